"""Project-wide record of modules defining a type named after themselves.

A module ``Set`` that defines a type ``Set`` contributes ``("Set",)``.
Contributions combine by set union, so the fold order across the import
graph never changes the result. No rule decision reads this yet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import reduce


@dataclass(frozen=True)
class ProjectAggregate:
    self_named_exposures: frozenset[tuple[str, ...]] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> ProjectAggregate:
        return cls()

    def merge(self, other: ProjectAggregate) -> ProjectAggregate:
        return ProjectAggregate(self.self_named_exposures | other.self_named_exposures)

    def __or__(self, other: ProjectAggregate) -> ProjectAggregate:
        return self.merge(other)

    def __contains__(self, module_name: object) -> bool:
        return module_name in self.self_named_exposures

    @staticmethod
    def fold(aggregates: Iterable[ProjectAggregate]) -> ProjectAggregate:
        return reduce(ProjectAggregate.merge, aggregates, ProjectAggregate.empty())


def self_named_exposure(
    module_name: tuple[str, ...], defined_types: Iterable[str]
) -> ProjectAggregate:
    """Contribution of one module: itself if it defines a type named like its last segment."""
    if module_name and module_name[-1] in set(defined_types):
        return ProjectAggregate(frozenset({module_name}))
    return ProjectAggregate.empty()
