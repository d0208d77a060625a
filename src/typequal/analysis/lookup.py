"""Module name lookup: which module actually defines a qualified reference.

The rule depends on this as a capability. Any object with a
``module_name_for(range)`` method works; ``LookupTable`` is the plain
dict-backed one, and ``build_lookup_table`` fills it from a module's imports.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

from typequal.ast.nodes import Import, Module
from typequal.ast.visitor import qualified_type_references
from typequal.models.errors import Range


class ModuleNameLookupTable(Protocol):
    def module_name_for(self, range: Range) -> tuple[str, ...] | None:
        """Return the defining module of the reference at ``range``, or None."""
        ...


@dataclass
class LookupTable:
    """Maps reference ranges to the module that defines the referenced name."""

    _entries: dict[Range, tuple[str, ...]] = field(default_factory=dict)

    def add(self, range: Range, module_name: tuple[str, ...] | str) -> None:
        if isinstance(module_name, str):
            module_name = tuple(module_name.split("."))
        self._entries[range] = module_name

    def module_name_for(self, range: Range) -> tuple[str, ...] | None:
        return self._entries.get(range)

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class ImplicitImport:
    module_name: tuple[str, ...]
    alias: str | None = None


# Imports every module gets without writing them.
DEFAULT_IMPORTS: tuple[ImplicitImport, ...] = (
    ImplicitImport(("Basics",)),
    ImplicitImport(("List",)),
    ImplicitImport(("Maybe",)),
    ImplicitImport(("Result",)),
    ImplicitImport(("String",)),
    ImplicitImport(("Char",)),
    ImplicitImport(("Tuple",)),
    ImplicitImport(("Debug",)),
    ImplicitImport(("Platform",)),
    ImplicitImport(("Platform", "Cmd"), "Cmd"),
    ImplicitImport(("Platform", "Sub"), "Sub"),
)


def _answers_to(import_: Import | ImplicitImport, qualifier: str) -> bool:
    if import_.alias is not None:
        return import_.alias == qualifier
    return ".".join(import_.module_name) == qualifier


def build_lookup_table(
    module: Module,
    known_modules: Mapping[tuple[str, ...], set[str] | frozenset[str]] | None = None,
    implicit_imports: bool = True,
) -> LookupTable:
    """Resolve every qualified type reference of ``module`` through its imports.

    A qualifier matches an import by alias, or by its dotted module name when
    the import has no alias. Explicit imports are tried before the implicit
    defaults. When ``known_modules`` lists the types a module defines, a
    candidate known not to define the name is skipped. References that match
    nothing are left out of the table.
    """
    candidates: list[Import | ImplicitImport] = list(module.imports)
    if implicit_imports:
        candidates.extend(DEFAULT_IMPORTS)

    table = LookupTable()
    for reference in qualified_type_references(module):
        for candidate in candidates:
            if not _answers_to(candidate, reference.qualifier):
                continue
            defined = known_modules.get(candidate.module_name) if known_modules else None
            if defined is None or reference.name in defined:
                table.add(reference.range, candidate.module_name)
                break
    return table
