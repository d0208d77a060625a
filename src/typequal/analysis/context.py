"""Per-module context: locally defined types and the import index."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from typequal.analysis.aggregate import ProjectAggregate
from typequal.analysis.lookup import ModuleNameLookupTable
from typequal.ast.nodes import (
    CustomTypeDeclaration,
    Declaration,
    DestructuringDeclaration,
    ExposingAll,
    ExposingExplicit,
    FunctionDeclaration,
    Import,
    InfixDeclaration,
    Module,
    PortDeclaration,
    TypeAliasDeclaration,
    TypeExpose,
    TypeOrAliasExpose,
)


def collect_defined_types(declarations: Iterable[Declaration]) -> frozenset[str]:
    """Names introduced by the module's own type aliases and custom types."""
    names: set[str] = set()
    for declaration in declarations:
        match declaration:
            case TypeAliasDeclaration(name=name) | CustomTypeDeclaration(name=name):
                names.add(name)
            case (
                FunctionDeclaration()
                | PortDeclaration()
                | InfixDeclaration()
                | DestructuringDeclaration()
            ):
                pass
    return frozenset(names)


def exposes_type(import_: Import, name: str) -> bool:
    """Whether ``import_`` makes the type ``name`` usable without a qualifier."""
    match import_.exposing:
        case ExposingAll():
            return True
        case ExposingExplicit(entries=entries):
            return any(
                isinstance(entry, TypeOrAliasExpose | TypeExpose) and entry.name == name
                for entry in entries
            )
        case None:
            return False
    return False


@dataclass(frozen=True)
class ImportIndex:
    """The module's import declarations, in source order."""

    imports: tuple[Import, ...] = ()

    @classmethod
    def of(cls, imports: Iterable[Import]) -> ImportIndex:
        return cls(imports=tuple(imports))

    def __iter__(self) -> Iterator[Import]:
        return iter(self.imports)

    def __len__(self) -> int:
        return len(self.imports)

    def partition(
        self, module_name: Sequence[str]
    ) -> tuple[tuple[Import, ...], tuple[Import, ...]]:
        """Split into imports of ``module_name`` and all the others."""
        target = tuple(module_name)
        matching = tuple(i for i in self.imports if i.module_name == target)
        other = tuple(i for i in self.imports if i.module_name != target)
        return matching, other

    @property
    def imported_modules(self) -> list[tuple[str, ...]]:
        seen: dict[tuple[str, ...], None] = {}
        for import_ in self.imports:
            seen.setdefault(import_.module_name, None)
        return list(seen)


def any_exposes_type(imports: Iterable[Import], name: str) -> bool:
    return any(exposes_type(i, name) for i in imports)


@dataclass(frozen=True)
class ModuleContext:
    """Everything the decision needs about one module, built once before traversal."""

    module_name: tuple[str, ...]
    defined_types: frozenset[str]
    imports: ImportIndex
    lookup: ModuleNameLookupTable
    project: ProjectAggregate = field(default_factory=ProjectAggregate.empty)

    @classmethod
    def build(
        cls,
        module: Module,
        lookup: ModuleNameLookupTable,
        project: ProjectAggregate | None = None,
    ) -> ModuleContext:
        return cls(
            module_name=module.name,
            defined_types=collect_defined_types(module.declarations),
            imports=ImportIndex.of(module.imports),
            lookup=lookup,
            project=project if project is not None else ProjectAggregate.empty(),
        )
