"""Fluent builder API for constructing module syntax trees with exact ranges.

Ranges are located in the module's source text, so trees built here line up
with the text that edits will later be applied to.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from typing import Self

from typequal.ast.nodes import (
    CustomTypeDeclaration,
    Declaration,
    ExposedName,
    Exposing,
    ExposingAll,
    ExposingExplicit,
    Expression,
    FunctionDeclaration,
    FunctionExpose,
    FunctionOrValue,
    FunctionType,
    GenericRecordType,
    GenericType,
    Import,
    InfixExpose,
    LetDeclaration,
    LetExpr,
    Module,
    Pattern,
    PortDeclaration,
    RecordField,
    RecordType,
    Signature,
    TupledType,
    TypeAliasDeclaration,
    TypeAnnotation,
    Typed,
    TypeExpose,
    TypeOrAliasExpose,
    UnitExpr,
    UnitType,
    ValueConstructor,
)
from typequal.models.errors import Position, Range


class SourceLocator:
    """Converts between string offsets and 1-based row/column positions."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(source) if ch == "\n"]
        self._cursors: dict[str, int] = {}

    def position_at(self, offset: int) -> Position:
        row = bisect_right(self._line_starts, offset)
        return Position(row=row, column=offset - self._line_starts[row - 1] + 1)

    def offset_of(self, position: Position) -> int:
        if position.row > len(self._line_starts):
            raise ValueError(f"Row {position.row} is past the end of the source")
        return self._line_starts[position.row - 1] + position.column - 1

    def range_between(self, start: int, end: int) -> Range:
        return Range(start=self.position_at(start), end=self.position_at(end))

    def search(self, pattern: str, start: int = 0, flags: int = 0) -> re.Match[str]:
        match = re.compile(pattern, flags).search(self.source, start)
        if match is None:
            raise ValueError(f"Pattern {pattern!r} not found in source after offset {start}")
        return match

    def next(self, fragment: str) -> Range:
        """Range of the next whole-word occurrence of ``fragment``.

        Each fragment keeps its own cursor, so repeated calls walk through
        the occurrences in source order.
        """
        pattern = rf"(?<![\w.]){re.escape(fragment)}(?![\w.])"
        match = self.search(pattern, self._cursors.get(fragment, 0))
        self._cursors[fragment] = match.end()
        return self.range_between(match.start(), match.end())


# ---------------------------------------------------------------------------
# Type annotation helpers
# ---------------------------------------------------------------------------


def generic(name: str) -> GenericType:
    return GenericType(name=name)


def unit() -> UnitType:
    return UnitType()


def tupled(*elements: TypeAnnotation) -> TupledType:
    return TupledType(elements=list(elements))


def record(*fields: tuple[str, TypeAnnotation]) -> RecordType:
    return RecordType(fields=[RecordField(name=n, annotation=a) for n, a in fields])


def extensible(name: str, *fields: tuple[str, TypeAnnotation]) -> GenericRecordType:
    return GenericRecordType(
        generic=name, fields=[RecordField(name=n, annotation=a) for n, a in fields]
    )


def arrow(*annotations: TypeAnnotation) -> TypeAnnotation:
    """Right-associative function type: ``arrow(a, b, c)`` is ``a -> (b -> c)``."""
    if not annotations:
        raise ValueError("arrow() needs at least one annotation")
    result = annotations[-1]
    for annotation in reversed(annotations[:-1]):
        result = FunctionType(left=annotation, right=result)
    return result


# ---------------------------------------------------------------------------
# Declaration and expression helpers
# ---------------------------------------------------------------------------


def value(name: str) -> FunctionOrValue:
    *qualifier, local = name.split(".")
    return FunctionOrValue(name=local, module_name=tuple(qualifier))


def signature(name: str, annotation: TypeAnnotation) -> Signature:
    return Signature(name=name, annotation=annotation)


def function(
    name: str,
    annotation: TypeAnnotation | None = None,
    body: Expression | None = None,
    args: tuple[str, ...] = (),
) -> FunctionDeclaration:
    return FunctionDeclaration(
        name=name,
        body=body if body is not None else UnitExpr(),
        arguments=[Pattern(source=a) for a in args],
        signature=signature(name, annotation) if annotation is not None else None,
    )


def let(declarations: list[LetDeclaration], body: Expression) -> LetExpr:
    return LetExpr(declarations=declarations, body=body)


def alias(name: str, annotation: TypeAnnotation, *generics: str) -> TypeAliasDeclaration:
    return TypeAliasDeclaration(name=name, annotation=annotation, generics=list(generics))


def constructor(name: str, *arguments: TypeAnnotation) -> ValueConstructor:
    return ValueConstructor(name=name, arguments=list(arguments))


def custom_type(name: str, *constructors: ValueConstructor) -> CustomTypeDeclaration:
    return CustomTypeDeclaration(name=name, constructors=list(constructors))


def port(name: str, annotation: TypeAnnotation) -> PortDeclaration:
    return PortDeclaration(signature=signature(name, annotation))


# ---------------------------------------------------------------------------
# Module builder
# ---------------------------------------------------------------------------


class ModuleBuilder:
    """Fluent builder for a module whose ranges come from ``source``."""

    def __init__(self, source: str) -> None:
        self.locator = SourceLocator(source)
        self._imports: list[Import] = []
        self._declarations: list[Declaration] = []
        self._import_cursor = 0

    @property
    def source(self) -> str:
        return self.locator.source

    def typed(self, reference: str, *args: TypeAnnotation) -> Typed:
        """A type reference such as ``"Set.Set"`` or ``"String"``, located in the source."""
        *qualifier, name = reference.split(".")
        return Typed(
            module_name=tuple(qualifier),
            name=name,
            name_range=self.locator.next(reference),
            args=list(args),
        )

    def import_(
        self,
        module_name: str,
        alias: str | None = None,
        exposing: str | list[str] | None = None,
    ) -> Self:
        """Add the next ``import <module_name> ...`` line of the source.

        ``exposing`` is ``".."`` for a wildcard, or a list of entries written
        as in source: ``"Set"``, ``"Maybe(..)"``, ``"map"``, ``"(+)"``.
        """
        pattern = rf"^import[ \t]+{re.escape(module_name)}(?![\w.])[^\n]*?(?=[ \t]*$)"
        match = self.locator.search(pattern, self._import_cursor, re.MULTILINE)
        self._import_cursor = match.end()
        self._imports.append(
            Import(
                module_name=tuple(module_name.split(".")),
                range=self.locator.range_between(match.start(), match.end()),
                alias=alias,
                exposing=self._exposing(exposing, match) if exposing is not None else None,
            )
        )
        return self

    def _exposing(self, exposing: str | list[str], line: re.Match[str]) -> Exposing:
        keyword = self.locator.search(r"\bexposing\b", line.start())
        if keyword.start() >= line.end():
            raise ValueError(f"No exposing clause in {line.group(0)!r}")
        if exposing == "..":
            wildcard = self.locator.search(r"\(\s*\.\.\s*\)", keyword.end())
            return ExposingAll(range=self.locator.range_between(wildcard.start(), wildcard.end()))
        if isinstance(exposing, str):
            exposing = [exposing]
        entries: list[ExposedName] = []
        cursor = keyword.end()
        for entry in exposing:
            exposed, cursor = self._exposed_name(entry, cursor)
            entries.append(exposed)
        return ExposingExplicit(entries=entries)

    def _exposed_name(self, entry: str, start: int) -> tuple[ExposedName, int]:
        if entry.startswith("("):
            found = self.locator.search(re.escape(entry), start)
            return (
                InfixExpose(
                    name=entry.strip("()"),
                    range=self.locator.range_between(found.start(), found.end()),
                ),
                found.end(),
            )
        name = entry.removesuffix("(..)")
        found = self.locator.search(rf"(?<![\w.]){re.escape(name)}(?![\w.])", start)
        full_range = self.locator.range_between(found.start(), found.end())
        if entry.endswith("(..)"):
            opened = self.locator.search(r"\(\s*\.\.\s*\)", found.end())
            return (
                TypeExpose(
                    name=name,
                    range=self.locator.range_between(found.start(), opened.end()),
                    open_range=self.locator.range_between(opened.start(), opened.end()),
                ),
                opened.end(),
            )
        if name[:1].isupper():
            return TypeOrAliasExpose(name=name, range=full_range), found.end()
        return FunctionExpose(name=name, range=full_range), found.end()

    def declare(self, *declarations: Declaration) -> Self:
        self._declarations.extend(declarations)
        return self

    def build(self, name: str, exposing: Exposing | None = None) -> Module:
        return Module(
            name=tuple(name.split(".")),
            imports=list(self._imports),
            declarations=list(self._declarations),
            exposing=exposing,
        )
