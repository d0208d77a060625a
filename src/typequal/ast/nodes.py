"""Immutable syntax tree for Elm-style modules.

Only the parts the rule inspects carry source ranges: qualified type
references, import declarations and exposed names. Everything else is kept
as plain structure so the walker can reach nested let-bound signatures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from typequal.models.errors import Range

# ---------------------------------------------------------------------------
# Type annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GenericType:
    """A type variable: ``a``, ``msg``."""

    name: str


@dataclass(frozen=True)
class Typed:
    """A type constructor, optionally qualified: ``Set.Set String``.

    ``name_range`` covers exactly the qualifier, the dot and the name.
    """

    module_name: tuple[str, ...]
    name: str
    name_range: Range
    args: list[TypeAnnotation] = field(default_factory=list)

    @property
    def qualified(self) -> bool:
        return bool(self.module_name)


@dataclass(frozen=True)
class UnitType:
    """The unit type ``()``."""


@dataclass(frozen=True)
class TupledType:
    elements: list[TypeAnnotation] = field(default_factory=list)


@dataclass(frozen=True)
class RecordField:
    name: str
    annotation: TypeAnnotation


@dataclass(frozen=True)
class RecordType:
    """``{ name : String, age : Int }``"""

    fields: list[RecordField] = field(default_factory=list)


@dataclass(frozen=True)
class GenericRecordType:
    """Extensible record: ``{ a | name : String }``."""

    generic: str
    fields: list[RecordField] = field(default_factory=list)


@dataclass(frozen=True)
class FunctionType:
    """``left -> right``"""

    left: TypeAnnotation
    right: TypeAnnotation


TypeAnnotation = (
    GenericType | Typed | UnitType | TupledType | RecordType | GenericRecordType | FunctionType
)


# ---------------------------------------------------------------------------
# Patterns and expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Pattern:
    """Opaque pattern; the rule never looks inside patterns."""

    source: str


@dataclass(frozen=True)
class Signature:
    """``name : annotation``"""

    name: str
    annotation: TypeAnnotation


@dataclass(frozen=True)
class UnitExpr:
    pass


@dataclass(frozen=True)
class LiteralExpr:
    """A string, char, integer or float literal."""

    value: str | int | float


@dataclass(frozen=True)
class FunctionOrValue:
    """A value reference, optionally qualified: ``List.map``."""

    name: str
    module_name: tuple[str, ...] = ()


@dataclass(frozen=True)
class Application:
    """Function application: ``f a b``."""

    exprs: list[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class OperatorApplication:
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class IfBlock:
    condition: Expression
    then_branch: Expression
    else_branch: Expression


@dataclass(frozen=True)
class Negation:
    expr: Expression


@dataclass(frozen=True)
class TupledExpr:
    elements: list[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class ParenthesizedExpr:
    expr: Expression


@dataclass(frozen=True)
class ListExpr:
    elements: list[Expression] = field(default_factory=list)


@dataclass(frozen=True)
class RecordExpr:
    fields: list[tuple[str, Expression]] = field(default_factory=list)


@dataclass(frozen=True)
class RecordUpdate:
    """``{ record | field = value }``"""

    name: str
    fields: list[tuple[str, Expression]] = field(default_factory=list)


@dataclass(frozen=True)
class RecordAccess:
    expr: Expression
    field_name: str


@dataclass(frozen=True)
class Lambda:
    args: list[Pattern]
    body: Expression


@dataclass(frozen=True)
class CaseBranch:
    pattern: Pattern
    expr: Expression


@dataclass(frozen=True)
class CaseExpr:
    subject: Expression
    branches: list[CaseBranch] = field(default_factory=list)


@dataclass(frozen=True)
class LetDestructuring:
    pattern: Pattern
    expr: Expression


@dataclass(frozen=True)
class LetExpr:
    declarations: list[LetDeclaration]
    body: Expression


Expression = (
    UnitExpr
    | LiteralExpr
    | FunctionOrValue
    | Application
    | OperatorApplication
    | IfBlock
    | Negation
    | TupledExpr
    | ParenthesizedExpr
    | ListExpr
    | RecordExpr
    | RecordUpdate
    | RecordAccess
    | Lambda
    | CaseExpr
    | LetExpr
)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FunctionDeclaration:
    """A function or value definition, top-level or let-bound."""

    name: str
    body: Expression
    arguments: list[Pattern] = field(default_factory=list)
    signature: Signature | None = None


LetDeclaration = FunctionDeclaration | LetDestructuring


@dataclass(frozen=True)
class TypeAliasDeclaration:
    name: str
    annotation: TypeAnnotation
    generics: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValueConstructor:
    name: str
    arguments: list[TypeAnnotation] = field(default_factory=list)


@dataclass(frozen=True)
class CustomTypeDeclaration:
    name: str
    constructors: list[ValueConstructor] = field(default_factory=list)
    generics: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PortDeclaration:
    signature: Signature


class InfixDirection(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    NON = "non"


@dataclass(frozen=True)
class InfixDeclaration:
    direction: InfixDirection
    precedence: int
    operator: str
    function: str


@dataclass(frozen=True)
class DestructuringDeclaration:
    pattern: Pattern
    expr: Expression


Declaration = (
    FunctionDeclaration
    | TypeAliasDeclaration
    | CustomTypeDeclaration
    | PortDeclaration
    | InfixDeclaration
    | DestructuringDeclaration
)


# ---------------------------------------------------------------------------
# Imports and exposing clauses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FunctionExpose:
    name: str
    range: Range


@dataclass(frozen=True)
class InfixExpose:
    name: str
    range: Range


@dataclass(frozen=True)
class TypeOrAliasExpose:
    """A type exposed without its constructors: ``Set``."""

    name: str
    range: Range


@dataclass(frozen=True)
class TypeExpose:
    """A type exposed with its constructors: ``Maybe(..)``."""

    name: str
    range: Range
    open_range: Range | None = None


ExposedName = FunctionExpose | InfixExpose | TypeOrAliasExpose | TypeExpose


@dataclass(frozen=True)
class ExposingAll:
    """``exposing (..)``"""

    range: Range


@dataclass(frozen=True)
class ExposingExplicit:
    entries: list[ExposedName] = field(default_factory=list)


Exposing = ExposingAll | ExposingExplicit


@dataclass(frozen=True)
class Import:
    """``import Module.Name as Alias exposing (...)``

    ``range`` covers the whole import declaration.
    """

    module_name: tuple[str, ...]
    range: Range
    alias: str | None = None
    exposing: Exposing | None = None

    @property
    def dotted_name(self) -> str:
        return ".".join(self.module_name)


@dataclass(frozen=True)
class Module:
    """A parsed module: its name, exposing clause, imports and declarations."""

    name: tuple[str, ...]
    imports: list[Import] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    exposing: Exposing | None = None

    @property
    def dotted_name(self) -> str:
        return ".".join(self.name)
