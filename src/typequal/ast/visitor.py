"""Visitor that yields every qualified type reference found in a module."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from typequal.ast.nodes import (
    Application,
    CaseExpr,
    CustomTypeDeclaration,
    FunctionDeclaration,
    FunctionType,
    GenericRecordType,
    IfBlock,
    Lambda,
    LetDestructuring,
    LetExpr,
    ListExpr,
    Module,
    Negation,
    OperatorApplication,
    ParenthesizedExpr,
    PortDeclaration,
    RecordAccess,
    RecordExpr,
    RecordType,
    RecordUpdate,
    Signature,
    TupledExpr,
    TupledType,
    TypeAliasDeclaration,
    Typed,
)
from typequal.models.errors import Range


@dataclass(frozen=True)
class QualifiedTypeReference:
    """An occurrence of ``Qualifier.Name`` used as a type.

    ``range`` covers the qualifier, the separating dot and the name.
    """

    qualifier: str
    name: str
    range: Range

    @property
    def self_qualified(self) -> bool:
        return self.qualifier == self.name


class TypeReferenceWalker:
    """Pre-order, left-to-right walk over every position a type annotation can appear.

    Override specific visit_* methods to customize behavior. Nodes without a
    matching method (literals, value references, infix declarations, ...)
    contribute nothing.
    """

    def walk(self, module: Module) -> Iterator[QualifiedTypeReference]:
        """Lazily yield the qualified type references of ``module``.

        The returned iterator is single-pass; call ``walk`` again for a
        fresh sequence.
        """
        for declaration in module.declarations:
            yield from self.visit(declaration)

    def visit(self, node: Any) -> Iterator[QualifiedTypeReference]:
        """Dispatch to the appropriate visit_* method."""
        method_name = f"visit_{type(node).__name__.lower()}"
        method = getattr(self, method_name, self.generic_visit)
        return method(node)

    def generic_visit(self, node: Any) -> Iterator[QualifiedTypeReference]:
        return iter(())

    # -- declarations --------------------------------------------------------

    def visit_functiondeclaration(
        self, node: FunctionDeclaration
    ) -> Iterator[QualifiedTypeReference]:
        if node.signature is not None:
            yield from self.visit(node.signature)
        yield from self.visit(node.body)

    def visit_signature(self, node: Signature) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.annotation)

    def visit_typealiasdeclaration(
        self, node: TypeAliasDeclaration
    ) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.annotation)

    def visit_customtypedeclaration(
        self, node: CustomTypeDeclaration
    ) -> Iterator[QualifiedTypeReference]:
        for constructor in node.constructors:
            for argument in constructor.arguments:
                yield from self.visit(argument)

    def visit_portdeclaration(self, node: PortDeclaration) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.signature)

    # -- type annotations ----------------------------------------------------

    def visit_typed(self, node: Typed) -> Iterator[QualifiedTypeReference]:
        if node.qualified:
            yield QualifiedTypeReference(
                qualifier=".".join(node.module_name),
                name=node.name,
                range=node.name_range,
            )
        for arg in node.args:
            yield from self.visit(arg)

    def visit_tupledtype(self, node: TupledType) -> Iterator[QualifiedTypeReference]:
        for element in node.elements:
            yield from self.visit(element)

    def visit_recordtype(self, node: RecordType) -> Iterator[QualifiedTypeReference]:
        for record_field in node.fields:
            yield from self.visit(record_field.annotation)

    def visit_genericrecordtype(
        self, node: GenericRecordType
    ) -> Iterator[QualifiedTypeReference]:
        for record_field in node.fields:
            yield from self.visit(record_field.annotation)

    def visit_functiontype(self, node: FunctionType) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.left)
        yield from self.visit(node.right)

    # -- expressions ---------------------------------------------------------

    def visit_letexpr(self, node: LetExpr) -> Iterator[QualifiedTypeReference]:
        for declaration in node.declarations:
            yield from self.visit(declaration)
        yield from self.visit(node.body)

    def visit_letdestructuring(self, node: LetDestructuring) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.expr)

    def visit_application(self, node: Application) -> Iterator[QualifiedTypeReference]:
        for expr in node.exprs:
            yield from self.visit(expr)

    def visit_operatorapplication(
        self, node: OperatorApplication
    ) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.left)
        yield from self.visit(node.right)

    def visit_ifblock(self, node: IfBlock) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.condition)
        yield from self.visit(node.then_branch)
        yield from self.visit(node.else_branch)

    def visit_negation(self, node: Negation) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.expr)

    def visit_parenthesizedexpr(
        self, node: ParenthesizedExpr
    ) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.expr)

    def visit_tupledexpr(self, node: TupledExpr) -> Iterator[QualifiedTypeReference]:
        for element in node.elements:
            yield from self.visit(element)

    def visit_listexpr(self, node: ListExpr) -> Iterator[QualifiedTypeReference]:
        for element in node.elements:
            yield from self.visit(element)

    def visit_recordexpr(self, node: RecordExpr) -> Iterator[QualifiedTypeReference]:
        for _, value in node.fields:
            yield from self.visit(value)

    def visit_recordupdate(self, node: RecordUpdate) -> Iterator[QualifiedTypeReference]:
        for _, value in node.fields:
            yield from self.visit(value)

    def visit_recordaccess(self, node: RecordAccess) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.expr)

    def visit_lambda(self, node: Lambda) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.body)

    def visit_caseexpr(self, node: CaseExpr) -> Iterator[QualifiedTypeReference]:
        yield from self.visit(node.subject)
        for branch in node.branches:
            yield from self.visit(branch.expr)


def qualified_type_references(module: Module) -> Iterator[QualifiedTypeReference]:
    """Shorthand for ``TypeReferenceWalker().walk(module)``."""
    return TypeReferenceWalker().walk(module)
