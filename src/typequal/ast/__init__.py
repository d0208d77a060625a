"""Syntax tree for Elm-style modules and the type reference walker."""

from typequal.ast.builder import ModuleBuilder, SourceLocator
from typequal.ast.visitor import (
    QualifiedTypeReference,
    TypeReferenceWalker,
    qualified_type_references,
)

__all__ = [
    "ModuleBuilder",
    "QualifiedTypeReference",
    "SourceLocator",
    "TypeReferenceWalker",
    "qualified_type_references",
]
