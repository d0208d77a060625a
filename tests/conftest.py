"""Shared test fixtures for typequal."""

from __future__ import annotations

import pytest

from typequal.analysis.lookup import build_lookup_table
from typequal.analysis.rule import NoRedundantlyQualifiedType
from typequal.ast.builder import ModuleBuilder, function, value
from typequal.ast.nodes import Module
from typequal.ast.visitor import TypeReferenceWalker
from typequal.models.errors import Diagnostic


@pytest.fixture
def rule() -> NoRedundantlyQualifiedType:
    return NoRedundantlyQualifiedType()


@pytest.fixture
def walker() -> TypeReferenceWalker:
    return TypeReferenceWalker()


def check(module: Module) -> list[Diagnostic]:
    """Run the rule with a lookup table resolved from the module's own imports."""
    return NoRedundantlyQualifiedType().check(module, build_lookup_table(module))


SET_IMPORT_SOURCE = """\
module Main exposing (..)

import Set


names : Set.Set String
names =
    Set.empty
"""


def set_import_module(source: str = SET_IMPORT_SOURCE, **import_options: object) -> Module:
    """``names : Set.Set String`` with a configurable ``import Set`` line."""
    b = ModuleBuilder(source)
    b.import_("Set", **import_options)  # type: ignore[arg-type]
    b.declare(
        function("names", b.typed("Set.Set", b.typed("String")), body=value("Set.empty"))
    )
    return b.build("Main")
