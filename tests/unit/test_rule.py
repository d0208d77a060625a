"""Tests for the NoRedundantlyQualifiedType rule, end to end on single modules."""

from __future__ import annotations

from typequal.analysis.fixes import apply_edits
from typequal.analysis.lookup import LookupTable
from typequal.analysis.rule import NoRedundantlyQualifiedType
from typequal.ast.builder import (
    ModuleBuilder,
    alias,
    arrow,
    constructor,
    custom_type,
    function,
    generic,
    value,
)
from typequal.models.errors import InsertAt, RemoveRange
from tests.conftest import SET_IMPORT_SOURCE, check, set_import_module


class TestTrigger:
    def test_reports_self_qualified_type(self) -> None:
        [diagnostic] = check(set_import_module())
        assert diagnostic.rule == "NoRedundantlyQualifiedType"
        assert diagnostic.message == "This type can be simplified to just `Set`."
        assert "repeats the name" in diagnostic.detail
        assert diagnostic.range.start.row == 6
        assert isinstance(diagnostic.edits[0], RemoveRange)

    def test_plain_import_gets_exposing_clause(self) -> None:
        [diagnostic] = check(set_import_module())
        fixed = apply_edits(SET_IMPORT_SOURCE, diagnostic.edits)
        assert "import Set exposing (Set)\n" in fixed
        assert "names : Set String\n" in fixed
        assert "    Set.empty\n" in fixed

    def test_already_exposed_needs_no_import_edit(self) -> None:
        source = SET_IMPORT_SOURCE.replace("import Set\n", "import Set exposing (Set)\n")
        [diagnostic] = check(set_import_module(source, exposing=["Set"]))
        assert len(diagnostic.edits) == 1
        fixed = apply_edits(source, diagnostic.edits)
        assert "import Set exposing (Set)\n" in fixed
        assert "names : Set String\n" in fixed

    def test_existing_entry_is_not_duplicated(self) -> None:
        source = """\
module Main exposing (..)

import Dict exposing (Dict, empty)


table : Dict.Dict String Int
table =
    empty
"""
        b = ModuleBuilder(source)
        b.import_("Dict", exposing=["Dict", "empty"])
        b.declare(
            function(
                "table",
                b.typed("Dict.Dict", b.typed("String"), b.typed("Int")),
                body=value("empty"),
            )
        )
        [diagnostic] = check(b.build("Main"))
        assert [type(e) for e in diagnostic.edits] == [RemoveRange]
        fixed = apply_edits(source, diagnostic.edits)
        assert fixed.count("Dict,") == 1
        assert "table : Dict String Int\n" in fixed

    def test_implicitly_imported_module(self) -> None:
        source = """\
module Main exposing (..)


first : List a -> Maybe.Maybe a
first list =
    List.head list
"""
        b = ModuleBuilder(source)
        b.declare(
            function(
                "first",
                arrow(b.typed("List", generic("a")), b.typed("Maybe.Maybe", generic("a"))),
                body=value("List.head"),
                args=("list",),
            )
        )
        [diagnostic] = check(b.build("Main"))
        assert len(diagnostic.edits) == 1
        assert "first : List a -> Maybe a\n" in apply_edits(source, diagnostic.edits)

    def test_aliased_import_of_other_module(self) -> None:
        source = """\
module Main exposing (..)

import Json.Decode as Decoder


decoder : Decoder.Decoder Int
decoder =
    Decoder.int
"""
        b = ModuleBuilder(source)
        b.import_("Json.Decode", alias="Decoder")
        b.declare(
            function("decoder", b.typed("Decoder.Decoder", b.typed("Int")), body=value("Decoder.int"))
        )
        [diagnostic] = check(b.build("Main"))
        fixed = apply_edits(source, diagnostic.edits)
        assert "import Json.Decode as Decoder exposing (Decoder)\n" in fixed
        assert "decoder : Decoder Int\n" in fixed


class TestSuppression:
    def test_local_type_of_same_name(self) -> None:
        source = """\
module Main exposing (..)

import Set


type Set
    = Wrapped (Set.Set Int)
"""
        b = ModuleBuilder(source)
        b.import_("Set")
        b.declare(custom_type("Set", constructor("Wrapped", b.typed("Set.Set", b.typed("Int")))))
        assert check(b.build("Main")) == []

    def test_local_alias_of_same_name_even_when_imported_exposed(self) -> None:
        source = """\
module Main exposing (..)

import Set exposing (Set)


type alias Set =
    Set.Set Int
"""
        b = ModuleBuilder(source)
        b.import_("Set", exposing=["Set"])
        b.declare(alias("Set", b.typed("Set.Set", b.typed("Int"))))
        assert check(b.build("Main")) == []

    def test_qualifier_differs_from_name(self) -> None:
        source = """\
module Main exposing (..)

import Set as S


names : S.Set String
names =
    S.empty
"""
        b = ModuleBuilder(source)
        b.import_("Set", alias="S")
        b.declare(function("names", b.typed("S.Set", b.typed("String")), body=value("S.empty")))
        assert check(b.build("Main")) == []

    def test_other_import_exposes_same_name(self) -> None:
        source = """\
module Main exposing (..)

import Set
import Tree exposing (..)


names : Set.Set String
names =
    Set.empty
"""
        b = ModuleBuilder(source)
        b.import_("Set").import_("Tree", exposing="..")
        b.declare(
            function("names", b.typed("Set.Set", b.typed("String")), body=value("Set.empty"))
        )
        assert check(b.build("Main")) == []

    def test_unresolved_reference_is_skipped(self, rule: NoRedundantlyQualifiedType) -> None:
        assert rule.check(set_import_module(), LookupTable()) == []


class TestIdempotence:
    def test_fixed_source_has_nothing_left(self) -> None:
        [diagnostic] = check(set_import_module())
        fixed = apply_edits(SET_IMPORT_SOURCE, diagnostic.edits)

        b = ModuleBuilder(fixed)
        b.import_("Set", exposing=["Set"])
        b.declare(function("names", b.typed("Set", b.typed("String")), body=value("Set.empty")))
        assert check(b.build("Main")) == []

    def test_fixes_one_at_a_time(self) -> None:
        source = """\
module Main exposing (..)

import Set


union : Set.Set comparable -> Set.Set comparable
union a =
    a
"""

        b = ModuleBuilder(source)
        b.import_("Set")
        sig = arrow(
            b.typed("Set.Set", generic("comparable")), b.typed("Set.Set", generic("comparable"))
        )
        first_pass = check(b.declare(function("union", sig, args=("a",))).build("Main"))
        assert len(first_pass) == 2
        # Each diagnostic carries its own import edit; applied together they would clash.
        assert all(isinstance(d.edits[1], InsertAt) for d in first_pass)

        fixed = apply_edits(source, first_pass[0].edits)
        assert "union : Set comparable -> Set.Set comparable\n" in fixed

        b = ModuleBuilder(fixed)
        b.import_("Set", exposing=["Set"])
        sig = arrow(
            b.typed("Set", generic("comparable")), b.typed("Set.Set", generic("comparable"))
        )
        [second] = check(b.declare(function("union", sig, args=("a",))).build("Main"))
        assert len(second.edits) == 1
        assert "union : Set comparable -> Set comparable\n" in apply_edits(fixed, second.edits)
