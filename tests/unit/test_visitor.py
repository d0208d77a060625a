"""Tests for the qualified type reference walker."""

from __future__ import annotations

import types

from typequal.ast.builder import (
    ModuleBuilder,
    alias,
    arrow,
    constructor,
    custom_type,
    extensible,
    function,
    generic,
    let,
    port,
    record,
    tupled,
    value,
)
from typequal.ast.nodes import (
    Application,
    CaseBranch,
    CaseExpr,
    DestructuringDeclaration,
    IfBlock,
    InfixDeclaration,
    InfixDirection,
    Lambda,
    LetDestructuring,
    ListExpr,
    Module,
    Pattern,
    RecordExpr,
    UnitExpr,
)
from typequal.ast.visitor import TypeReferenceWalker, qualified_type_references
from typequal.models.errors import Position, Range

WALKER_SOURCE = """\
module Shapes exposing (..)

import Dict
import Html
import Json.Decode as Decode
import Set


type alias Model =
    { seen : Set.Set Int
    , cache : Dict.Dict String (List Int)
    }


type Shape
    = Circle Html.Html
    | Group ( Set.Set Int, Decode.Value )


port send : Dict.Dict String Int -> Cmd msg


view : { a | node : Html.Html } -> Html.Html
view model =
    let
        helper : Set.Set Int -> Int
        helper s =
            0
    in
    helper model
"""


def _walker_module() -> Module:
    b = ModuleBuilder(WALKER_SOURCE)
    b.import_("Dict").import_("Html").import_("Json.Decode", alias="Decode").import_("Set")
    b.declare(
        alias(
            "Model",
            record(
                ("seen", b.typed("Set.Set", b.typed("Int"))),
                (
                    "cache",
                    b.typed("Dict.Dict", b.typed("String"), b.typed("List", b.typed("Int"))),
                ),
            ),
        ),
        custom_type(
            "Shape",
            constructor("Circle", b.typed("Html.Html")),
            constructor(
                "Group", tupled(b.typed("Set.Set", b.typed("Int")), b.typed("Decode.Value"))
            ),
        ),
        port(
            "send",
            arrow(
                b.typed("Dict.Dict", b.typed("String"), b.typed("Int")),
                b.typed("Cmd", generic("msg")),
            ),
        ),
        function(
            "view",
            arrow(extensible("a", ("node", b.typed("Html.Html"))), b.typed("Html.Html")),
            body=let(
                [
                    function(
                        "helper",
                        arrow(b.typed("Set.Set", b.typed("Int")), b.typed("Int")),
                        args=("s",),
                    )
                ],
                Application(exprs=[value("helper"), value("model")]),
            ),
            args=("model",),
        ),
    )
    return b.build("Shapes")


class TestTypeReferenceWalker:
    def test_yields_only_qualified_references_in_preorder(self) -> None:
        refs = list(qualified_type_references(_walker_module()))
        assert [(r.qualifier, r.name, r.range.start.row) for r in refs] == [
            ("Set", "Set", 10),
            ("Dict", "Dict", 11),
            ("Html", "Html", 16),
            ("Set", "Set", 17),
            ("Decode", "Value", 17),
            ("Dict", "Dict", 20),
            ("Html", "Html", 23),
            ("Html", "Html", 23),
            ("Set", "Set", 26),
        ]

    def test_range_covers_qualifier_dot_and_name(self) -> None:
        first = next(qualified_type_references(_walker_module()))
        assert first.range == Range(
            start=Position(row=10, column=14), end=Position(row=10, column=21)
        )
        line = WALKER_SOURCE.splitlines()[9]
        assert line[13:20] == "Set.Set"

    def test_walk_is_lazy_and_single_pass(self, walker: TypeReferenceWalker) -> None:
        module = _walker_module()
        refs = walker.walk(module)
        assert isinstance(refs, types.GeneratorType)
        assert len(list(refs)) == 9
        assert list(refs) == []
        assert len(list(walker.walk(module))) == 9

    def test_self_qualified_flag(self) -> None:
        refs = list(qualified_type_references(_walker_module()))
        assert [r.self_qualified for r in refs].count(False) == 1


NESTED_SOURCE = """\
module Nested exposing (run)

run flag items =
    case flag of
        True ->
            \\x ->
                let
                    inner : Maybe.Maybe Int
                    inner =
                        let
                            deepest : Result.Result String Int
                            deepest =
                                Ok 1
                        in
                        Nothing
                in
                x

        False ->
            [ { count = if flag then (let ( a, b ) = (let pair : Tuple.Tuple -> Int
                                                            pair = 0 in pair) in a) else 0 } ]
"""


class TestNestedLetSignatures:
    def test_reaches_let_signatures_inside_expressions(self) -> None:
        b = ModuleBuilder(NESTED_SOURCE)
        deepest = function(
            "deepest", b.typed("Result.Result", b.typed("String"), b.typed("Int"))
        )
        inner = function(
            "inner",
            b.typed("Maybe.Maybe", b.typed("Int")),
            body=let([deepest], value("Nothing")),
        )
        pair = function("pair", arrow(b.typed("Tuple.Tuple"), b.typed("Int")))
        destructured = let(
            [LetDestructuring(pattern=Pattern("( a, b )"), expr=let([pair], value("pair")))],
            value("a"),
        )
        body = CaseExpr(
            subject=value("flag"),
            branches=[
                CaseBranch(
                    pattern=Pattern("True"),
                    expr=Lambda(args=[Pattern("x")], body=let([inner], value("x"))),
                ),
                CaseBranch(
                    pattern=Pattern("False"),
                    expr=ListExpr(
                        elements=[
                            RecordExpr(
                                fields=[
                                    (
                                        "count",
                                        IfBlock(
                                            condition=value("flag"),
                                            then_branch=destructured,
                                            else_branch=UnitExpr(),
                                        ),
                                    )
                                ]
                            )
                        ]
                    ),
                ),
            ],
        )
        module = b.declare(function("run", body=body, args=("flag", "items"))).build("Nested")

        refs = list(qualified_type_references(module))
        assert [(r.qualifier, r.range.start.row) for r in refs] == [
            ("Maybe", 8),
            ("Result", 11),
            ("Tuple", 20),
        ]

    def test_declarations_without_types_contribute_nothing(self) -> None:
        module = Module(
            name=("Ops",),
            declarations=[
                InfixDeclaration(
                    direction=InfixDirection.LEFT, precedence=5, operator="|=", function="keeper"
                ),
                DestructuringDeclaration(pattern=Pattern("( a, b )"), expr=UnitExpr()),
                function("untyped", body=value("List.map")),
            ],
        )
        assert list(qualified_type_references(module)) == []
