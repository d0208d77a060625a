"""The rule: flag ``Name.Name`` type references and offer to drop the qualifier."""

from __future__ import annotations

import logging

from typequal.analysis.aggregate import ProjectAggregate
from typequal.analysis.context import ModuleContext
from typequal.analysis.decision import AcceptedDecision, decide
from typequal.analysis.fixes import compose_fix
from typequal.analysis.lookup import ModuleNameLookupTable
from typequal.ast.nodes import Module
from typequal.ast.visitor import TypeReferenceWalker
from typequal.models.errors import Diagnostic

logger = logging.getLogger("typequal.rule")

RULE_NAME = "NoRedundantlyQualifiedType"


def _diagnostic(decision: AcceptedDecision) -> Diagnostic:
    name = decision.name
    return Diagnostic(
        rule=RULE_NAME,
        message=f"This type can be simplified to just `{name}`.",
        details=[
            f"The qualifier `{name}.` repeats the name of the type it qualifies.",
            f"Since `{name}` is defined in a module of the same name and nothing else "
            f"in scope is called `{name}`, the qualifier can be dropped.",
        ],
        range=decision.range,
        edits=compose_fix(decision),
    )


class NoRedundantlyQualifiedType:
    """Runs the redundant-qualifier check over one module at a time.

    Stateless, safe to share across modules.
    """

    name = RULE_NAME

    def __init__(self) -> None:
        self._walker = TypeReferenceWalker()

    def check(
        self,
        module: Module,
        lookup: ModuleNameLookupTable,
        project: ProjectAggregate | None = None,
    ) -> list[Diagnostic]:
        """Return one diagnostic per qualified type reference that can be simplified."""
        context = ModuleContext.build(module, lookup, project)
        diagnostics: list[Diagnostic] = []
        for reference in self._walker.walk(module):
            decision = decide(reference, context)
            if decision is not None:
                diagnostics.append(_diagnostic(decision))
        logger.debug(
            "%s: %d diagnostic(s) in %s", RULE_NAME, len(diagnostics), module.dotted_name
        )
        return diagnostics
