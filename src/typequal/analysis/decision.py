"""Decides whether a self-qualified type reference can lose its qualifier."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from typequal.analysis.context import ModuleContext, any_exposes_type
from typequal.ast.nodes import Import
from typequal.ast.visitor import QualifiedTypeReference
from typequal.models.errors import Range

logger = logging.getLogger("typequal.rule")


@dataclass(frozen=True)
class AcceptedDecision:
    """A reference whose qualifier is redundant and safe to remove.

    ``matching`` holds the imports of the module that defines the type; the
    import-side edit is computed from them alone.
    """

    reference: QualifiedTypeReference
    module_name: tuple[str, ...]
    matching: tuple[Import, ...]

    @property
    def name(self) -> str:
        return self.reference.name

    @property
    def range(self) -> Range:
        return self.reference.range


def decide(reference: QualifiedTypeReference, context: ModuleContext) -> AcceptedDecision | None:
    """Return an ``AcceptedDecision`` for ``reference``, or None to leave it alone.

    Checks, in order:

    1. The qualifier is textually identical to the type name (``Set.Set``).
    2. The module does not define a type of that name itself; the qualifier
       may be what tells the two apart.
    3. The lookup table knows which module defines the reference.
    4. No import other than the defining module's exposes the name
       unqualified; dropping the qualifier could bind it elsewhere.

    Rejections are normal outcomes and never raise.
    """
    if not reference.self_qualified:
        return None

    if reference.name in context.defined_types:
        logger.debug(
            "Keeping %s.%s: %s defines its own %s",
            reference.qualifier,
            reference.name,
            ".".join(context.module_name),
            reference.name,
        )
        return None

    module_name = context.lookup.module_name_for(reference.range)
    if module_name is None:
        logger.debug(
            "Skipping %s.%s at %d:%d: no module resolved",
            reference.qualifier,
            reference.name,
            reference.range.start.row,
            reference.range.start.column,
        )
        return None

    matching, other = context.imports.partition(module_name)
    if any_exposes_type(other, reference.name):
        logger.debug(
            "Keeping %s.%s: another import exposes %s",
            reference.qualifier,
            reference.name,
            reference.name,
        )
        return None

    return AcceptedDecision(reference=reference, module_name=module_name, matching=matching)
