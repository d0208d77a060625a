"""Redundant type qualifier detection: context, decision, fixes and project runs."""

from typequal.analysis.aggregate import ProjectAggregate, self_named_exposure
from typequal.analysis.context import ImportIndex, ModuleContext, collect_defined_types
from typequal.analysis.decision import AcceptedDecision, decide
from typequal.analysis.fixes import (
    FixCompositionError,
    OverlappingEditsError,
    apply_edits,
    compose_fix,
)
from typequal.analysis.lookup import LookupTable, ModuleNameLookupTable, build_lookup_table
from typequal.analysis.project import ProjectAnalysis
from typequal.analysis.rule import NoRedundantlyQualifiedType

__all__ = [
    "AcceptedDecision",
    "FixCompositionError",
    "ImportIndex",
    "LookupTable",
    "ModuleContext",
    "ModuleNameLookupTable",
    "NoRedundantlyQualifiedType",
    "OverlappingEditsError",
    "ProjectAggregate",
    "ProjectAnalysis",
    "apply_edits",
    "build_lookup_table",
    "collect_defined_types",
    "compose_fix",
    "decide",
    "self_named_exposure",
]
