"""typequal: finds type references qualified by their own name (``Set.Set``) and fixes them."""

from typequal.analysis import (
    NoRedundantlyQualifiedType,
    ProjectAggregate,
    ProjectAnalysis,
    apply_edits,
    build_lookup_table,
)
from typequal.models import AnalysisResult, Diagnostic
from typequal.settings import Settings, configure_logging

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Diagnostic",
    "NoRedundantlyQualifiedType",
    "ProjectAggregate",
    "ProjectAnalysis",
    "Settings",
    "__version__",
    "apply_edits",
    "build_lookup_table",
    "configure_logging",
]
