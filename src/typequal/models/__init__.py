"""Pydantic models for diagnostics, edits and source positions."""

from typequal.models.errors import (
    AnalysisResult,
    Diagnostic,
    Edit,
    InsertAt,
    ModuleDiagnostics,
    Position,
    Range,
    RemoveRange,
)

__all__ = [
    "AnalysisResult",
    "Diagnostic",
    "Edit",
    "InsertAt",
    "ModuleDiagnostics",
    "Position",
    "Range",
    "RemoveRange",
]
