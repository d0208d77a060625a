"""Structured diagnostic models with source position tracking."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """A point in the source: 1-based row and column."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=1)
    column: int = Field(ge=1)

    def shifted(self, columns: int) -> Position:
        return Position(row=self.row, column=self.column + columns)


class Range(BaseModel):
    """Points to an exact span of source text. ``end`` is exclusive."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def of(cls, start_row: int, start_column: int, end_row: int, end_column: int) -> Range:
        return cls(
            start=Position(row=start_row, column=start_column),
            end=Position(row=end_row, column=end_column),
        )


class RemoveRange(BaseModel):
    """Delete the text covered by ``range``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remove"] = "remove"
    range: Range


class InsertAt(BaseModel):
    """Insert ``text`` at ``position``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["insert"] = "insert"
    position: Position
    text: str

    @property
    def range(self) -> Range:
        return Range(start=self.position, end=self.position)


Edit = Annotated[RemoveRange | InsertAt, Field(discriminator="kind")]


class Diagnostic(BaseModel):
    """A reported issue with its location and the edits that resolve it.

    Edit coordinates always refer to the original, unmodified source.
    """

    rule: str
    message: str
    details: list[str] = []
    range: Range
    edits: list[Edit] = []

    @property
    def detail(self) -> str:
        return " ".join(self.details)


class ModuleDiagnostics(BaseModel):
    """Diagnostics produced for a single module."""

    module_name: tuple[str, ...]
    diagnostics: list[Diagnostic] = []


class AnalysisResult(BaseModel):
    """Result of running the rule over a set of modules."""

    modules: list[ModuleDiagnostics] = []
    self_named_exposures: list[tuple[str, ...]] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for m in self.modules for d in m.diagnostics]

    def for_module(self, module_name: tuple[str, ...] | str) -> list[Diagnostic]:
        """Diagnostics of one analysed module.  Raises ``KeyError`` if not analysed."""
        if isinstance(module_name, str):
            module_name = tuple(module_name.split("."))
        for module in self.modules:
            if module.module_name == module_name:
                return module.diagnostics
        raise KeyError(f"No module '{'.'.join(module_name)}' in this analysis")

    @property
    def clean(self) -> bool:
        return not any(m.diagnostics for m in self.modules)
