"""Builds the text edits for an accepted decision, and applies edits to source."""

from __future__ import annotations

from collections.abc import Sequence

from typequal.analysis.context import any_exposes_type
from typequal.analysis.decision import AcceptedDecision
from typequal.ast.builder import SourceLocator
from typequal.ast.nodes import ExposingExplicit, Import
from typequal.models.errors import Edit, InsertAt, Range, RemoveRange


class FixCompositionError(Exception):
    """Raised when a fix is requested for a reference that is not self-qualified."""


class OverlappingEditsError(Exception):
    """Raised when two edits touch the same stretch of source."""

    def __init__(self, first: Edit, second: Edit) -> None:
        self.first = first
        self.second = second
        super().__init__(f"Edits overlap: {first!r} and {second!r}")


def compose_fix(decision: AcceptedDecision) -> list[Edit]:
    """Qualifier removal first, then the import edit if one is needed.

    Both edits are expressed against the original source and touch disjoint
    spans.
    """
    reference = decision.reference
    if reference.qualifier != reference.name:
        raise FixCompositionError(
            f"Cannot drop qualifier '{reference.qualifier}' from '{reference.name}': "
            f"qualifier and name differ"
        )

    start = reference.range.start
    edits: list[Edit] = [
        RemoveRange(range=Range(start=start, end=start.shifted(len(reference.name) + 1)))
    ]
    import_edit = _import_edit(reference.name, decision.matching)
    if import_edit is not None:
        edits.append(import_edit)
    return edits


def _import_edit(name: str, matching: Sequence[Import]) -> InsertAt | None:
    """Edit that keeps ``name`` in scope once it is written unqualified."""
    if any_exposes_type(matching, name):
        return None

    for import_ in matching:
        if isinstance(import_.exposing, ExposingExplicit) and import_.exposing.entries:
            first = import_.exposing.entries[0]
            return InsertAt(position=first.range.start, text=f"{name}, ")

    if not matching:
        # Implicitly imported module; the bare name is already reachable.
        return None

    for import_ in matching:
        if import_.exposing is None:
            return InsertAt(position=import_.range.end, text=f" exposing ({name})")
    return None


def apply_edits(source: str, edits: Sequence[Edit]) -> str:
    """Apply ``edits``, all expressed against ``source``, and return the new text.

    Raises ``OverlappingEditsError`` if two edits overlap or two insertions
    share a position.
    """
    locator = SourceLocator(source)
    spans = sorted(
        (
            (locator.offset_of(edit.range.start), locator.offset_of(edit.range.end), edit)
            for edit in edits
        ),
        key=lambda span: (span[0], span[1]),
    )

    for (start_a, end_a, edit_a), (start_b, _, edit_b) in zip(spans, spans[1:], strict=False):
        both_inserts = isinstance(edit_a, InsertAt) and isinstance(edit_b, InsertAt)
        if start_b < end_a or (both_inserts and start_a == start_b):
            raise OverlappingEditsError(edit_a, edit_b)

    result = source
    for start, end, edit in reversed(spans):
        replacement = edit.text if isinstance(edit, InsertAt) else ""
        result = result[:start] + replacement + result[end:]
    return result
