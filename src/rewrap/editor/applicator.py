"""Translate edits into the host's range-replace primitive."""

from __future__ import annotations

from typing import Optional, Sequence

from ..core.positions import END_OF_LINE, Position
from .edits import Edit
from .host import EditBuilder, LineRange, TextDocumentLike


def edit_range(edit: Edit, line_count: Optional[int] = None) -> LineRange:
    """Return the range covering the original lines of ``edit``.

    ``end_line`` is exclusive, so the range stops at the end of the line
    before it. A zero-length edit becomes an insertion point, and an edit
    with no replacement lines also swallows the trailing line break. When
    such an edit runs to the end of a document of ``line_count`` lines, the
    line break before it goes instead.
    """

    if edit.end_line <= edit.start_line:
        point = Position(edit.start_line, 0)
        return LineRange(point, point)
    if not edit.lines:
        if line_count is not None and edit.end_line >= line_count and edit.start_line > 0:
            return LineRange(Position(edit.start_line - 1, END_OF_LINE), Position(edit.end_line, 0))
        return LineRange(Position(edit.start_line, 0), Position(edit.end_line, 0))
    return LineRange(Position(edit.start_line, 0), Position(edit.end_line - 1, END_OF_LINE))


def edit_text(edit: Edit, newline: str = "\n") -> str:
    text = newline.join(edit.lines)
    if edit.end_line <= edit.start_line and edit.lines:
        text += newline
    return text


def apply_edits(
    edits: Sequence[Edit],
    document: TextDocumentLike,
    builder: EditBuilder,
    *,
    newline: str = "\n",
) -> None:
    """Queue every edit on ``builder``; the host commits them as one batch."""

    for edit in edits:
        text_range = document.validate_range(edit_range(edit, document.line_count))
        builder.replace(text_range, edit_text(edit, newline))


__all__ = ["apply_edits", "edit_range", "edit_text"]
