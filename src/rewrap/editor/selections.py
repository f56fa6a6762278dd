"""Remap selections through a batch of line edits.

Edits are keyed to the original line numbering, sorted ascending and
disjoint. Each edit shifts every later line by its ``line_delta``; the
running shift is computed once per batch and positions look up the last edit
starting at or before their line. Positions that fall inside a replaced range
are projected onto the replacement lines:

* at or past the end of the range's last line: end of the last new line;
* same number of lines: same relative line, character clamped;
* different number of lines: relative line scaled by the ratio of line
  counts, clamped to the replacement, character clamped.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Sequence

from ..core.positions import Position, Selection, utf16_length
from .edits import Edit, ensure_ascending


def adjust_selections(
    original_lines: Sequence[str],
    selections: Sequence[Selection],
    edits: Sequence[Edit],
) -> List[Selection]:
    """Return ``selections`` as they should be after ``edits`` are applied."""

    if not edits:
        return list(selections)
    timeline = _EditTimeline(original_lines, edits)
    return [Selection(timeline.map(item.anchor), timeline.map(item.active)) for item in selections]


def adjust_position(original_lines: Sequence[str], position: Position, edits: Sequence[Edit]) -> Position:
    """Remap a single position; see :func:`adjust_selections`."""

    if not edits:
        return position
    return _EditTimeline(original_lines, edits).map(position)


class _EditTimeline:
    """Ordered edits with the line shift accumulated before each one."""

    def __init__(self, original_lines: Sequence[str], edits: Sequence[Edit]) -> None:
        ensure_ascending(edits)
        self._original_lines = original_lines
        self._edits = tuple(edits)
        self._starts = [edit.start_line for edit in self._edits]
        self._shifts: list[int] = []
        shift = 0
        for edit in self._edits:
            self._shifts.append(shift)
            shift += edit.line_delta

    def map(self, position: Position) -> Position:
        index = bisect_right(self._starts, position.line) - 1
        if index < 0:
            return position
        edit = self._edits[index]
        shift = self._shifts[index]
        if position.line < edit.end_line:
            return self._map_inside(edit, shift, position)
        return position.with_line(position.line + shift + edit.line_delta)

    def _map_inside(self, edit: Edit, shift: int, position: Position) -> Position:
        new_start = edit.start_line + shift
        replacement = edit.lines
        if not replacement:
            return Position(new_start, 0)

        original_count = edit.end_line - edit.start_line
        relative = position.line - edit.start_line
        if relative == original_count - 1 and position.character >= self._original_length(position.line):
            last = len(replacement) - 1
            return Position(new_start + last, utf16_length(replacement[last]))

        if len(replacement) == original_count:
            target = relative
        else:
            target = (relative * len(replacement)) // original_count
            target = max(0, min(target, len(replacement) - 1))
        character = min(position.character, utf16_length(replacement[target]))
        return Position(new_start + target, character)

    def _original_length(self, line: int) -> int:
        if 0 <= line < len(self._original_lines):
            return utf16_length(self._original_lines[line])
        return 0


__all__ = ["adjust_position", "adjust_selections"]
