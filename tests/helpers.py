"""Shared test helpers and stub classes.

This module contains reusable test stubs that are used across multiple test files.
Import from here instead of duplicating these classes in individual test files.
"""

from __future__ import annotations

from typing import Callable, Sequence

from rewrap.core.positions import Position, Selection
from rewrap.core.sections import Section, SectionSet, SectionTier
from rewrap.editor.edits import SectionWrapError
from rewrap.editor.host import EditBuilder, LineRange
from rewrap.services.settings import WrappingOptions


class FakeDocument:
    """List-backed document; columns are plain ``str`` indexes."""

    def __init__(self, lines: Sequence[str], language_id: str = "plaintext") -> None:
        self.lines = list(lines)
        self.language_id = language_id

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, line: int) -> str:
        return self.lines[line]

    def validate_range(self, text_range: LineRange) -> LineRange:
        return LineRange(self._clamp(text_range.start), self._clamp(text_range.end))

    def _clamp(self, position: Position) -> Position:
        last = max(0, len(self.lines) - 1)
        if position.line > last:
            return Position(last, len(self.lines[last]) if self.lines else 0)
        return Position(position.line, min(position.character, len(self.lines[position.line])))

    def offset_at(self, position: Position) -> int:
        return sum(len(line) + 1 for line in self.lines[: position.line]) + position.character

    def text(self) -> str:
        return "\n".join(self.lines)


class FakeEditBuilder:
    def __init__(self) -> None:
        self.replacements: list[tuple[LineRange, str]] = []

    def replace(self, text_range: LineRange, text: str) -> None:
        self.replacements.append((text_range, text))


class FakeEditor:
    """Editor stub recording edit batches; ``accept=False`` mimics a host rejection."""

    def __init__(
        self,
        lines: Sequence[str],
        selections: Sequence[Selection] = (),
        *,
        language_id: str = "plaintext",
        tab_size: object = 4,
        accept: bool = True,
    ) -> None:
        self.document = FakeDocument(lines, language_id)
        self.selections: Sequence[Selection] = list(selections)
        self.tab_size = tab_size
        self.accept = accept
        self.batches: list[list[tuple[LineRange, str]]] = []

    async def edit(self, callback: Callable[[EditBuilder], None]) -> bool:
        builder = FakeEditBuilder()
        callback(builder)
        self.batches.append(builder.replacements)
        if not self.accept:
            return False
        text = self.document.text()
        ordered = sorted(
            builder.replacements,
            key=lambda item: self.document.offset_at(item[0].start),
            reverse=True,
        )
        for text_range, replacement in ordered:
            start = self.document.offset_at(text_range.start)
            end = self.document.offset_at(text_range.end)
            text = text[:start] + replacement + text[end:]
        self.document.lines = text.split("\n")
        return True


class RecordingNotifier:
    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def show_warning(self, message: str) -> None:
        self.warnings.append(message)

    def show_error(self, message: str) -> None:
        self.errors.append(message)


class ScriptedProcessor:
    """Processor returning fixed sections and canned wrap output per start line."""

    def __init__(
        self,
        primary: Sequence[Section] = (),
        secondary: Sequence[Section] = (),
        outputs: dict[int, Sequence[str]] | None = None,
        failing: Sequence[int] = (),
    ) -> None:
        self.primary = list(primary)
        self.secondary = list(secondary)
        self.outputs = dict(outputs or {})
        self.failing = set(failing)
        self.wrapped: list[Section] = []

    def find_sections(self, lines: Sequence[str], tab_size: int) -> SectionSet:
        return SectionSet(primary=self.primary, secondary=self.secondary)

    def wrap_section(self, options: WrappingOptions, section: Section) -> list[str]:
        self.wrapped.append(section)
        if section.start_line in self.failing:
            raise SectionWrapError("bad decoration", section=section)
        return list(self.outputs[section.start_line])


def primary(start: int, end: int) -> Section:
    return Section(start, end)


def secondary(start: int, end: int) -> Section:
    return Section(start, end, tier=SectionTier.SECONDARY)


def caret(line: int, character: int) -> Selection:
    return Selection.caret(line, character)
