"""Wrappable sections and the rules for picking them from selections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from .positions import Selection


class SectionTier(str, Enum):
    """Granularity of a section."""

    PRIMARY = "primary"  # whole blocks, e.g. a comment block
    SECONDARY = "secondary"  # paragraphs inside a primary section


@dataclass(slots=True, frozen=True)
class Section:
    """Half-open line range ``[start_line, end_line)`` of wrappable content.

    Attributes:
        start_line: First line of the section.
        end_line: Line after the last line of the section.
        lines: Raw document lines covered by the section.
        indent: Leading whitespace shared by every line.
        prefix: Decoration (comment marker plus spacing) after the indent.
        tier: Whether this is a primary or secondary section.
    """

    start_line: int
    end_line: int
    lines: tuple[str, ...] = ()
    indent: str = ""
    prefix: str = ""
    tier: SectionTier = SectionTier.PRIMARY

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.end_line < self.start_line:
            raise ValueError(f"Invalid section range [{self.start_line}, {self.end_line})")
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def key(self) -> tuple[str, int, int]:
        """Identity of the section: its line range within its tier."""

        return (self.tier.value, self.start_line, self.end_line)

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line

    def contains_lines(self, first: int, last: int) -> bool:
        """Return ``True`` when inclusive lines ``first..last`` lie inside."""

        return self.start_line <= first and last < self.end_line

    def intersects_lines(self, first: int, last: int) -> bool:
        return self.start_line <= last and first < self.end_line

    def contains_section(self, other: Section) -> bool:
        return self.start_line <= other.start_line and other.end_line <= self.end_line


@dataclass(slots=True)
class SectionSet:
    """Sections found in a document, split by tier and sorted ascending."""

    primary: list[Section] = field(default_factory=list)
    secondary: list[Section] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.primary = sorted(self.primary, key=lambda section: section.start_line)
        self.secondary = sorted(self.secondary, key=lambda section: section.start_line)


def sections_in_selections(
    primary: Sequence[Section],
    secondary: Sequence[Section],
    selections: Iterable[Selection],
) -> list[Section]:
    """Return the sections the ``selections`` ask to rewrap.

    The result is deduplicated and sorted by ``start_line``. When a primary
    section is picked, secondary sections inside it are dropped so the
    resulting edits never overlap. Selections that touch no section add
    nothing; an empty result is returned as-is.
    """

    chosen: dict[tuple[str, int, int], Section] = {}
    for selection in selections:
        for section in _sections_for_selection(primary, secondary, selection):
            chosen.setdefault(section.key, section)

    picked_primary = [s for s in chosen.values() if s.tier is SectionTier.PRIMARY]
    result = [
        section
        for section in chosen.values()
        if section.tier is SectionTier.PRIMARY
        or not any(parent.contains_section(section) for parent in picked_primary)
    ]
    result.sort(key=lambda section: (section.start_line, section.end_line))
    return result


def _sections_for_selection(
    primary: Sequence[Section],
    secondary: Sequence[Section],
    selection: Selection,
) -> list[Section]:
    first, last = selection.line_span()
    touched = [section for section in primary if section.intersects_lines(first, last)]
    if not touched:
        return []
    if len(touched) == 1 and (selection.is_caret or touched[0].contains_lines(first, last)):
        parent = touched[0]
        for child in secondary:
            if parent.contains_section(child) and child.contains_lines(first, last):
                return [child]
    return touched


__all__ = ["Section", "SectionSet", "SectionTier", "sections_in_selections"]
