"""Line-range edits and their synthesis from wrapped sections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from ..core.sections import Section
from ..services.settings import WrappingOptions

if TYPE_CHECKING:
    from ..languages.base import DocumentProcessor

LOGGER = logging.getLogger(__name__)


class SectionWrapError(ValueError):
    """Raised when a section cannot be wrapped because its metadata is malformed."""

    def __init__(self, message: str, *, section: Section | None = None, reason: str = "malformed_section") -> None:
        super().__init__(message)
        self.section = section
        self.reason = reason


class EditOrderError(RuntimeError):
    """Raised when an edit batch is not strictly ascending and non-overlapping."""


@dataclass(slots=True, frozen=True)
class Edit:
    """Replace original lines ``[start_line, end_line)`` with ``lines``."""

    start_line: int
    end_line: int
    lines: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))

    @property
    def line_delta(self) -> int:
        """Lines added (positive) or removed (negative) by this edit."""

        return len(self.lines) - (self.end_line - self.start_line)

    @classmethod
    def for_section(cls, section: Section, lines: Iterable[str]) -> Edit:
        return cls(start_line=section.start_line, end_line=section.end_line, lines=tuple(lines))


@dataclass(slots=True, frozen=True)
class WrapResult:
    """Outcome of wrapping one section: an edit, or a reason it was skipped."""

    section: Section
    edit: Optional[Edit] = None
    skipped: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.edit is not None


def wrap_section(processor: "DocumentProcessor", options: WrappingOptions, section: Section) -> WrapResult:
    """Wrap ``section`` through ``processor``, capturing malformed sections."""

    try:
        lines = processor.wrap_section(options, section)
    except SectionWrapError as exc:
        return WrapResult(section=section, skipped=f"{exc.reason}: {exc}")
    return WrapResult(section=section, edit=Edit.for_section(section, lines))


def synthesize_edits(
    processor: "DocumentProcessor",
    options: WrappingOptions,
    sections: Sequence[Section],
) -> List[Edit]:
    """Return one edit per wrappable section, in ascending line order.

    Sections the wrapper rejects are logged and skipped; the rest of the
    batch still goes through. Adjacent edits are never merged.
    """

    edits: List[Edit] = []
    for section in sections:
        result = wrap_section(processor, options, section)
        if result.edit is None:
            LOGGER.warning(
                "Skipping section [%d, %d): %s", section.start_line, section.end_line, result.skipped
            )
            continue
        edits.append(result.edit)
    ensure_ascending(edits)
    return edits


def ensure_ascending(edits: Sequence[Edit]) -> None:
    """Raise :class:`EditOrderError` unless edits are sorted and disjoint."""

    previous_end = -1
    previous_start = -1
    for edit in edits:
        if edit.end_line < edit.start_line:
            raise EditOrderError(f"Edit range [{edit.start_line}, {edit.end_line}) is inverted")
        if edit.start_line <= previous_start or edit.start_line < previous_end:
            raise EditOrderError(
                f"Edit [{edit.start_line}, {edit.end_line}) overlaps or precedes the previous edit"
            )
        previous_start = edit.start_line
        previous_end = edit.end_line


__all__ = [
    "Edit",
    "EditOrderError",
    "SectionWrapError",
    "WrapResult",
    "ensure_ascending",
    "synthesize_edits",
    "wrap_section",
]
