"""Interface implemented by per-language section partitioners and wrappers."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..core.sections import Section, SectionSet
from ..services.settings import WrappingOptions


class DocumentProcessor(Protocol):
    """Finds wrappable sections in a document and rewraps them.

    ``find_sections`` must return each tier sorted ascending and
    non-overlapping, with every secondary section inside a primary one.
    ``wrap_section`` is deterministic and raises
    :class:`~rewrap.editor.edits.SectionWrapError` only for malformed
    section metadata.
    """

    def find_sections(self, lines: Sequence[str], tab_size: int) -> SectionSet:
        ...

    def wrap_section(self, options: WrappingOptions, section: Section) -> list[str]:
        ...


__all__ = ["DocumentProcessor"]
