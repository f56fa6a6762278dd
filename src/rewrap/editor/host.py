"""Protocols describing the editor surface the wrapping command runs against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, Sequence

from ..core.positions import Position, Selection


@dataclass(slots=True, frozen=True)
class LineRange:
    """Range between two positions, as handed to :class:`EditBuilder`."""

    start: Position
    end: Position


class TextDocumentLike(Protocol):
    """Read access to a document's lines."""

    @property
    def language_id(self) -> str:
        ...

    @property
    def line_count(self) -> int:
        ...

    def line_at(self, line: int) -> str:
        ...

    def validate_range(self, text_range: LineRange) -> LineRange:
        """Clamp ``text_range`` to the document bounds."""
        ...


class EditBuilder(Protocol):
    """Collects replacements to be committed as one batch."""

    def replace(self, text_range: LineRange, text: str) -> None:
        ...


class TextEditorLike(Protocol):
    """The minimum set of editor features needed to wrap a document."""

    document: TextDocumentLike
    selections: Sequence[Selection]

    @property
    def tab_size(self) -> Any:
        ...

    def edit(self, callback: Callable[[EditBuilder], None]) -> Awaitable[bool]:
        """Run ``callback`` against a builder and commit its replacements atomically."""
        ...


class Notifier(Protocol):
    """User-facing notifications raised by the wrapping command."""

    def show_warning(self, message: str) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...


__all__ = ["EditBuilder", "LineRange", "Notifier", "TextDocumentLike", "TextEditorLike"]
