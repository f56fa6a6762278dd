"""Editor host backed by a PySide6 ``QTextDocument``.

Replacements collected during :meth:`QtTextEditor.edit` are applied inside a
single edit block, so the whole rewrap is one undo step. Columns are UTF-16
code units, which is also what Qt uses for document positions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from PySide6.QtGui import QTextCursor, QTextDocument

from ..core.positions import Position, Selection, utf16_length
from .host import EditBuilder, LineRange

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _Replacement:
    start: int
    end: int
    text: str


class QtTextDocument:
    """Line-oriented view over a ``QTextDocument``."""

    def __init__(self, document: QTextDocument, *, language_id: str = "plaintext") -> None:
        self._document = document
        self._language_id = language_id

    @property
    def qt_document(self) -> QTextDocument:
        return self._document

    @property
    def language_id(self) -> str:
        return self._language_id

    @property
    def line_count(self) -> int:
        return self._document.blockCount()

    def line_at(self, line: int) -> str:
        block = self._document.findBlockByNumber(line)
        if not block.isValid():
            raise IndexError(f"Line {line} is outside the document")
        return block.text()

    def text(self) -> str:
        return self._document.toPlainText()

    def validate_range(self, text_range: LineRange) -> LineRange:
        start = self.validate_position(text_range.start)
        end = self.validate_position(text_range.end)
        if end < start:
            start, end = end, start
        return LineRange(start, end)

    def validate_position(self, position: Position) -> Position:
        last_line = max(0, self.line_count - 1)
        if position.line > last_line:
            return Position(last_line, utf16_length(self.line_at(last_line)))
        length = utf16_length(self.line_at(position.line))
        return Position(position.line, min(position.character, length))

    def offset_at(self, position: Position) -> int:
        """Return the absolute document offset of ``position``."""

        valid = self.validate_position(position)
        block = self._document.findBlockByNumber(valid.line)
        return block.position() + valid.character


class _QtEditBuilder:
    def __init__(self, document: QtTextDocument) -> None:
        self._document = document
        self.replacements: List[_Replacement] = []

    def replace(self, text_range: LineRange, text: str) -> None:
        valid = self._document.validate_range(text_range)
        self.replacements.append(
            _Replacement(
                start=self._document.offset_at(valid.start),
                end=self._document.offset_at(valid.end),
                text=text,
            )
        )


class QtTextEditor:
    """Minimal editor surface over a ``QTextDocument`` with multiple selections."""

    def __init__(
        self,
        document: QTextDocument,
        *,
        language_id: str = "plaintext",
        selections: Sequence[Selection] = (),
        tab_size: int = 4,
    ) -> None:
        self.document = QtTextDocument(document, language_id=language_id)
        self.selections: Sequence[Selection] = list(selections) or [Selection.caret(0, 0)]
        self.tab_size = tab_size

    @classmethod
    def from_text(cls, text: str, **kwargs) -> QtTextEditor:
        return cls(QTextDocument(text), **kwargs)

    async def edit(self, callback: Callable[[EditBuilder], None]) -> bool:
        builder = _QtEditBuilder(self.document)
        callback(builder)
        replacements = sorted(builder.replacements, key=lambda item: (item.start, item.end))
        if _overlaps(replacements):
            LOGGER.warning("Rejecting %d overlapping replacement(s)", len(replacements))
            return False

        cursor = QTextCursor(self.document.qt_document)
        cursor.beginEditBlock()
        try:
            for replacement in reversed(replacements):
                cursor.setPosition(replacement.start)
                cursor.setPosition(replacement.end, QTextCursor.MoveMode.KeepAnchor)
                cursor.insertText(replacement.text)
        finally:
            cursor.endEditBlock()
        return True

    def cursor_for(self, selection: Selection) -> QTextCursor:
        """Return a ``QTextCursor`` spanning ``selection``, anchor first."""

        cursor = QTextCursor(self.document.qt_document)
        cursor.setPosition(self.document.offset_at(selection.anchor))
        cursor.setPosition(self.document.offset_at(selection.active), QTextCursor.MoveMode.KeepAnchor)
        return cursor


def _overlaps(replacements: Sequence[_Replacement]) -> bool:
    previous_end = -1
    for item in replacements:
        if item.start < previous_end:
            return True
        previous_end = max(previous_end, item.end)
    return False


__all__ = ["QtTextDocument", "QtTextEditor"]
