"""Tests for the QTextDocument-backed editor host."""

from __future__ import annotations

import pytest

from rewrap.core.positions import END_OF_LINE, Position, Selection
from rewrap.editor.command import wrap_something
from rewrap.editor.host import LineRange
from rewrap.editor.qt_host import QtTextEditor
from rewrap.services.settings import WrappingOptions


@pytest.fixture(autouse=True)
def _ensure_qapp(qapp):  # pragma: no cover - pytest-qt provides the fixture
    """Guarantee a running QApplication for QTextDocument layout."""

    return qapp


def test_document_exposes_lines() -> None:
    editor = QtTextEditor.from_text("alpha\nbeta\n\ngamma", language_id="python")

    assert editor.document.line_count == 4
    assert editor.document.line_at(1) == "beta"
    assert editor.document.line_at(2) == ""
    assert editor.document.language_id == "python"
    with pytest.raises(IndexError):
        editor.document.line_at(9)


def test_validate_range_clamps_to_document_bounds() -> None:
    editor = QtTextEditor.from_text("one\ntwo")

    clamped = editor.document.validate_range(LineRange(Position(0, 0), Position(1, END_OF_LINE)))
    past_end = editor.document.validate_range(LineRange(Position(1, 1), Position(7, 0)))

    assert clamped == LineRange(Position(0, 0), Position(1, 3))
    assert past_end == LineRange(Position(1, 1), Position(1, 3))


def test_offsets_use_utf16_columns() -> None:
    editor = QtTextEditor.from_text("\U0001F600x\nnext")

    assert editor.document.offset_at(Position(0, 3)) == 3
    assert editor.document.offset_at(Position(1, 0)) == 4


@pytest.mark.asyncio
async def test_wrap_applies_single_undo_step() -> None:
    original = "// a short\n// comment\ncode();\n// one two three"
    editor = QtTextEditor.from_text(
        original,
        language_id="javascript",
        selections=[Selection.caret(0, 2), Selection.caret(2, 0), Selection.caret(3, 5)],
    )

    assert await wrap_something(editor, WrappingOptions(wrapping_column=12)) is True

    text = editor.document.text()
    assert text.split("\n") == ["// a short", "// comment", "code();", "// one two", "// three"]
    assert editor.selections == [Selection.caret(0, 2), Selection.caret(2, 0), Selection.caret(3, 5)]

    editor.document.qt_document.undo()

    assert editor.document.text() == original


@pytest.mark.asyncio
async def test_wrap_merges_lines_in_qt_document() -> None:
    editor = QtTextEditor.from_text(
        "// a short\n// comment\ncode();",
        language_id="javascript",
        selections=[Selection.caret(1, 3), Selection.caret(2, 0)],
    )

    await wrap_something(editor, WrappingOptions(wrapping_column=20))

    assert editor.document.text() == "// a short comment\ncode();"
    assert editor.selections == [Selection.caret(0, 3), Selection.caret(1, 0)]


@pytest.mark.asyncio
async def test_overlapping_replacements_are_rejected() -> None:
    editor = QtTextEditor.from_text("abcdef")

    def callback(builder) -> None:
        builder.replace(LineRange(Position(0, 0), Position(0, 4)), "x")
        builder.replace(LineRange(Position(0, 2), Position(0, 6)), "y")

    assert await editor.edit(callback) is False
    assert editor.document.text() == "abcdef"


def test_cursor_for_selection_keeps_anchor() -> None:
    editor = QtTextEditor.from_text("hello\nworld")

    cursor = editor.cursor_for(Selection(Position(1, 3), Position(0, 1)))

    assert cursor.anchor() == 9
    assert cursor.position() == 1
    assert cursor.selectedText() == "ello\u2029wor"
