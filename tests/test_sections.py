"""Tests for positions, selections and picking sections from selections."""

from __future__ import annotations

import pytest

from rewrap.core.positions import Position, Selection, utf16_length
from rewrap.core.sections import Section, SectionSet, SectionTier, sections_in_selections
from tests.helpers import caret, primary, secondary

PRIMARY = [primary(0, 5), primary(7, 9)]
SECONDARY = [secondary(0, 2), secondary(3, 5), secondary(7, 9)]


def _pick(*selections: Selection) -> list[tuple[str, int, int]]:
    return [section.key for section in sections_in_selections(PRIMARY, SECONDARY, selections)]


def test_caret_inside_paragraph_prefers_secondary_section() -> None:
    assert _pick(caret(1, 3)) == [("secondary", 0, 2)]


def test_caret_between_paragraphs_selects_primary_section() -> None:
    assert _pick(caret(2, 0)) == [("primary", 0, 5)]


def test_selection_across_paragraphs_selects_primary_section() -> None:
    selection = Selection(Position(0, 0), Position(4, 2))

    assert _pick(selection) == [("primary", 0, 5)]


def test_selection_spanning_blocks_selects_every_primary() -> None:
    selection = Selection(Position(8, 1), Position(1, 0))

    assert _pick(selection) == [("primary", 0, 5), ("primary", 7, 9)]


def test_selection_outside_sections_contributes_nothing() -> None:
    assert _pick(caret(6, 0)) == []
    assert sections_in_selections(PRIMARY, SECONDARY, []) == []


def test_duplicate_hits_collapse_and_sort_ascending() -> None:
    assert _pick(caret(8, 0), caret(1, 0), caret(0, 4)) == [("secondary", 0, 2), ("secondary", 7, 9)]


def test_secondary_inside_selected_primary_is_dropped() -> None:
    whole_block = Selection(Position(0, 0), Position(4, 1))

    assert _pick(caret(1, 0), whole_block) == [("primary", 0, 5)]


def test_selection_ending_at_line_start_excludes_that_line() -> None:
    selection = Selection(Position(3, 0), Position(5, 0))

    assert _pick(selection) == [("secondary", 3, 5)]


def test_primary_without_matching_secondary_is_used() -> None:
    sections = sections_in_selections([primary(0, 3)], [], [caret(1, 0)])

    assert [section.key for section in sections] == [("primary", 0, 3)]


def test_section_rejects_inverted_ranges() -> None:
    with pytest.raises(ValueError):
        Section(4, 2)


def test_section_set_sorts_each_tier() -> None:
    sections = SectionSet(primary=[primary(5, 6), primary(0, 2)], secondary=[secondary(5, 6), secondary(0, 1)])

    assert [s.start_line for s in sections.primary] == [0, 5]
    assert [s.start_line for s in sections.secondary] == [0, 5]
    assert sections.secondary[0].tier is SectionTier.SECONDARY


def test_selection_helpers() -> None:
    reversed_selection = Selection((4, 2), (1, 7))

    assert reversed_selection.is_reversed
    assert reversed_selection.start == Position(1, 7)
    assert reversed_selection.end == Position(4, 2)
    assert reversed_selection.line_span() == (1, 4)
    assert caret(3, 3).is_caret
    assert caret(3, 0).line_span() == (3, 3)


def test_position_coercion() -> None:
    assert Position.from_value({"line": 2, "character": 5}) == Position(2, 5)
    assert Position.from_value([1, 0]) == Position(1, 0)
    assert Position(-1, -3) == Position(0, 0)
    assert tuple(Position(3, 4)) == (3, 4)
    with pytest.raises(ValueError):
        Position.from_value([1])
    with pytest.raises(TypeError):
        Position.from_value(object())
    assert Selection.from_value({"anchor": (0, 1), "active": (2, 3)}) == Selection(Position(0, 1), Position(2, 3))


def test_utf16_length_counts_surrogate_pairs() -> None:
    assert utf16_length("abc") == 3
    assert utf16_length("a\U0001F600") == 3
