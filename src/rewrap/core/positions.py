"""Line/character positions and editor selections."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

# Character value meaning "end of line" when building ranges; hosts clamp it.
END_OF_LINE = sys.maxsize


def utf16_length(text: str) -> int:
    """Return the length of ``text`` in UTF-16 code units.

    Hosts address columns in UTF-16 units, so a character outside the BMP
    counts as two columns.
    """

    return len(text.encode("utf-16-le")) // 2


@dataclass(slots=True, frozen=True, order=True)
class Position(Sequence[int]):
    """Zero-based ``(line, character)`` location inside a document."""

    line: int
    character: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", self._coerce_index(self.line, "line"))
        object.__setattr__(self, "character", self._coerce_index(self.character, "character"))

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Position {label} must be an integer")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Position {label} must be an integer") from exc
        if number < 0:
            return 0
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.line
        if index == 1:
            return self.character
        raise IndexError("Position index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.character

    def to_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)

    def with_line(self, line: int) -> Position:
        return Position(line, self.character)

    @classmethod
    def from_value(cls, value: Any) -> Position:
        """Coerce ``value`` into a :class:`Position`.

        Accepts positions, ``(line, character)`` pairs, mappings with
        ``line``/``character`` keys, or objects exposing those attributes.
        """

        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            if "line" not in value or "character" not in value:
                raise ValueError("Position mappings require line and character keys")
            return cls(value["line"], value["character"])
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Position sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        character = getattr(value, "character", None)
        if line is not None and character is not None:
            return cls(line, character)
        raise TypeError("Unsupported Position input")


@dataclass(slots=True, frozen=True)
class Selection:
    """A user selection; ``anchor == active`` denotes a caret."""

    anchor: Position
    active: Position

    def __post_init__(self) -> None:
        object.__setattr__(self, "anchor", Position.from_value(self.anchor))
        object.__setattr__(self, "active", Position.from_value(self.active))

    @property
    def is_caret(self) -> bool:
        return self.anchor == self.active

    @property
    def start(self) -> Position:
        return min(self.anchor, self.active)

    @property
    def end(self) -> Position:
        return max(self.anchor, self.active)

    @property
    def is_reversed(self) -> bool:
        return self.active < self.anchor

    def line_span(self) -> tuple[int, int]:
        """Return the inclusive ``(first, last)`` lines the selection covers.

        A non-empty selection that ends at character 0 does not cover that
        final line, matching how editors select whole lines.
        """

        start, end = self.start, self.end
        last = end.line
        if not self.is_caret and end.character == 0 and end.line > start.line:
            last -= 1
        return start.line, last

    @classmethod
    def caret(cls, line: int, character: int) -> Selection:
        position = Position(line, character)
        return cls(position, position)

    @classmethod
    def from_value(cls, value: Any) -> Selection:
        """Coerce ``value`` into a :class:`Selection`."""

        if isinstance(value, Selection):
            return value
        if isinstance(value, Mapping):
            if "anchor" not in value or "active" not in value:
                raise ValueError("Selection mappings require anchor and active keys")
            return cls(value["anchor"], value["active"])
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Selection sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        anchor = getattr(value, "anchor", None)
        active = getattr(value, "active", None)
        if anchor is not None and active is not None:
            return cls(anchor, active)
        raise TypeError("Unsupported Selection input")


__all__ = ["END_OF_LINE", "Position", "Selection", "utf16_length"]
