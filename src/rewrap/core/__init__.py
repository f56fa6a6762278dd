"""Core domain types shared by the wrapping engine.

Positions and selections live here, together with the section model used to
decide which parts of a document get reflowed.
"""

from .positions import END_OF_LINE, Position, Selection, utf16_length
from .sections import Section, SectionSet, sections_in_selections

__all__ = [
    "END_OF_LINE",
    "Position",
    "Section",
    "SectionSet",
    "Selection",
    "sections_in_selections",
    "utf16_length",
]
