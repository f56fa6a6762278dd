"""Rewrap: reflow comments and prose to a wrapping column inside source files."""

from .core.positions import Position, Selection
from .core.sections import Section, SectionSet
from .editor.command import get_edits_and_selections, rewrap_comment, wrap_something
from .editor.edits import Edit
from .services.settings import WrappingOptions, resolve_wrapping_options

__all__ = [
    "Edit",
    "Position",
    "Section",
    "SectionSet",
    "Selection",
    "WrappingOptions",
    "get_edits_and_selections",
    "resolve_wrapping_options",
    "rewrap_comment",
    "wrap_something",
]

__version__ = "0.1.0"
