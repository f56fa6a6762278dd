"""Edit synthesis, selection remapping and the rewrap command."""

from importlib import import_module
from typing import Any

from .edits import Edit, EditOrderError, SectionWrapError, WrapResult, synthesize_edits
from .selections import adjust_position, adjust_selections

__all__ = [
    "Edit",
    "EditOrderError",
    "SectionWrapError",
    "WrapResult",
    "adjust_position",
    "adjust_selections",
    "synthesize_edits",
]


def __getattr__(name: str) -> Any:
    if name in {"command", "qt_host"}:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
