"""Wrapping options and the configuration layer they are resolved from."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol

__all__ = [
    "ConfigurationProvider",
    "EnvironmentConfiguration",
    "MappingConfiguration",
    "WrappingOptions",
    "DEFAULT_TAB_SIZE",
    "DEFAULT_WRAPPING_COLUMN",
    "resolve_wrapping_options",
]

LOGGER = logging.getLogger(__name__)

DEFAULT_WRAPPING_COLUMN = 80
DEFAULT_TAB_SIZE = 4
_LARGE_WRAPPING_COLUMN = 120
# Hosts report 300 for ``editor.wrappingColumn`` when the user never set it.
_EDITOR_COLUMN_SENTINEL = 300
_EXTENSION_SECTION = "rewrap"
_EDITOR_SECTION = "editor"
_INT_ENV_OVERRIDES: Mapping[str, str] = {
    "REWRAP_WRAPPING_COLUMN": "wrappingColumn",
}
_BOOL_ENV_OVERRIDES: Mapping[str, str] = {
    "REWRAP_DOUBLE_SENTENCE_SPACING": "doubleSentenceSpacing",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}

WarningSink = Callable[[str], None]


@dataclass(slots=True, frozen=True)
class WrappingOptions:
    """Sanitized options controlling a single wrap operation."""

    wrapping_column: int = DEFAULT_WRAPPING_COLUMN
    tab_size: int = DEFAULT_TAB_SIZE
    double_sentence_spacing: bool = False


class ConfigurationProvider(Protocol):
    """Read access to live host settings, grouped by section."""

    def get(self, section: str, key: str, default: Any = None) -> Any:
        ...


class MappingConfiguration:
    """Configuration backed by a settings mapping.

    Both nested (``{"editor": {"rulers": [80]}}``) and dotted
    (``{"editor.rulers": [80]}``) keys are understood; dotted keys win.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def get(self, section: str, key: str, default: Any = None) -> Any:
        dotted = f"{section}.{key}"
        if dotted in self._values:
            return self._values[dotted]
        nested = self._values.get(section)
        if isinstance(nested, Mapping) and key in nested:
            return nested[key]
        return default

    def update(self, values: Mapping[str, Any]) -> None:
        self._values.update(values)

    @classmethod
    def from_json(cls, path: Path | str) -> MappingConfiguration:
        """Load a JSON settings file, tolerating missing or broken files."""

        target = Path(path).expanduser()
        if not target.exists():
            return cls()
        try:
            payload = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.warning("Failed to read settings from %s: %s", target, exc)
            return cls()
        if not isinstance(payload, Mapping):
            LOGGER.warning("Settings file %s does not contain an object; ignoring", target)
            return cls()
        return cls(payload)


class EnvironmentConfiguration:
    """Layers ``REWRAP_*`` environment overrides on top of another provider.

    The environment is read on every lookup.
    """

    def __init__(
        self,
        base: ConfigurationProvider | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._base = base or MappingConfiguration()
        self._environ = environ

    def get(self, section: str, key: str, default: Any = None) -> Any:
        if section == _EXTENSION_SECTION:
            override = self._override(key)
            if override is not None:
                return override
        return self._base.get(section, key, default)

    def _override(self, key: str) -> Any:
        environ = os.environ if self._environ is None else self._environ
        for env_key, field_name in _INT_ENV_OVERRIDES.items():
            if field_name == key and env_key in environ:
                raw = environ[env_key].strip()
                try:
                    return int(raw)
                except ValueError:
                    # Left raw so the resolver reports it as invalid.
                    return raw
        for env_key, field_name in _BOOL_ENV_OVERRIDES.items():
            if field_name == key and env_key in environ:
                return environ[env_key].strip().lower() in _TRUE_VALUES
        return None


def resolve_wrapping_options(
    config: ConfigurationProvider,
    editor_tab_size: Any,
    *,
    on_warning: WarningSink | None = None,
) -> WrappingOptions:
    """Resolve :class:`WrappingOptions` from live configuration.

    Never fails: invalid values fall back to defaults and are reported
    through the logger and ``on_warning``.
    """

    wrapping_column = _resolve_wrapping_column(config, on_warning)
    tab_size = _resolve_tab_size(editor_tab_size, wrapping_column, on_warning)
    double_spacing = config.get(_EXTENSION_SECTION, "doubleSentenceSpacing")
    return WrappingOptions(
        wrapping_column=wrapping_column,
        tab_size=tab_size,
        double_sentence_spacing=_as_bool(double_spacing),
    )


def _resolve_wrapping_column(config: ConfigurationProvider, on_warning: WarningSink | None) -> Any:
    column = _first_defined(
        config.get(_EXTENSION_SECTION, "wrappingColumn"),
        _first_ruler(config.get(_EDITOR_SECTION, "rulers")),
        _editor_column(config.get(_EDITOR_SECTION, "wrappingColumn")),
    )
    if column is None:
        return DEFAULT_WRAPPING_COLUMN

    if not _is_positive_int(column):
        _warn(
            on_warning,
            f"Rewrap: wrapping column is an invalid value ({column!r}). "
            f"Using the default of ({DEFAULT_WRAPPING_COLUMN}) instead.",
        )
        return DEFAULT_WRAPPING_COLUMN
    if column > _LARGE_WRAPPING_COLUMN:
        _warn(on_warning, f"Rewrap: wrapping column is a rather large value ({column}).")
    return int(column)


def _resolve_tab_size(tab_size: Any, wrapping_column: int, on_warning: WarningSink | None) -> int:
    if not _is_positive_int(tab_size):
        _warn(
            on_warning,
            f"Rewrap: tabSize is an invalid value ({tab_size!r}). "
            f"Using the default of ({DEFAULT_TAB_SIZE}) instead.",
        )
        tab_size = DEFAULT_TAB_SIZE
    if tab_size > wrapping_column / 2:
        _warn(
            on_warning,
            f"Rewrap: tabSize is ({tab_size}) and wrappingColumn is ({wrapping_column}). "
            "Unexpected results may occur.",
        )
    return int(tab_size)


def _first_defined(*values: Any) -> Any:
    for value in values:
        if not _is_unset(value):
            return value
    return None


def _is_unset(value: Any) -> bool:
    # Empty and zero settings fall through to the next source.
    if value is None or value is False or value == "":
        return True
    return _is_int(value) and value == 0


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


def _first_ruler(rulers: Any) -> Any:
    if isinstance(rulers, (list, tuple)) and rulers:
        return rulers[0]
    return None


def _editor_column(column: Any) -> int | None:
    if _is_int(column) and 0 < column < _EDITOR_COLUMN_SENTINEL:
        return int(column)
    return None


def _is_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def _is_positive_int(value: Any) -> bool:
    return _is_int(value) and value >= 1


def _warn(on_warning: WarningSink | None, message: str) -> None:
    LOGGER.warning(message)
    if on_warning is not None:
        on_warning(message)
