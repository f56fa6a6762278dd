"""The rewrap command: find sections, build edits, apply them, fix selections."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..core.positions import Selection
from ..core.sections import sections_in_selections
from ..languages.base import DocumentProcessor
from ..languages.registry import LanguageRegistry, default_registry
from ..services.settings import ConfigurationProvider, WrappingOptions, resolve_wrapping_options
from ..utils.logging import get_log_path, setup_logging
from .applicator import apply_edits
from .edits import Edit, synthesize_edits
from .host import Notifier, TextEditorLike
from .selections import adjust_selections

LOGGER = logging.getLogger(__name__)

_FAILURE_MESSAGE = (
    "Sorry, there was an error in Rewrap. The document was not changed. "
    "Please report it together with the log file{location}."
)


def get_edits_and_selections(
    processor: DocumentProcessor,
    document_lines: Sequence[str],
    selections: Sequence[Selection],
    options: WrappingOptions,
) -> Tuple[List[Edit], List[Selection]]:
    """Return the edits for a document and where the selections land afterwards."""

    sections = processor.find_sections(document_lines, options.tab_size)
    to_edit = sections_in_selections(sections.primary, sections.secondary, selections)
    # Ascending order is relied on by adjust_selections.
    edits = synthesize_edits(processor, options, to_edit)
    adjusted = adjust_selections(document_lines, selections, edits)
    return edits, adjusted


async def wrap_something(
    editor: TextEditorLike,
    options: WrappingOptions,
    *,
    registry: Optional[LanguageRegistry] = None,
) -> bool:
    """Rewrap the sections under the editor's selections.

    Edits and new selections are computed from one snapshot before anything
    is applied. Selections are only updated once the host has committed the
    edit batch. Returns whether the host accepted the edits.
    """

    document = editor.document
    processor = (registry or default_registry()).get(document.language_id)
    lines = [document.line_at(index) for index in range(document.line_count)]
    selections = list(editor.selections)

    edits, new_selections = get_edits_and_selections(processor, lines, selections, options)
    if not edits:
        LOGGER.debug("Nothing to rewrap for %d selection(s)", len(selections))
        return True

    applied = await editor.edit(lambda builder: apply_edits(edits, document, builder))
    if not applied:
        LOGGER.warning("Host rejected %d rewrap edit(s); selections left unchanged", len(edits))
        return False
    editor.selections = new_selections
    return True


async def rewrap_comment(
    editor: TextEditorLike,
    config: ConfigurationProvider,
    notifier: Notifier,
    *,
    registry: Optional[LanguageRegistry] = None,
) -> bool:
    """Entry point for the rewrap command.

    The log file is set up on first use. Configuration problems produce a
    single warning. Any unexpected error is logged and reported once, with
    the log file location; nothing is applied in that case.
    """

    warnings: list[str] = []
    try:
        setup_logging()
        options = resolve_wrapping_options(config, editor.tab_size, on_warning=warnings.append)
        if warnings:
            notifier.show_warning("\n".join(warnings))
        return await wrap_something(editor, options, registry=registry)
    except Exception:
        LOGGER.exception(
            "Rewrap failed (language=%s, lines=%s, selections=%s)",
            _safe_language(editor),
            _safe_line_count(editor),
            _safe_selection_count(editor),
        )
        log_path = get_log_path()
        location = f" at {log_path}" if log_path is not None else ""
        notifier.show_error(_FAILURE_MESSAGE.format(location=location))
        return False


def _safe_language(editor: TextEditorLike) -> str:
    try:
        return str(editor.document.language_id)
    except Exception:  # pragma: no cover - diagnostics only
        return "?"


def _safe_line_count(editor: TextEditorLike) -> str:
    try:
        return str(editor.document.line_count)
    except Exception:  # pragma: no cover - diagnostics only
        return "?"


def _safe_selection_count(editor: TextEditorLike) -> str:
    try:
        return str(len(editor.selections))
    except Exception:  # pragma: no cover - diagnostics only
        return "?"


__all__ = ["get_edits_and_selections", "rewrap_comment", "wrap_something"]
