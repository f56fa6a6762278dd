"""Registry mapping host language ids to document processors."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping

from .base import DocumentProcessor
from .basic import BasicLanguage

LOGGER = logging.getLogger(__name__)

PLAIN_TEXT = "plaintext"

_LINE_COMMENTS: Mapping[str, tuple[str, ...]] = {
    "#": (
        "coffeescript",
        "dockerfile",
        "makefile",
        "perl",
        "powershell",
        "python",
        "r",
        "ruby",
        "shellscript",
        "toml",
        "yaml",
    ),
    "//": (
        "c",
        "cpp",
        "csharp",
        "dart",
        "fsharp",
        "go",
        "java",
        "javascript",
        "javascriptreact",
        "kotlin",
        "php",
        "rust",
        "scala",
        "swift",
        "typescript",
        "typescriptreact",
    ),
    "--": ("elm", "haskell", "lua", "sql"),
    ";": ("clojure", "ini", "lisp"),
    "%": ("erlang", "latex", "matlab"),
}
_PROSE: tuple[str, ...] = (PLAIN_TEXT, "markdown", "restructuredtext", "git-commit")


class UnknownLanguageError(LookupError):
    """Raised when a strict lookup finds no processor for a language id."""

    def __init__(self, language_id: str) -> None:
        super().__init__(f"No document processor registered for {language_id!r}")
        self.language_id = language_id


class LanguageRegistry:
    """Language id to :class:`DocumentProcessor` lookup with a prose fallback."""

    def __init__(self, processors: Mapping[str, DocumentProcessor] | None = None) -> None:
        self._processors: Dict[str, DocumentProcessor] = {}
        for language_id, processor in (processors or {}).items():
            self.register(language_id, processor)

    def register(self, language_id: str, processor: DocumentProcessor) -> None:
        key = _normalize(language_id)
        if not key:
            raise ValueError("language_id must be a non-empty string")
        if key in self._processors:
            LOGGER.debug("Replacing document processor for %s", key)
        self._processors[key] = processor

    def get(self, language_id: str | None, *, strict: bool = False) -> DocumentProcessor:
        key = _normalize(language_id)
        processor = self._processors.get(key)
        if processor is not None:
            return processor
        if strict:
            raise UnknownLanguageError(key)
        LOGGER.debug("No processor for %r; treating document as plain text", language_id)
        return self._processors.get(PLAIN_TEXT) or BasicLanguage()

    def languages(self) -> Iterable[str]:
        return sorted(self._processors)

    def __contains__(self, language_id: object) -> bool:
        return isinstance(language_id, str) and _normalize(language_id) in self._processors

    @classmethod
    def with_defaults(cls) -> LanguageRegistry:
        registry = cls()
        for marker, language_ids in _LINE_COMMENTS.items():
            processor = BasicLanguage(marker)
            for language_id in language_ids:
                registry.register(language_id, processor)
        prose = BasicLanguage()
        for language_id in _PROSE:
            registry.register(language_id, prose)
        return registry


def _normalize(language_id: str | None) -> str:
    return (language_id or "").strip().lower()


_DEFAULT_REGISTRY = LanguageRegistry.with_defaults()


def default_registry() -> LanguageRegistry:
    return _DEFAULT_REGISTRY


def register_language(language_id: str, processor: DocumentProcessor) -> None:
    """Register ``processor`` on the shared registry."""

    _DEFAULT_REGISTRY.register(language_id, processor)


def processor_for(language_id: str | None, *, strict: bool = False) -> DocumentProcessor:
    """Return the processor for ``language_id`` from the shared registry."""

    return _DEFAULT_REGISTRY.get(language_id, strict=strict)


__all__ = [
    "LanguageRegistry",
    "PLAIN_TEXT",
    "UnknownLanguageError",
    "default_registry",
    "processor_for",
    "register_language",
]
