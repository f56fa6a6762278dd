"""Per-language section partitioners and wrappers."""

from .base import DocumentProcessor
from .basic import BasicLanguage
from .registry import (
    LanguageRegistry,
    UnknownLanguageError,
    default_registry,
    processor_for,
    register_language,
)

__all__ = [
    "BasicLanguage",
    "DocumentProcessor",
    "LanguageRegistry",
    "UnknownLanguageError",
    "default_registry",
    "processor_for",
    "register_language",
]
