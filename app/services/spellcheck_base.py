"""
Shared primitives for the spell-check services: normalization, language
status and the error taxonomy.
"""
import enum
from pathlib import Path
from typing import Optional


def normalize_word(word: str) -> str:
    """Lower-case and trim a word before any comparison."""
    return word.strip().lower()


class LanguageStatus(str, enum.Enum):
    """Load state of a single language inside the engine."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class SpellcheckError(Exception):
    """Base class for spell-check failures."""


class DictionaryUnavailable(SpellcheckError):
    """
    Neither the on-disk dictionary nor the bootstrap path produced a word list.

    Attributes:
        language: Language code that failed to load
        path: Expected dictionary asset path (if one was computed)
    """

    def __init__(self, language: str, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.language = language
        self.path = path


class PersistenceFailure(SpellcheckError):
    """Writing a dictionary asset or the custom-word snapshot failed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class MalformedDictionaryLine(SpellcheckError):
    """A single line of a word-list file could not be parsed."""

    def __init__(self, line_number: int, reason: str):
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason
