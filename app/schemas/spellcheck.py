"""
Pydantic schemas for spell-check functionality.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.config import settings
from app.services.spellcheck_base import LanguageStatus
from app.utils.language_validator import validate_language_code


def _validate_language(v: Optional[str]) -> str:
    """Fill in the default language and reject malformed codes."""
    if v is None:
        return settings.SPELLCHECK_DEFAULT_LANGUAGE
    if not isinstance(v, str):
        raise ValueError("Language code must be a string")
    v = v.strip().lower()
    if not validate_language_code(v):
        raise ValueError(f"Invalid language code '{v}'. Expected e.g. 'rw', 'en' or 'en-us'.")
    return v


class CheckResult(BaseModel):
    """Correctness of one token of a checked text."""

    word: str = Field(description="Token as it appears in the text")
    correct: bool = Field(description="Whether the token is spelled correctly")
    offset: int = Field(ge=0, description="Character index of the token in the checked text")


class WordRequest(BaseModel):
    """A single word in a given language."""

    word: str = Field(..., max_length=256, description="Word to check or modify")
    language: Optional[str] = Field(
        None, validate_default=True, description="Language code (defaults to the service default)"
    )

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, v: Optional[str]) -> str:
        return _validate_language(v)


class CheckTextRequest(BaseModel):
    """A body of text to check token by token."""

    text: str = Field(..., description="Text to check")
    language: Optional[str] = Field(
        None, validate_default=True, description="Language code (defaults to the service default)"
    )

    @field_validator("language", mode="before")
    @classmethod
    def validate_language(cls, v: Optional[str]) -> str:
        return _validate_language(v)

    @field_validator("text")
    @classmethod
    def validate_text_length(cls, v: str) -> str:
        if len(v) > settings.SPELLCHECK_MAX_TEXT_LENGTH:
            raise ValueError(
                f"Text too long ({len(v)} characters). Maximum is {settings.SPELLCHECK_MAX_TEXT_LENGTH}; "
                "split it into smaller chunks."
            )
        return v


class CheckWordResponse(BaseModel):
    """Result of checking a single word."""

    word: str
    language: str
    correct: bool = Field(description="True if spelled correctly (or the language is not ready)")


class SuggestionsResponse(BaseModel):
    """Suggested corrections for a word."""

    word: str
    language: str
    suggestions: List[str] = Field(description="Suggested corrections, nearest first")


class CheckTextResponse(BaseModel):
    """Per-token results for a checked text."""

    language: str
    results: List[CheckResult] = Field(description="Tokens in text order")

    class Config:
        json_schema_extra = {
            "example": {
                "language": "rw",
                "results": [
                    {"word": "muraho", "correct": True, "offset": 0},
                    {"word": "ikaze", "correct": False, "offset": 7},
                    {"word": "muraho", "correct": True, "offset": 13}
                ]
            }
        }


class WordMutationResponse(BaseModel):
    """Outcome of adding or removing a custom word."""

    word: str = Field(description="Normalized word")
    language: str
    persisted: bool = Field(description="False if the change only lives in memory for this session")


class LanguageInfo(BaseModel):
    """State of one language in the engine."""

    language: str
    status: LanguageStatus
    enabled: bool
    word_count: int = Field(description="Words in the base dictionary")
    custom_word_count: int = Field(description="User-added words")
    degraded: bool = Field(description="Serving the bootstrap list or an empty dictionary")


class LanguagesResponse(BaseModel):
    """All languages known to the engine."""

    enabled: List[str]
    languages: List[LanguageInfo]
