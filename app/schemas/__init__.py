"""
Pydantic schemas for API request/response models.
"""
from app.schemas.spellcheck import (
    CheckResult,
    CheckTextRequest,
    CheckTextResponse,
    CheckWordResponse,
    LanguageInfo,
    LanguagesResponse,
    SuggestionsResponse,
    WordMutationResponse,
    WordRequest,
)
from app.schemas.health import HealthResponse

__all__ = [
    "CheckResult",
    "CheckTextRequest",
    "CheckTextResponse",
    "CheckWordResponse",
    "LanguageInfo",
    "LanguagesResponse",
    "SuggestionsResponse",
    "WordMutationResponse",
    "WordRequest",
    "HealthResponse",
]
