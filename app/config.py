"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS Configuration
    CORS_ORIGINS: str = "*"

    # Development/Debug
    DEBUG: bool = False
    RELOAD: bool = False

    # Spell-check Configuration
    SPELLCHECK_ENABLED: bool = True  # Load dictionaries at startup
    SPELLCHECK_DICTIONARY_PATH: str = "/app/data/dictionaries"  # <lang>/<lang>.dic + <lang>.aff
    SPELLCHECK_CUSTOM_WORDS_PATH: str = "/app/data/custom-words.json"  # User-added words, all languages
    SPELLCHECK_DEFAULT_LANGUAGE: str = "rw"  # Used when a request omits the language
    SPELLCHECK_DEFAULT_LANGUAGES: str = "rw"  # Comma-separated, enabled and loaded at startup
    SPELLCHECK_MAX_EDIT_DISTANCE: int = 2  # Max edit distance for suggestions
    SPELLCHECK_LENGTH_TOLERANCE: int = 2  # Max length difference between word and candidate
    SPELLCHECK_PREFIX_LENGTH: int = 2  # Candidate must share this many leading characters
    SPELLCHECK_SUGGESTION_COUNT: int = 5  # Max suggestions per misspelled word
    SPELLCHECK_SORT_SUGGESTIONS: bool = True  # Rank by distance; False keeps dictionary order
    SPELLCHECK_MAX_TEXT_LENGTH: int = 200_000  # Max characters accepted by /check-text

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def default_languages_list(self) -> List[str]:
        """Parse startup languages from comma-separated string, keeping order."""
        languages: List[str] = []
        for language in self.SPELLCHECK_DEFAULT_LANGUAGES.split(","):
            language = language.strip().lower()
            if language and language not in languages:
                languages.append(language)
        return languages


# Global settings instance
settings = Settings()
