"""
API routes for spell-checking.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from app.schemas.spellcheck import (
    CheckTextRequest,
    CheckTextResponse,
    CheckWordResponse,
    LanguageInfo,
    LanguagesResponse,
    SuggestionsResponse,
    WordMutationResponse,
    WordRequest,
)
from app.services.spellcheck import SpellcheckEngine
from app.services.spellcheck_base import normalize_word
from app.utils.language_validator import LANGUAGE_CODE_PATTERN
from app.utils.logger import get_logger


logger = get_logger("routes.spellcheck")
router = APIRouter()

LanguagePath = Annotated[
    str,
    Path(pattern=f"^{LANGUAGE_CODE_PATTERN.pattern}$", description="Language code (e.g., 'rw', 'en')")
]


def get_spellcheck_engine(request: Request) -> SpellcheckEngine:
    """
    Dependency to get the spell-check engine from app state.

    Args:
        request: FastAPI request object

    Returns:
        SpellcheckEngine instance

    Raises:
        HTTPException: If the engine was never created
    """
    engine = getattr(request.app.state, "spellcheck_engine", None)
    if engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Spell-check service not available"
        )
    return engine


@router.post(
    "/check-word",
    response_model=CheckWordResponse,
    summary="Check a single word",
    description="Returns whether a word is spelled correctly. Languages that are not ready accept every word."
)
def check_word(
    payload: WordRequest,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> CheckWordResponse:
    correct = engine.check_word(payload.word, payload.language)
    return CheckWordResponse(word=payload.word, language=payload.language, correct=correct)


@router.post(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Suggest corrections",
    description="Returns up to five dictionary words within two edits of the given word."
)
def get_suggestions(
    payload: WordRequest,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> SuggestionsResponse:
    suggestions = engine.get_suggestions(payload.word, payload.language)
    return SuggestionsResponse(word=payload.word, language=payload.language, suggestions=suggestions)


@router.post(
    "/check-text",
    response_model=CheckTextResponse,
    summary="Check a text",
    description="Tokenizes the text and returns correctness and character offset for every token."
)
def check_text(
    payload: CheckTextRequest,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> CheckTextResponse:
    """
    Check a body of text word by word.

    Declared as a sync endpoint so FastAPI runs it in the thread pool and a
    long document does not stall the event loop.
    """
    results = engine.check_text(payload.text, payload.language)

    logger.debug(
        "Text checked",
        language=payload.language,
        characters=len(payload.text),
        tokens=len(results),
        misspelled=sum(1 for r in results if not r.correct),
    )

    return CheckTextResponse(language=payload.language, results=results)


@router.post(
    "/words",
    response_model=WordMutationResponse,
    summary="Add a custom word",
    description="Accept a word for a language from now on. `persisted` is false if it could not be saved to disk."
)
async def add_word(
    payload: WordRequest,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> WordMutationResponse:
    persisted = await engine.add_word(payload.word, payload.language)
    return WordMutationResponse(
        word=normalize_word(payload.word),
        language=payload.language,
        persisted=persisted
    )


@router.delete(
    "/words/{language}/{word}",
    response_model=WordMutationResponse,
    summary="Remove a custom word",
    description="Stop accepting a previously added word. Base dictionary words are not affected."
)
async def remove_word(
    word: str,
    language: LanguagePath,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> WordMutationResponse:
    persisted = await engine.remove_word(word, language)
    return WordMutationResponse(word=normalize_word(word), language=language, persisted=persisted)


@router.get(
    "/languages",
    response_model=LanguagesResponse,
    summary="List languages",
    description="Enabled languages and the load state of every known language."
)
def list_languages(engine: SpellcheckEngine = Depends(get_spellcheck_engine)) -> LanguagesResponse:
    return LanguagesResponse(
        enabled=engine.get_enabled_languages(),
        languages=engine.list_languages()
    )


@router.put(
    "/languages/{language}",
    response_model=LanguageInfo,
    summary="Enable a language",
    description="Enable a language and load its dictionary (bootstrapping one if none is installed)."
)
async def enable_language(
    language: LanguagePath,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> LanguageInfo:
    logger.info("Enabling language", language=language)
    return await engine.enable_language(language)


@router.delete(
    "/languages/{language}",
    response_model=LanguageInfo,
    summary="Disable a language",
    description="Disable a language. Checks for it accept every word until it is enabled again."
)
def disable_language(
    language: LanguagePath,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> LanguageInfo:
    logger.info("Disabling language", language=language)
    return engine.disable_language(language)


@router.post(
    "/languages/{language}/reload",
    response_model=LanguageInfo,
    summary="Reload a dictionary",
    description="Re-read a language's dictionary from disk and replace the loaded word list."
)
async def reload_language(
    language: LanguagePath,
    engine: SpellcheckEngine = Depends(get_spellcheck_engine)
) -> LanguageInfo:
    logger.info("Reloading language", language=language)
    await engine.reload_language(language)
    return engine.get_language_info(language)
