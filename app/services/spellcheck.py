"""
Spell-check engine: the facade the API talks to.

One engine instance is created at application startup and shared through
app.state. It owns a LanguageState per language (base WordSet plus load
status), the enabled-language set, and the custom-word store.
"""
import asyncio
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set

from app.config import settings
from app.schemas.spellcheck import CheckResult, LanguageInfo
from app.services.custom_dictionary import CustomDictionaryStore
from app.services.dictionary_loader import DictionaryLoader
from app.services.spellcheck_base import DictionaryUnavailable, LanguageStatus, normalize_word
from app.services.suggestions import SuggestionEngine
from app.services.word_set import WordSet
from app.utils.language_validator import validate_language_code
from app.utils.logger import get_logger


logger = get_logger("services.spellcheck")

# Word characters plus apostrophes; \b keeps leading/trailing quotes out of tokens
WORD_PATTERN = re.compile(r"\b[\w']+\b")


@dataclass
class LanguageState:
    """Everything the engine tracks for one language."""

    language: str
    status: LanguageStatus = LanguageStatus.UNINITIALIZED
    word_set: Optional[WordSet] = None
    degraded: bool = False
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)


class SpellcheckEngine:
    """
    Multi-language spell checker with a user overlay.

    Checks are fail-open: a language that is not enabled or not loaded
    accepts every word, and an empty dictionary accepts every word. The
    check methods never raise.
    """

    def __init__(
        self,
        loader: Optional[DictionaryLoader] = None,
        store: Optional[CustomDictionaryStore] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        default_languages: Optional[List[str]] = None,
        default_language: Optional[str] = None,
    ):
        """
        Initialize spell-check engine.

        Args:
            loader: Dictionary loader (default: configured dictionary path)
            store: Custom word store (default: configured custom words path)
            suggestion_engine: Suggestion engine (default: configured thresholds)
            default_languages: Languages enabled and loaded by initialize() (default from config)
            default_language: Language used when a call omits one (default from config)
        """
        self._loader = loader or DictionaryLoader()
        self._store = store or CustomDictionaryStore()
        self._suggestions = suggestion_engine or SuggestionEngine()
        self._default_languages = list(
            default_languages if default_languages is not None else settings.default_languages_list
        )
        self._default_language = default_language or settings.SPELLCHECK_DEFAULT_LANGUAGE

        self._languages: Dict[str, LanguageState] = {}
        self._enabled: Set[str] = set(self._default_languages)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def store(self) -> CustomDictionaryStore:
        return self._store

    @property
    def default_language(self) -> str:
        return self._default_language

    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """
        Load the custom words and every default language.

        Safe to call more than once; later calls return immediately.
        """
        async with self._init_lock:
            if self._initialized:
                return

            logger.info("Initializing spell-check engine", languages=",".join(self._default_languages))
            await self._ensure_store_loaded()
            for language in self._default_languages:
                await self.load_language(language)

            self._initialized = True
            logger.info(
                "Spell-check engine initialized",
                ready=",".join(lang for lang in self._default_languages if self.is_ready(lang)),
            )

    async def _ensure_store_loaded(self) -> None:
        # Saving an unloaded store would overwrite the file with a partial snapshot
        if not self._store.is_loaded():
            await self._store.load()

    async def load_language(self, language: str, reload: bool = False) -> LanguageStatus:
        """
        Load a language's dictionary off the event loop.

        Loading never fails: if the dictionary is unavailable the language
        becomes Ready with an empty (accept-all) word set.

        Args:
            language: Language code
            reload: Replace an already loaded word set

        Returns:
            Resulting status of the language
        """
        if not validate_language_code(language):
            logger.warning("Refusing to load invalid language code", language=language)
            return LanguageStatus.UNINITIALIZED

        state = self._languages.setdefault(language, LanguageState(language=language))

        async with state.lock:
            if state.status is LanguageStatus.READY and not reload:
                return state.status

            # During a reload the previous word set keeps serving checks
            if state.status is not LanguageStatus.READY:
                state.status = LanguageStatus.LOADING

            try:
                word_set = await asyncio.to_thread(self._loader.load, language)
                degraded = word_set.bootstrapped or not word_set
                if word_set.bootstrapped:
                    logger.warning(
                        "Using bootstrap dictionary",
                        language=language,
                        word_count=len(word_set),
                    )
            except DictionaryUnavailable as e:
                logger.warning(
                    "Dictionary unavailable, accepting all words",
                    language=language,
                    error=str(e),
                )
                word_set = WordSet.empty(language)
                degraded = True
            except Exception as e:
                logger.error(
                    "Unexpected error loading dictionary, accepting all words",
                    language=language,
                    error=str(e),
                    exc_info=True,
                )
                word_set = WordSet.empty(language)
                degraded = True

            state.word_set = word_set
            state.degraded = degraded
            state.status = LanguageStatus.READY

        logger.info(
            "Language ready",
            language=language,
            word_count=len(word_set),
            degraded=degraded,
            reload=reload,
        )
        return state.status

    async def reload_language(self, language: str) -> LanguageStatus:
        """Re-read a language's dictionary from disk and swap it in."""
        return await self.load_language(language, reload=True)

    def is_ready(self, language: str) -> bool:
        """True if the language is enabled and its dictionary is loaded."""
        return self._active_word_set(language) is not None

    def _active_word_set(self, language: str) -> Optional[WordSet]:
        if language not in self._enabled:
            return None
        state = self._languages.get(language)
        if state is None or state.status is not LanguageStatus.READY:
            return None
        return state.word_set

    @staticmethod
    def _is_correct(normalized: str, word_set: WordSet, overlay: FrozenSet[str]) -> bool:
        if not normalized or normalized in overlay:
            return True
        if not word_set:
            return True
        return normalized in word_set.words

    def check_word(self, word: str, language: Optional[str] = None) -> bool:
        """
        Check whether a word is spelled correctly.

        Args:
            word: Word to check (case and surrounding whitespace are ignored)
            language: Language code (default: engine default language)

        Returns:
            True if the word is in the custom words or the dictionary, or if
            the language is not ready
        """
        if language is None:
            language = self._default_language
        try:
            word_set = self._active_word_set(language)
            if word_set is None:
                return True
            return self._is_correct(normalize_word(word), word_set, self._store.words(language))
        except Exception as e:
            logger.error("Word check failed, accepting word", language=language, error=str(e), exc_info=True)
            return True

    def get_suggestions(self, word: str, language: Optional[str] = None) -> List[str]:
        """
        Suggest corrections for a word from the base dictionary.

        Custom words are not offered as suggestions.

        Args:
            word: Misspelled word
            language: Language code (default: engine default language)

        Returns:
            Up to the configured number of suggestions, empty if the language is not ready
        """
        if language is None:
            language = self._default_language
        try:
            word_set = self._active_word_set(language)
            if word_set is None:
                return []
            return self._suggestions.suggest(word, word_set)
        except Exception as e:
            logger.error("Suggestion lookup failed", language=language, error=str(e), exc_info=True)
            return []

    def check_text(self, text: str, language: Optional[str] = None) -> List[CheckResult]:
        """
        Check every word of a text.

        Tokens are runs of word characters and apostrophes. Each occurrence is
        reported with its own character offset, so repeated words are listed
        once per occurrence.

        Args:
            text: Text to check
            language: Language code (default: engine default language)

        Returns:
            Results in text order, empty for empty text
        """
        if language is None:
            language = self._default_language
        if not text:
            return []

        try:
            # One snapshot for the whole text
            word_set = self._active_word_set(language)
            overlay = self._store.words(language)

            results = []
            for match in WORD_PATTERN.finditer(text):
                token = match.group()
                correct = word_set is None or self._is_correct(normalize_word(token), word_set, overlay)
                results.append(CheckResult(word=token, correct=correct, offset=match.start()))
            return results
        except Exception as e:
            logger.error("Text check failed", language=language, error=str(e), exc_info=True)
            return []

    async def add_word(self, word: str, language: Optional[str] = None) -> bool:
        """
        Accept a word for a language from now on.

        Args:
            word: Word to add
            language: Language code (default: engine default language)

        Returns:
            True if the change was saved to disk, False if it only lives in memory
        """
        if language is None:
            language = self._default_language
        if not validate_language_code(language):
            logger.warning("Ignoring custom word for invalid language code", language=language)
            return False
        await self._ensure_store_loaded()
        return await self._store.add(language, word)

    async def remove_word(self, word: str, language: Optional[str] = None) -> bool:
        """
        Stop accepting a previously added word.

        Only the custom words are affected; a word in the base dictionary
        stays correct.

        Args:
            word: Word to remove
            language: Language code (default: engine default language)

        Returns:
            True if the change was saved to disk (or there was nothing to remove)
        """
        if language is None:
            language = self._default_language
        if not validate_language_code(language):
            logger.warning("Ignoring custom word removal for invalid language code", language=language)
            return False
        await self._ensure_store_loaded()
        return await self._store.remove(language, word)

    async def enable_language(self, language: str) -> LanguageInfo:
        """
        Enable a language, loading its dictionary if needed.

        Args:
            language: Language code

        Returns:
            State of the language after enabling
        """
        if validate_language_code(language):
            self._enabled.add(language)
            await self.load_language(language)
            logger.info("Language enabled", language=language)
        else:
            logger.warning("Refusing to enable invalid language code", language=language)
        return self.get_language_info(language)

    def disable_language(self, language: str) -> LanguageInfo:
        """
        Disable a language. Its dictionary stays cached for re-enabling.

        Args:
            language: Language code

        Returns:
            State of the language after disabling
        """
        self._enabled.discard(language)
        logger.info("Language disabled", language=language)
        return self.get_language_info(language)

    def get_enabled_languages(self) -> List[str]:
        return sorted(self._enabled)

    def get_language_info(self, language: str) -> LanguageInfo:
        state = self._languages.get(language)
        word_set = state.word_set if state else None
        return LanguageInfo(
            language=language,
            status=state.status if state else LanguageStatus.UNINITIALIZED,
            enabled=language in self._enabled,
            word_count=len(word_set) if word_set is not None else 0,
            custom_word_count=len(self._store.words(language)),
            degraded=state.degraded if state else False,
        )

    def list_languages(self) -> List[LanguageInfo]:
        """State of every language that is enabled, loaded, or has custom words."""
        known = set(self._languages) | self._enabled | set(self._store.languages())
        return [self.get_language_info(language) for language in sorted(known)]


def create_spellcheck_engine() -> SpellcheckEngine:
    """
    Create a spell-check engine wired from application settings.

    Returns:
        New, uninitialized SpellcheckEngine
    """
    return SpellcheckEngine(
        loader=DictionaryLoader(settings.SPELLCHECK_DICTIONARY_PATH),
        store=CustomDictionaryStore(settings.SPELLCHECK_CUSTOM_WORDS_PATH),
        suggestion_engine=SuggestionEngine(),
        default_languages=settings.default_languages_list,
        default_language=settings.SPELLCHECK_DEFAULT_LANGUAGE,
    )
