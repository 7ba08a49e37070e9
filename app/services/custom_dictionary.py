"""
Persistent per-language overlay of user-approved words.

The whole overlay (every language) lives in one JSON document:

    {"rw": ["ikaze", "mwiriwe"], "en": ["kubernetes"]}

Every mutation rewrites the full snapshot. Overlays are small (hundreds to
low thousands of words), so this stays cheap.
"""
import asyncio
import json
import os
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

import aiofiles

from app.config import settings
from app.services.spellcheck_base import PersistenceFailure, normalize_word
from app.utils.logger import get_logger


logger = get_logger("services.custom_dictionary")


class CustomDictionaryStore:
    """
    User-added words keyed by language.

    Each language maps to a frozenset that is swapped, never edited, so
    concurrent readers always see a complete snapshot. Mutations and the
    snapshot write are serialized by a single asyncio lock, which rules out
    lost updates when two requests add words at the same time.
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize custom dictionary store.

        Args:
            storage_path: JSON file holding the overlay (default from config)
        """
        self._path = Path(storage_path) if storage_path else Path(settings.SPELLCHECK_CUSTOM_WORDS_PATH)
        self._words: Dict[str, FrozenSet[str]] = {}
        self._lock = asyncio.Lock()
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._path

    def is_loaded(self) -> bool:
        return self._loaded

    def words(self, language: str) -> FrozenSet[str]:
        """Current overlay snapshot for a language."""
        return self._words.get(language, frozenset())

    def languages(self) -> List[str]:
        return sorted(self._words)

    async def load(self) -> Dict[str, FrozenSet[str]]:
        """
        Load the overlay from disk.

        A missing or corrupt file yields an empty overlay; entries that are not
        lists of strings are skipped.

        Returns:
            Mapping of language to loaded words
        """
        async with self._lock:
            self._words = await self._read_snapshot()
            self._loaded = True

        logger.info(
            "Custom words loaded",
            path=str(self._path),
            languages=len(self._words),
            word_count=sum(len(words) for words in self._words.values()),
        )
        return dict(self._words)

    async def _read_snapshot(self) -> Dict[str, FrozenSet[str]]:
        if not self._path.exists():
            logger.info("No custom words file, starting empty", path=str(self._path))
            return {}

        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(
                "Failed to read custom words, starting empty",
                path=str(self._path),
                error=str(e),
            )
            return {}

        if not isinstance(data, dict):
            logger.warning("Custom words file is not an object, starting empty", path=str(self._path))
            return {}

        snapshot: Dict[str, FrozenSet[str]] = {}
        for language, words in data.items():
            if not isinstance(language, str) or not isinstance(words, list):
                logger.warning("Skipping malformed custom words entry", language=str(language))
                continue
            normalized = {normalize_word(w) for w in words if isinstance(w, str)}
            normalized.discard("")
            if normalized:
                snapshot[language] = frozenset(normalized)
        return snapshot

    async def add(self, language: str, word: str) -> bool:
        """
        Add a word to a language's overlay and persist the overlay.

        The in-memory change is kept even if the write fails.

        Args:
            language: Language code
            word: Word to accept (normalized here)

        Returns:
            True if the overlay is durably saved, False otherwise
        """
        normalized = normalize_word(word)
        if not normalized:
            logger.debug("Ignoring empty custom word", language=language)
            return True

        async with self._lock:
            current = self._words.get(language, frozenset())
            if normalized in current:
                return True
            self._words = {**self._words, language: current | {normalized}}
            saved = await self._save_locked()

        logger.info("Custom word added", language=language, word=normalized, persisted=saved)
        return saved

    async def remove(self, language: str, word: str) -> bool:
        """
        Remove a word from a language's overlay and persist the overlay.

        Removing a word that is not in the overlay is a no-op. Words in the
        base dictionary are not affected.

        Args:
            language: Language code
            word: Word to remove (normalized here)

        Returns:
            True if the overlay is durably saved (or nothing changed), False otherwise
        """
        normalized = normalize_word(word)

        async with self._lock:
            current = self._words.get(language, frozenset())
            if normalized not in current:
                return True
            remaining = current - {normalized}
            updated = dict(self._words)
            if remaining:
                updated[language] = remaining
            else:
                del updated[language]
            self._words = updated
            saved = await self._save_locked()

        logger.info("Custom word removed", language=language, word=normalized, persisted=saved)
        return saved

    async def save(self) -> bool:
        """
        Persist the current overlay snapshot.

        Returns:
            True if written, False if the write failed (failure is logged)
        """
        async with self._lock:
            return await self._save_locked()

    async def _save_locked(self) -> bool:
        try:
            await self._write_snapshot(self._words)
            return True
        except PersistenceFailure as e:
            logger.warning(
                "Failed to persist custom words (kept in memory for this session)",
                path=str(self._path),
                error=str(e),
            )
            return False

    async def _write_snapshot(self, snapshot: Dict[str, FrozenSet[str]]) -> None:
        """
        Write the snapshot atomically: temporary file first, then rename.

        Raises:
            PersistenceFailure: If any step of the write fails
        """
        data = {language: sorted(words) for language, words in sorted(snapshot.items())}
        temp_path = self._path.with_name(f"{self._path.name}.tmp")

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(json.dumps(data, ensure_ascii=False, indent=2))
            os.replace(temp_path, self._path)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.debug("Could not remove temporary custom words file", path=str(temp_path))
            raise PersistenceFailure(f"Failed to write custom words: {e}", path=self._path) from e

        logger.debug("Custom words saved", path=str(self._path), languages=len(data))
