"""
Dictionary asset loading with bootstrap fallback.

Each language lives in its own directory under the dictionary root:

    <root>/<lang>/<lang>.dic   one word per line (optional Hunspell count line, /FLAGS)
    <root>/<lang>/<lang>.aff   metadata header, only the "SET <encoding>" directive is read

Only the .dic file has to exist for a language to count as installed.
"""
import codecs
import os
import time
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from app.config import settings
from app.services.bootstrap_words import get_bootstrap_words
from app.services.spellcheck_base import (
    DictionaryUnavailable,
    MalformedDictionaryLine,
    PersistenceFailure,
    normalize_word,
)
from app.services.word_set import WordSet
from app.utils.language_validator import validate_language_code
from app.utils.logger import get_logger


logger = get_logger("services.dictionary_loader")

DEFAULT_ENCODING = "utf-8"
AFFIX_HEADER = f"SET {DEFAULT_ENCODING.upper()}\n"


def parse_dictionary_line(raw: bytes, encoding: str, line_number: int) -> Optional[str]:
    """
    Parse one line of a .dic file.

    Args:
        raw: Line bytes without the trailing newline
        encoding: Encoding declared by the affix header
        line_number: 1-based line number, used in error reports

    Returns:
        Normalized word, or None for blank and comment lines

    Raises:
        MalformedDictionaryLine: If the line cannot be decoded or is not a single word
    """
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as e:
        raise MalformedDictionaryLine(line_number, f"not valid {encoding}: {e.reason}") from e

    text = text.lstrip("\ufeff").strip()
    if not text or text.startswith("#"):
        return None

    # Hunspell entries: word[/FLAGS][<TAB>morphology]
    entry = text.split("\t", 1)[0]
    word = normalize_word(entry.split("/", 1)[0])

    if not word:
        raise MalformedDictionaryLine(line_number, "empty word")
    if any(ch.isspace() for ch in word):
        raise MalformedDictionaryLine(line_number, "word contains whitespace")

    return word


def read_affix_encoding(aff_path: Path) -> str:
    """
    Read the character encoding from an affix header.

    Missing files, unreadable files and unknown encodings all fall back to UTF-8.
    """
    try:
        with open(aff_path, "r", encoding="ascii", errors="ignore") as f:
            for line in f:
                parts = line.split()
                if len(parts) >= 2 and parts[0] == "SET":
                    codecs.lookup(parts[1])
                    return parts[1]
    except FileNotFoundError:
        pass
    except (OSError, LookupError) as e:
        logger.debug("Ignoring affix header", path=str(aff_path), error=str(e))
    return DEFAULT_ENCODING


class DictionaryLoader:
    """
    Resolves a language code to a WordSet.

    A missing asset is replaced by the built-in bootstrap list, which is also
    written to disk so the next start finds it. Absence of a dictionary never
    raises; only an unreadable asset that cannot be rebuilt does.
    """

    def __init__(self, dictionary_path: Optional[str] = None):
        """
        Initialize dictionary loader.

        Args:
            dictionary_path: Root directory for dictionary assets (default from config)
        """
        self._root = Path(dictionary_path) if dictionary_path else Path(settings.SPELLCHECK_DICTIONARY_PATH)

    @property
    def root(self) -> Path:
        return self._root

    def asset_paths(self, language: str) -> Tuple[Path, Path]:
        """Return the (.dic, .aff) paths for a language."""
        language_dir = self._root / language
        return language_dir / f"{language}.dic", language_dir / f"{language}.aff"

    def load(self, language: str) -> WordSet:
        """
        Load the dictionary for a language, bootstrapping it if absent.

        Args:
            language: Language code (e.g., 'rw')

        Returns:
            WordSet for the language (possibly the bootstrap list)

        Raises:
            DictionaryUnavailable: If the language code is invalid, or the asset
                exists but can be neither read nor rebuilt
        """
        if not validate_language_code(language):
            raise DictionaryUnavailable(language, f"Invalid language code: {language!r}")

        dic_path, aff_path = self.asset_paths(language)

        if not dic_path.exists():
            logger.warning(
                "Dictionary asset not found, creating bootstrap dictionary",
                language=language,
                path=str(dic_path),
            )
            words = get_bootstrap_words(language)
            try:
                self.write_asset(language, words)
            except PersistenceFailure as e:
                logger.warning(
                    "Failed to persist bootstrap dictionary (in-memory only)",
                    language=language,
                    error=str(e),
                )
            return WordSet(language, words, bootstrapped=True)

        try:
            return self._read_asset(language, dic_path, aff_path)
        except OSError as e:
            logger.error(
                "Failed to read dictionary, rebuilding from bootstrap list",
                language=language,
                path=str(dic_path),
                error=str(e),
            )

        words = get_bootstrap_words(language)
        try:
            self.write_asset(language, words)
        except PersistenceFailure as e:
            raise DictionaryUnavailable(
                language,
                f"Dictionary for {language!r} is unreadable and could not be rebuilt",
                path=dic_path,
            ) from e
        return WordSet(language, words, bootstrapped=True)

    def _read_asset(self, language: str, dic_path: Path, aff_path: Path) -> WordSet:
        """Parse a .dic file, skipping malformed lines."""
        start_time = time.time()
        encoding = read_affix_encoding(aff_path)

        with open(dic_path, "rb") as f:
            lines = f.read().splitlines()

        words: List[str] = []
        malformed = 0
        first_entry = True

        for line_number, raw in enumerate(lines, start=1):
            try:
                word = parse_dictionary_line(raw, encoding, line_number)
            except MalformedDictionaryLine as e:
                malformed += 1
                logger.debug("Skipping malformed dictionary line", language=language, reason=str(e))
                first_entry = False
                continue

            if word is None:
                continue
            # Hunspell .dic files start with an approximate word count
            if first_entry and word.isdigit():
                first_entry = False
                continue
            first_entry = False
            words.append(word)

        word_set = WordSet(language, words)

        logger.info(
            "Dictionary loaded",
            language=language,
            word_count=len(word_set),
            malformed_lines=malformed,
            encoding=encoding,
            load_time_seconds=round(time.time() - start_time, 3),
            path=str(dic_path),
        )
        if not word_set:
            logger.warning("Dictionary is empty, every word will be accepted", language=language)

        return word_set

    def write_asset(self, language: str, words: Iterable[str]) -> Path:
        """
        Write a dictionary asset (.dic word list plus .aff header).

        The word list is written to a temporary file and moved into place so a
        crash never leaves a truncated dictionary behind.

        Args:
            language: Language code
            words: Words to write, normalized on the way out

        Returns:
            Path of the written .dic file

        Raises:
            PersistenceFailure: If the directory or either file cannot be written
        """
        dic_path, aff_path = self.asset_paths(language)
        temp_path = dic_path.with_name(f"{dic_path.name}.tmp")

        normalized: List[str] = []
        seen = set()
        for word in words:
            word = normalize_word(word)
            if word and word not in seen:
                seen.add(word)
                normalized.append(word)

        try:
            dic_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding=DEFAULT_ENCODING, newline="\n") as f:
                f.write("\n".join(normalized))
                if normalized:
                    f.write("\n")
            os.replace(temp_path, dic_path)
            with open(aff_path, "w", encoding=DEFAULT_ENCODING, newline="\n") as f:
                f.write(AFFIX_HEADER)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.debug("Could not remove temporary dictionary file", path=str(temp_path))
            raise PersistenceFailure(f"Failed to write dictionary for {language!r}: {e}", path=dic_path) from e

        logger.info(
            "Dictionary asset written",
            language=language,
            word_count=len(normalized),
            path=str(dic_path),
        )
        return dic_path
