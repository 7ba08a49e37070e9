"""
Pytest configuration and fixtures for spellcheck service tests.
"""
import os
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Callable, Iterable

import pytest
from httpx import AsyncClient, ASGITransport

# Point settings at a throwaway directory before importing the app,
# so nothing in the test run touches /app/data
_TEST_DATA_DIR = Path(tempfile.mkdtemp(prefix="spellcheck-tests-"))
os.environ["SPELLCHECK_DICTIONARY_PATH"] = str(_TEST_DATA_DIR / "dictionaries")
os.environ["SPELLCHECK_CUSTOM_WORDS_PATH"] = str(_TEST_DATA_DIR / "custom-words.json")
os.environ["SPELLCHECK_DEFAULT_LANGUAGE"] = "rw"
os.environ["SPELLCHECK_DEFAULT_LANGUAGES"] = "rw"

from app.main import app
from app.services.custom_dictionary import CustomDictionaryStore
from app.services.dictionary_loader import DictionaryLoader
from app.services.spellcheck import SpellcheckEngine
from app.services.suggestions import SuggestionEngine


# Base vocabulary used by the "rw" scenario tests
RW_WORDS = ["muraho", "murakoze"]


@pytest.fixture
def dictionary_dir(tmp_path) -> Path:
    """Empty dictionary root for one test."""
    path = tmp_path / "dictionaries"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def custom_words_path(tmp_path) -> Path:
    """Location of the custom words file for one test (not created)."""
    return tmp_path / "custom-words.json"


@pytest.fixture
def make_dictionary(dictionary_dir) -> Callable[..., Path]:
    """
    Factory writing a dictionary asset into the test dictionary root.

    Usage:
        make_dictionary("rw", ["muraho", "murakoze"])
        make_dictionary("en", raw="5\\nhello/S\\n", header=None)
    """

    def _make(
        language: str,
        words: Iterable[str] = (),
        raw=None,
        header="SET UTF-8\n",
    ) -> Path:
        language_dir = dictionary_dir / language
        language_dir.mkdir(parents=True, exist_ok=True)
        dic_path = language_dir / f"{language}.dic"
        if raw is None:
            dic_path.write_text("\n".join(words), encoding="utf-8")
        elif isinstance(raw, bytes):
            dic_path.write_bytes(raw)
        else:
            dic_path.write_text(raw, encoding="utf-8")
        if header is not None:
            (language_dir / f"{language}.aff").write_text(header, encoding="utf-8")
        return dic_path

    return _make


@pytest.fixture
def loader(dictionary_dir) -> DictionaryLoader:
    return DictionaryLoader(str(dictionary_dir))


@pytest.fixture
def store(custom_words_path) -> CustomDictionaryStore:
    return CustomDictionaryStore(str(custom_words_path))


@pytest.fixture
def suggestion_engine() -> SuggestionEngine:
    return SuggestionEngine(
        max_results=5,
        max_distance=2,
        length_tolerance=2,
        prefix_length=2,
        sort_by_distance=True,
    )


@pytest.fixture
def build_engine(loader, store, suggestion_engine) -> Callable[..., SpellcheckEngine]:
    """Factory for engines sharing the test's dictionary root and custom words file."""

    def _build(default_languages=("rw",), custom_store=None) -> SpellcheckEngine:
        return SpellcheckEngine(
            loader=loader,
            store=custom_store or store,
            suggestion_engine=suggestion_engine,
            default_languages=list(default_languages),
            default_language="rw",
        )

    return _build


@pytest.fixture
async def engine(make_dictionary, build_engine) -> SpellcheckEngine:
    """Initialized engine with the "rw" base dictionary {muraho, murakoze}."""
    make_dictionary("rw", RW_WORDS)
    spellcheck_engine = build_engine()
    await spellcheck_engine.initialize()
    return spellcheck_engine


@pytest.fixture
async def client(engine) -> AsyncGenerator[AsyncClient, None]:
    """
    Async test client for the FastAPI application.

    The lifespan does not run under ASGITransport, so the test engine is
    installed on app.state directly.
    """
    app.state.spellcheck_engine = engine
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.state.spellcheck_engine = None
