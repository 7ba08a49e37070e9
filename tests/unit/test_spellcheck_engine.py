"""
Unit tests for SpellcheckEngine.
"""
from unittest.mock import patch

import pytest

from app.services.dictionary_loader import DictionaryLoader
from app.services.spellcheck import WORD_PATTERN, SpellcheckEngine
from app.services.spellcheck_base import DictionaryUnavailable, LanguageStatus


class TestWordPattern:
    """Tests for text tokenization."""

    def test_tokenize_basic_words(self):
        assert WORD_PATTERN.findall("muraho ikaze muraho") == ["muraho", "ikaze", "muraho"]

    def test_tokenize_keeps_inner_apostrophes(self):
        """Test contractions stay one token while quotes around words are dropped."""
        assert WORD_PATTERN.findall("don't 'quoted'") == ["don't", "quoted"]

    def test_tokenize_ignores_punctuation(self):
        assert WORD_PATTERN.findall("Muraho, amakuru? Ni meza!") == ["Muraho", "amakuru", "Ni", "meza"]

    def test_tokenize_unicode_letters(self):
        assert WORD_PATTERN.findall("café naïve") == ["café", "naïve"]


class TestScenario:
    """End-to-end behaviour on the rw dictionary {muraho, murakoze}."""

    @pytest.mark.asyncio
    async def test_case_and_whitespace_insensitive(self, engine):
        assert engine.check_word("Muraho ", "rw") is True

    @pytest.mark.asyncio
    async def test_unknown_word_is_incorrect(self, engine):
        assert engine.check_word("ikaze", "rw") is False

    @pytest.mark.asyncio
    async def test_suggestions(self, engine):
        assert engine.get_suggestions("murako", "rw") == ["muraho", "murakoze"]

    @pytest.mark.asyncio
    async def test_added_word_becomes_correct(self, engine):
        assert await engine.add_word("ikaze", "rw") is True
        assert engine.check_word("ikaze", "rw") is True

    @pytest.mark.asyncio
    async def test_check_text_after_add(self, engine):
        await engine.add_word("ikaze", "rw")

        results = engine.check_text("muraho ikaze muraho", "rw")

        assert [(r.word, r.correct, r.offset) for r in results] == [
            ("muraho", True, 0),
            ("ikaze", True, 7),
            ("muraho", True, 13),
        ]


class TestCheckWord:
    """Tests for single-word checks."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("variant", ["muraho", "MURAHO", "  Muraho", "muraho\t", "MuRaHo "])
    async def test_normalization_is_idempotent(self, engine, variant):
        assert engine.check_word(variant, "rw") == engine.check_word("muraho", "rw")

    @pytest.mark.asyncio
    async def test_empty_word_is_correct(self, engine):
        assert engine.check_word("   ", "rw") is True

    @pytest.mark.asyncio
    async def test_default_language_is_used(self, engine):
        assert engine.default_language == "rw"
        assert engine.check_word("ikaze") is False

    @pytest.mark.asyncio
    async def test_unsupported_language_accepts_everything(self, engine):
        assert engine.check_word("anything", "xx") is True
        assert engine.get_suggestions("anything", "xx") == []

    @pytest.mark.asyncio
    async def test_invalid_language_accepts_everything(self, engine):
        assert engine.check_word("anything", "../../etc") is True

    @pytest.mark.asyncio
    async def test_empty_language_code_accepts_everything(self, engine):
        assert engine.check_word("ikaze", "") is True
        assert engine.get_suggestions("murako", "") == []
        assert [r.correct for r in engine.check_text("ikaze murako", "")] == [True, True]

    def test_uninitialized_engine_accepts_everything(self, build_engine):
        spellcheck_engine = build_engine()

        assert spellcheck_engine.is_initialized() is False
        assert spellcheck_engine.check_word("ikaze", "rw") is True
        assert spellcheck_engine.get_suggestions("ikaze", "rw") == []

    @pytest.mark.asyncio
    async def test_empty_dictionary_accepts_everything(self, make_dictionary, build_engine):
        make_dictionary("rw", raw="")
        spellcheck_engine = build_engine()
        await spellcheck_engine.initialize()

        assert spellcheck_engine.is_ready("rw")
        assert spellcheck_engine.check_word("whatever", "rw") is True
        assert spellcheck_engine.get_suggestions("whatever", "rw") == []

    @pytest.mark.asyncio
    async def test_check_never_raises(self, engine):
        with patch.object(engine.store, "words", side_effect=RuntimeError("boom")):
            assert engine.check_word("ikaze", "rw") is True
            assert engine.check_text("ikaze", "rw") == []


class TestCheckText:
    """Tests for whole-text checks."""

    @pytest.mark.asyncio
    async def test_repeated_words_get_their_own_offsets(self, make_dictionary, build_engine):
        make_dictionary("rw", ["foo"])
        spellcheck_engine = build_engine()
        await spellcheck_engine.initialize()

        results = spellcheck_engine.check_text("foo foo bar", "rw")

        assert [(r.word, r.correct, r.offset) for r in results] == [
            ("foo", True, 0),
            ("foo", True, 4),
            ("bar", False, 8),
        ]

    @pytest.mark.asyncio
    async def test_offsets_index_into_original_text(self, engine):
        text = "  Muraho,\nmurako! murakoze"

        results = engine.check_text(text, "rw")

        for result in results:
            assert text[result.offset:result.offset + len(result.word)] == result.word
        assert [r.correct for r in results] == [True, False, True]

    @pytest.mark.asyncio
    async def test_tokens_keep_original_case(self, engine):
        results = engine.check_text("MURAHO", "rw")
        assert results[0].word == "MURAHO"
        assert results[0].correct is True

    @pytest.mark.asyncio
    async def test_empty_text(self, engine):
        assert engine.check_text("", "rw") == []
        assert engine.check_text("  ... !", "rw") == []

    @pytest.mark.asyncio
    async def test_unsupported_language_marks_all_correct(self, engine):
        results = engine.check_text("ikaze murako", "xx")
        assert [r.correct for r in results] == [True, True]


class TestCustomWords:
    """Tests for the user overlay."""

    @pytest.mark.asyncio
    async def test_remove_restores_previous_result(self, engine):
        before = engine.check_word("ikaze", "rw")
        await engine.add_word("Ikaze", "rw")

        assert await engine.remove_word("IKAZE", "rw") is True

        assert engine.check_word("ikaze", "rw") == before

    @pytest.mark.asyncio
    async def test_remove_does_not_affect_base_dictionary(self, engine):
        await engine.remove_word("muraho", "rw")
        assert engine.check_word("muraho", "rw") is True

    @pytest.mark.asyncio
    async def test_custom_words_are_not_suggested(self, engine):
        await engine.add_word("murakaza", "rw")
        assert "murakaza" not in engine.get_suggestions("murakz", "rw")

    @pytest.mark.asyncio
    async def test_custom_words_are_per_language(self, engine):
        await engine.add_word("ikaze", "rw")
        await engine.enable_language("en")

        assert engine.check_word("ikaze", "en") is False

    @pytest.mark.asyncio
    async def test_invalid_language_is_rejected(self, engine):
        assert await engine.add_word("ikaze", "not a code") is False
        assert await engine.remove_word("ikaze", "not a code") is False

    @pytest.mark.asyncio
    async def test_empty_language_code_is_rejected(self, engine):
        assert await engine.add_word("ikaze", "") is False
        assert await engine.remove_word("ikaze", "") is False
        assert engine.store.words("rw") == frozenset()

    @pytest.mark.asyncio
    async def test_add_before_initialize_keeps_existing_file(self, build_engine, store, custom_words_path):
        custom_words_path.write_text('{"rw": ["mwiriwe"]}', encoding="utf-8")
        spellcheck_engine = build_engine()

        await spellcheck_engine.add_word("ikaze", "rw")

        assert store.words("rw") == frozenset({"ikaze", "mwiriwe"})

    @pytest.mark.asyncio
    async def test_custom_words_survive_restart(self, engine, build_engine, custom_words_path):
        await engine.add_word("ikaze", "rw")

        from app.services.custom_dictionary import CustomDictionaryStore

        restarted = build_engine(custom_store=CustomDictionaryStore(str(custom_words_path)))
        await restarted.initialize()

        assert restarted.check_word("ikaze", "rw") is True


class TestLanguageLifecycle:
    """Tests for loading, reloading, enabling and disabling languages."""

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, make_dictionary, build_engine):
        make_dictionary("rw", ["muraho"])
        spellcheck_engine = build_engine()

        with patch.object(DictionaryLoader, "load", wraps=spellcheck_engine._loader.load) as load:
            await spellcheck_engine.initialize()
            await spellcheck_engine.initialize()

        assert load.call_count == 1
        assert spellcheck_engine.is_initialized()

    @pytest.mark.asyncio
    async def test_missing_dictionary_bootstraps(self, build_engine, dictionary_dir, loader, store):
        spellcheck_engine = build_engine()
        await spellcheck_engine.initialize()

        info = spellcheck_engine.get_language_info("rw")
        assert info.status == LanguageStatus.READY
        assert info.word_count > 0
        assert info.degraded is True
        assert (dictionary_dir / "rw" / "rw.dic").exists()

        # A fresh engine reads the persisted asset instead of bootstrapping again
        fresh = SpellcheckEngine(
            loader=DictionaryLoader(str(dictionary_dir)),
            store=store,
            default_languages=["rw"],
            default_language="rw",
        )
        await fresh.initialize()
        fresh_info = fresh.get_language_info("rw")
        assert fresh_info.degraded is False
        assert fresh_info.word_count == info.word_count

    @pytest.mark.asyncio
    async def test_language_without_builtin_list_bootstraps_words(self, build_engine, dictionary_dir):
        spellcheck_engine = build_engine(default_languages=("fr",))
        await spellcheck_engine.initialize()

        info = spellcheck_engine.get_language_info("fr")
        assert info.status == LanguageStatus.READY
        assert info.word_count > 0
        assert (dictionary_dir / "fr" / "fr.dic").read_text(encoding="utf-8") != ""

    @pytest.mark.asyncio
    async def test_unavailable_dictionary_degrades_to_accept_all(self, build_engine):
        spellcheck_engine = build_engine()

        with patch.object(
            DictionaryLoader, "load", side_effect=DictionaryUnavailable("rw", "disk gone")
        ):
            status = await spellcheck_engine.load_language("rw")

        assert status == LanguageStatus.READY
        info = spellcheck_engine.get_language_info("rw")
        assert info.degraded is True
        assert info.word_count == 0
        assert spellcheck_engine.check_word("ikaze", "rw") is True

    @pytest.mark.asyncio
    async def test_unexpected_load_error_degrades(self, build_engine):
        spellcheck_engine = build_engine()

        with patch.object(DictionaryLoader, "load", side_effect=RuntimeError("boom")):
            await spellcheck_engine.initialize()

        assert spellcheck_engine.is_ready("rw")
        assert spellcheck_engine.get_language_info("rw").degraded is True

    @pytest.mark.asyncio
    async def test_load_invalid_language(self, engine):
        assert await engine.load_language("Not/Valid") == LanguageStatus.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_reload_picks_up_new_words(self, engine, make_dictionary):
        assert engine.check_word("amakuru", "rw") is False

        make_dictionary("rw", ["muraho", "murakoze", "amakuru"])
        status = await engine.reload_language("rw")

        assert status == LanguageStatus.READY
        assert engine.check_word("amakuru", "rw") is True
        assert engine.get_language_info("rw").word_count == 3

    @pytest.mark.asyncio
    async def test_load_without_reload_keeps_cached_set(self, engine, make_dictionary):
        make_dictionary("rw", ["muraho", "murakoze", "amakuru"])

        await engine.load_language("rw")

        assert engine.check_word("amakuru", "rw") is False

    @pytest.mark.asyncio
    async def test_disable_and_enable(self, engine):
        info = engine.disable_language("rw")

        assert info.enabled is False
        assert engine.check_word("ikaze", "rw") is True

        info = await engine.enable_language("rw")

        assert info.enabled is True
        assert info.status == LanguageStatus.READY
        assert engine.check_word("ikaze", "rw") is False

    @pytest.mark.asyncio
    async def test_enable_new_language_loads_it(self, engine, make_dictionary):
        make_dictionary("en", ["hello", "world"])

        info = await engine.enable_language("en")

        assert info.status == LanguageStatus.READY
        assert info.word_count == 2
        assert engine.get_enabled_languages() == ["en", "rw"]
        assert engine.check_word("Hello", "en") is True
        assert engine.check_word("helo", "en") is False

    @pytest.mark.asyncio
    async def test_enable_invalid_language(self, engine):
        info = await engine.enable_language("INVALID!")

        assert info.enabled is False
        assert "INVALID!" not in engine.get_enabled_languages()

    @pytest.mark.asyncio
    async def test_list_languages(self, engine):
        await engine.add_word("kubernetes", "en")

        languages = {info.language: info for info in engine.list_languages()}

        assert set(languages) == {"en", "rw"}
        assert languages["rw"].enabled is True
        assert languages["rw"].word_count == 2
        assert languages["en"].enabled is False
        assert languages["en"].status == LanguageStatus.UNINITIALIZED
        assert languages["en"].custom_word_count == 1
