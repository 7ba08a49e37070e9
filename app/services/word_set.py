"""
Immutable vocabulary for one language.
"""
from typing import FrozenSet, Iterable, Iterator, Tuple

from app.services.spellcheck_base import normalize_word


class WordSet:
    """
    Normalized, read-only set of dictionary words for a single language.

    Membership is case- and whitespace-insensitive because the probe is
    normalized the same way the stored words were. Iteration follows the
    order in which words first appeared in the source list, so it is stable
    for a given dictionary asset. Reloading a dictionary builds a new
    WordSet; an existing instance is never mutated.
    """

    __slots__ = ("_language", "_words", "_ordered", "_bootstrapped")

    def __init__(self, language: str, words: Iterable[str] = (), bootstrapped: bool = False):
        ordered = []
        seen = set()
        for word in words:
            normalized = normalize_word(word)
            if normalized and normalized not in seen:
                seen.add(normalized)
                ordered.append(normalized)

        self._language = language
        self._words: FrozenSet[str] = frozenset(seen)
        self._ordered: Tuple[str, ...] = tuple(ordered)
        self._bootstrapped = bootstrapped

    @classmethod
    def empty(cls, language: str) -> "WordSet":
        return cls(language)

    @property
    def language(self) -> str:
        return self._language

    @property
    def words(self) -> FrozenSet[str]:
        return self._words

    @property
    def bootstrapped(self) -> bool:
        """True when the words came from the built-in bootstrap list."""
        return self._bootstrapped

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        return normalize_word(word) in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __bool__(self) -> bool:
        return bool(self._ordered)

    def __repr__(self) -> str:
        return f"WordSet(language={self._language!r}, size={len(self._ordered)}, bootstrapped={self._bootstrapped})"
