"""
Suggestion generation for misspelled words.

Candidates are taken from a WordSet and must survive two cheap filters
(length difference and shared prefix) before the edit distance is computed.
Edit distance is plain Levenshtein (insert/delete/substitute, unit cost),
computed by SymSpellPy's bounded implementation.
"""
from typing import List, Optional, Tuple

from symspellpy.editdistance import DistanceAlgorithm, EditDistance

from app.config import settings
from app.services.spellcheck_base import normalize_word
from app.services.word_set import WordSet
from app.utils.logger import get_logger


logger = get_logger("services.suggestions")

_LEVENSHTEIN = EditDistance(DistanceAlgorithm.LEVENSHTEIN)


def levenshtein_distance(word: str, candidate: str, max_distance: Optional[int] = None) -> int:
    """
    Compute the Levenshtein distance between two strings.

    Args:
        word: First string
        candidate: Second string
        max_distance: Stop early once the distance is known to exceed this bound

    Returns:
        Edit distance, or -1 if it exceeds max_distance
    """
    if max_distance is None:
        max_distance = max(len(word), len(candidate))
    return _LEVENSHTEIN.compare(word, candidate, max_distance)


class SuggestionEngine:
    """
    Bounded fuzzy matcher over a WordSet.

    With sort_by_distance enabled, all accepted candidates are ranked by
    (distance, word) before truncation, which makes the output independent of
    dictionary order. With it disabled, the first max_results accepted
    candidates in dictionary order are returned.
    """

    def __init__(
        self,
        max_results: Optional[int] = None,
        max_distance: Optional[int] = None,
        length_tolerance: Optional[int] = None,
        prefix_length: Optional[int] = None,
        sort_by_distance: Optional[bool] = None,
    ):
        """
        Initialize suggestion engine.

        Args:
            max_results: Maximum suggestions returned (default from config)
            max_distance: Maximum accepted edit distance (default from config)
            length_tolerance: Maximum length difference between word and candidate (default from config)
            prefix_length: Number of leading characters a candidate must share (default from config)
            sort_by_distance: Rank by distance instead of dictionary order (default from config)
        """
        self._max_results = max_results if max_results is not None else settings.SPELLCHECK_SUGGESTION_COUNT
        self._max_distance = max_distance if max_distance is not None else settings.SPELLCHECK_MAX_EDIT_DISTANCE
        self._length_tolerance = (
            length_tolerance if length_tolerance is not None else settings.SPELLCHECK_LENGTH_TOLERANCE
        )
        self._prefix_length = prefix_length if prefix_length is not None else settings.SPELLCHECK_PREFIX_LENGTH
        self._sort_by_distance = (
            sort_by_distance if sort_by_distance is not None else settings.SPELLCHECK_SORT_SUGGESTIONS
        )

    @property
    def max_results(self) -> int:
        return self._max_results

    @property
    def max_distance(self) -> int:
        return self._max_distance

    def suggest(self, word: str, word_set: WordSet, max_results: Optional[int] = None) -> List[str]:
        """
        Suggest dictionary words close to the given word.

        Args:
            word: Word to find suggestions for (normalized here)
            word_set: Vocabulary to draw candidates from
            max_results: Override for the maximum number of suggestions

        Returns:
            Up to max_results candidates, each within max_distance edits
        """
        limit = self._max_results if max_results is None else max_results
        normalized = normalize_word(word)
        if limit <= 0 or not normalized or not word_set:
            return []

        prefix = normalized[: self._prefix_length]
        accepted: List[Tuple[int, str]] = []

        for candidate in word_set:
            if abs(len(candidate) - len(normalized)) > self._length_tolerance:
                continue
            if not candidate.startswith(prefix):
                continue

            distance = levenshtein_distance(normalized, candidate, self._max_distance)
            if distance < 0:
                continue

            accepted.append((distance, candidate))
            if not self._sort_by_distance and len(accepted) >= limit:
                break

        if self._sort_by_distance:
            accepted.sort()

        suggestions = [candidate for _, candidate in accepted[:limit]]
        logger.debug(
            "Suggestions computed",
            word=normalized,
            language=word_set.language,
            candidates=len(accepted),
            returned=len(suggestions),
        )
        return suggestions
