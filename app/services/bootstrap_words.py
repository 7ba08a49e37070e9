"""
Built-in word lists written to disk when a language has no dictionary asset.

These are deliberately tiny: enough for the checker to come up offline and
recognise everyday greetings, not a substitute for a real dictionary.
"""
from typing import Dict, List

BOOTSTRAP_WORDS: Dict[str, List[str]] = {
    # Kinyarwanda
    "rw": [
        "muraho", "mwaramutse", "mwiriwe", "ijoro", "ryari", "urakoze",
        "murakoze", "yego", "oya", "amakuru", "neza", "byiza", "gute", "ute",
        "hehe", "kubera", "kuki", "igihe", "umunsi", "icyumweru", "ukwezi",
        "umwaka", "abantu", "umuntu", "umuryango", "inzu", "akazi", "ishuri",
        "ibitabo", "igitabo", "imodoka", "indege", "amazi", "ibiryo",
        "umugati", "ibirayi", "inyama", "imboga", "imbuto", "rwanda", "kigali",
        "kinyarwanda", "ikinyarwanda",
    ],
    "en": [
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "can", "do",
        "for", "from", "good", "have", "he", "hello", "her", "his", "how", "i",
        "in", "is", "it", "morning", "my", "no", "not", "of", "on", "or",
        "please", "she", "thank", "thanks", "that", "the", "they", "this",
        "to", "was", "we", "what", "when", "where", "which", "who", "why",
        "will", "with", "yes", "you", "your",
    ],
}


# Languages without a list of their own bootstrap from this one
FALLBACK_LANGUAGE = "rw"


def get_bootstrap_words(language: str) -> List[str]:
    """
    Get the bootstrap word list for a language.

    Languages without a built-in list get the Kinyarwanda list.

    Args:
        language: Language code

    Returns:
        Copy of the built-in list (never empty)
    """
    return list(BOOTSTRAP_WORDS.get(language) or BOOTSTRAP_WORDS[FALLBACK_LANGUAGE])
