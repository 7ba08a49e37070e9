"""
Language code validation utilities for spell-check dictionaries.
"""
import re

# Codes double as dictionary directory and file names, so only a
# conservative ISO 639-style shape is accepted: "rw", "en", "en-us", "pt_br".
LANGUAGE_CODE_PATTERN = re.compile(r"[a-z]{2,3}(?:[-_][a-z0-9]{2,8})?")


def validate_language_code(language: str) -> bool:
    """
    Validate the shape of a language code.

    Args:
        language: Language code to validate (e.g., 'rw', 'en', 'en-us')

    Returns:
        True if the code is well-formed, False otherwise

    Example:
        >>> validate_language_code("rw")
        True
        >>> validate_language_code("../etc")
        False
        >>> validate_language_code("EN")
        False
    """
    if not isinstance(language, str):
        return False
    return LANGUAGE_CODE_PATTERN.fullmatch(language) is not None
