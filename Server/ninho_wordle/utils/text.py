"""
Text Normalization

Accent handling for Brazilian Portuguese words.
"""

import unicodedata


def normalize(text: str, mode: str = "strip") -> str:
    """
    Normalize Portuguese text by handling diacritics.

    Args:
        text: Input string
        mode: "strip" removes diacritics (case preserved), "keep" returns input as is

    Returns:
        str: Normalized string

    Raises:
        ValueError: If mode is not "strip" or "keep"
    """
    if mode == "keep":
        return text

    if mode == "strip":
        decomposed = unicodedata.normalize("NFD", text)
        return "".join(char for char in decomposed if not unicodedata.combining(char))

    raise ValueError(f"Invalid mode: {mode}. Must be 'strip' or 'keep'")


def normalize_word(word: str) -> str:
    """Comparison key for a word: trimmed, uppercase, no diacritics."""
    return normalize(word.strip().upper())
