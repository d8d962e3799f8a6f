"""
Game Configuration Constants Module

This module defines all game configuration constants and loads the
pt-BR word lists. All game parameters are centralized here.
"""

import json
import os
from typing import Final, List

from ..utils.text import normalize_word

# Hard domain constraint: every target and guess has exactly five letters
WORD_LENGTH: Final[int] = 5

MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per session.
"""

OFFENSIVE_WORDS: Final[List[str]] = ['IDIOTA', 'BURRO', 'TOLO', 'BESTA', 'ASNO', 'IMBECIL']


def _load_word_list(file_name: str) -> List[str]:
    """
    Load a word list from a JSON file next to this module.

    Args:
        file_name: JSON file holding an array of words

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If the file is not found
        ValueError: If the JSON is malformed, the list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, file_name)

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_name}: {e}")

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    uppercase_words = [word.strip().upper() for word in word_list]

    for word in uppercase_words:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return uppercase_words


# Words that can be drawn as the target
SOLUTIONS: Final[List[str]] = _load_word_list('solutions.json')

# Extra words accepted as guesses (stored accent-free)
ALLOWED_GUESSES: Final[List[str]] = _load_word_list('allowed.json')


def validate_word_list_integrity() -> bool:
    """
    Validates the integrity and consistency of the word lists.

    Checks that both lists hold uppercase 5-letter alphabetic words without
    duplicates, and that no solution is blocked as offensive.

    Returns:
        bool: True if the word lists pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for name, words in (('solutions', SOLUTIONS), ('allowed', ALLOWED_GUESSES)):
        if not words:
            raise ValueError(f"Word list '{name}' cannot be empty")

        for index, word in enumerate(words):
            if len(word) != WORD_LENGTH:
                raise ValueError(f"Word at index {index} '{word}' in {name} is not {WORD_LENGTH} characters long")

            if not word.isalpha():
                raise ValueError(f"Word at index {index} '{word}' in {name} contains non-alphabetic characters")

            if not word.isupper():
                raise ValueError(f"Word at index {index} '{word}' in {name} is not in uppercase format")

        normalized = [normalize_word(word) for word in words]
        if len(normalized) != len(set(normalized)):
            duplicates = sorted({word for word in normalized if normalized.count(word) > 1})
            raise ValueError(f"Duplicate words found in {name}: {duplicates}")

    blocked = set(OFFENSIVE_WORDS)
    offensive_solutions = [word for word in SOLUTIONS if normalize_word(word) in blocked]
    if offensive_solutions:
        raise ValueError(f"Offensive words found in solutions: {offensive_solutions}")

    return True


def get_word_statistics() -> dict:
    """
    Analyzes the solution list and returns statistical information.

    Returns:
        dict: total_words, accepted_guesses, avg_vowel_count,
        letter_frequency and most_common_letters
    """
    if not SOLUTIONS:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    plain_words = [normalize_word(word) for word in SOLUTIONS]
    total_vowels = sum(len([char for char in word if char in vowels]) for word in plain_words)

    letter_frequency = {}
    for word in plain_words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(SOLUTIONS),
        "accepted_guesses": len(set(plain_words) | {normalize_word(word) for word in ALLOWED_GUESSES}),
        "avg_vowel_count": round(total_vowels / len(SOLUTIONS), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        stats = get_word_statistics()
        print(f" Game statistics: {stats}")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
