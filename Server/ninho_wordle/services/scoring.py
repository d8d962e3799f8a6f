"""
Scoring Engine

Compares a guess against the target word and returns one verdict per
letter, following the classic two-pass Wordle rules.
"""

from collections import Counter
from typing import List

from ..config.game_settings import WORD_LENGTH
from ..models.game import LetterStatus
from ..utils.errors import LengthMismatchError, WordLengthError
from ..utils.text import normalize


def _prepare(word: str, normalize_accents: bool) -> str:
    word = word.upper()
    if normalize_accents:
        word = normalize(word)
    return word


def score(target: str, guess: str, normalize_accents: bool = True) -> List[LetterStatus]:
    """
    Score a guess against the target word.

    Repeated letters are resolved with a per-letter tally of the target:
    exact positions consume the tally first, then the remaining guess letters
    are marked present while the tally lasts. A letter that appears twice in
    the guess but once in the target gets a single positive verdict.

    Args:
        target: The 5-letter word to be found
        guess: The 5-letter word submitted
        normalize_accents: Compare accented and plain letters as equal

    Returns:
        List[LetterStatus]: Five verdicts, in guess order

    Raises:
        LengthMismatchError: If target and guess lengths differ
        WordLengthError: If the words are not 5 letters long
    """
    normalized_target = _prepare(target, normalize_accents)
    normalized_guess = _prepare(guess, normalize_accents)

    if len(normalized_target) != len(normalized_guess):
        raise LengthMismatchError(len(normalized_target), len(normalized_guess))
    if len(normalized_target) != WORD_LENGTH:
        raise WordLengthError(len(normalized_target), len(normalized_guess))

    result = [LetterStatus.ABSENT] * WORD_LENGTH
    remaining = Counter(normalized_target)

    # First pass: exact positions
    for i, (target_letter, guess_letter) in enumerate(zip(normalized_target, normalized_guess)):
        if guess_letter == target_letter:
            result[i] = LetterStatus.CORRECT
            remaining[guess_letter] -= 1

    # Second pass: letters elsewhere in the target
    for i, guess_letter in enumerate(normalized_guess):
        if result[i] is LetterStatus.CORRECT:
            continue
        if remaining[guess_letter] > 0:
            result[i] = LetterStatus.PRESENT
            remaining[guess_letter] -= 1

    return result


def is_winning(target: str, guess: str) -> bool:
    """True when the guess matches the target ignoring case and accents."""
    return _prepare(target.strip(), True) == _prepare(guess.strip(), True)
