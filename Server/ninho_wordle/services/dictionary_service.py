"""
Dictionary Service

Accepted-word set (solutions plus allowed guesses) and the filtering used
to build the allowed-guess list from raw word sources.
"""

import random
import re
from typing import Iterable, List, Optional, Tuple

from ..config.game_settings import ALLOWED_GUESSES, OFFENSIVE_WORDS, SOLUTIONS, WORD_LENGTH
from ..utils.text import normalize, normalize_word

DISALLOWED_WORDS = frozenset(['aaaah', 'xanax', 'aaron', 'abbey', 'about'])
DISALLOWED_PREFIXES = ('mc', 'mr', 'dr', 'sr', 'sra')

_PLAIN_WORD = re.compile(r'^[a-z]+$')
_DICTIONARY_ENTRY = re.compile(r'^[a-záàâãéêíóôõúç]+$')


class WordDictionary:
    """
    Accepted-word set provider.

    Membership is case, accent and surrounding-whitespace insensitive.
    Solutions are always accepted as guesses.
    """

    def __init__(self,
                 solutions: Iterable[str],
                 allowed: Iterable[str] = (),
                 blocked: Iterable[str] = OFFENSIVE_WORDS):
        self.solutions: List[str] = [word.strip().upper() for word in solutions]
        if not self.solutions:
            raise ValueError("Solution list cannot be empty")

        self._solution_keys = frozenset(normalize_word(word) for word in self.solutions)
        self._accepted_keys = self._solution_keys | frozenset(normalize_word(word) for word in allowed)
        self._blocked_keys = frozenset(normalize_word(word) for word in blocked)

    @classmethod
    def default(cls) -> "WordDictionary":
        """Dictionary backed by the packaged pt-BR word lists."""
        return cls(SOLUTIONS, ALLOWED_GUESSES, OFFENSIVE_WORDS)

    def _key(self, word) -> Optional[str]:
        if not word or not isinstance(word, str):
            return None
        key = normalize_word(word)
        if len(key) != WORD_LENGTH:
            return None
        return key

    def contains(self, word) -> bool:
        """Whether the word is accepted as a guess."""
        key = self._key(word)
        if key is None or key in self._blocked_keys:
            return False
        return key in self._accepted_keys

    __contains__ = contains

    def is_solution(self, word) -> bool:
        """Whether the word can be drawn as a target."""
        key = self._key(word)
        return key is not None and key in self._solution_keys

    def random_solution(self, rng: Optional[random.Random] = None) -> str:
        """Pick a target uniformly at random among the solutions."""
        return (rng or random).choice(self.solutions)

    def __len__(self) -> int:
        return len(self._accepted_keys)


def _plain(word: str) -> str:
    return normalize(word).lower()


def _is_allowed_candidate(word: str, dictionary_keys: frozenset) -> bool:
    if len(word) != WORD_LENGTH:
        return False
    if not _PLAIN_WORD.match(word):
        return False
    if word in DISALLOWED_WORDS:
        return False
    if any(word.startswith(prefix) for prefix in DISALLOWED_PREFIXES):
        return False
    return word in dictionary_keys


def build_allowed_words(frequency_words: Iterable[Tuple[str, int]],
                        dictionary_words: Iterable[str],
                        answers: Iterable[str],
                        limit: int = 8000) -> List[str]:
    """
    Build the allowed-guess list.

    Args:
        frequency_words: (word, rank) pairs from a frequency list
        dictionary_words: Lowercase dictionary entries (accents allowed)
        answers: Solution words, always included when they are plain 5-letter words
        limit: Highest frequency rank considered

    Returns:
        List[str]: Sorted, de-duplicated, accent-free lowercase words
    """
    dictionary_keys = frozenset(
        _plain(word) for word in dictionary_words
        if word and word == word.lower() and _DICTIONARY_ENTRY.match(word)
    )

    allowed = set()
    for word, rank in frequency_words:
        if not 0 < rank <= limit:
            continue
        plain = _plain(word.lower())
        if _is_allowed_candidate(plain, dictionary_keys):
            allowed.add(plain)

    for word in answers:
        plain = _plain(word.lower())
        if len(plain) == WORD_LENGTH and _PLAIN_WORD.match(plain):
            allowed.add(plain)

    return sorted(allowed)


def parse_frequency_lines(lines: Iterable[str]) -> List[Tuple[str, int]]:
    """Parse "word rank" lines, skipping malformed ones."""
    entries = []
    for line in lines:
        parts = line.strip().split(' ')
        if len(parts) < 2:
            continue
        try:
            rank = int(parts[1])
        except ValueError:
            continue
        entries.append((parts[0].lower(), rank))
    return entries


def parse_dictionary_lines(lines: Iterable[str]) -> List[str]:
    """Extract the stems of a hunspell .dic file (text before '/')."""
    return [line.strip().split('/')[0] for line in lines if line.strip()]
