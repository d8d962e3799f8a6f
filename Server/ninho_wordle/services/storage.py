"""
Session Storage

Key-value string storage standing in for the browser's local storage.
Values are always kept as strings; callers serialize and parse.
"""

from typing import Dict, Optional

ID_KEY = 'userId'
CORRECT_WORD_KEY = 'correctWord'
GUESSES_KEY = 'userGuesses'
CURRENT_WORD_INDEX_KEY = 'currentWordIndex'
CURRENT_LETTER_INDEX_KEY = 'currentLetterIndex'
GAME_STATE_KEY = 'gameState'
LAST_PLAYED_KEY = 'lastPlayed'

STORAGE_KEYS = (
    ID_KEY, CORRECT_WORD_KEY, GUESSES_KEY, CURRENT_WORD_INDEX_KEY,
    CURRENT_LETTER_INDEX_KEY, GAME_STATE_KEY, LAST_PLAYED_KEY
)


class MemoryStorage:
    """In-memory key-value string store with the local storage interface."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            if value is not None:
                self.set_item(key, value)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> Dict[str, str]:
        """Copy of every stored item, e.g. to hand back to the client."""
        return dict(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
