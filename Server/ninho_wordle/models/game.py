"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LetterStatus(Enum):
    """Per-letter verdict of a scored guess."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def rank(self) -> int:
        """Ordering used by the keyboard hints (absent < present < correct)."""
        return _STATUS_RANK[self]


_STATUS_RANK = {
    LetterStatus.ABSENT: 0,
    LetterStatus.PRESENT: 1,
    LetterStatus.CORRECT: 2,
}


class GameStatus(Enum):
    """Session lifecycle. Only PLAYING accepts edits."""
    NEW_PLAYER = "NEW_PLAYER"
    PLAYING = "PLAYING"
    WIN = "WIN"
    LOSE = "LOSE"


class NoticeType(Enum):
    """Kind of transient message shown to the player."""
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    DANGER = "DANGER"


@dataclass(frozen=True)
class Notice:
    """Transient user-facing message."""
    message: str
    kind: NoticeType = NoticeType.INFO
    duration_ms: Optional[int] = None  # None keeps it until the next notice

    def to_dict(self) -> Dict:
        return {
            'message': self.message,
            'kind': self.kind.value,
            'duration_ms': self.duration_ms
        }


@dataclass(frozen=True)
class GuessGrid:
    """
    Immutable grid of guess rows.

    Every update returns a new grid; callers replace their reference instead
    of mutating cells through shared lists.
    """
    rows: Tuple[Tuple[str, ...], ...]

    @classmethod
    def empty(cls, max_attempts: int, word_length: int) -> "GuessGrid":
        return cls(tuple(tuple("" for _ in range(word_length)) for _ in range(max_attempts)))

    @classmethod
    def from_lists(cls, rows: List[List[str]]) -> "GuessGrid":
        return cls(tuple(tuple(cell for cell in row) for row in rows))

    def to_lists(self) -> List[List[str]]:
        return [list(row) for row in self.rows]

    def with_cell(self, row: int, column: int, value: str) -> "GuessGrid":
        """Return a copy of the grid with one cell replaced."""
        updated_row = self.rows[row][:column] + (value,) + self.rows[row][column + 1:]
        return GuessGrid(self.rows[:row] + (updated_row,) + self.rows[row + 1:])

    def cell(self, row: int, column: int) -> str:
        return self.rows[row][column]

    def is_filled(self, row: int, column: int) -> bool:
        return self.rows[row][column].strip() != ""

    def row_complete(self, row: int) -> bool:
        return all(letter.strip() != "" for letter in self.rows[row])

    def word(self, row: int) -> str:
        return "".join(self.rows[row])

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class SessionState:
    """Client-facing snapshot of a game session (answer hidden while playing)."""
    user_id: Optional[str]
    game_state: str
    grid: List[List[str]]
    evaluations: List[List[str]]
    current_row: int
    current_column: int
    max_attempts: int
    letter_hints: Dict[str, str]
    notice: Optional[Dict] = None
    answer: Optional[str] = None  # Only included when the game is over
    storage: Dict[str, str] = field(default_factory=dict)
