"""
Game Service

Contains the session manager for the daily pt-BR word game and the
registry that keeps one session per player.
"""

import json
import random
import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from ..config.game_settings import MAX_ATTEMPTS, WORD_LENGTH
from ..models.game import GameStatus, GuessGrid, LetterStatus, Notice, NoticeType, SessionState
from ..utils.errors import InvalidGuessError, ValidationError
from ..utils.game_logger import game_logger
from ..utils.text import normalize_word
from .dictionary_service import WordDictionary
from .scoring import is_winning, score
from .storage import (
    CORRECT_WORD_KEY, CURRENT_LETTER_INDEX_KEY, CURRENT_WORD_INDEX_KEY, GAME_STATE_KEY,
    GUESSES_KEY, ID_KEY, LAST_PLAYED_KEY, MemoryStorage
)

INCOMPLETE_ROW_NOTICE = Notice('Por favor, preencha todos os 5 espaços.', NoticeType.INFO, 2000)
INVALID_WORD_NOTICE = Notice('Palavra inválida.', NoticeType.INFO, 2000)

_DIRECTIONS = {'left': -1, 'right': 1}


class GameSession:
    """
    Session manager for a single player.

    This class handles:
    - The guess grid and the cursor inside the active row
    - Guess submission, scoring and win/lose detection
    - Keyboard letter hints that never regress
    - Persistence to a key-value string storage and the daily reset

    Only PLAYING accepts edits. Rows before ``current_row`` are submitted
    and never written again.
    """

    def __init__(self,
                 dictionary: WordDictionary,
                 storage: Optional[MemoryStorage] = None,
                 max_attempts: int = MAX_ATTEMPTS,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.dictionary = dictionary
        self.storage = storage if storage is not None else MemoryStorage()
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
        self.clock = clock or datetime.now
        self.lock = threading.RLock()

        self.user_id: Optional[str] = None
        self.correct_word: Optional[str] = None
        self.grid = GuessGrid.empty(max_attempts, WORD_LENGTH)
        self.current_row = 0
        self.current_column = 0
        self.game_state = GameStatus.PLAYING
        self.letter_hints: Dict[str, LetterStatus] = {}
        self.notice: Optional[Notice] = None

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------

    def enter_letter(self, letter: str) -> bool:
        """
        Write a letter into the active cell.

        The cursor then jumps to the next empty cell on its right. When it
        runs past the last cell the row is submitted automatically; a
        rejected submission leaves the row in place with a notice.

        Returns:
            bool: False when the input was ignored
        """
        # Uppercasing may expand a character ('ß' -> 'SS'); cells hold exactly one
        letter = letter.upper() if isinstance(letter, str) else ''
        if len(letter) != 1 or self.current_column >= WORD_LENGTH or not self._can_edit():
            return False

        self.notice = None
        row = self.current_row
        self.grid = self.grid.with_cell(row, self.current_column, letter)

        next_column = self.current_column + 1
        while next_column < WORD_LENGTH and self.grid.is_filled(row, next_column):
            next_column += 1
        self.current_column = next_column
        self._save()

        if next_column >= WORD_LENGTH:
            try:
                self.submit_guess()
            except InvalidGuessError as e:
                # Auto-submit rejections are reported through the notice only
                self.notice = e.notice

        return True

    def delete_letter(self) -> bool:
        """
        Clear a cell of the active row.

        A filled cell under the cursor is cleared in place. Otherwise the
        closest filled cell before the cursor is cleared and the cursor moves
        there.

        Returns:
            bool: False when nothing was deleted
        """
        if not self._can_edit():
            return False

        self.notice = None
        row = self.current_row
        column = self.current_column

        if column < WORD_LENGTH and self.grid.is_filled(row, column):
            self.grid = self.grid.with_cell(row, column, "")
        else:
            previous = [i for i in range(min(column, WORD_LENGTH)) if self.grid.is_filled(row, i)]
            if not previous:
                return False
            self.current_column = previous[-1]
            self.grid = self.grid.with_cell(row, self.current_column, "")

        self._save()
        return True

    def submit_guess(self) -> Optional[List[LetterStatus]]:
        """
        Score the active row and advance the game.

        Returns:
            List of verdicts, or None when the session is not PLAYING

        Raises:
            InvalidGuessError: If the row is incomplete or the word is not accepted
        """
        if not self._can_edit():
            return None

        self.notice = None
        row = self.current_row

        if not self.grid.row_complete(row):
            self._reject(INCOMPLETE_ROW_NOTICE)

        guess = self.grid.word(row)
        won = is_winning(self.correct_word, guess)
        if not won and not self.dictionary.contains(guess):
            self._reject(INVALID_WORD_NOTICE)

        verdicts = score(self.correct_word, guess)

        self.current_row = row + 1
        self.current_column = 0
        self._update_letter_hints([row])

        if won:
            self.game_state = GameStatus.WIN
            self.notice = Notice(
                f'Parabéns! Você ganhou! A palavra era: {self.correct_word}', NoticeType.SUCCESS
            )
        elif row >= self.max_attempts - 1:
            self.game_state = GameStatus.LOSE
            self.notice = Notice(
                f'Que pena! Você perdeu. A palavra era: {self.correct_word}', NoticeType.DANGER
            )

        self._save()
        self._touch_last_played()
        return verdicts

    def move_cursor(self, direction) -> bool:
        """
        Move the cursor one cell inside the active row, wrapping at the edges.

        Args:
            direction: "left" / "right" or -1 / 1

        Raises:
            ValidationError: If the direction is unknown
        """
        delta = _DIRECTIONS.get(direction) if isinstance(direction, str) else direction
        if isinstance(delta, bool) or delta not in (-1, 1):
            raise ValidationError(f"Invalid direction: {direction}. Must be 'left' or 'right'")

        if not self._can_edit():
            return False

        if self.current_column >= WORD_LENGTH:
            self.current_column = WORD_LENGTH - 1 if delta < 0 else 0
        else:
            self.current_column = (self.current_column + delta) % WORD_LENGTH

        self._save()
        return True

    def set_cursor(self, column: int) -> bool:
        """Place the cursor on any cell of the active row."""
        if isinstance(column, bool) or not isinstance(column, int) or not 0 <= column < WORD_LENGTH:
            raise ValidationError(f"Column must be between 0 and {WORD_LENGTH - 1}")

        if not self._can_edit():
            return False

        self.current_column = column
        self._save()
        return True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset_session(self, is_new_player: bool = False) -> None:
        """Draw a new target and start from an empty grid."""
        self.correct_word = self.dictionary.random_solution(self.rng)
        self.grid = GuessGrid.empty(self.max_attempts, WORD_LENGTH)
        self.current_row = 0
        self.current_column = 0
        self.letter_hints = {}
        self.notice = None
        self.game_state = GameStatus.NEW_PLAYER if is_new_player else GameStatus.PLAYING

        self._save()
        self._touch_last_played()

    def initialize_session(self, user_id: Optional[str] = None) -> None:
        """
        Restore the session from storage, or reset it.

        A player without a stored game starts as NEW_PLAYER. A stored game
        from another day, or one missing its target, is replaced by a fresh
        one. Corrupt stored values fall back to defaults.
        """
        self.user_id = self.storage.get_item(ID_KEY) or user_id or str(uuid.uuid4())
        self.storage.set_item(ID_KEY, self.user_id)

        stored_state = self.storage.get_item(GAME_STATE_KEY)
        loaded_state = self._load_game_state()

        if stored_state is None or loaded_state is GameStatus.NEW_PLAYER:
            return self.reset_session(True)

        last_played = self._load_last_played()
        if last_played is None or last_played.date() != self.clock().date():
            return self.reset_session(False)

        saved_word = self.storage.get_item(CORRECT_WORD_KEY)
        if not self.dictionary.is_solution(saved_word):
            return self.reset_session(False)

        self.correct_word = saved_word
        self.grid = self._load_grid()
        self.current_row = self._load_index(CURRENT_WORD_INDEX_KEY, self.max_attempts)
        self.current_column = self._load_index(CURRENT_LETTER_INDEX_KEY, WORD_LENGTH)
        self.game_state = loaded_state
        self.notice = None
        self.letter_hints = {}
        self._update_letter_hints(range(self.current_row))

    def start_new_day(self) -> bool:
        """
        Reinitialize a live session whose last play was on another day.

        Returns:
            bool: True when the session was replaced
        """
        last_played = self._load_last_played()
        if last_played is not None and last_played.date() == self.clock().date():
            return False

        self.initialize_session(self.user_id)
        return True

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def evaluations(self) -> List[List[LetterStatus]]:
        """Verdicts of every submitted row."""
        return [
            score(self.correct_word, self.grid.word(row))
            for row in self._submitted_rows(range(self.current_row))
        ]

    def to_state(self, include_storage: bool = False) -> SessionState:
        """Client-facing snapshot; the answer is revealed only once the game is over."""
        game_over = self.game_state in (GameStatus.WIN, GameStatus.LOSE)
        return SessionState(
            user_id=self.user_id,
            game_state=self.game_state.value,
            grid=self.grid.to_lists(),
            evaluations=[[status.value for status in row] for row in self.evaluations()],
            current_row=self.current_row,
            current_column=self.current_column,
            max_attempts=self.max_attempts,
            letter_hints={letter: status.value for letter, status in sorted(self.letter_hints.items())},
            notice=self.notice.to_dict() if self.notice else None,
            answer=self.correct_word if game_over else None,
            storage=self.storage.snapshot() if include_storage else {}
        )

    @property
    def game_over(self) -> bool:
        return self.game_state in (GameStatus.WIN, GameStatus.LOSE)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _can_edit(self) -> bool:
        return self.game_state is GameStatus.PLAYING and self.current_row < len(self.grid)

    def _reject(self, notice: Notice) -> None:
        self.notice = notice
        raise InvalidGuessError(notice)

    def _submitted_rows(self, rows: Iterable[int]) -> List[int]:
        return [row for row in rows if row < len(self.grid) and self.grid.row_complete(row)]

    def _update_letter_hints(self, rows: Iterable[int]) -> None:
        """
        Fold submitted rows into the keyboard hints.

        Letter-level rule: a positional match is correct, a letter found
        anywhere in the target is present, anything else is absent. A hint
        is only ever replaced by a better one.
        """
        target = normalize_word(self.correct_word)
        hints = dict(self.letter_hints)

        for row in self._submitted_rows(rows):
            for i, letter in enumerate(self.grid.rows[row]):
                key = normalize_word(letter)
                current = hints.get(key)
                if current is LetterStatus.CORRECT:
                    continue

                if key == target[i]:
                    status = LetterStatus.CORRECT
                elif key in target:
                    status = LetterStatus.PRESENT
                else:
                    status = LetterStatus.ABSENT

                if current is None or status.rank > current.rank:
                    hints[key] = status

        self.letter_hints = hints

    def _save(self) -> None:
        self.storage.set_item(CORRECT_WORD_KEY, self.correct_word)
        self.storage.set_item(GUESSES_KEY, json.dumps(self.grid.to_lists(), ensure_ascii=False))
        self.storage.set_item(CURRENT_WORD_INDEX_KEY, self.current_row)
        self.storage.set_item(CURRENT_LETTER_INDEX_KEY, self.current_column)
        self.storage.set_item(GAME_STATE_KEY, self.game_state.value)

    def _touch_last_played(self) -> None:
        self.storage.set_item(LAST_PLAYED_KEY, self.clock().isoformat())

    def _load_game_state(self) -> GameStatus:
        stored = self.storage.get_item(GAME_STATE_KEY)
        if stored not in GameStatus.__members__:
            return GameStatus.PLAYING
        return GameStatus[stored]

    def _load_last_played(self) -> Optional[datetime]:
        stored = self.storage.get_item(LAST_PLAYED_KEY)
        if not stored:
            return None
        try:
            return datetime.fromisoformat(stored)
        except ValueError:
            return None

    def _load_index(self, key: str, upper: int) -> int:
        try:
            index = int(self.storage.get_item(key))
        except (TypeError, ValueError):
            return 0
        return max(0, min(index, upper))

    def _load_grid(self) -> GuessGrid:
        """Stored grid, or an empty one when the JSON is missing, corrupt or misshapen."""
        empty = GuessGrid.empty(self.max_attempts, WORD_LENGTH)
        try:
            rows = json.loads(self.storage.get_item(GUESSES_KEY) or 'null')
        except ValueError:
            return empty

        if not isinstance(rows, list) or len(rows) != self.max_attempts:
            return empty
        for row in rows:
            if not isinstance(row, list) or len(row) != WORD_LENGTH:
                return empty
            if not all(isinstance(cell, str) and len(cell) <= 1 for cell in row):
                return empty

        return GuessGrid.from_lists(rows)


class GameService:
    """
    Registry of game sessions, one per player.

    Owned by the Flask application; sessions live for the process lifetime.
    """

    def __init__(self,
                 dictionary: Optional[WordDictionary] = None,
                 max_attempts: int = MAX_ATTEMPTS,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.dictionary = dictionary or WordDictionary.default()
        self.max_attempts = max_attempts
        self.rng = rng
        self.clock = clock
        self.sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def get_session(self,
                    user_id: Optional[str] = None,
                    snapshot: Optional[Dict[str, str]] = None) -> GameSession:
        """
        Return the session of a player, creating and initializing it if needed.

        Args:
            user_id: Player identifier, generated when missing
            snapshot: Storage items saved by the client; replaces any live session

        Returns:
            GameSession ready to play
        """
        with self._lock:
            live = self.sessions.get(user_id) if user_id and snapshot is None else None

        if live is not None:
            with live.lock:
                if live.start_new_day():
                    game_logger.logger.info(f"New day for user {live.user_id}; session reset")
            return live

        with self._lock:
            session = GameSession(
                self.dictionary,
                MemoryStorage(snapshot),
                max_attempts=self.max_attempts,
                rng=self.rng,
                clock=self.clock
            )
            session.initialize_session(user_id)
            if user_id and user_id != session.user_id:
                # The snapshot belongs to another player id
                self.sessions.pop(user_id, None)
            self.sessions[session.user_id] = session

        game_logger.logger.info(
            f"Session ready for user {session.user_id} (state: {session.game_state.value})"
        )
        return session

    def drop_session(self, user_id: str) -> bool:
        """Forget a player's session."""
        with self._lock:
            return self.sessions.pop(user_id, None) is not None

    def active_sessions_count(self) -> int:
        return len(self.sessions)
