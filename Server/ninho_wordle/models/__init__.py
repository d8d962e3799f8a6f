"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameStatus, GuessGrid, LetterStatus, Notice, NoticeType, SessionState
from .word import Definition, ThemeWord

__all__ = [
    'GameStatus', 'GuessGrid', 'LetterStatus', 'Notice', 'NoticeType', 'SessionState',
    'Definition', 'ThemeWord'
]
