"""
Services Package

Contains all business logic and service classes.
"""

from .dictionary_service import WordDictionary, build_allowed_words
from .game_service import GameService, GameSession
from .scoring import score
from .storage import MemoryStorage
from .word_service import DefinitionService, OpenRouterClient, ThemeWordService, WordCheckClient, WordService

__all__ = [
    'WordDictionary', 'build_allowed_words',
    'GameService', 'GameSession',
    'score',
    'MemoryStorage',
    'DefinitionService', 'OpenRouterClient', 'ThemeWordService', 'WordCheckClient', 'WordService'
]
