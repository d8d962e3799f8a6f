"""
Utilities Package

Contains utility functions, decorators, errors and helper modules.
"""

from .errors import (
    ExternalServiceError, InvalidGuessError, LengthMismatchError, NinhoError,
    ValidationError, WordLengthError
)
from .game_logger import game_logger
from .request_cache import InFlightCache
from .text import normalize, normalize_word

__all__ = [
    'ExternalServiceError', 'InvalidGuessError', 'LengthMismatchError', 'NinhoError',
    'ValidationError', 'WordLengthError',
    'game_logger', 'InFlightCache', 'normalize', 'normalize_word'
]
