"""
Error Types

Exception hierarchy shared by the scoring engine, the session manager and
the external word services.
"""

from typing import Optional


RETRY_SUGGESTION = "Limite da API atingido. Tente novamente em alguns instantes."


class NinhoError(Exception):
    """Base class for all game errors."""


class ValidationError(NinhoError, ValueError):
    """Input failed a hard domain constraint (never silently corrected)."""


class LengthMismatchError(ValidationError):
    """Target and guess have different lengths."""

    def __init__(self, target_length: int, guess_length: int):
        super().__init__(
            f"Target and guess must have the same length. "
            f"Target: {target_length}, Guess: {guess_length}"
        )
        self.target_length = target_length
        self.guess_length = guess_length


class WordLengthError(ValidationError):
    """Word is not exactly five letters long."""

    def __init__(self, target_length: int, guess_length: int):
        super().__init__(
            f"Only 5-letter words are supported. "
            f"Target: {target_length}, Guess: {guess_length}"
        )
        self.target_length = target_length
        self.guess_length = guess_length


class InvalidGuessError(NinhoError):
    """
    Guess rejected by the session (incomplete row or unknown word).

    Recoverable: the session state is unchanged and the attached notice is
    meant to be shown to the player.
    """

    def __init__(self, notice):
        super().__init__(notice.message)
        self.notice = notice


class ExternalServiceError(NinhoError):
    """
    Upstream collaborator failed (rate limited, quota, unavailable).

    Attributes:
        status_code: HTTP status to surface to the client
        rate_limited: True for 429 / quota errors
        retryable: True when trying again later may succeed
    """

    def __init__(self,
                 message: str,
                 status_code: int = 502,
                 rate_limited: bool = False,
                 retryable: Optional[bool] = None):
        super().__init__(message)
        self.status_code = 429 if rate_limited else status_code
        self.rate_limited = rate_limited
        if retryable is None:
            retryable = rate_limited or status_code in (502, 503, 504)
        self.retryable = retryable

    @property
    def user_message(self) -> str:
        """Message safe to show to the player."""
        if self.rate_limited:
            return RETRY_SUGGESTION
        return str(self)
