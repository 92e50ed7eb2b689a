class WordScrambleError(Exception):
    """Base exception for the WordScramble server."""


class WordSourceError(WordScrambleError):
    """Raised when the word pool cannot be loaded."""


class ResourceMissing(WordSourceError):
    """Raised when the word pool resource cannot be located."""


class ResourceUnreadable(WordSourceError):
    """Raised when the word pool resource exists but cannot be decoded as text."""


class GameError(WordScrambleError):
    """Raised for recoverable game errors reported back to the caller."""

    code = 'game_error'


class EmptyPool(GameError):
    """Raised when a round is started from a pool with no candidates."""

    code = 'empty_pool'


class RoundNotStarted(GameError):
    """Raised when a word is submitted before the first round."""

    code = 'round_not_started'


class SessionNotFound(GameError, KeyError):
    """Raised when a session id is unknown to the manager."""

    code = 'session_not_found'

    def __str__(self) -> str:
        return f"Unknown session: {self.args[0]}" if self.args else "Unknown session"


class SessionInUse(GameError):
    """Raised when a session id is already taken by another client."""

    code = 'session_in_use'
