class EngineError(Exception):
    """Base class for errors surfaced to API callers."""


class NotFound(EngineError):
    """A quiz, attempt or participant does not resolve."""


class InvalidInput(EngineError):
    """A required field (e.g. participant username) is missing."""
