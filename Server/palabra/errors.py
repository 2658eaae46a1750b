"""
Exception hierarchy for the Palabra game.
"""


class PalabraError(Exception):
    """Base class for all game errors."""


class WordListError(PalabraError, ValueError):
    """The word list is missing, malformed or empty. Fatal at startup."""


class PersistenceError(PalabraError):
    """A storage backend failed to load or save a value."""


class ApiError(PalabraError):
    """The game server could not be reached or answered unexpectedly."""
