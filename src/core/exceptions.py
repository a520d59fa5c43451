"""
Custom exceptions shared by all layers.

Every error the domain or service layer raises on purpose derives from GameError,
so the API layer only needs a single place to translate them into responses.
"""


class GameError(Exception):
    """Base class for all expected (caller-facing) errors."""


class ValidationError(GameError):
    """Malformed or missing input: empty name, unknown mode, bad player combination, cell out of range."""


class NotFoundError(GameError):
    """No game (or player) with the requested ID."""


class InvalidStateError(GameError):
    """Operation attempted on a game that is already over."""


class TurnError(GameError):
    """The player to move is of the wrong type for the requested action."""


class OccupiedError(GameError):
    """Target cell already holds a symbol."""


class InternalConsistencyError(GameError):
    """Stored state contradicts itself (ex. CPU cannot find a move in a game that is still in progress)."""


class ConfigurationError(Exception):
    """Invalid value in the environment configuration."""
