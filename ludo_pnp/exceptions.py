# Specific exception types for the rules engine
class LudoError(Exception):
    """Base exception for rules-engine errors."""

    pass


class ConfigurationError(LudoError, ValueError):
    """Raised when player or token counts are out of range."""

    pass


class InvalidRequestError(LudoError):
    """Raised when a roll or move is requested in the wrong phase (no state change)."""

    pass


class IllegalMoveError(LudoError):
    """Raised when apply_move is called with a move that is not the legal one."""

    pass
