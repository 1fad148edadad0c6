"""
Ludo pass-and-play rules engine.
Turn state machine and board topology for 2-6 players sharing one device.
"""

from .board import TOPOLOGY, BoardTopology
from .config import config, validate_game_settings
from .engine import TurnEngine
from .exceptions import (
    ConfigurationError,
    IllegalMoveError,
    InvalidRequestError,
    LudoError,
)
from .session import GameSession
from .token import Token
from .types import (
    AdvanceHomeRow,
    AdvanceOnTrack,
    Color,
    Enter,
    EnterHomeRow,
    Finish,
    GamePhase,
    Move,
    MoveEvents,
    MoveResult,
    RollResult,
    TokenState,
)

__all__ = [
    "TurnEngine",
    "GameSession",
    "BoardTopology",
    "TOPOLOGY",
    "Token",
    "TokenState",
    "GamePhase",
    "Color",
    "Move",
    "Enter",
    "AdvanceOnTrack",
    "EnterHomeRow",
    "AdvanceHomeRow",
    "Finish",
    "MoveEvents",
    "MoveResult",
    "RollResult",
    "LudoError",
    "ConfigurationError",
    "InvalidRequestError",
    "IllegalMoveError",
    "config",
    "validate_game_settings",
]
