from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .token import Token
from .types import GamePhase


@dataclass(slots=True)
class GameSession:
    """The single mutable aggregate of a game. Only TurnEngine mutates it."""

    phase: GamePhase = GamePhase.NOT_STARTED
    player_count: int = 0
    tokens_per_player: int = 0
    active_player: int = 0
    pending_die: Optional[int] = None
    six_streak: int = 0
    winner: Optional[int] = None
    turn: int = 0  # number of times the turn has passed
    tokens: List[List[Token]] = field(default_factory=list)

    def reset(self, player_count: int, tokens_per_player: int) -> None:
        self.phase = GamePhase.IN_PROGRESS
        self.player_count = player_count
        self.tokens_per_player = tokens_per_player
        self.active_player = 0
        self.pending_die = None
        self.six_streak = 0
        self.winner = None
        self.turn = 0
        self.tokens = [
            [Token(player=p, token_index=t) for t in range(tokens_per_player)]
            for p in range(player_count)
        ]

    def is_started(self) -> bool:
        return self.phase is not GamePhase.NOT_STARTED

    def is_over(self) -> bool:
        return self.phase is GamePhase.FINISHED

    def tokens_of(self, player: int) -> List[Token]:
        return self.tokens[player]

    def token(self, player: int, token_index: int) -> Token:
        return self.tokens[player][token_index]

    def has_token(self, player: int, token_index: int) -> bool:
        return 0 <= player < self.player_count and 0 <= token_index < self.tokens_per_player

    def finished_count(self, player: int) -> int:
        return sum(1 for t in self.tokens[player] if t.is_finished())

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "player_count": self.player_count,
            "tokens_per_player": self.tokens_per_player,
            "active_player": self.active_player,
            "pending_die": self.pending_die,
            "six_streak": self.six_streak,
            "winner": self.winner,
            "turn": self.turn,
            "tokens": [[t.to_dict() for t in row] for row in self.tokens],
        }
