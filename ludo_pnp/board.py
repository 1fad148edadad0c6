"""
Board topology for the rules engine.
Pure data computed once: ring cells, entry/transition cells, safe cells and
the per-seat distance to the home-row turn-off.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, FrozenSet, Optional, Tuple

import numpy as np

from .config import Config, config
from .token import Token
from .types import (
    AdvanceHomeRow,
    AdvanceOnTrack,
    Enter,
    EnterHomeRow,
    Finish,
    Move,
)

if TYPE_CHECKING:
    from .session import GameSession


def _compute_steps_to_transition(cfg: Config) -> Tuple[Tuple[int, ...], ...]:
    # steps[p][i]: forward steps from cell i until seat p's transition cell (1..N)
    n = cfg.TRACK_LENGTH
    table = []
    for transition in cfg.TRANSITION_SQUARES:
        table.append(tuple(((transition - i - 1) % n) + 1 for i in range(n)))
    return tuple(table)


@dataclass(frozen=True, slots=True)
class BoardTopology:
    track_length: int
    home_row_length: int
    exit_roll: int
    entries: Tuple[int, ...]
    transitions: Tuple[int, ...]
    seat_names: Tuple[str, ...]
    safe_cells: FrozenSet[int]
    steps_table: Tuple[Tuple[int, ...], ...]

    @classmethod
    def from_config(cls, cfg: Config = config) -> "BoardTopology":
        return cls(
            track_length=cfg.TRACK_LENGTH,
            home_row_length=cfg.HOME_ROW_LENGTH,
            exit_roll=cfg.EXIT_ROLL,
            entries=tuple(cfg.ENTRY_SQUARES),
            transitions=tuple(cfg.TRANSITION_SQUARES),
            seat_names=tuple(cfg.SEAT_NAMES),
            safe_cells=frozenset(cfg.ENTRY_SQUARES),
            steps_table=_compute_steps_to_transition(cfg),
        )

    # --- Lookups ---
    def entry_index(self, player: int) -> int:
        return self.entries[player]

    def transition_index(self, player: int) -> int:
        return self.transitions[player]

    def normalize(self, offset: int) -> int:
        return offset % self.track_length

    def is_safe(self, track_index: int) -> bool:
        return self.normalize(track_index) in self.safe_cells

    def steps_to_transition(self, player: int, track_index: int) -> int:
        return self.steps_table[player][self.normalize(track_index)]

    def seat_name(self, player: int) -> str:
        return self.seat_names[player]

    # --- Rules: destinations ---
    def destination(self, token: Token, die: int) -> Optional[Move]:
        """Where `token` ends up with `die`, or None if it cannot move."""
        if token.is_finished():
            return None

        if token.is_in_base():
            if die == self.exit_roll:
                return Enter(self.entry_index(token.player))
            return None

        if token.is_on_track():
            steps = self.steps_to_transition(token.player, token.track_index)
            if die < steps:
                return AdvanceOnTrack(self.normalize(token.track_index + die))
            remaining = die - steps
            if remaining == 0:
                return AdvanceOnTrack(self.transition_index(token.player))
            if remaining > self.home_row_length:
                return None  # would overshoot the finish
            return EnterHomeRow(remaining - 1)

        target = token.home_index + die
        if target < self.home_row_length:
            return AdvanceHomeRow(target)
        if target == self.home_row_length:
            return Finish()
        return None  # exact count required

    # --- Occupancy views for renderers ---
    def occupancy(self, session: "GameSession") -> np.ndarray:
        """(players, track_length) count of tokens on each ring cell."""
        grid = np.zeros((session.player_count, self.track_length), dtype=np.int64)
        for p in range(session.player_count):
            for tok in session.tokens_of(p):
                if tok.is_on_track():
                    grid[p, tok.track_index] += 1
        return grid

    def home_row_occupancy(self, session: "GameSession") -> np.ndarray:
        """(players, home_row_length) count of tokens in each home-row cell."""
        grid = np.zeros((session.player_count, self.home_row_length), dtype=np.int64)
        for p in range(session.player_count):
            for tok in session.tokens_of(p):
                if tok.is_on_home_row():
                    grid[p, tok.home_index] += 1
        return grid


TOPOLOGY = BoardTopology.from_config()
