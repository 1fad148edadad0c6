from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Union


class Color(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    PURPLE = 4
    TEAL = 5


class TokenState(Enum):
    """Possible states of a token."""

    BASE = "base"  # waiting in the yard, needs a six
    ON_TRACK = "on_track"  # somewhere on the shared ring
    ON_HOME_ROW = "on_home_row"  # inside the player's private row
    FINISHED = "finished"  # reached the center


class GamePhase(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


# --- Move variants: one case per transition ---


@dataclass(frozen=True, slots=True)
class Enter:
    """Base -> player's entry cell."""

    track_index: int


@dataclass(frozen=True, slots=True)
class AdvanceOnTrack:
    """Stay on the ring (includes landing exactly on the transition cell)."""

    track_index: int


@dataclass(frozen=True, slots=True)
class EnterHomeRow:
    """Ring -> home row."""

    home_index: int


@dataclass(frozen=True, slots=True)
class AdvanceHomeRow:
    home_index: int


@dataclass(frozen=True, slots=True)
class Finish:
    pass


Move = Union[Enter, AdvanceOnTrack, EnterHomeRow, AdvanceHomeRow, Finish]


@dataclass(slots=True)
class MoveEvents:
    entered_track: bool = False
    entered_home_row: bool = False
    finished: bool = False
    won: bool = False
    # (player, token_index) of every opposing token sent back to base
    captures: List[Tuple[int, int]] = field(default_factory=list)


@dataclass(slots=True)
class MoveResult:
    player: int
    token_index: int
    die: int
    move: Move
    events: MoveEvents
    extra_turn: bool
    next_player: int


@dataclass(slots=True)
class RollResult:
    player: int
    value: int
    next_player: int
    forfeited: bool = False  # third consecutive six
    skipped: bool = False  # no token could use the roll
    movable: List[int] = field(default_factory=list)

    @property
    def awaiting_move(self) -> bool:
        return not (self.forfeited or self.skipped)
