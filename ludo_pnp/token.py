"""
Token representation for the rules engine.
Each player owns 1-4 tokens for the whole game; only the engine moves them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import TokenState


@dataclass(slots=True)
class Token:
    """
    A single piece. Exactly one of track_index / home_index is set while the
    token is on the ring or in its home row; neither is set in base or finished.
    """

    player: int
    token_index: int
    state: TokenState = TokenState.BASE
    track_index: Optional[int] = None  # 0..51 on the shared ring
    home_index: Optional[int] = None  # 0..5 in the home row

    def is_in_base(self) -> bool:
        return self.state is TokenState.BASE

    def is_on_track(self) -> bool:
        return self.state is TokenState.ON_TRACK

    def is_on_home_row(self) -> bool:
        return self.state is TokenState.ON_HOME_ROW

    def is_finished(self) -> bool:
        return self.state is TokenState.FINISHED

    def send_to_base(self) -> None:
        self.state = TokenState.BASE
        self.track_index = None
        self.home_index = None

    def place_on_track(self, track_index: int) -> None:
        self.state = TokenState.ON_TRACK
        self.track_index = track_index
        self.home_index = None

    def place_on_home_row(self, home_index: int) -> None:
        self.state = TokenState.ON_HOME_ROW
        self.track_index = None
        self.home_index = home_index

    def finish(self) -> None:
        self.state = TokenState.FINISHED
        self.track_index = None
        self.home_index = None

    def check_invariant(self) -> None:
        """Raise ValueError if the indices disagree with the state."""
        has_track = self.track_index is not None
        has_home = self.home_index is not None
        expected = {
            TokenState.BASE: (False, False),
            TokenState.ON_TRACK: (True, False),
            TokenState.ON_HOME_ROW: (False, True),
            TokenState.FINISHED: (False, False),
        }[self.state]
        if (has_track, has_home) != expected:
            raise ValueError(f"corrupt token position: {self}")

    def to_dict(self) -> dict:
        """Snapshot for the presentation layer."""
        return {
            "player": self.player,
            "token_index": self.token_index,
            "state": self.state.value,
            "track_index": self.track_index,
            "home_index": self.home_index,
        }

    def __str__(self) -> str:
        where = ""
        if self.track_index is not None:
            where = f" at {self.track_index}"
        elif self.home_index is not None:
            where = f" at home row {self.home_index}"
        return f"Token(P{self.player}_{self.token_index}: {self.state.value}{where})"
