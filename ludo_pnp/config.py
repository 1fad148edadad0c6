import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


def validate_game_settings(player_count: int, tokens_per_player: int) -> None:
    """Reject out-of-range player/token counts before any session state exists."""
    if not config.MIN_PLAYERS <= player_count <= config.MAX_PLAYERS:
        raise ConfigurationError(
            f"player_count must be between {config.MIN_PLAYERS} and "
            f"{config.MAX_PLAYERS}, got {player_count}"
        )
    if not config.MIN_TOKENS <= tokens_per_player <= config.MAX_TOKENS:
        raise ConfigurationError(
            f"tokens_per_player must be between {config.MIN_TOKENS} and "
            f"{config.MAX_TOKENS}, got {tokens_per_player}"
        )


@dataclass(slots=True)
class Config:
    # --- Session defaults (console front end) ---
    NUM_PLAYERS: int = int(os.getenv("LUDO_NUM_PLAYERS", 4))
    TOKENS_PER_PLAYER: int = int(os.getenv("LUDO_TOKENS_PER_PLAYER", 4))
    SEED: Optional[int] = _optional_int("LUDO_SEED")
    LOG_LEVEL: str = os.getenv("LUDO_LOG_LEVEL", "INFO")

    # --- Rules ---
    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 6
    MIN_TOKENS: int = 1
    MAX_TOKENS: int = 4
    DIE_MIN: int = 1
    DIE_MAX: int = 6
    EXIT_ROLL: int = 6
    MAX_SIX_STREAK: int = 3

    # --- Board ---
    TRACK_LENGTH: int = 52
    HOME_ROW_LENGTH: int = 6

    # Per-seat tables, always sized for MAX_PLAYERS
    ENTRY_SQUARES: list[int] = field(
        default_factory=lambda: [0, 8, 17, 26, 34, 43]
    )  # Red, Green, Blue, Yellow, Purple, Teal
    TRANSITION_SQUARES: list[int] = field(
        default_factory=lambda: [0, 13, 26, 39, 45, 7]
    )  # last shared cell before each home row
    SEAT_NAMES: list[str] = field(
        default_factory=lambda: ["Red", "Green", "Blue", "Yellow", "Purple", "Teal"]
    )

    def __post_init__(self):
        for name in ("ENTRY_SQUARES", "TRANSITION_SQUARES", "SEAT_NAMES"):
            if len(getattr(self, name)) != self.MAX_PLAYERS:
                raise ConfigurationError(f"{name} must have {self.MAX_PLAYERS} entries")
        for idx in self.ENTRY_SQUARES + self.TRANSITION_SQUARES:
            if not 0 <= idx < self.TRACK_LENGTH:
                raise ConfigurationError(f"board cell {idx} is off the track")

        if self.NUM_PLAYERS < self.MIN_PLAYERS or self.NUM_PLAYERS > self.MAX_PLAYERS:
            raise ConfigurationError(
                f"LUDO_NUM_PLAYERS must be between {self.MIN_PLAYERS} and {self.MAX_PLAYERS}"
            )
        if (
            self.TOKENS_PER_PLAYER < self.MIN_TOKENS
            or self.TOKENS_PER_PLAYER > self.MAX_TOKENS
        ):
            raise ConfigurationError(
                f"LUDO_TOKENS_PER_PLAYER must be between {self.MIN_TOKENS} and {self.MAX_TOKENS}"
            )


config = Config()
