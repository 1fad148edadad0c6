from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from .board import TOPOLOGY, BoardTopology
from .config import config, validate_game_settings
from .exceptions import IllegalMoveError, InvalidRequestError
from .session import GameSession
from .types import (
    AdvanceHomeRow,
    AdvanceOnTrack,
    Enter,
    EnterHomeRow,
    Finish,
    GamePhase,
    Move,
    MoveEvents,
    MoveResult,
    RollResult,
)


@dataclass(slots=True)
class TurnEngine:
    """Rules and turn state machine. Holds no game state besides its die."""

    topology: BoardTopology = TOPOLOGY
    rng: random.Random = field(default_factory=lambda: random.Random(config.SEED))

    # --- Lifecycle ---
    def start_game(
        self,
        player_count: int,
        tokens_per_player: int,
        session: Optional[GameSession] = None,
    ) -> GameSession:
        validate_game_settings(player_count, tokens_per_player)
        session = session if session is not None else GameSession()
        session.reset(player_count, tokens_per_player)
        logger.info(
            f"New game started: {player_count} players, {tokens_per_player} tokens each"
        )
        return session

    # --- Dice ---
    def roll_die(self, session: GameSession) -> RollResult:
        if not session.is_started():
            raise InvalidRequestError("Game has not started.")
        if session.is_over():
            raise InvalidRequestError("Game is over.")
        if session.pending_die is not None:
            raise InvalidRequestError("Already rolled. Move a token.")

        player = session.active_player
        value = self.rng.randint(config.DIE_MIN, config.DIE_MAX)
        logger.info(f"{self.topology.seat_name(player)} rolled {value}")

        if value == config.EXIT_ROLL:
            session.six_streak += 1
            if session.six_streak >= config.MAX_SIX_STREAK:
                logger.info(
                    f"Three sixes! {self.topology.seat_name(player)}'s turn ends."
                )
                self._pass_turn(session)
                return RollResult(
                    player=player,
                    value=value,
                    next_player=session.active_player,
                    forfeited=True,
                )
        else:
            session.six_streak = 0

        session.pending_die = value
        movable = self.movable_tokens(session)
        if not movable:
            logger.info(
                f"{self.topology.seat_name(player)} has no token that can move {value}"
            )
            self._pass_turn(session)
            return RollResult(
                player=player,
                value=value,
                next_player=session.active_player,
                skipped=True,
            )

        return RollResult(
            player=player,
            value=value,
            next_player=player,
            movable=movable,
        )

    # --- Rules: legality ---
    def legal_move(
        self, session: GameSession, player: int, token_index: int, die: int
    ) -> Optional[Move]:
        """The move `token_index` would make with `die`, or None when it cannot move."""
        if session.phase is not GamePhase.IN_PROGRESS:
            return None
        if player != session.active_player:
            return None
        if not session.has_token(player, token_index):
            return None
        if not config.DIE_MIN <= die <= config.DIE_MAX:
            return None
        move = self.topology.destination(session.token(player, token_index), die)
        logger.debug(f"legal_move P{player} T{token_index} die={die} -> {move}")
        return move

    def movable_tokens(
        self, session: GameSession, die: Optional[int] = None
    ) -> List[int]:
        """Token indices of the active player that can use `die` (default: pending die)."""
        die = session.pending_die if die is None else die
        if die is None:
            return []
        player = session.active_player
        return [
            idx
            for idx in range(session.tokens_per_player)
            if self.legal_move(session, player, idx, die) is not None
        ]

    # --- Applying a move ---
    def apply_move(
        self, session: GameSession, player: int, token_index: int, move: Move
    ) -> MoveResult:
        if session.phase is not GamePhase.IN_PROGRESS:
            raise InvalidRequestError("Game is not in progress.")
        die = session.pending_die
        if die is None:
            raise InvalidRequestError("Roll first.")
        expected = self.legal_move(session, player, token_index, die)
        if expected is None or expected != move:
            raise IllegalMoveError(
                f"{move} is not the legal move for P{player} T{token_index} with {die}"
            )

        token = session.token(player, token_index)
        name = self.topology.seat_name(player)
        events = MoveEvents()

        if isinstance(move, Enter):
            token.place_on_track(move.track_index)
            events.entered_track = True
            logger.info(f"{name} enters the track.")
        elif isinstance(move, AdvanceOnTrack):
            token.place_on_track(move.track_index)
            logger.info(f"{name} moved a token on the track.")
        elif isinstance(move, EnterHomeRow):
            token.place_on_home_row(move.home_index)
            events.entered_home_row = True
            logger.info(f"{name} entered home row.")
        elif isinstance(move, AdvanceHomeRow):
            token.place_on_home_row(move.home_index)
            logger.info(f"{name} advanced in home row.")
        elif isinstance(move, Finish):
            token.finish()
            events.finished = True
            logger.info(f"{name} brought a token HOME!")

        if token.is_on_track():
            events.captures = self._resolve_captures(session, player, token.track_index)

        if all(t.is_finished() for t in session.tokens_of(player)):
            session.winner = player
            session.phase = GamePhase.FINISHED
            session.pending_die = None
            events.won = True
            logger.info(f"{name} WINS!")
            return MoveResult(
                player=player,
                token_index=token_index,
                die=die,
                move=move,
                events=events,
                extra_turn=False,
                next_player=player,
            )

        # A six keeps the turn, finishing on a six included.
        extra_turn = die == config.EXIT_ROLL
        if extra_turn:
            session.pending_die = None
        else:
            self._pass_turn(session)

        return MoveResult(
            player=player,
            token_index=token_index,
            die=die,
            move=move,
            events=events,
            extra_turn=extra_turn,
            next_player=session.active_player,
        )

    def select_token(
        self, session: GameSession, token_index: int
    ) -> Optional[MoveResult]:
        """A player tapped one of their tokens: move it if the pending die allows."""
        if session.phase is not GamePhase.IN_PROGRESS:
            raise InvalidRequestError("Game is not in progress.")
        if session.pending_die is None:
            raise InvalidRequestError("Roll first.")
        player = session.active_player
        move = self.legal_move(session, player, token_index, session.pending_die)
        if move is None:
            logger.info("That token cannot move with this roll.")
            return None
        return self.apply_move(session, player, token_index, move)

    # --- Internals ---
    def _resolve_captures(
        self, session: GameSession, player: int, track_index: int
    ) -> list[tuple[int, int]]:
        if self.topology.is_safe(track_index):
            return []
        captured: list[tuple[int, int]] = []
        for opponent in range(session.player_count):
            if opponent == player:
                continue
            for other in session.tokens_of(opponent):
                if other.is_on_track() and other.track_index == track_index:
                    other.send_to_base()
                    captured.append((opponent, other.token_index))
                    logger.info(
                        f"{self.topology.seat_name(player)} captured "
                        f"{self.topology.seat_name(opponent)}!"
                    )
        return captured

    def _pass_turn(self, session: GameSession) -> None:
        session.active_player = (session.active_player + 1) % session.player_count
        session.pending_die = None
        session.six_streak = 0
        session.turn += 1
        logger.info(f"Turn: {self.topology.seat_name(session.active_player)}")
