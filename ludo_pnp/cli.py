from __future__ import annotations

import argparse
import random
import sys
from typing import Callable, TextIO

from loguru import logger

from .config import config
from .engine import TurnEngine
from .exceptions import LudoError
from .session import GameSession

HELP = "Commands: r = roll, <n> = move token n, s = state, q = quit"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ludo pass-and-play on one terminal")
    parser.add_argument("--players", type=int, default=config.NUM_PLAYERS)
    parser.add_argument("--tokens", type=int, default=config.TOKENS_PER_PLAYER)
    parser.add_argument("--seed", type=int, default=config.SEED)
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    return parser


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{message}")


def render(engine: TurnEngine, session: GameSession) -> str:
    """Plain-text board: ring cells holding tokens, home rows, base and finished counts."""
    topo = engine.topology
    track = topo.occupancy(session)
    home = topo.home_row_occupancy(session)
    lines = []
    for p in range(session.player_count):
        cells = [f"{i}x{int(n)}" for i, n in enumerate(track[p]) if n]
        row = "".join(str(int(n)) if n else "." for n in home[p])
        tokens = session.tokens_of(p)
        in_base = sum(1 for t in tokens if t.is_in_base())
        marker = "*" if p == session.active_player and not session.is_over() else " "
        lines.append(
            f"{marker}{topo.seat_name(p):<7} base={in_base} "
            f"track=[{' '.join(cells)}] home=[{row}] "
            f"finished={session.finished_count(p)}"
        )
    die = session.pending_die if session.pending_die is not None else "-"
    lines.append(f"Turn: {topo.seat_name(session.active_player)}  die: {die}")
    return "\n".join(lines)


def run(
    engine: TurnEngine,
    session: GameSession,
    read_line: Callable[[], str],
    out: TextIO,
) -> None:
    """Drive one game from text commands until someone wins or the input ends."""
    print(HELP, file=out)
    print(render(engine, session), file=out)
    while not session.is_over():
        name = engine.topology.seat_name(session.active_player)
        try:
            raw = read_line()
        except EOFError:
            break
        cmd = raw.strip().lower()
        if cmd in ("q", "quit"):
            break
        try:
            if cmd in ("r", "roll"):
                result = engine.roll_die(session)
                if result.forfeited:
                    print(f"{name}: three sixes, turn ends.", file=out)
                elif result.skipped:
                    print(f"{name} rolled {result.value}: no move possible.", file=out)
                else:
                    print(
                        f"{name} rolled {result.value}, movable tokens: {result.movable}",
                        file=out,
                    )
            elif cmd.isdigit():
                moved = engine.select_token(session, int(cmd))
                if moved is None:
                    print("That token cannot move with this roll.", file=out)
                else:
                    print(render(engine, session), file=out)
            elif cmd in ("s", "state"):
                print(render(engine, session), file=out)
            else:
                print(HELP, file=out)
        except LudoError as e:
            print(str(e), file=out)

    if session.winner is not None:
        print(f"{engine.topology.seat_name(session.winner)} wins!", file=out)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    engine = TurnEngine(rng=random.Random(args.seed))
    try:
        session = engine.start_game(args.players, args.tokens)
    except LudoError as e:
        logger.error(f"Cannot start game: {e}")
        return 2
    run(engine, session, lambda: input("> "), sys.stdout)
    return 0
