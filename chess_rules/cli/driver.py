"""
Command line read loop: one move per line on stdin, the board (or a complaint) on stdout.

    $ chess-rules --notation long
"""

import argparse
import sys
from typing import Optional, Sequence, TextIO

from chess_rules.api.models import MoveRequest
from chess_rules.core.config import EngineConfig
from chess_rules.core.exceptions import GameError
from chess_rules.core.logging_config import configure_logging
from chess_rules.core.shared_types import NotationName
from chess_rules.services.game_session import GameSession


def build_parser() -> argparse.ArgumentParser:
    argp = argparse.ArgumentParser(prog="chess-rules", description=__doc__)
    argp.add_argument(
        "--notation",
        "-n",
        choices=[name.value for name in NotationName],
        default=None,
        help="move notation: short ('Nf3') or long ('g1f3')",
    )
    argp.add_argument(
        "--extended-movement",
        "-x",
        action="store_true",
        default=None,
        help="also generate bishop, rook, queen and king moves",
    )
    argp.add_argument("--fen", default=None, help="start from this FEN (placement, optionally followed by the side to move)")
    argp.add_argument("--log-level", default=None, help="ex. DEBUG, INFO, WARNING")
    return argp


def run(session: GameSession, stdin: TextIO, stdout: TextIO) -> None:
    """Read until end of input. Blank lines are skipped."""
    print(session.render(), file=stdout)
    for line in stdin:
        if not line.strip():
            continue

        response = session.submit(MoveRequest(text=line))
        if response.accepted:
            print(session.render(), file=stdout)
        else:
            print(response.message, file=stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    options = build_parser().parse_args(argv)
    try:
        config = EngineConfig.from_env(
            notation=options.notation,
            extended_movement=options.extended_movement,
            starting_fen=options.fen,
            log_level=options.log_level,
        )
        configure_logging(config.log_level)
        session = GameSession(config)
    except GameError as e:
        print(f"chess-rules: {e}", file=sys.stderr)
        return 2

    run(session, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
