"""Command-line front end for the rules engine.

Usage:
    chessgame perft [--fen FEN] --depth N [--divide]
    chessgame moves [--fen FEN]
    chessgame pgn [--fen FEN] MOVE [MOVE ...]

``perft`` counts leaf nodes of the legal move tree, ``moves`` lists the legal
moves in SAN, ``pgn`` replays SAN moves and prints the game as PGN.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from chessgame.config import get_settings
from chessgame.core.errors import ChessError
from chessgame.core.game import Game
from chessgame.core.notation import STARTING_FEN, game_to_pgn, move_to_san, parse_san

_LOGGER = logging.getLogger(__name__)


def perft(game: Game, depth: int) -> int:
    """Number of leaf nodes reachable from *game* in exactly *depth* plies."""
    if depth == 0:
        return 1
    nodes = 0
    for move in game.legal_moves():
        game.execute_move(move)
        nodes += perft(game, depth - 1)
        game.undo_last_move()
    return nodes


def divide(game: Game, depth: int) -> dict[str, int]:
    """Perft split by root move, keyed by UCI."""
    counts: dict[str, int] = {}
    for move in game.legal_moves():
        game.execute_move(move)
        counts[move.uci] = perft(game, depth - 1)
        game.undo_last_move()
    return counts


def _cmd_perft(args: argparse.Namespace) -> int:
    game = Game.from_fen(args.fen)
    if args.divide and args.depth > 0:
        counts = divide(game, args.depth)
        for uci in sorted(counts):
            print(f"{uci}: {counts[uci]}")
        print(f"Nodes: {sum(counts.values())}")
    else:
        print(perft(game, args.depth))
    return 0


def _cmd_moves(args: argparse.Namespace) -> int:
    game = Game.from_fen(args.fen)
    for san in sorted(move_to_san(game, move) for move in game.legal_moves()):
        print(san)
    return 0


def _cmd_pgn(args: argparse.Namespace) -> int:
    game = Game.from_fen(args.fen)
    for san in args.moves:
        game.execute_move(parse_san(game, san))
    outcome = game.get_outcome()
    if outcome is not None:
        _LOGGER.info("Game over: %s (%s)", outcome.result, outcome.termination.name)
    print(game_to_pgn(game), end="")
    return 0


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError("depth must be >= 0")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessgame",
        description="Chess rules engine tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_perft = sub.add_parser("perft", help="Count move-tree leaf nodes")
    p_perft.add_argument("--fen", default=STARTING_FEN, help="Start position (default: initial)")
    p_perft.add_argument("--depth", type=_non_negative, required=True, help="Search depth in plies")
    p_perft.add_argument("--divide", action="store_true", help="Print counts per root move")
    p_perft.set_defaults(handler=_cmd_perft)

    p_moves = sub.add_parser("moves", help="List legal moves in SAN")
    p_moves.add_argument("--fen", default=STARTING_FEN, help="Position (default: initial)")
    p_moves.set_defaults(handler=_cmd_moves)

    p_pgn = sub.add_parser("pgn", help="Replay SAN moves and print PGN")
    p_pgn.add_argument("--fen", default=STARTING_FEN, help="Start position (default: initial)")
    p_pgn.add_argument("moves", nargs="+", metavar="MOVE", help="Moves in SAN")
    p_pgn.set_defaults(handler=_cmd_pgn)
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, get_settings().log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return args.handler(args)
    except ChessError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
