"""Notation package: FEN / SAN / PGN parsing and serialization."""

from chessgame.core.notation.fen import STARTING_FEN, game_from_fen, game_to_fen, position_key
from chessgame.core.notation.models import ParsedPgn, PgnMove
from chessgame.core.notation.pgn import (
    build_pgn,
    game_from_pgn,
    game_to_pgn,
    parse_pgn,
    parse_pgn_game,
    pgn_movetext_from_moves,
    pgn_movetext_from_sans,
    result_from_pgn,
    result_to_pgn,
)
from chessgame.core.notation.san import (
    build_move_for_board,
    game_to_san_moves,
    move_to_san,
    parse_san,
)

__all__ = [
    "STARTING_FEN",
    "PgnMove",
    "ParsedPgn",
    "game_from_fen",
    "game_to_fen",
    "position_key",
    "move_to_san",
    "parse_san",
    "build_move_for_board",
    "game_to_san_moves",
    "result_to_pgn",
    "result_from_pgn",
    "pgn_movetext_from_sans",
    "pgn_movetext_from_moves",
    "build_pgn",
    "game_to_pgn",
    "parse_pgn_game",
    "parse_pgn",
    "game_from_pgn",
]
