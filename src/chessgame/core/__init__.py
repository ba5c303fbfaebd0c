"""Core domain layer: pieces, board, moves and the game orchestrator.

Quick start::

    from chessgame.core import create_standard_game, game_to_pgn, parse_san

    game = create_standard_game()
    game.execute_move(parse_san(game, "e4"))
    for move in game.legal_moves():
        print(move)
    print(game_to_pgn(game))
"""

from chessgame.core.board import Board
from chessgame.core.enums import PROMOTION_KINDS, CastlingRights, PieceKind, Team, Termination
from chessgame.core.errors import (
    ChessError,
    IllegalDestinationError,
    InvalidPositionError,
    MalformedFenError,
    NoPieceAtSquareError,
    PieceIdMismatchError,
    WrongTurnError,
)
from chessgame.core.game import DRAW, Game, MoveRecord, Outcome
from chessgame.core.move import (
    CastleMove,
    EnPassantMove,
    Move,
    MoveResolution,
    PromotionMove,
    SimpleMove,
)
from chessgame.core.piece import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    SlidingPiece,
    create_piece,
)
from chessgame.core.position import Position
from chessgame.core.factories import create_standard_game, create_swapped_game, standard_pieces
from chessgame.core.notation import (
    STARTING_FEN,
    game_from_fen,
    game_from_pgn,
    game_to_fen,
    game_to_pgn,
    game_to_san_moves,
    move_to_san,
    parse_san,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "PieceKind",
    "PROMOTION_KINDS",
    "Team",
    "Termination",
    # Errors
    "ChessError",
    "IllegalDestinationError",
    "InvalidPositionError",
    "MalformedFenError",
    "NoPieceAtSquareError",
    "PieceIdMismatchError",
    "WrongTurnError",
    # Domain objects
    "Board",
    "DRAW",
    "Game",
    "MoveRecord",
    "Outcome",
    "Position",
    # Pieces
    "Piece",
    "Pawn",
    "Knight",
    "Bishop",
    "Rook",
    "Queen",
    "King",
    "SlidingPiece",
    "create_piece",
    # Moves
    "Move",
    "MoveResolution",
    "SimpleMove",
    "CastleMove",
    "EnPassantMove",
    "PromotionMove",
    # Factories
    "create_standard_game",
    "create_swapped_game",
    "standard_pieces",
    # Notation
    "STARTING_FEN",
    "game_from_fen",
    "game_to_fen",
    "game_to_pgn",
    "game_from_pgn",
    "game_to_san_moves",
    "move_to_san",
    "parse_san",
]
