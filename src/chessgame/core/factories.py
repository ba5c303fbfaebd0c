"""Factories for the standard starting arrangement and its colour-swapped twin."""

from __future__ import annotations

import itertools

from chessgame.config import EngineSettings
from chessgame.core.enums import PieceKind, Team
from chessgame.core.game import Game
from chessgame.core.piece import Piece, create_piece
from chessgame.core.position import Position

BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _side(team: Team, back_row: int, pawn_row: int, counter: itertools.count[int]) -> list[Piece]:
    pieces: list[Piece] = []
    prefix = team.name.lower()
    for column, kind in enumerate(BACK_RANK):
        piece_id = f"{prefix}-{kind.name.lower()}-{next(counter)}"
        pieces.append(create_piece(kind, piece_id, team, Position(back_row, column)))
    for column in range(8):
        piece_id = f"{prefix}-pawn-{next(counter)}"
        pieces.append(create_piece(PieceKind.PAWN, piece_id, team, Position(pawn_row, column)))
    return pieces


def standard_pieces() -> list[Piece]:
    """The 32 pieces of the initial position.

    Ids are numbered in placement order, ``white-rook-1`` to ``black-pawn-32``.
    """
    counter = itertools.count(1)
    return _side(Team.WHITE, 0, 1, counter) + _side(Team.BLACK, 7, 6, counter)


def create_standard_game(settings: EngineSettings | None = None) -> Game:
    """A new game from the standard starting position, white to move."""
    return Game(standard_pieces(), settings=settings)


def create_swapped_game(settings: EngineSettings | None = None) -> Game:
    """Standard layout with the colours exchanged: white on ranks 7-8.

    Neither king stands on its own home square, so no castling rights exist.
    """
    counter = itertools.count(1)
    pieces = _side(Team.WHITE, 7, 6, counter) + _side(Team.BLACK, 0, 1, counter)
    return Game(pieces, settings=settings)
