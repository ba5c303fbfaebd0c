"""Board-level rule checks: attacked squares, check, insufficient material."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgame.core.enums import PieceKind, Team
from chessgame.core.piece import BISHOP_DIRS, KING_OFFSETS, KNIGHT_OFFSETS, ROOK_DIRS

if TYPE_CHECKING:
    from chessgame.core.board import Board
    from chessgame.core.position import Position

_DIAGONAL_ATTACKERS = (PieceKind.BISHOP, PieceKind.QUEEN)
_STRAIGHT_ATTACKERS = (PieceKind.ROOK, PieceKind.QUEEN)
_HEAVY_KINDS = (PieceKind.PAWN, PieceKind.ROOK, PieceKind.QUEEN)


def _attacked_by_step(
    board: Board,
    target: Position,
    by_team: Team,
    offsets: tuple[tuple[int, int], ...],
    kind: PieceKind,
) -> bool:
    for row_delta, column_delta in offsets:
        origin = target.shift(row_delta, column_delta)
        if origin is None:
            continue
        piece = board.get_piece(origin)
        if piece is not None and piece.team == by_team and piece.kind is kind:
            return True
    return False


def _attacked_by_ray(
    board: Board,
    target: Position,
    by_team: Team,
    directions: tuple[tuple[int, int], ...],
    kinds: tuple[PieceKind, ...],
) -> bool:
    for row_delta, column_delta in directions:
        square = target.shift(row_delta, column_delta)
        while square is not None:
            piece = board.get_piece(square)
            if piece is not None:
                if piece.team == by_team and piece.kind in kinds:
                    return True
                break
            square = square.shift(row_delta, column_delta)
    return False


def is_square_attacked(board: Board, target: Position, by_team: Team) -> bool:
    """Is *target* attacked by any piece of *by_team*?

    Occupancy of *target* itself is irrelevant, so this also answers whether
    an empty square a castling king would cross is covered.
    """
    # A pawn attacks diagonally forward, so look one row behind the target.
    back = -by_team.forward
    for column_delta in (-1, 1):
        origin = target.shift(back, column_delta)
        if origin is None:
            continue
        piece = board.get_piece(origin)
        if piece is not None and piece.team == by_team and piece.kind is PieceKind.PAWN:
            return True

    return (
        _attacked_by_step(board, target, by_team, KNIGHT_OFFSETS, PieceKind.KNIGHT)
        or _attacked_by_step(board, target, by_team, KING_OFFSETS, PieceKind.KING)
        or _attacked_by_ray(board, target, by_team, BISHOP_DIRS, _DIAGONAL_ATTACKERS)
        or _attacked_by_ray(board, target, by_team, ROOK_DIRS, _STRAIGHT_ATTACKERS)
    )


def is_king_in_check(board: Board, team: Team) -> bool:
    """Is *team*'s king attacked?  A missing king is never in check."""
    king = board.find_king(team)
    if king is None:
        return False
    return is_square_attacked(board, king.position, team.opposite)


def is_insufficient_material(board: Board) -> bool:
    """Simplified dead-position test.

    K vs K, K+minor vs K, K+minor vs K+minor and K+N+N vs K are
    insufficient.  Two bishops on one side, or bishop and knight on one
    side, count as sufficient regardless of square colour.
    """
    others = [p for p in board.all_pieces() if p.kind is not PieceKind.KING]
    if not others:
        return True
    if any(p.kind in _HEAVY_KINDS for p in others):
        return False

    minors: dict[Team, list[PieceKind]] = {Team.WHITE: [], Team.BLACK: []}
    for piece in others:
        minors[piece.team].append(piece.kind)

    total = len(others)
    if total <= 1:
        return True
    if total == 2:
        white, black = minors[Team.WHITE], minors[Team.BLACK]
        if len(white) == 1 and len(black) == 1:
            return True
        same_side = white or black
        return all(kind is PieceKind.KNIGHT for kind in same_side)
    return False
