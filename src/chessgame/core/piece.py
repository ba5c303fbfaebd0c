"""Piece hierarchy and pseudo-legal move generation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from chessgame.core.enums import PieceKind, Team
from chessgame.core.move import Move, SimpleMove
from chessgame.core.position import Position

if TYPE_CHECKING:
    from chessgame.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# FEN character ↔ (Team, PieceKind)
_CHAR_MAP: dict[str, tuple[Team, PieceKind]] = {
    "P": (Team.WHITE, PieceKind.PAWN),
    "N": (Team.WHITE, PieceKind.KNIGHT),
    "B": (Team.WHITE, PieceKind.BISHOP),
    "R": (Team.WHITE, PieceKind.ROOK),
    "Q": (Team.WHITE, PieceKind.QUEEN),
    "K": (Team.WHITE, PieceKind.KING),
    "p": (Team.BLACK, PieceKind.PAWN),
    "n": (Team.BLACK, PieceKind.KNIGHT),
    "b": (Team.BLACK, PieceKind.BISHOP),
    "r": (Team.BLACK, PieceKind.ROOK),
    "q": (Team.BLACK, PieceKind.QUEEN),
    "k": (Team.BLACK, PieceKind.KING),
}

_UNICODE: dict[tuple[Team, PieceKind], str] = {
    (Team.WHITE, PieceKind.PAWN): "♙",
    (Team.WHITE, PieceKind.KNIGHT): "♘",
    (Team.WHITE, PieceKind.BISHOP): "♗",
    (Team.WHITE, PieceKind.ROOK): "♖",
    (Team.WHITE, PieceKind.QUEEN): "♕",
    (Team.WHITE, PieceKind.KING): "♔",
    (Team.BLACK, PieceKind.PAWN): "♟",
    (Team.BLACK, PieceKind.KNIGHT): "♞",
    (Team.BLACK, PieceKind.BISHOP): "♝",
    (Team.BLACK, PieceKind.ROOK): "♜",
    (Team.BLACK, PieceKind.QUEEN): "♛",
    (Team.BLACK, PieceKind.KING): "♚",
}

_FEN_CHARS: dict[tuple[Team, PieceKind], str] = {v: k for k, v in _CHAR_MAP.items()}


class Piece(ABC):
    """A piece on the board: stable id, team, kind and current square."""

    __slots__ = ("id", "team", "position")

    kind: ClassVar[PieceKind]

    def __init__(self, piece_id: str, team: Team, position: Position) -> None:
        self.id = piece_id
        self.team = team
        self.position = position

    @abstractmethod
    def generate_moves(self, board: Board) -> list[Move]:
        """Pseudo-legal moves against *board* (own king safety not checked)."""

    def clone(self) -> Piece:
        return type(self)(self.id, self.team, self.position)

    def belongs_to(self, team: Team) -> bool:
        return self.team == team

    def _step_moves(self, board: Board, offsets: tuple[tuple[int, int], ...]) -> list[Move]:
        moves: list[Move] = []
        for row_delta, column_delta in offsets:
            target = self.position.shift(row_delta, column_delta)
            if target is None:
                continue
            occupant = board.get_piece(target)
            if occupant is None or occupant.team != self.team:
                moves.append(SimpleMove(self.id, self.position, target))
        return moves

    # ── Serialisation ────────────────────────────────────────────────────

    @property
    def fen_char(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.team, self.kind)]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.team, self.kind)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (self.id, self.team, self.kind, self.position) == (
            other.id,
            other.team,
            other.kind,
            other.position,
        )

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r}, {self.team.name}, {self.position})"


class Pawn(Piece):
    __slots__ = ()
    kind = PieceKind.PAWN

    @property
    def starting_row(self) -> int:
        return 1 if self.team is Team.WHITE else 6

    def generate_moves(self, board: Board) -> list[Move]:
        moves: list[Move] = []
        forward = self.team.forward
        origin = self.position

        one_step = origin.shift(forward, 0)
        if one_step is not None and board.is_empty(one_step):
            moves.append(SimpleMove(self.id, origin, one_step))
            if origin.row == self.starting_row:
                two_step = origin.shift(2 * forward, 0)
                if two_step is not None and board.is_empty(two_step):
                    moves.append(SimpleMove(self.id, origin, two_step))

        for column_delta in (-1, 1):
            target = origin.shift(forward, column_delta)
            if target is None:
                continue
            occupant = board.get_piece(target)
            if occupant is not None and occupant.team != self.team:
                moves.append(SimpleMove(self.id, origin, target))
        return moves


class Knight(Piece):
    __slots__ = ()
    kind = PieceKind.KNIGHT

    def generate_moves(self, board: Board) -> list[Move]:
        return self._step_moves(board, KNIGHT_OFFSETS)


class King(Piece):
    __slots__ = ()
    kind = PieceKind.KING

    def generate_moves(self, board: Board) -> list[Move]:
        return self._step_moves(board, KING_OFFSETS)


class SlidingPiece(Piece):
    """Piece that walks each direction until blocked."""

    __slots__ = ()
    directions: ClassVar[tuple[tuple[int, int], ...]] = ()

    def generate_moves(self, board: Board) -> list[Move]:
        moves: list[Move] = []
        for row_delta, column_delta in self.directions:
            target = self.position.shift(row_delta, column_delta)
            while target is not None:
                occupant = board.get_piece(target)
                if occupant is None:
                    moves.append(SimpleMove(self.id, self.position, target))
                else:
                    if occupant.team != self.team:
                        moves.append(SimpleMove(self.id, self.position, target))
                    break
                target = target.shift(row_delta, column_delta)
        return moves


class Bishop(SlidingPiece):
    __slots__ = ()
    kind = PieceKind.BISHOP
    directions = BISHOP_DIRS


class Rook(SlidingPiece):
    __slots__ = ()
    kind = PieceKind.ROOK
    directions = ROOK_DIRS


class Queen(SlidingPiece):
    __slots__ = ()
    kind = PieceKind.QUEEN
    directions = QUEEN_DIRS


PIECE_CLASSES: dict[PieceKind, type[Piece]] = {
    PieceKind.PAWN: Pawn,
    PieceKind.KNIGHT: Knight,
    PieceKind.BISHOP: Bishop,
    PieceKind.ROOK: Rook,
    PieceKind.QUEEN: Queen,
    PieceKind.KING: King,
}


def create_piece(kind: PieceKind, piece_id: str, team: Team, position: Position) -> Piece:
    """Instantiate the concrete class for *kind*."""
    return PIECE_CLASSES[kind](piece_id, team, position)


def team_and_kind(char: str) -> tuple[Team, PieceKind]:
    """Decode a FEN character, e.g. ``'N'`` → (WHITE, KNIGHT).

    Raises ``KeyError`` for an unknown character.
    """
    return _CHAR_MAP[char]
