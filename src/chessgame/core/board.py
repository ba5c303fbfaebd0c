"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from chessgame.core.enums import PieceKind, Team
from chessgame.core.errors import IllegalDestinationError, NoPieceAtSquareError
from chessgame.core.piece import Piece
from chessgame.core.position import Position


class Board:
    """Mutable 64-square board holding :class:`Piece` objects.

    Squares are a flat list indexed by :attr:`Position.index`, so
    :meth:`clone` is a list copy plus one cheap clone per live piece.
    """

    __slots__ = ("_squares",)

    def __init__(self, pieces: Iterable[Piece] = ()) -> None:
        self._squares: list[Piece | None] = [None] * 64
        for piece in pieces:
            self.place_piece(piece)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, position: Position) -> Piece | None:
        return self._squares[position.index]

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.all_pieces())

    def get_piece(self, position: Position) -> Piece | None:
        return self._squares[position.index]

    def is_empty(self, position: Position) -> bool:
        return self._squares[position.index] is None

    # -- Query helpers ------------------------------------------------------

    def get_piece_by_id(self, piece_id: str) -> Piece | None:
        for piece in self._squares:
            if piece is not None and piece.id == piece_id:
                return piece
        return None

    def get_pieces_by_team(self, team: Team) -> list[Piece]:
        return [p for p in self._squares if p is not None and p.team == team]

    def all_pieces(self) -> list[Piece]:
        """Every live piece, ordered a1..h8."""
        return [p for p in self._squares if p is not None]

    def pieces_of(self, team: Team, kind: PieceKind) -> list[Piece]:
        return [p for p in self._squares if p is not None and p.team == team and p.kind is kind]

    def find_king(self, team: Team) -> Piece | None:
        """The king of *team*, or ``None`` when the position has none."""
        for piece in self._squares:
            if piece is not None and piece.team == team and piece.kind is PieceKind.KING:
                return piece
        return None

    # -- Mutation -----------------------------------------------------------

    def place_piece(self, piece: Piece) -> None:
        """Put *piece* on its own :attr:`Piece.position`."""
        slot = piece.position.index
        if self._squares[slot] is not None:
            raise IllegalDestinationError(f"{piece.position} is already occupied")
        if self.get_piece_by_id(piece.id) is not None:
            raise IllegalDestinationError(f"Piece id {piece.id!r} is already on the board")
        self._squares[slot] = piece

    def remove_piece(self, position: Position) -> Piece | None:
        """Lift and return the piece on *position* (``None`` if empty)."""
        slot = position.index
        piece = self._squares[slot]
        self._squares[slot] = None
        return piece

    def move_piece(self, from_sq: Position, to_sq: Position) -> Piece | None:
        """Relocate the piece on *from_sq*, returning any piece captured on *to_sq*."""
        piece = self._squares[from_sq.index]
        if piece is None:
            raise NoPieceAtSquareError(f"There is no piece on {from_sq}")
        captured = self.remove_piece(to_sq)
        self._squares[from_sq.index] = None
        piece.position = to_sq
        self._squares[to_sq.index] = piece
        return captured

    # -- Copying ------------------------------------------------------------

    def clone(self) -> Board:
        b = Board()
        b._squares = [None if p is None else p.clone() for p in self._squares]
        return b

    def clear(self) -> None:
        self._squares = [None] * 64

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for column in range(8):
                p = self._squares[row * 8 + column]
                cells.append(p.fen_char if p else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
