"""Move command objects: simple, castle, en passant and promotion.

Each move is an immutable descriptor.  :meth:`Move.execute` mutates the
board and returns a :class:`MoveResolution`; that resolution is the only
state :meth:`Move.revert` needs to restore the board exactly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgame.core.enums import PROMOTION_KINDS, PieceKind
from chessgame.core.errors import (
    IllegalDestinationError,
    NoPieceAtSquareError,
    PieceIdMismatchError,
)
from chessgame.core.position import Position

if TYPE_CHECKING:
    from chessgame.core.board import Board
    from chessgame.core.piece import Piece

_PROMO_CHARS: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveResolution:
    """Undo payload returned by :meth:`Move.execute`."""

    captured_piece: Piece | None = None
    is_promotion: bool = False
    promoted_piece: Piece | None = None


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Abstract move descriptor."""

    piece_id: str
    from_sq: Position
    to_sq: Position

    @abstractmethod
    def validate(self, board: Board) -> None:
        """Raise a :class:`~chessgame.core.errors.ChessError` if inapplicable."""

    @abstractmethod
    def execute(self, board: Board) -> MoveResolution:
        """Apply the move to *board* and return the undo payload."""

    @abstractmethod
    def revert(self, board: Board, resolution: MoveResolution) -> None:
        """Exact inverse of :meth:`execute`."""

    # ── Display ──────────────────────────────────────────────────────────

    def description(self) -> str:
        return f"{self.from_sq} -> {self.to_sq}"

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return f"{self.from_sq}{self.to_sq}"

    def __str__(self) -> str:
        return self.uci

    # ── Shared checks ────────────────────────────────────────────────────

    def _piece_to_move(self, board: Board) -> Piece:
        piece = board.get_piece(self.from_sq)
        if piece is None:
            raise NoPieceAtSquareError(f"There is no piece on {self.from_sq}")
        if piece.id != self.piece_id:
            raise PieceIdMismatchError(
                f"Piece on {self.from_sq} is {piece.id!r}, move names {self.piece_id!r}"
            )
        return piece

    def _moved_piece(self, board: Board, at: Position, piece_id: str) -> Piece:
        piece = board.get_piece(at)
        if piece is None or piece.id != piece_id:
            raise PieceIdMismatchError(f"Unable to revert {self}: {piece_id!r} is not on {at}")
        return piece

    @staticmethod
    def _restore_capture(board: Board, resolution: MoveResolution) -> None:
        if resolution.captured_piece is not None:
            board.place_piece(resolution.captured_piece)


@dataclass(frozen=True, slots=True)
class SimpleMove(Move):
    """Relocation of one piece, capturing whatever enemy stands on the target."""

    def validate(self, board: Board) -> None:
        piece = self._piece_to_move(board)
        target = board.get_piece(self.to_sq)
        if target is not None and target.team == piece.team:
            raise IllegalDestinationError(f"{self.to_sq} is occupied by an allied piece")

    def execute(self, board: Board) -> MoveResolution:
        self.validate(board)
        captured = board.move_piece(self.from_sq, self.to_sq)
        return MoveResolution(captured_piece=captured)

    def revert(self, board: Board, resolution: MoveResolution) -> None:
        self._moved_piece(board, self.to_sq, self.piece_id)
        board.move_piece(self.to_sq, self.from_sq)
        self._restore_capture(board, resolution)


@dataclass(frozen=True, slots=True)
class CastleMove(Move):
    """King and rook relocate together."""

    rook_id: str
    rook_from: Position
    rook_to: Position

    @property
    def is_kingside(self) -> bool:
        return self.to_sq.column > self.from_sq.column

    def description(self) -> str:
        return "O-O" if self.is_kingside else "O-O-O"

    def validate(self, board: Board) -> None:
        king = self._piece_to_move(board)
        if king.kind is not PieceKind.KING:
            raise IllegalDestinationError("Castling requires a king")

        rook = board.get_piece(self.rook_from)
        if rook is None or rook.id != self.rook_id or rook.kind is not PieceKind.ROOK:
            raise PieceIdMismatchError(f"Castling rook {self.rook_id!r} is not on {self.rook_from}")
        if rook.team != king.team:
            raise IllegalDestinationError("Castling rook belongs to the opposing team")

        for target in (self.to_sq, self.rook_to):
            if target not in (self.from_sq, self.rook_from) and not board.is_empty(target):
                raise IllegalDestinationError(f"Castling destination {target} is not empty")

        row = self.from_sq.row
        low = min(self.from_sq.column, self.rook_from.column) + 1
        high = max(self.from_sq.column, self.rook_from.column)
        for column in range(low, high):
            if not board.is_empty(Position(row, column)):
                raise IllegalDestinationError("Castling path is blocked")

    def execute(self, board: Board) -> MoveResolution:
        self.validate(board)
        king = board.remove_piece(self.from_sq)
        rook = board.remove_piece(self.rook_from)
        assert king is not None and rook is not None
        king.position = self.to_sq
        rook.position = self.rook_to
        board.place_piece(king)
        board.place_piece(rook)
        return MoveResolution()

    def revert(self, board: Board, resolution: MoveResolution) -> None:
        self._moved_piece(board, self.to_sq, self.piece_id)
        self._moved_piece(board, self.rook_to, self.rook_id)
        king = board.remove_piece(self.to_sq)
        rook = board.remove_piece(self.rook_to)
        assert king is not None and rook is not None
        king.position = self.from_sq
        rook.position = self.rook_from
        board.place_piece(king)
        board.place_piece(rook)


@dataclass(frozen=True, slots=True)
class EnPassantMove(Move):
    """Pawn capture of the pawn standing on ``captured_at``."""

    captured_at: Position

    def description(self) -> str:
        return f"{self.from_sq} x {self.to_sq} (e.p.)"

    def validate(self, board: Board) -> None:
        pawn = self._piece_to_move(board)
        if pawn.kind is not PieceKind.PAWN:
            raise IllegalDestinationError("En passant is only valid for pawns")
        if not board.is_empty(self.to_sq):
            raise IllegalDestinationError("En passant destination must be empty")
        captured = board.get_piece(self.captured_at)
        if captured is None or captured.kind is not PieceKind.PAWN:
            raise IllegalDestinationError(f"No pawn to capture en passant on {self.captured_at}")
        if captured.team == pawn.team:
            raise IllegalDestinationError("En passant target is an allied pawn")

    def execute(self, board: Board) -> MoveResolution:
        self.validate(board)
        captured = board.remove_piece(self.captured_at)
        board.move_piece(self.from_sq, self.to_sq)
        return MoveResolution(captured_piece=captured)

    def revert(self, board: Board, resolution: MoveResolution) -> None:
        self._moved_piece(board, self.to_sq, self.piece_id)
        board.move_piece(self.to_sq, self.from_sq)
        self._restore_capture(board, resolution)


@dataclass(frozen=True, slots=True)
class PromotionMove(Move):
    """Pawn reaching its last row, replaced by ``promote_to`` under the same id."""

    promote_to: PieceKind = PieceKind.QUEEN

    def description(self) -> str:
        return f"{self.from_sq} -> {self.to_sq} = {self.promote_to.value}"

    @property
    def uci(self) -> str:
        return f"{self.from_sq}{self.to_sq}{_PROMO_CHARS.get(self.promote_to, '')}"

    def validate(self, board: Board) -> None:
        pawn = self._piece_to_move(board)
        if pawn.kind is not PieceKind.PAWN:
            raise IllegalDestinationError("Promotion requires a pawn")
        if self.promote_to not in PROMOTION_KINDS:
            raise IllegalDestinationError(f"Cannot promote to {self.promote_to}")
        if self.to_sq.row != pawn.team.promotion_row:
            raise IllegalDestinationError(f"{self.to_sq} is not on the promotion row")
        target = board.get_piece(self.to_sq)
        if target is not None and target.team == pawn.team:
            raise IllegalDestinationError(f"{self.to_sq} is occupied by an allied piece")

    def execute(self, board: Board) -> MoveResolution:
        from chessgame.core.piece import create_piece

        self.validate(board)
        pawn = board.remove_piece(self.from_sq)
        assert pawn is not None
        captured = board.remove_piece(self.to_sq)
        promoted = create_piece(self.promote_to, self.piece_id, pawn.team, self.to_sq)
        board.place_piece(promoted)
        return MoveResolution(captured_piece=captured, is_promotion=True, promoted_piece=promoted)

    def revert(self, board: Board, resolution: MoveResolution) -> None:
        from chessgame.core.piece import Pawn

        promoted = self._moved_piece(board, self.to_sq, self.piece_id)
        board.remove_piece(self.to_sq)
        board.place_piece(Pawn(self.piece_id, promoted.team, self.from_sq))
        self._restore_capture(board, resolution)
