"""Game: turn tracking, legal move generation, history and termination.

The legality filter simply simulates each candidate on a board clone and
discards those that leave the mover's king attacked.  Pins, discovered
checks and double checks all fall out of that single test.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal, TypeAlias

from chessgame.config import EngineSettings, get_settings
from chessgame.core.board import Board
from chessgame.core.enums import PROMOTION_KINDS, CastlingRights, PieceKind, Team, Termination
from chessgame.core.errors import (
    ChessError,
    IllegalDestinationError,
    NoPieceAtSquareError,
    PieceIdMismatchError,
    WrongTurnError,
)
from chessgame.core.move import (
    CastleMove,
    EnPassantMove,
    Move,
    MoveResolution,
    PromotionMove,
    SimpleMove,
)
from chessgame.core.position import Position
from chessgame.core.rules import is_insufficient_material, is_king_in_check, is_square_attacked

if TYPE_CHECKING:
    from chessgame.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

DRAW: Final = "DRAW"
GameResult: TypeAlias = "Team | Literal['DRAW'] | None"

_KING_COLUMN = 4

_ROOK_CORNERS: dict[Position, CastlingRights] = {
    Position(0, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(0, 7): CastlingRights.WHITE_KINGSIDE,
    Position(7, 0): CastlingRights.BLACK_QUEENSIDE,
    Position(7, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    resolution: MoveResolution


@dataclass(frozen=True, slots=True)
class Outcome:
    """How a finished game ended."""

    result: Team | Literal["DRAW"]
    termination: Termination

    @property
    def is_draw(self) -> bool:
        return self.result == DRAW


class Game:
    """One chess game: owns the board, the side to move and the history.

    Not thread-safe; a game must only be mutated from one thread at a time.
    """

    __slots__ = (
        "_board",
        "_turn",
        "_history",
        "_halfmove_clock",
        "_clock_stack",
        "_castling",
        "_castling_stack",
        "_position_keys",
        "_initial_turn",
        "_initial_fullmove",
        "_initial_en_passant",
        "_settings",
        "start_fen",
    )

    def __init__(
        self,
        pieces: Iterable[Piece],
        *,
        turn: Team = Team.WHITE,
        castling_rights: CastlingRights | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
        en_passant: Position | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self._board = Board(pieces)
        self._turn = turn
        self._history: list[MoveRecord] = []
        self._halfmove_clock = halfmove_clock
        self._clock_stack: list[int] = []
        self._castling = (
            self._derive_castling_rights() if castling_rights is None else castling_rights
        )
        self._castling_stack: list[CastlingRights] = []
        self._initial_turn = turn
        self._initial_fullmove = fullmove_number
        self._initial_en_passant = en_passant
        self._settings = settings if settings is not None else get_settings()
        self._position_keys: list[str] = [self.position_key()]
        self.start_fen = self.to_fen()

    @classmethod
    def from_fen(cls, fen: str, settings: EngineSettings | None = None) -> Game:
        """Build a game from FEN text (raises ``MalformedFenError``)."""
        from chessgame.core.notation.fen import game_from_fen

        return game_from_fen(fen, settings=settings)

    # ── Accessors ────────────────────────────────────────────────────────

    def get_board(self) -> Board:
        return self._board

    def get_turn(self) -> Team:
        return self._turn

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def halfmove_clock(self) -> int:
        """Half-moves since the last capture or pawn move."""
        return self._halfmove_clock

    @property
    def fullmove_number(self) -> int:
        black_started = 1 if self._initial_turn is Team.BLACK else 0
        return self._initial_fullmove + (len(self._history) + black_started) // 2

    @property
    def castling_rights(self) -> CastlingRights:
        return self._castling

    @property
    def ply_count(self) -> int:
        return len(self._history)

    def move_history(self) -> list[MoveRecord]:
        return list(self._history)

    def is_king_in_check(self, team: Team) -> bool:
        return is_king_in_check(self._board, team)

    # ── Move generation ──────────────────────────────────────────────────

    def generate_moves_for(self, piece_id: str) -> list[Move]:
        """Legal moves of one piece; empty if it is unknown or not on move."""
        piece = self._board.get_piece_by_id(piece_id)
        if piece is None or piece.team != self._turn:
            return []
        return [m for m in self._candidate_moves(piece) if self._leaves_king_safe(m, piece.team)]

    def legal_moves(self) -> list[Move]:
        """Every legal move of the side to move."""
        moves: list[Move] = []
        for piece in self._board.get_pieces_by_team(self._turn):
            moves.extend(self.generate_moves_for(piece.id))
        return moves

    def has_legal_move(self) -> bool:
        return any(
            self.generate_moves_for(piece.id)
            for piece in self._board.get_pieces_by_team(self._turn)
        )

    def _candidate_moves(self, piece: Piece) -> list[Move]:
        moves = piece.generate_moves(self._board)
        if piece.kind is PieceKind.PAWN:
            moves = self._with_promotions(piece, moves)
            en_passant = self._en_passant_move(piece)
            if en_passant is not None:
                moves.append(en_passant)
        elif piece.kind is PieceKind.KING:
            moves.extend(self._castle_moves(piece))
        return moves

    @staticmethod
    def _with_promotions(pawn: Piece, moves: list[Move]) -> list[Move]:
        last_row = pawn.team.promotion_row
        expanded: list[Move] = []
        for move in moves:
            if move.to_sq.row != last_row:
                expanded.append(move)
                continue
            expanded.extend(
                PromotionMove(pawn.id, move.from_sq, move.to_sq, kind) for kind in PROMOTION_KINDS
            )
        return expanded

    def _en_passant_move(self, pawn: Piece) -> EnPassantMove | None:
        target = self.en_passant_target()
        if target is None:
            return None
        origin = pawn.position
        if target.row != origin.row + pawn.team.forward:
            return None
        if abs(target.column - origin.column) != 1:
            return None
        captured_at = Position(origin.row, target.column)
        victim = self._board.get_piece(captured_at)
        if victim is None or victim.kind is not PieceKind.PAWN or victim.team == pawn.team:
            return None
        return EnPassantMove(pawn.id, origin, target, captured_at)

    def _castle_moves(self, king: Piece) -> list[Move]:
        team = king.team
        row = team.home_row
        board = self._board
        if king.position != Position(row, _KING_COLUMN):
            return []
        if not self._castling & CastlingRights.both(team):
            return []
        if is_king_in_check(board, team):
            return []

        moves: list[Move] = []
        for kingside in (True, False):
            if not self._castling & CastlingRights.for_team(team, kingside=kingside):
                continue
            rook_from = Position(row, 7 if kingside else 0)
            rook = board.get_piece(rook_from)
            if rook is None or rook.kind is not PieceKind.ROOK or rook.team != team:
                continue

            low, high = sorted((_KING_COLUMN, rook_from.column))
            if any(not board.is_empty(Position(row, c)) for c in range(low + 1, high)):
                continue

            step = 1 if kingside else -1
            king_path = (Position(row, _KING_COLUMN + step), Position(row, _KING_COLUMN + 2 * step))
            if any(is_square_attacked(board, square, team.opposite) for square in king_path):
                continue

            moves.append(
                CastleMove(
                    king.id,
                    king.position,
                    king_path[1],
                    rook.id,
                    rook_from,
                    Position(row, _KING_COLUMN + step),
                )
            )
        return moves

    def _leaves_king_safe(self, move: Move, team: Team) -> bool:
        trial = self._board.clone()
        try:
            move.execute(trial)
        except ChessError:
            return False
        return not is_king_in_check(trial, team)

    # ── Special-move state ───────────────────────────────────────────────

    def en_passant_target(self) -> Position | None:
        """Square skipped by the opponent's last move if it was a double pawn push."""
        if not self._history:
            return self._initial_en_passant
        last = self._history[-1].move
        if type(last) is not SimpleMove:
            return None
        if last.from_sq.column != last.to_sq.column:
            return None
        if abs(last.to_sq.row - last.from_sq.row) != 2:
            return None
        mover = self._board.get_piece(last.to_sq)
        if mover is None or mover.kind is not PieceKind.PAWN:
            return None
        return Position((last.from_sq.row + last.to_sq.row) // 2, last.from_sq.column)

    def _derive_castling_rights(self) -> CastlingRights:
        rights = CastlingRights.NONE
        for team in Team:
            row = team.home_row
            king = self._board.get_piece(Position(row, _KING_COLUMN))
            if king is None or king.kind is not PieceKind.KING or king.team != team:
                continue
            for kingside, column in ((True, 7), (False, 0)):
                rook = self._board.get_piece(Position(row, column))
                if rook is not None and rook.kind is PieceKind.ROOK and rook.team == team:
                    rights |= CastlingRights.for_team(team, kingside=kingside)
        return rights

    def _castling_after(self, move: Move, piece: Piece) -> CastlingRights:
        rights = self._castling
        if piece.kind is PieceKind.KING:
            rights &= ~CastlingRights.both(piece.team)
        for square in (move.from_sq, move.to_sq):
            corner = _ROOK_CORNERS.get(square)
            if corner is not None:
                rights &= ~corner
        return rights

    # ── Execution ────────────────────────────────────────────────────────

    def execute_move(self, move: Move) -> MoveRecord:
        """Play *move* for the side to move.

        Raises a :class:`~chessgame.core.errors.ChessError` subclass and
        leaves the game untouched if the move is not legal.
        """
        board = self._board
        piece = board.get_piece(move.from_sq)
        if piece is None:
            raise NoPieceAtSquareError(f"There is no piece on {move.from_sq}")
        if piece.team != self._turn:
            raise WrongTurnError(f"It is {self._turn.name}'s turn, not {piece.team.name}'s")
        if piece.id != move.piece_id:
            raise PieceIdMismatchError(
                f"Piece on {move.from_sq} is {piece.id!r}, move names {move.piece_id!r}"
            )

        move.validate(board)
        if move not in self._candidate_moves(piece):
            raise IllegalDestinationError(
                f"{piece.kind} on {move.from_sq} cannot play {move.description()}"
            )

        resolution = move.execute(board)
        if is_king_in_check(board, piece.team):
            move.revert(board, resolution)
            _LOGGER.debug("Rejected %s: leaves %s king in check", move.uci, piece.team)
            raise IllegalDestinationError(f"{move.description()} leaves own king in check")

        record = MoveRecord(move, resolution)
        self._history.append(record)

        self._clock_stack.append(self._halfmove_clock)
        if resolution.captured_piece is not None or piece.kind is PieceKind.PAWN:
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1

        self._castling_stack.append(self._castling)
        self._castling = self._castling_after(move, piece)

        self._turn = self._turn.opposite
        self._position_keys.append(self.position_key())
        _LOGGER.debug("Executed %s (%s), %s to move", move.uci, move.piece_id, self._turn)
        return record

    def undo_last_move(self) -> MoveRecord | None:
        """Take back the last move; a no-op returning ``None`` on empty history."""
        if not self._history:
            return None
        record = self._history.pop()
        self._halfmove_clock = self._clock_stack.pop()
        self._castling = self._castling_stack.pop()
        self._position_keys.pop()
        record.move.revert(self._board, record.resolution)
        self._turn = self._turn.opposite
        _LOGGER.debug("Undid %s (%s)", record.move.uci, record.move.piece_id)
        return record

    # ── Termination ──────────────────────────────────────────────────────

    def repetition_count(self) -> int:
        """How many times the current position occurred in this game."""
        current = self._position_keys[-1]
        return self._position_keys.count(current)

    def get_outcome(self) -> Outcome | None:
        """The game's outcome, or ``None`` while it continues."""
        board = self._board
        if board.find_king(Team.WHITE) is None or board.find_king(Team.BLACK) is None:
            return Outcome(DRAW, Termination.MISSING_KING)
        if is_insufficient_material(board):
            return Outcome(DRAW, Termination.INSUFFICIENT_MATERIAL)
        if self.repetition_count() >= self._settings.repetition_limit:
            return Outcome(DRAW, Termination.THREEFOLD_REPETITION)
        if self._halfmove_clock >= self._settings.fifty_move_halfmoves:
            return Outcome(DRAW, Termination.FIFTY_MOVE_RULE)
        if self.has_legal_move():
            return None
        if self.is_king_in_check(self._turn):
            return Outcome(self._turn.opposite, Termination.CHECKMATE)
        return Outcome(DRAW, Termination.STALEMATE)

    def get_result(self) -> Team | Literal["DRAW"] | None:
        """Winning team, ``"DRAW"``, or ``None`` while the game continues."""
        outcome = self.get_outcome()
        return None if outcome is None else outcome.result

    # ── Notation ─────────────────────────────────────────────────────────

    def position_key(self) -> str:
        """Placement, side to move, castling rights and en passant target."""
        from chessgame.core.notation.fen import position_key

        return position_key(self)

    def to_fen(self) -> str:
        from chessgame.core.notation.fen import game_to_fen

        return game_to_fen(self)

    def __repr__(self) -> str:
        return f"Game({self.to_fen()!r})"
