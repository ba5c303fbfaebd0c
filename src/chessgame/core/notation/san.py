"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import logging

from chessgame.core.enums import PieceKind
from chessgame.core.errors import ChessError, IllegalDestinationError, NoPieceAtSquareError
from chessgame.core.board import Board
from chessgame.core.game import Game, MoveRecord
from chessgame.core.move import CastleMove, EnPassantMove, Move, PromotionMove, SimpleMove
from chessgame.core.position import Position

_LOGGER = logging.getLogger(__name__)

_SAN_PIECE: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceKind] = {v: k for k, v in _SAN_PIECE.items()}


def _disambiguation(game: Game, move: Move) -> str:
    board = game.get_board()
    piece = board.get_piece(move.from_sq)
    assert piece is not None
    rivals = [
        other.position
        for other in board.pieces_of(piece.team, piece.kind)
        if other.id != piece.id
        and any(m.to_sq == move.to_sq for m in game.generate_moves_for(other.id))
    ]
    if not rivals:
        return ""
    if all(sq.column != move.from_sq.column for sq in rivals):
        return move.from_sq.file
    if all(sq.row != move.from_sq.row for sq in rivals):
        return move.from_sq.rank
    return move.from_sq.to_algebraic()


def move_to_san(game: Game, move: Move) -> str:
    """Convert a legal *move* to SAN given the *game* before the move.

    The move is played and taken back to compute the check suffix, so the
    game is left exactly as it was.
    """
    board = game.get_board()
    piece = board.get_piece(move.from_sq)
    if piece is None:
        raise NoPieceAtSquareError(f"There is no piece on {move.from_sq}")

    if isinstance(move, CastleMove):
        san = move.description()
    else:
        is_capture = not board.is_empty(move.to_sq) or isinstance(move, EnPassantMove)
        if piece.kind is PieceKind.PAWN:
            san = move.from_sq.file if is_capture else ""
        else:
            san = _SAN_PIECE[piece.kind] + _disambiguation(game, move)
        if is_capture:
            san += "x"
        san += move.to_sq.to_algebraic()
        if isinstance(move, PromotionMove):
            san += "=" + _SAN_PIECE[move.promote_to]

    # Check / checkmate suffix
    game.execute_move(move)
    try:
        if game.is_king_in_check(game.get_turn()):
            san += "+" if game.has_legal_move() else "#"
    finally:
        game.undo_last_move()
    return san


def _lan_fallback(move: Move) -> str:
    return f"{move.from_sq}-{move.to_sq}"


def build_move_for_board(board: Board, record: MoveRecord) -> Move | None:
    """Rebuild *record*'s move against *board*, using the ids found there."""
    move = record.move
    piece = board.get_piece(move.from_sq)
    if piece is None:
        return None
    if isinstance(move, CastleMove):
        rook = board.get_piece(move.rook_from)
        if rook is None:
            return None
        return CastleMove(piece.id, move.from_sq, move.to_sq, rook.id, move.rook_from, move.rook_to)
    if isinstance(move, EnPassantMove):
        return EnPassantMove(piece.id, move.from_sq, move.to_sq, move.captured_at)
    if isinstance(move, PromotionMove):
        return PromotionMove(piece.id, move.from_sq, move.to_sq, move.promote_to)
    return SimpleMove(piece.id, move.from_sq, move.to_sq)


def game_to_san_moves(game: Game) -> list[str]:
    """SAN for every half-move in *game*'s history.

    The history is replayed on a fresh game built from ``game.start_fen``;
    a step that cannot be replayed is written as ``e2-e4``.
    """
    replay = Game.from_fen(game.start_fen, settings=game.settings)
    sans: list[str] = []
    for record in game.move_history():
        move = build_move_for_board(replay.get_board(), record)
        if move is None:
            sans.append(_lan_fallback(record.move))
            continue
        try:
            sans.append(move_to_san(replay, move))
            replay.execute_move(move)
        except ChessError as exc:
            _LOGGER.warning("Cannot replay %s for SAN: %s", record.move.uci, exc)
            sans.append(_lan_fallback(record.move))
    return sans


def parse_san(game: Game, san: str) -> Move:
    """Parse a SAN string into a legal :class:`Move` of the side to move."""
    clean = san.strip().removesuffix("e.p.").strip().rstrip("+#!?")
    legal = game.legal_moves()

    # Castling
    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        kingside = clean.count("-") == 1
        for m in legal:
            if isinstance(m, CastleMove) and m.is_kingside == kingside:
                return m
        raise IllegalDestinationError(f"Illegal move: {san}")

    # Promotion
    promotion: PieceKind | None = None
    if "=" in clean:
        clean, _, promo_char = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo_char.upper())
        if promotion is None or promotion is PieceKind.KING:
            raise IllegalDestinationError(f"Invalid promotion piece in {san!r}")

    # Destination (last two chars)
    try:
        to_sq = Position.from_algebraic(clean[-2:])
    except ChessError:
        raise IllegalDestinationError(f"Invalid SAN: {san!r}") from None
    clean = clean[:-2].removesuffix("x")

    # Piece kind
    if clean and clean[0] in _SAN_PIECE_REV:
        kind = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        kind = PieceKind.PAWN

    # Disambiguation
    from_file: str | None = None
    from_rank: str | None = None
    for ch in clean:
        if ch in "abcdefgh":
            from_file = ch
        elif ch in "12345678":
            from_rank = ch
        else:
            raise IllegalDestinationError(f"Invalid SAN: {san!r}")
    if kind is PieceKind.PAWN and from_file is None:
        # A pawn move without a file prefix is a push along its own file.
        from_file = to_sq.file

    board = game.get_board()
    candidates: list[Move] = []
    for m in legal:
        if isinstance(m, CastleMove) or m.to_sq != to_sq:
            continue
        piece = board.get_piece(m.from_sq)
        if piece is None or piece.kind is not kind:
            continue
        if isinstance(m, PromotionMove):
            if m.promote_to is not (promotion or PieceKind.QUEEN):
                continue
        elif promotion is not None:
            continue
        if from_file is not None and m.from_sq.file != from_file:
            continue
        if from_rank is not None and m.from_sq.rank != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalDestinationError(f"Illegal move: {san}")
    raise IllegalDestinationError(f"Ambiguous move: {san} -> {[str(c) for c in candidates]}")
