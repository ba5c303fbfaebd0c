"""FEN parsing and serialization."""

from __future__ import annotations

from chessgame.config import EngineSettings
from chessgame.core.enums import CastlingRights, PieceKind, Team
from chessgame.core.errors import InvalidPositionError, MalformedFenError
from chessgame.core.game import Game
from chessgame.core.piece import Piece, create_piece, team_and_kind
from chessgame.core.position import Position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_placement(placement: str) -> list[Piece]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedFenError("Invalid FEN: piece placement must have 8 ranks")

    counters: dict[tuple[Team, PieceKind], int] = {}
    pieces: list[Piece] = []
    for rank_idx, rank_text in enumerate(ranks):
        row = 7 - rank_idx
        column = 0
        for ch in rank_text:
            if column > 7:
                raise MalformedFenError(f"Invalid FEN: too many squares in rank {row + 1}")
            if ch in "12345678":
                column += int(ch)
                continue
            if ch.isdigit():
                raise MalformedFenError(f"Invalid FEN: bad empty-run digit {ch!r}")
            try:
                team, kind = team_and_kind(ch)
            except KeyError:
                raise MalformedFenError(f"Invalid FEN: unknown piece character {ch!r}") from None
            counters[(team, kind)] = counters.get((team, kind), 0) + 1
            piece_id = f"{team.name.lower()}-{kind.name.lower()}-{counters[(team, kind)]}"
            pieces.append(create_piece(kind, piece_id, team, Position(row, column)))
            column += 1
        if column != 8:
            raise MalformedFenError(f"Invalid FEN: rank {row + 1} must have 8 squares")
    return pieces


def _parse_castling(text: str) -> CastlingRights:
    rights = CastlingRights.NONE
    if text == "-":
        return rights
    lookup = dict(_CASTLING_CHARS)
    for ch in text:
        right = lookup.get(ch)
        if right is None or rights & right:
            raise MalformedFenError(f"Invalid FEN: bad castling field {text!r}")
        rights |= right
    return rights


def _parse_en_passant(text: str, turn: Team) -> Position | None:
    if text == "-":
        return None
    try:
        target = Position.from_algebraic(text)
    except InvalidPositionError:
        raise MalformedFenError(f"Invalid FEN: bad en-passant square {text!r}") from None
    # White captures onto rank 6, black onto rank 3.
    expected_row = 5 if turn is Team.WHITE else 2
    if target.row != expected_row:
        raise MalformedFenError(f"Invalid FEN: en-passant square {text!r} for side to move")
    return target


def _parse_count(text: str, field: str, minimum: int) -> int:
    if not (text.isascii() and text.isdigit()):
        raise MalformedFenError(f"Invalid FEN: {field} must be a non-negative integer")
    value = int(text)
    if value < minimum:
        raise MalformedFenError(f"Invalid FEN: {field} must be at least {minimum}")
    return value


def game_from_fen(fen: str, settings: EngineSettings | None = None) -> Game:
    """Parse a FEN string into a :class:`Game`.

    Raises :class:`~chessgame.core.errors.MalformedFenError` with a message
    naming the offending field.
    """
    trimmed = fen.strip() if isinstance(fen, str) else ""
    if not trimmed:
        raise MalformedFenError("Invalid FEN: empty string")
    parts = trimmed.split()
    if len(parts) != 6:
        raise MalformedFenError(
            "Invalid FEN: expected 6 fields (placement active castling ep halfmove fullmove)"
        )
    placement, active, castling_part, ep_part, halfmove_part, fullmove_part = parts

    pieces = _parse_placement(placement)

    if active == "w":
        turn = Team.WHITE
    elif active == "b":
        turn = Team.BLACK
    else:
        raise MalformedFenError(f'Invalid FEN: active color must be "w" or "b", got {active!r}')

    castling = _parse_castling(castling_part)
    en_passant = _parse_en_passant(ep_part, turn)
    halfmove = _parse_count(halfmove_part, "halfmove clock", 0)
    fullmove = _parse_count(fullmove_part, "fullmove number", 1)

    return Game(
        pieces,
        turn=turn,
        castling_rights=castling,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
        en_passant=en_passant,
        settings=settings,
    )


# ── Serialization ────────────────────────────────────────────────────────────


def placement_field(game: Game) -> str:
    board = game.get_board()
    rows: list[str] = []
    for row in range(7, -1, -1):
        empty = 0
        text = ""
        for column in range(8):
            piece = board.get_piece(Position(row, column))
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += piece.fen_char
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def castling_field(rights: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_CHARS if rights & right)
    return text or "-"


def position_key(game: Game) -> str:
    """The first four FEN fields: the state that must repeat for a repetition."""
    target = game.en_passant_target()
    return " ".join(
        (
            placement_field(game),
            "w" if game.get_turn() is Team.WHITE else "b",
            castling_field(game.castling_rights),
            target.to_algebraic() if target is not None else "-",
        )
    )


def game_to_fen(game: Game) -> str:
    """Serialise a :class:`Game` to FEN."""
    return f"{position_key(game)} {game.halfmove_clock} {game.fullmove_number}"
