"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import Enum, IntFlag, auto


class Team(Enum):
    """Side to which a piece belongs."""

    WHITE = "WHITE"
    BLACK = "BLACK"

    @property
    def opposite(self) -> Team:
        return Team.BLACK if self is Team.WHITE else Team.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn advance for this team."""
        return 1 if self is Team.WHITE else -1

    @property
    def home_row(self) -> int:
        return 0 if self is Team.WHITE else 7

    @property
    def promotion_row(self) -> int:
        return 7 if self is Team.WHITE else 0

    def __str__(self) -> str:
        return self.name.lower()


def opposite(team: Team) -> Team:
    """The other team."""
    return team.opposite


class PieceKind(Enum):
    """The six chess piece kinds."""

    PAWN = "PAWN"
    KNIGHT = "KNIGHT"
    BISHOP = "BISHOP"
    ROOK = "ROOK"
    QUEEN = "QUEEN"
    KING = "KING"

    def __str__(self) -> str:
        return self.name.lower()


PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_team(cls, team: Team, *, kingside: bool) -> CastlingRights:
        if team is Team.WHITE:
            return cls.WHITE_KINGSIDE if kingside else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if kingside else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, team: Team) -> CastlingRights:
        return cls.WHITE_BOTH if team is Team.WHITE else cls.BLACK_BOTH


class Termination(Enum):
    """Why a game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    THREEFOLD_REPETITION = auto()
    FIFTY_MOVE_RULE = auto()
    MISSING_KING = auto()
