"""Domain errors raised by the rules engine.

Every error derives from :class:`ChessError`, itself a :class:`ValueError`,
so callers may catch either the precise class or the whole family.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for all recoverable rules-engine errors."""


class InvalidPositionError(ChessError):
    """A board coordinate lies outside 0-7 or cannot be parsed."""


class NoPieceAtSquareError(ChessError):
    """A move or query expected a piece on a square that is empty."""


class WrongTurnError(ChessError):
    """The piece being moved does not belong to the side to move."""


class PieceIdMismatchError(ChessError):
    """A move descriptor names a different piece than the board holds."""


class IllegalDestinationError(ChessError):
    """The move is blocked, lands on an ally, or leaves its own king in check."""


class MalformedFenError(ChessError):
    """A FEN string cannot be parsed."""
