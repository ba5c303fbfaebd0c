"""Square coordinate value type and algebraic helpers.

Rows and columns are both 0-7.  Row 0 is rank 1 (white's back rank) and
column 0 is the a-file, so ``Position(3, 4)`` is ``e4``.  The flat board
index follows the Little-Endian Rank-File mapping::

    a1=0, b1=1, ..., h1=7
    a2=8, ...
    a8=56, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

from chessgame.core.errors import InvalidPositionError

_FILES = "abcdefgh"
_RANKS = "12345678"


def _in_bounds(value: int) -> bool:
    return 0 <= value <= 7


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable (row, column) board coordinate."""

    row: int
    column: int

    def __post_init__(self) -> None:
        for value in (self.row, self.column):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPositionError(f"Position coordinate must be an int: {value!r}")
            if not _in_bounds(value):
                raise InvalidPositionError(f"Position out of bounds: {value}")

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def from_algebraic(cls, notation: str) -> Position:
        """Parse a square name, e.g. ``'e4'`` → ``Position(3, 4)``."""
        text = notation.lower() if isinstance(notation, str) else ""
        if len(text) != 2 or text[0] not in _FILES or text[1] not in _RANKS:
            raise InvalidPositionError(f"Invalid algebraic notation: {notation!r}")
        return cls(_RANKS.index(text[1]), _FILES.index(text[0]))

    @classmethod
    def from_index(cls, index: int) -> Position:
        """Inverse of :attr:`index`."""
        if not 0 <= index < 64:
            raise InvalidPositionError(f"Square index out of bounds: {index}")
        return cls(index >> 3, index & 7)

    # ── Navigation ───────────────────────────────────────────────────────

    def shift(self, row_delta: int, column_delta: int) -> Position | None:
        """The square offset by the deltas, or ``None`` when off the board."""
        row = self.row + row_delta
        column = self.column + column_delta
        if not (_in_bounds(row) and _in_bounds(column)):
            return None
        return Position(row, column)

    # ── Conversions ──────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        """Flat 0-63 board slot."""
        return self.row * 8 + self.column

    @property
    def is_light(self) -> bool:
        """Whether this is a light square (h1 is light, a1 is dark)."""
        return (self.row + self.column) % 2 == 1

    @property
    def file(self) -> str:
        return _FILES[self.column]

    @property
    def rank(self) -> str:
        return _RANKS[self.row]

    def to_algebraic(self) -> str:
        return _FILES[self.column] + _RANKS[self.row]

    def __str__(self) -> str:
        return self.to_algebraic()


def sq(name: str) -> Position:
    """Shorthand for :meth:`Position.from_algebraic`."""
    return Position.from_algebraic(name)


ALL_POSITIONS: tuple[Position, ...] = tuple(Position.from_index(i) for i in range(64))
