"""Notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    san: str
    comment: str = ""


@dataclass(slots=True)
class ParsedPgn:
    """Headers, mainline moves and result token of one PGN game."""

    headers: dict[str, str]
    moves: list[PgnMove]
    result_token: str

    @property
    def start_fen(self) -> str | None:
        """Custom start position, when the game was set up from FEN."""
        if self.headers.get("SetUp") == "1":
            return self.headers.get("FEN")
        return None
