"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator

import pytest

from chessgame.config import EngineSettings, get_settings
from chessgame.core.game import Game
from chessgame.core.move import Move
from chessgame.core.position import Position

FindMove = Callable[[Game, str, str], Move]
Play = Callable[..., None]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep CHESSGAME_* variables of the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("CHESSGAME_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(_env_file=None)


def _find_move(game: Game, origin: str, target: str) -> Move:
    from_sq = Position.from_algebraic(origin)
    to_sq = Position.from_algebraic(target)
    for move in game.legal_moves():
        if move.from_sq == from_sq and move.to_sq == to_sq:
            return move
    raise AssertionError(f"No legal move {origin}{target} in {game.to_fen()}")


def _play(game: Game, *uci_moves: str) -> None:
    for uci in uci_moves:
        game.execute_move(_find_move(game, uci[:2], uci[2:4]))


@pytest.fixture
def find_move() -> FindMove:
    """Look up the legal move of the side to move between two squares.

    For a promotion the first candidate (the queen) is returned.
    """
    return _find_move


@pytest.fixture
def play() -> Play:
    """Play moves given as ``e2e4`` strings."""
    return _play
