"""Tests for engine settings."""

import pytest
from pydantic import ValidationError

from chessgame.config import EngineSettings, get_settings
from chessgame.core.factories import create_standard_game


class TestEngineSettings:
    def test_defaults(self, settings: EngineSettings) -> None:
        assert settings.fifty_move_halfmoves == 50
        assert settings.repetition_limit == 3
        assert settings.log_level == "WARNING"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHESSGAME_FIFTY_MOVE_HALFMOVES", "100")
        monkeypatch.setenv("CHESSGAME_REPETITION_LIMIT", "5")
        settings = EngineSettings(_env_file=None)
        assert settings.fifty_move_halfmoves == 100
        assert settings.repetition_limit == 5

    def test_env_file(self, tmp_path) -> None:
        env_file = tmp_path / "engine.env"
        env_file.write_text("CHESSGAME_LOG_LEVEL=DEBUG\n", encoding="utf-8")
        assert EngineSettings(_env_file=env_file).log_level == "DEBUG"

    @pytest.mark.parametrize(
        ("field", "value"),
        [("fifty_move_halfmoves", 0), ("repetition_limit", 1)],
    )
    def test_bounds(self, field: str, value: int) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(_env_file=None, **{field: value})

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_game_uses_process_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHESSGAME_REPETITION_LIMIT", "4")
        get_settings.cache_clear()
        game = create_standard_game()
        assert game.settings.repetition_limit == 4

    def test_repetition_limit_applies(self, monkeypatch: pytest.MonkeyPatch, play) -> None:
        monkeypatch.setenv("CHESSGAME_REPETITION_LIMIT", "2")
        get_settings.cache_clear()
        game = create_standard_game()
        play(game, "g1f3", "g8f6", "f3g1", "f6g8")
        assert game.get_result() == "DRAW"
