"""Tests for the command-line front end."""

import logging

import pytest

from chessgame.cli import build_parser, main


class TestPerftCommand:
    def test_depth_two(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["perft", "--depth", "2"]) == 0
        assert capsys.readouterr().out.strip() == "400"

    def test_divide(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["perft", "--depth", "1", "--divide"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert "e2e4: 1" in lines
        assert lines[-1] == "Nodes: 20"

    def test_custom_fen(self, capsys: pytest.CaptureFixture[str]) -> None:
        fen = "4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1"
        assert main(["perft", "--fen", fen, "--depth", "1"]) == 0
        assert capsys.readouterr().out.strip() == "26"

    def test_negative_depth_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["perft", "--depth", "-1"])


class TestMovesCommand:
    def test_lists_san(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["moves"]) == 0
        out = capsys.readouterr().out.split()
        assert len(out) == 20
        assert "Nf3" in out and "e4" in out

    def test_bad_fen_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["moves", "--fen", "not a fen"]) == 2
        assert "error: Invalid FEN" in capsys.readouterr().err


class TestPgnCommand:
    def test_scholars_mate(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["pgn", "e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7#"])
        assert code == 0
        out = capsys.readouterr().out
        assert '[Result "1-0"]' in out
        assert "4. Qxf7# 1-0" in out

    def test_game_over_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="chessgame.cli"):
            main(["pgn", "f3", "e5", "g4", "Qh4#"])
        assert "CHECKMATE" in caplog.text

    def test_illegal_move_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["pgn", "e5"]) == 2
        assert "Illegal move" in capsys.readouterr().err
