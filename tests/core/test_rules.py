"""Tests for attack detection and the insufficient-material rule."""

from chessgame.core.board import Board
from chessgame.core.enums import Team
from chessgame.core.notation import game_from_fen
from chessgame.core.piece import Bishop, King, Knight, Pawn, Queen, Rook
from chessgame.core.position import sq
from chessgame.core.rules import is_insufficient_material, is_king_in_check, is_square_attacked


def kings(*extra) -> Board:
    return Board([King("K", Team.WHITE, sq("e1")), King("k", Team.BLACK, sq("e8")), *extra])


class TestAttacks:
    def test_pawn_attacks_forward_diagonals(self) -> None:
        board = Board([Pawn("P", Team.WHITE, sq("e4"))])
        assert is_square_attacked(board, sq("d5"), Team.WHITE)
        assert is_square_attacked(board, sq("f5"), Team.WHITE)
        assert not is_square_attacked(board, sq("e5"), Team.WHITE)
        assert not is_square_attacked(board, sq("d3"), Team.WHITE)

    def test_black_pawn_attacks_down(self) -> None:
        board = Board([Pawn("p", Team.BLACK, sq("e5"))])
        assert is_square_attacked(board, sq("d4"), Team.BLACK)
        assert not is_square_attacked(board, sq("d6"), Team.BLACK)

    def test_knight(self) -> None:
        board = Board([Knight("N", Team.WHITE, sq("g1"))])
        assert is_square_attacked(board, sq("f3"), Team.WHITE)
        assert not is_square_attacked(board, sq("g3"), Team.WHITE)

    def test_slider_blocked(self) -> None:
        board = Board([Rook("R", Team.WHITE, sq("a1")), Pawn("p", Team.BLACK, sq("a4"))])
        assert is_square_attacked(board, sq("a4"), Team.WHITE)
        assert not is_square_attacked(board, sq("a5"), Team.WHITE)

    def test_queen_diagonal(self) -> None:
        board = Board([Queen("Q", Team.WHITE, sq("d1"))])
        assert is_square_attacked(board, sq("h5"), Team.WHITE)

    def test_wrong_team_ignored(self) -> None:
        board = Board([Rook("R", Team.WHITE, sq("a1"))])
        assert not is_square_attacked(board, sq("a5"), Team.BLACK)


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        game = game_from_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
        assert not is_king_in_check(game.get_board(), Team.WHITE)

    def test_fools_mate_in_check(self) -> None:
        game = game_from_fen("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert is_king_in_check(game.get_board(), Team.WHITE)

    def test_missing_king_not_in_check(self) -> None:
        board = Board([Rook("r", Team.BLACK, sq("e8"))])
        assert not is_king_in_check(board, Team.WHITE)


class TestInsufficientMaterial:
    def test_kings_only(self) -> None:
        assert is_insufficient_material(kings())

    def test_no_pieces(self) -> None:
        assert is_insufficient_material(Board())

    def test_single_minor(self) -> None:
        assert is_insufficient_material(kings(Bishop("B", Team.WHITE, sq("c1"))))
        assert is_insufficient_material(kings(Knight("n", Team.BLACK, sq("b8"))))

    def test_minor_each(self) -> None:
        board = kings(Bishop("B", Team.WHITE, sq("c1")), Knight("n", Team.BLACK, sq("b8")))
        assert is_insufficient_material(board)

    def test_two_knights_one_side(self) -> None:
        board = kings(Knight("N1", Team.WHITE, sq("b1")), Knight("N2", Team.WHITE, sq("g1")))
        assert is_insufficient_material(board)

    def test_two_bishops_one_side_sufficient(self) -> None:
        board = kings(Bishop("B1", Team.WHITE, sq("c1")), Bishop("B2", Team.WHITE, sq("f1")))
        assert not is_insufficient_material(board)

    def test_bishop_and_knight_sufficient(self) -> None:
        board = kings(Bishop("B", Team.BLACK, sq("c8")), Knight("N", Team.BLACK, sq("b8")))
        assert not is_insufficient_material(board)

    def test_pawn_rook_queen_sufficient(self) -> None:
        assert not is_insufficient_material(kings(Pawn("P", Team.WHITE, sq("a2"))))
        assert not is_insufficient_material(kings(Rook("R", Team.WHITE, sq("a1"))))
        assert not is_insufficient_material(kings(Queen("q", Team.BLACK, sq("d8"))))

    def test_three_minors_sufficient(self) -> None:
        board = kings(
            Knight("N1", Team.WHITE, sq("b1")),
            Knight("N2", Team.WHITE, sq("g1")),
            Bishop("b", Team.BLACK, sq("c8")),
        )
        assert not is_insufficient_material(board)
