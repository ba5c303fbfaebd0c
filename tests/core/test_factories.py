"""Tests for the standard and swapped game factories."""

from chessgame.core.enums import CastlingRights, PieceKind, Team
from chessgame.core.factories import create_standard_game, create_swapped_game, standard_pieces
from chessgame.core.notation import STARTING_FEN
from chessgame.core.position import sq


class TestStandard:
    def test_ids_unique_and_numbered(self) -> None:
        pieces = standard_pieces()
        ids = [p.id for p in pieces]
        assert len(set(ids)) == 32
        assert ids[0] == "white-rook-1"
        assert ids[4] == "white-king-5"
        assert ids[-1] == "black-pawn-32"

    def test_fresh_ids_per_game(self) -> None:
        first = create_standard_game()
        second = create_standard_game()
        assert first.get_board().get_piece(sq("a1")).id == second.get_board().get_piece(sq("a1")).id

    def test_matches_starting_fen(self) -> None:
        game = create_standard_game()
        assert game.to_fen() == STARTING_FEN
        assert game.castling_rights == CastlingRights.ALL


class TestSwapped:
    def test_white_on_top(self) -> None:
        game = create_swapped_game()
        board = game.get_board()
        king = board.find_king(Team.WHITE)
        assert king is not None and king.position == sq("e8")
        assert all(p.position.row == 6 for p in board.pieces_of(Team.WHITE, PieceKind.PAWN))
        assert game.to_fen() == "RNBQKBNR/PPPPPPPP/8/8/8/8/pppppppp/rnbqkbnr w - - 0 1"

    def test_no_castling(self) -> None:
        assert create_swapped_game().castling_rights == CastlingRights.NONE

    def test_white_pawns_move_towards_rank_8(self) -> None:
        game = create_swapped_game()
        # White pawns already stand next to their promotion row and are blocked
        # by their own back rank, so only knights have moves.
        pawn = game.get_board().get_piece(sq("e7"))
        assert game.generate_moves_for(pawn.id) == []
        kinds = {game.get_board().get_piece(m.from_sq).kind for m in game.legal_moves()}
        assert kinds == {PieceKind.KNIGHT}
