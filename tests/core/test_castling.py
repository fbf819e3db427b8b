"""Unit tests for castling bookkeeping."""

import pytest

from chessai.core.board import Board
from chessai.core.castling import (
    CastlingRights,
    PieceMovementTracker,
    king_destination,
    rook_destination,
    rook_start,
)
from chessai.core.enums import Color, PieceType
from chessai.core.errors import InvalidPositionNotation
from chessai.core.move import Move
from chessai.core.piece import Piece
from chessai.core.types import A1, A8, B1, C8, D8, E1, G1, H1, H2, H8


class TestHelpers:
    def test_squares(self) -> None:
        assert rook_start(Color.WHITE, kingside=True) == H1
        assert rook_start(Color.BLACK, kingside=False) == A8
        assert king_destination(Color.WHITE, kingside=True) == G1
        assert king_destination(Color.BLACK, kingside=False) == C8
        assert rook_destination(Color.BLACK, kingside=False) == D8


class TestTracker:
    def test_king_move_blocks_both_sides(self) -> None:
        tracker = PieceMovementTracker()
        assert tracker.can_castle_kingside() and tracker.can_castle_queenside()
        tracker.mark_king_moved()
        assert not tracker.can_castle_kingside()
        assert not tracker.can_castle_queenside()

    def test_rook_move_blocks_one_side(self) -> None:
        tracker = PieceMovementTracker()
        tracker.mark_rook_moved(kingside=True)
        assert not tracker.can_castle_kingside()
        assert tracker.can_castle_queenside()


class TestCastlingRights:
    def test_fen_field_round_trip(self) -> None:
        for text in ("KQkq", "Kq", "k", "-"):
            assert CastlingRights.from_fen_field(text).fen_field() == text

    def test_fen_field_is_canonical_order(self) -> None:
        assert CastlingRights.from_fen_field("qkQK").fen_field() == "KQkq"

    @pytest.mark.parametrize("text", ["KK", "X", "KQkqK", "w"])
    def test_bad_field(self, text: str) -> None:
        with pytest.raises(InvalidPositionNotation):
            CastlingRights.from_fen_field(text)

    def test_rook_leaving_corner(self) -> None:
        rights = CastlingRights()
        rook = Piece(PieceType.ROOK, Color.WHITE, A1)
        rights.update_castling_rights(rook, Move(A1, B1))
        assert rights.fen_field() == "Kkq"

    def test_rook_off_corner_changes_nothing(self) -> None:
        rights = CastlingRights()
        rook = Piece(PieceType.ROOK, Color.WHITE, H2)
        rights.update_castling_rights(rook, Move(H2, H1))
        assert rights.fen_field() == "KQkq"

    def test_captured_corner_rook(self) -> None:
        rights = CastlingRights()
        rook = Piece(PieceType.ROOK, Color.WHITE, H2)
        victim = Piece(PieceType.ROOK, Color.BLACK, H8)
        rights.update_castling_rights(rook, Move(H2, H8), captured=victim)
        assert rights.fen_field() == "KQq"

    def test_apply_castling_move(self) -> None:
        board = Board.from_notation("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        board.castling.apply_castling_move(Color.WHITE, True, board)
        assert board[G1].kind == (Color.WHITE, PieceType.KING)
        assert board[H1] is None
        assert board.castling.fen_field() == "-"
        assert board.state.active_color == Color.WHITE

    def test_apply_without_rook_fails(self) -> None:
        board = Board.from_notation("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        with pytest.raises(ValueError):
            board.castling.apply_castling_move(Color.WHITE, True, board)

    def test_reset(self) -> None:
        rights = CastlingRights.from_fen_field("-")
        rights.reset()
        assert rights.fen_field() == "KQkq"
        assert rights.white.can_castle_kingside()

