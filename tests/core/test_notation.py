"""FEN import/export tests."""

import pytest

from chessai.core.board import Board
from chessai.core.enums import Color, PieceType
from chessai.core.errors import InvalidPositionNotation
from chessai.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessai.core.types import A8, E3, E4, H1


class TestExport:
    def test_initial_position(self, board: Board) -> None:
        assert board.export_notation() == STARTING_FEN
        assert board_to_fen(board) == STARTING_FEN

    def test_after_double_push(self, board: Board) -> None:
        board.apply_move(board.move_from_uci("e2e4"))
        assert board.export_notation() == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_castling_field_follows_trackers(self, board: Board) -> None:
        board.castling.white.mark_king_moved()
        board.castling.black.mark_rook_moved(kingside=False)
        assert board.export_notation().split()[2] == "k"
        board.castling.black.mark_rook_moved(kingside=True)
        assert board.export_notation().split()[2] == "-"


class TestImport:
    def test_starting(self) -> None:
        board = board_from_fen(STARTING_FEN)
        assert board[E4] is None
        assert board[A8].kind == (Color.BLACK, PieceType.ROOK)
        assert board[H1].kind == (Color.WHITE, PieceType.ROOK)
        assert board.state.active_color == Color.WHITE

    def test_side_ep_and_clocks(self) -> None:
        board = Board.from_notation(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 7 12"
        )
        assert board.state.active_color == Color.BLACK
        assert board.en_passant.target == E3
        assert board.state.halfmove_clock == 7
        assert board.state.fullmove_number == 12

    def test_clocks_are_optional(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/4K3 w - -")
        assert board.state.halfmove_clock == 0
        assert board.state.fullmove_number == 1

    def test_castling_rights_become_trackers(self) -> None:
        board = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        assert board.castling.can_castle(Color.WHITE, kingside=True)
        assert not board.castling.can_castle(Color.WHITE, kingside=False)
        assert not board.castling.can_castle(Color.BLACK, kingside=True)
        assert board.castling.can_castle(Color.BLACK, kingside=False)

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
            "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
            "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 0 3",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert Board.from_notation(fen).export_notation() == fen


class TestInvalid:
    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8/8",
            "8/8/8/8/8/8/8 w - - 0 1",
            "9/8/8/8/8/8/8/8 w - - 0 1",
            "ppppppppp/8/8/8/8/8/8/8 w - - 0 1",
            "7/8/8/8/8/8/8/8 w - - 0 1",
            "x7/8/8/8/8/8/8/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KX - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w KK - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - e4 0 1",
            "4k3/8/8/8/8/8/8/4K3 b - e6 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - z9 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - - -1 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 0",
            "4k3/8/8/8/8/8/8/4K3 w - - a 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 1 extra",
        ],
    )
    def test_rejected(self, fen: str) -> None:
        with pytest.raises(InvalidPositionNotation):
            board_from_fen(fen)

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            Board.from_notation("not a fen")
