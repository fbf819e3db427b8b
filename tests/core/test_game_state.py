"""Unit tests for GameState bookkeeping."""

from chessai.core.enums import Color, GameResult, PieceType
from chessai.core.game_state import GameState
from chessai.core.piece import Piece
from chessai.core.types import E2, G1


class TestGameState:
    def test_defaults(self) -> None:
        state = GameState()
        assert state.active_color == Color.WHITE
        assert state.halfmove_clock == 0
        assert state.fullmove_number == 1
        assert state.result == GameResult.IN_PROGRESS
        assert not state.is_game_over

    def test_toggle(self) -> None:
        state = GameState()
        state.toggle_active_color()
        assert state.active_color == Color.BLACK
        state.toggle_active_color()
        assert state.active_color == Color.WHITE

    def test_halfmove_clock(self) -> None:
        state = GameState(halfmove_clock=5)
        knight = Piece(PieceType.KNIGHT, Color.WHITE, G1)
        state.update_halfmove_clock(knight, None)
        assert state.halfmove_clock == 6
        victim = Piece(PieceType.PAWN, Color.BLACK, E2)
        state.update_halfmove_clock(knight, victim)
        assert state.halfmove_clock == 0
        state.halfmove_clock = 3
        state.update_halfmove_clock(Piece(PieceType.PAWN, Color.WHITE, E2), None)
        assert state.halfmove_clock == 0

    def test_fullmove_after_toggle(self) -> None:
        state = GameState()
        state.toggle_active_color()
        state.update_fullmove_number()
        assert state.fullmove_number == 1
        state.toggle_active_color()
        state.update_fullmove_number()
        assert state.fullmove_number == 2

    def test_reset_game(self) -> None:
        state = GameState(Color.BLACK, 12, 40, GameResult.DRAW)
        assert state.is_game_over
        state.reset_game()
        assert state == GameState()
