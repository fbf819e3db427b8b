"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessai.core.enums import Color, GameResult
from chessai.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessai.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    *color* defaults to the side to move.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color | None = None) -> bool:
        if color is None:
            color = board.state.active_color
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(board: Board, color: Color | None = None) -> bool:
        if color is None:
            color = board.state.active_color
        if not Rules.is_in_check(board, color):
            return False
        return not MoveGenerator(board).has_legal_move(color)

    @staticmethod
    def is_stalemate(board: Board, color: Color | None = None) -> bool:
        if color is None:
            color = board.state.active_color
        if Rules.is_in_check(board, color):
            return False
        return not MoveGenerator(board).has_legal_move(color)

    @staticmethod
    def game_result(board: Board) -> GameResult:
        """Outcome for the side to move: mated, stalemated or still playing."""
        color = board.state.active_color
        gen = MoveGenerator(board)
        if gen.has_legal_move(color):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(color):
            return GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        return GameResult.DRAW
