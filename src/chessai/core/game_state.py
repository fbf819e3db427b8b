"""GameState — side to move, move clocks and recorded outcome."""

from __future__ import annotations

from dataclasses import dataclass

from chessai.core.enums import Color, GameResult, PieceType
from chessai.core.piece import Piece


@dataclass(slots=True)
class GameState:
    """Turn and clock bookkeeping owned by a :class:`Board`.

    Only the board's move-application path mutates it.
    """

    active_color: Color = Color.WHITE
    halfmove_clock: int = 0
    fullmove_number: int = 1
    result: GameResult = GameResult.IN_PROGRESS

    def toggle_active_color(self) -> None:
        self.active_color = self.active_color.opposite

    def update_halfmove_clock(self, piece: Piece, captured: Piece | None) -> None:
        """Reset on a pawn move or capture, otherwise count one more ply."""
        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

    def update_fullmove_number(self) -> None:
        """Count a full move once Black's move has been absorbed.

        Must run after :meth:`toggle_active_color`.
        """
        if self.active_color == Color.WHITE:
            self.fullmove_number += 1

    def reset_game(self) -> None:
        """Back to a fresh game: White to move, clocks and result cleared."""
        self.active_color = Color.WHITE
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.result = GameResult.IN_PROGRESS

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS
