"""En passant target tracking."""

from __future__ import annotations

from dataclasses import dataclass

from chessai.core.enums import PieceType
from chessai.core.move import Move
from chessai.core.piece import Piece
from chessai.core.types import Square


@dataclass(slots=True)
class EnPassantTracker:
    """The square (if any) a pawn may capture onto en passant.

    Valid for exactly one move: every applied move recomputes it.
    """

    target: Square | None = None

    def update_target(self, piece: Piece, move: Move) -> None:
        if (
            piece.piece_type == PieceType.PAWN
            and abs(move.to_sq.row - move.from_sq.row) == 2
        ):
            self.target = Square((move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col)
        else:
            self.target = None

    def clear(self) -> None:
        self.target = None

    @property
    def name(self) -> str:
        """FEN field: algebraic target square or ``-``."""
        return self.target.name if self.target is not None else "-"

    def __str__(self) -> str:
        return self.name
