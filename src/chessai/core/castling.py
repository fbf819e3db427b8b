"""Castling eligibility derived from king and rook movement history."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessai.core.enums import Color, PieceType
from chessai.core.errors import InvalidPositionNotation
from chessai.core.move import Move
from chessai.core.piece import Piece
from chessai.core.types import Square

if TYPE_CHECKING:
    from chessai.core.board import Board

KING_START_COL = 4
_ROOK_START_COL = {True: 7, False: 0}
_KING_END_COL = {True: 6, False: 2}
_ROOK_END_COL = {True: 5, False: 3}

# FEN letter → (color, kingside), in output order.
_FEN_LETTERS: tuple[tuple[str, Color, bool], ...] = (
    ("K", Color.WHITE, True),
    ("Q", Color.WHITE, False),
    ("k", Color.BLACK, True),
    ("q", Color.BLACK, False),
)


def rook_start(color: Color, kingside: bool) -> Square:
    return Square(color.home_row, _ROOK_START_COL[kingside])


def king_destination(color: Color, kingside: bool) -> Square:
    return Square(color.home_row, _KING_END_COL[kingside])


def rook_destination(color: Color, kingside: bool) -> Square:
    return Square(color.home_row, _ROOK_END_COL[kingside])


@dataclass(slots=True)
class PieceMovementTracker:
    """Whether a side's king or either castling rook has moved."""

    king_moved: bool = False
    kingside_rook_moved: bool = False
    queenside_rook_moved: bool = False

    def can_castle_kingside(self) -> bool:
        return not self.king_moved and not self.kingside_rook_moved

    def can_castle_queenside(self) -> bool:
        return not self.king_moved and not self.queenside_rook_moved

    def mark_king_moved(self) -> None:
        self.king_moved = True

    def mark_rook_moved(self, kingside: bool) -> None:
        if kingside:
            self.kingside_rook_moved = True
        else:
            self.queenside_rook_moved = True


@dataclass(slots=True)
class CastlingRights:
    """Per-color movement trackers; the single source of castling rights."""

    white: PieceMovementTracker = field(default_factory=PieceMovementTracker)
    black: PieceMovementTracker = field(default_factory=PieceMovementTracker)

    def tracker(self, color: Color) -> PieceMovementTracker:
        return self.white if color == Color.WHITE else self.black

    def can_castle(self, color: Color, kingside: bool) -> bool:
        """Bookkeeping-only answer: neither the king nor that rook has moved.

        Path emptiness and attacked squares are checked by the move generator.
        """
        tracker = self.tracker(color)
        return tracker.can_castle_kingside() if kingside else tracker.can_castle_queenside()

    def apply_castling_move(self, color: Color, kingside: bool, board: Board) -> None:
        """Relocate king and rook to their castled squares.

        The active color is left alone; the board's post-move update owns it.
        """
        row = color.home_row
        king = board[Square(row, KING_START_COL)]
        rook = board[rook_start(color, kingside)]
        if king is None or rook is None:
            raise ValueError(f"{color.name} king or rook missing from its castling square")

        board.move_piece(king, king_destination(color, kingside))
        board.move_piece(rook, rook_destination(color, kingside))

        tracker = self.tracker(color)
        tracker.mark_king_moved()
        tracker.mark_rook_moved(kingside)

    def update_castling_rights(
        self, piece: Piece, move: Move, captured: Piece | None = None
    ) -> None:
        """Record king/rook movement caused by *move*.

        Any king move revokes both of its rights.  A rook leaving its home
        corner revokes the right on that side, and so does a capture of the
        opponent's rook on its home corner.
        """
        if piece.piece_type == PieceType.KING:
            tracker = self.tracker(piece.color)
            tracker.mark_king_moved()
        elif piece.piece_type == PieceType.ROOK:
            self._mark_corner(piece.color, move.from_sq)

        if captured is not None and captured.piece_type == PieceType.ROOK:
            self._mark_corner(captured.color, move.to_sq)

    def _mark_corner(self, color: Color, sq: Square) -> None:
        if sq.row != color.home_row:
            return
        if sq.col == _ROOK_START_COL[False]:
            self.tracker(color).mark_rook_moved(False)
        elif sq.col == _ROOK_START_COL[True]:
            self.tracker(color).mark_rook_moved(True)

    # ── FEN field ────────────────────────────────────────────────────────

    def fen_field(self) -> str:
        """``KQkq`` subset in fixed order, or ``-`` when none applies."""
        text = "".join(
            letter
            for letter, color, kingside in _FEN_LETTERS
            if self.can_castle(color, kingside)
        )
        return text or "-"

    @classmethod
    def from_fen_field(cls, text: str) -> CastlingRights:
        """Rebuild trackers from a FEN castling field.

        A missing letter is recorded as that rook having moved.
        """
        rights = cls()
        if text == "-":
            letters: set[str] = set()
        else:
            letters = set(text)
            if len(letters) != len(text) or not letters <= {"K", "Q", "k", "q"}:
                raise InvalidPositionNotation(f"Invalid FEN castling field: {text!r}")

        for letter, color, kingside in _FEN_LETTERS:
            if letter not in letters:
                rights.tracker(color).mark_rook_moved(kingside)
        return rights

    def reset(self) -> None:
        self.white = PieceMovementTracker()
        self.black = PieceMovementTracker()
