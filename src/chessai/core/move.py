"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chessai.core.enums import MoveFlag, PieceType
from chessai.core.errors import InvalidMoveNotation
from chessai.core.types import FILES, RANKS, Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_TYPES: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``flag`` tags the move kind (castle, en passant, promotion, ...).  Moves
    produced by the move generator carry the right tag; moves parsed from
    text only know their coordinates and must go through
    :meth:`Board.resolve_move` before being applied.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    # ── Parsing ──────────────────────────────────────────────────────────

    @classmethod
    def parse(cls, code: str) -> Move:
        """Parse coordinate notation such as ``"e2e4"`` or ``"e7e8q"``."""
        if len(code) not in (4, 5):
            raise InvalidMoveNotation(f"Move must have 4 or 5 characters: {code!r}")
        if (
            code[0] not in FILES
            or code[1] not in RANKS
            or code[2] not in FILES
            or code[3] not in RANKS
        ):
            raise InvalidMoveNotation(f"Invalid move coordinates: {code!r}")

        from_sq = Square(RANKS.index(code[1]), FILES.index(code[0]))
        to_sq = Square(RANKS.index(code[3]), FILES.index(code[2]))
        if from_sq == to_sq:
            raise InvalidMoveNotation(f"Move goes nowhere: {code!r}")

        if len(code) == 5:
            promotion = _PROMO_TYPES.get(code[4].lower())
            if promotion is None:
                raise InvalidMoveNotation(f"Invalid promotion piece: {code!r}")
            return cls(from_sq, to_sq, MoveFlag.PROMOTION, promotion)
        return cls(from_sq, to_sq)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
