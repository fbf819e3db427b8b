"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessai.core.castling import KING_START_COL, king_destination, rook_start
from chessai.core.enums import Color, MoveFlag, PieceType
from chessai.core.move import Move
from chessai.core.types import ALL_SQUARES, Square

if TYPE_CHECKING:
    from chessai.core.board import Board
    from chessai.core.piece import Piece


# (d_row, d_col) offsets
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)

# Squares strictly between king and rook, then the squares the king crosses.
_CASTLE_EMPTY_COLS = {True: (5, 6), False: (1, 2, 3)}
_CASTLE_TRANSIT_COLS = {True: (5, 6), False: (3, 2)}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves = [sq.offset(d_row, d_col) for d_row, d_col in offsets]
        targets[sq] = tuple(to_sq for to_sq in moves if to_sq is not None)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for d_row, d_col in directions:
            ray: list[Square] = []
            to_sq = sq.offset(d_row, d_col)
            while to_sq is not None:
                ray.append(to_sq)
                to_sq = to_sq.offset(d_row, d_col)
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, dict[Square, tuple[tuple[Square, ...], ...]]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


class MoveGenerator:
    """Generates legal moves for pieces on a :class:`Board`.

    Legality is decided by simulate-and-revert: each pseudo-legal move is
    played on the live board, the mover's king is tested for attack, and
    the board is restored before the answer is returned.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, piece: Piece) -> list[Move]:
        """Strictly legal moves for *piece*."""
        return [
            move
            for move in self.pseudo_legal_moves(piece)
            if not self._leaves_king_in_check(piece, move)
        ]

    def all_legal_moves(self, color: Color) -> list[Move]:
        legal: list[Move] = []
        for piece in self._board.pieces(color):
            legal.extend(self.legal_moves(piece))
        return legal

    def has_legal_move(self, color: Color) -> bool:
        """Whether any piece of *color* can move; stops at the first hit."""
        return any(self.legal_moves(piece) for piece in self._board.pieces(color))

    def pseudo_legal_moves(self, piece: Piece) -> list[Move]:
        """Moves following *piece*'s movement pattern (may leave own king in check)."""
        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(piece, _KNIGHT_TARGETS[piece.square], moves)
        elif ptype == PieceType.KING:
            self._gen_steps(piece, _KING_TARGETS[piece.square], moves)
            self._gen_castling(piece, moves)
        else:
            self._gen_sliding(piece, _SLIDER_RAYS[ptype][piece.square], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king = self._board.king(color)
        return self.is_square_attacked(king.square, color)

    def is_square_attacked(self, sq: Square, defending_color: Color) -> bool:
        """Is *sq* attacked by any piece opposing *defending_color*?"""
        board = self._board
        attacker = defending_color.opposite

        # Pawns attack diagonally forward, so look one row behind *sq*
        # from the attacker's point of view.
        for d_col in (-1, 1):
            from_sq = sq.offset(-attacker.forward, d_col)
            if from_sq is None:
                continue
            piece = board[from_sq]
            if piece is not None and piece.kind == (attacker, PieceType.PAWN):
                return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            piece = board[from_sq]
            if piece is not None and piece.kind == (attacker, PieceType.KNIGHT):
                return True

        if self._ray_attacked(_BISHOP_RAYS[sq], attacker, _DIAGONAL_ATTACKERS):
            return True
        if self._ray_attacked(_ROOK_RAYS[sq], attacker, _ORTHOGONAL_ATTACKERS):
            return True

        for from_sq in _KING_TARGETS[sq]:
            piece = board[from_sq]
            if piece is not None and piece.kind == (attacker, PieceType.KING):
                return True

        return False

    def _ray_attacked(
        self,
        rays: tuple[tuple[Square, ...], ...],
        attacker: Color,
        piece_types: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for from_sq in ray:
                piece = board[from_sq]
                if piece is None:
                    continue
                if piece.color == attacker and piece.piece_type in piece_types:
                    return True
                break
        return False

    # -- Legality probe -----------------------------------------------------

    def _leaves_king_in_check(self, piece: Piece, move: Move) -> bool:
        with self._board.simulate(piece, move):
            return self.is_in_check(piece.color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        sq = piece.square
        color = piece.color
        step = color.forward
        start_row = 1 if color == Color.WHITE else 6

        one_step = sq.offset(step, 0)
        if one_step is not None and board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, moves)
            if sq.row == start_row:
                two_step = Square(sq.row + 2 * step, sq.col)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for d_col in (-1, 1):
            cap_sq = sq.offset(step, d_col)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, moves)
            elif cap_sq == board.en_passant.target:
                victim = board[Square(sq.row, cap_sq.col)]
                if victim is not None and victim.kind == (
                    color.opposite,
                    PieceType.PAWN,
                ):
                    moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))

    @staticmethod
    def _add_pawn_move(from_sq: Square, to_sq: Square, moves: list[Move]) -> None:
        if to_sq.row in (0, 7):
            for pt in _PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_steps(
        self,
        piece: Piece,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(Move(piece.square, to_sq))

    def _gen_sliding(
        self,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(piece.square, to_sq))
                    continue
                if target.color != piece.color:
                    moves.append(Move(piece.square, to_sq))
                break

    def _gen_castling(self, king: Piece, moves: list[Move]) -> None:
        board = self._board
        color = king.color
        row = color.home_row
        if king.square != Square(row, KING_START_COL):
            return
        if self.is_square_attacked(king.square, color):
            return

        for kingside in (True, False):
            if not board.castling.can_castle(color, kingside):
                continue
            rook = board[rook_start(color, kingside)]
            if rook is None or rook.kind != (color, PieceType.ROOK):
                continue
            if any(not board.is_empty(Square(row, col)) for col in _CASTLE_EMPTY_COLS[kingside]):
                continue
            if any(
                self.is_square_attacked(Square(row, col), color)
                for col in _CASTLE_TRANSIT_COLS[kingside]
            ):
                continue
            flag = MoveFlag.CASTLE_KINGSIDE if kingside else MoveFlag.CASTLE_QUEENSIDE
            moves.append(Move(king.square, king_destination(color, kingside), flag))
