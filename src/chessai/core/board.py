"""Board — 8x8 grid of pieces plus the game bookkeeping that travels with it."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from chessai.core.castling import CastlingRights
from chessai.core.en_passant import EnPassantTracker
from chessai.core.enums import Color, GameResult, MoveFlag, PieceType
from chessai.core.errors import IllegalMoveError, MissingKingError
from chessai.core.game_state import GameState
from chessai.core.move import Move
from chessai.core.move_generator import MoveGenerator
from chessai.core.piece import Piece
from chessai.core.rules import Rules
from chessai.core.types import Square

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable chess board: piece grid, turn/clock state, castling and
    en passant trackers.

    Every occupied cell holds the very :class:`Piece` whose ``square`` names
    that cell; all relocations go through this class to keep both in step.
    Not safe for concurrent use: legality probes mutate the grid in place
    and restore it before returning.
    """

    __slots__ = ("_grid", "state", "castling", "en_passant")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        self.state = GameState()
        self.castling = CastlingRights()
        self.en_passant = EnPassantTracker()

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces of *color* (or all pieces), rank 1 first, file a first."""
        return [
            piece
            for row in self._grid
            for piece in row
            if piece is not None and (color is None or piece.color == color)
        ]

    def king(self, color: Color) -> Piece:
        """Return the single king of *color*."""
        kings = [
            piece
            for piece in self.pieces(color)
            if piece.piece_type == PieceType.KING
        ]
        if len(kings) != 1:
            raise MissingKingError(
                f"Expected one {color.name} king on board, found {len(kings)}"
            )
        return kings[0]

    # -- Low-level placement ------------------------------------------------

    def place(self, piece: Piece) -> Piece | None:
        """Put *piece* on its own square, returning whatever was there."""
        sq = piece.square
        previous = self._grid[sq.row][sq.col]
        self._grid[sq.row][sq.col] = piece
        return previous

    def remove(self, sq: Square) -> Piece | None:
        """Empty *sq*, returning the piece that stood there."""
        piece = self._grid[sq.row][sq.col]
        self._grid[sq.row][sq.col] = None
        return piece

    def move_piece(self, piece: Piece, to_sq: Square) -> Piece | None:
        """Relocate *piece*, returning the piece it displaced (if any)."""
        self._grid[piece.square.row][piece.square.col] = None
        captured = self._grid[to_sq.row][to_sq.col]
        self._grid[to_sq.row][to_sq.col] = piece
        piece.square = to_sq
        return captured

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]
        self.state.reset_game()
        self.castling.reset()
        self.en_passant.clear()

    # -- Setup --------------------------------------------------------------

    def initialize_standard_position(self) -> None:
        """Standard starting array; any previous contents are discarded."""
        self.clear()
        for col in range(8):
            self.place(Piece(PieceType.PAWN, Color.WHITE, Square(1, col)))
            self.place(Piece(PieceType.PAWN, Color.BLACK, Square(6, col)))
        for col, pt in enumerate(_BACK_RANK):
            self.place(Piece(pt, Color.WHITE, Square(0, col)))
            self.place(Piece(pt, Color.BLACK, Square(7, col)))

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        board = cls()
        board.initialize_standard_position()
        return board

    @classmethod
    def from_notation(cls, fen: str) -> Board:
        """Board described by a FEN string."""
        from chessai.core.notation import board_from_fen

        return board_from_fen(fen)

    # -- Move application ---------------------------------------------------

    def apply_move(self, move: Move) -> None:
        """Apply *move* as tagged.

        A move from an empty square is ignored.  An untagged move whose shape
        is special (king stepping two files, pawn reaching the last rank or
        capturing onto an empty square) is resolved first, so parsed castles,
        promotions and en passant captures land correctly.  Other moves are
        applied as given: use :meth:`legal_moves` or :meth:`resolve_move` to
        check legality first.

        A promoted pawn leaves the board; the object keeps its last square.
        """
        piece = self[move.from_sq]
        if piece is None:
            _LOGGER.debug("Ignoring move %s: no piece on %s", move, move.from_sq.name)
            return
        if move.flag == MoveFlag.NORMAL and self._has_special_shape(piece, move):
            move = self.resolve_move(move)

        captured: Piece | None = None
        if move.is_castle:
            kingside = move.flag == MoveFlag.CASTLE_KINGSIDE
            if piece.piece_type != PieceType.KING or not self.castling.can_castle(
                piece.color, kingside
            ):
                raise IllegalMoveError(f"{piece.color.name} may not castle with {move}")
            self.castling.apply_castling_move(piece.color, kingside, self)
        elif move.flag == MoveFlag.EN_PASSANT:
            captured = self.remove(Square(move.from_sq.row, move.to_sq.col))
            self.move_piece(piece, move.to_sq)
        else:
            captured = self.move_piece(piece, move.to_sq)
            if move.flag == MoveFlag.PROMOTION:
                self.place(
                    Piece(move.promotion or PieceType.QUEEN, piece.color, move.to_sq)
                )

        self._finish_move(piece, move, captured)

    def _has_special_shape(self, piece: Piece, move: Move) -> bool:
        if piece.piece_type == PieceType.KING:
            return abs(move.to_sq.col - move.from_sq.col) == 2
        if piece.piece_type == PieceType.PAWN:
            return move.to_sq.row in (0, 7) or (
                move.to_sq.col != move.from_sq.col and self.is_empty(move.to_sq)
            )
        return False

    def _finish_move(self, piece: Piece, move: Move, captured: Piece | None) -> None:
        """Post-move bookkeeping, run exactly once for every applied move."""
        state = self.state
        self.castling.update_castling_rights(piece, move, captured)
        self.en_passant.update_target(piece, move)
        state.update_halfmove_clock(piece, captured)
        state.toggle_active_color()
        state.update_fullmove_number()

        state.result = Rules.game_result(self)
        if state.result == GameResult.DRAW:
            _LOGGER.info("Stalemate: %s has no legal move, game drawn", state.active_color)
        elif state.result != GameResult.IN_PROGRESS:
            _LOGGER.info("%s is checkmated, game over", state.active_color)

    def resolve_move(self, move: Move) -> Move:
        """Legal, correctly tagged move with the coordinates of *move*.

        Promotions default to a queen when *move* names no piece type.
        """
        piece = self[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {move.from_sq.name}")

        candidates = [m for m in self.legal_moves(piece) if m.to_sq == move.to_sq]
        wanted = move.promotion
        if wanted is None and any(m.flag == MoveFlag.PROMOTION for m in candidates):
            wanted = PieceType.QUEEN
        for candidate in candidates:
            if candidate.promotion == wanted:
                return candidate
        raise IllegalMoveError(f"Illegal move {move} in {self.export_notation()}")

    def move_from_uci(self, code: str) -> Move:
        """Parse *code* and resolve it against the current position."""
        return self.resolve_move(Move.parse(code))

    # -- Legality queries ---------------------------------------------------

    def legal_moves(self, piece: Piece) -> list[Move]:
        return MoveGenerator(self).legal_moves(piece)

    def legal_targets(self, piece: Piece) -> list[Square]:
        """Destination squares of *piece*'s legal moves, without duplicates."""
        return list(dict.fromkeys(m.to_sq for m in self.legal_moves(piece)))

    def all_legal_moves(self, color: Color | None = None) -> list[Move]:
        """Every legal move for *color* (default: side to move)."""
        if color is None:
            color = self.state.active_color
        return MoveGenerator(self).all_legal_moves(color)

    def is_square_attacked(self, sq: Square, defending_color: Color) -> bool:
        """Is *sq* attacked by any piece of the side opposing *defending_color*?"""
        return MoveGenerator(self).is_square_attacked(sq, defending_color)

    def is_in_check(self, color: Color) -> bool:
        return Rules.is_in_check(self, color)

    def is_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self, color)

    def is_stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self, color)

    @contextmanager
    def simulate(self, piece: Piece, move: Move) -> Iterator[None]:
        """Temporarily play *piece* along *move* on this board.

        Only the moving piece and its victim are touched; the grid and every
        piece's square are restored on exit, whatever happens inside.
        """
        origin = piece.square
        victim_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            victim_sq = Square(origin.row, move.to_sq.col)
        victim = self.remove(victim_sq)
        self.move_piece(piece, move.to_sq)
        try:
            yield
        finally:
            self.move_piece(piece, origin)
            if victim is not None:
                self.place(victim)

    # -- Notation / copying -------------------------------------------------

    def export_notation(self) -> str:
        """FEN string of the current position."""
        from chessai.core.notation import board_to_fen

        return board_to_fen(self)

    def copy(self) -> Board:
        """Independent deep copy, pieces included."""
        board = Board()
        for piece in self.pieces():
            board.place(Piece(piece.piece_type, piece.color, piece.square))
        board.state = replace(self.state)
        board.castling = CastlingRights(
            replace(self.castling.white), replace(self.castling.black)
        )
        board.en_passant = replace(self.en_passant)
        return board

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.export_notation() == other.export_notation()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for col in range(8):
                piece = self._grid[row][col]
                cells.append(str(piece) if piece else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
