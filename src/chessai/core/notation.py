"""FEN parsing and serialization."""

from __future__ import annotations

from chessai.core.board import Board
from chessai.core.castling import CastlingRights
from chessai.core.enums import Color
from chessai.core.errors import InvalidPositionNotation
from chessai.core.piece import Piece
from chessai.core.types import Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a fresh :class:`Board`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidPositionNotation(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = Board()

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidPositionNotation(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        row = 7 - rank_idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidPositionNotation(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise InvalidPositionNotation(f"Invalid FEN rank width: {fen!r}")
                try:
                    board.place(Piece.from_char(ch, Square(row, col)))
                except ValueError as exc:
                    raise InvalidPositionNotation(f"{exc}: {fen!r}") from None
                col += 1
            if col > 8:
                raise InvalidPositionNotation(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise InvalidPositionNotation(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        board.state.active_color = Color.WHITE
    elif side_part == "b":
        board.state.active_color = Color.BLACK
    else:
        raise InvalidPositionNotation(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    board.castling = CastlingRights.from_fen_field(castling_part)

    # 4. En passant
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise InvalidPositionNotation(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_row = 5 if board.state.active_color == Color.WHITE else 2
        if ep.row != expected_row:
            raise InvalidPositionNotation(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant.target = ep

    # 5–6. Clocks (optional)
    board.state.halfmove_clock = _parse_clock(parts, 4, 0, 0)
    board.state.fullmove_number = _parse_clock(parts, 5, 1, 1)
    return board


def _parse_clock(parts: list[str], index: int, default: int, minimum: int) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise InvalidPositionNotation(f"Invalid FEN clock field: {parts[index]!r}") from None
    if value < minimum:
        raise InvalidPositionNotation(f"Invalid FEN clock field: {parts[index]!r}")
    return value


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Placement
    rows: list[str] = []
    for row_idx in range(7, -1, -1):
        empty = 0
        row = ""
        for col in range(8):
            piece = board[Square(row_idx, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    state = board.state
    side_str = "w" if state.active_color == Color.WHITE else "b"

    # 3–4. Castling, en passant
    castling_str = board.castling.fen_field()
    ep_str = board.en_passant.name

    return f"{board_str} {side_str} {castling_str} {ep_str} {state.halfmove_clock} {state.fullmove_number}"
