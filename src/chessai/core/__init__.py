"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chessai.core import Board, Move

    board = Board.initial()
    pawn = board[Move.parse("e2e4").from_sq]
    print(board.legal_targets(pawn))
    board.apply_move(board.move_from_uci("e2e4"))
    print(board.export_notation())
"""

from chessai.core.board import Board
from chessai.core.castling import CastlingRights, PieceMovementTracker
from chessai.core.en_passant import EnPassantTracker
from chessai.core.enums import Color, GameResult, MoveFlag, PieceType
from chessai.core.errors import (
    ChessError,
    EngineError,
    IllegalMoveError,
    InvalidMoveNotation,
    InvalidPositionNotation,
    MissingKingError,
)
from chessai.core.game_state import GameState
from chessai.core.move import Move
from chessai.core.move_generator import MoveGenerator
from chessai.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chessai.core.piece import Piece
from chessai.core.rules import Rules
from chessai.core.types import Square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Errors
    "ChessError",
    "EngineError",
    "IllegalMoveError",
    "InvalidMoveNotation",
    "InvalidPositionNotation",
    "MissingKingError",
    # Domain objects
    "Board",
    "CastlingRights",
    "EnPassantTracker",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "PieceMovementTracker",
    "Rules",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
