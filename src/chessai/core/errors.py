"""Exception hierarchy for the chess core and its collaborators."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all chessai errors."""


class MissingKingError(ChessError, LookupError):
    """A color does not have exactly one king on the board.

    The board is corrupt at this point; callers should not try to recover.
    """


class InvalidMoveNotation(ChessError, ValueError):
    """A move string is not ``<file><rank><file><rank>[promotion]``."""


class IllegalMoveError(ChessError, ValueError):
    """A move is not legal in the current position."""


class InvalidPositionNotation(ChessError, ValueError):
    """A FEN string cannot be parsed."""


class EngineError(ChessError, RuntimeError):
    """The external search engine failed or broke protocol."""
