"""Game layer: a session wiring the board to an optional search engine."""

from chessai.game.session import GameOverCallback, GameSession, MoveCallback, SessionEvents

__all__ = [
    "GameOverCallback",
    "GameSession",
    "MoveCallback",
    "SessionEvents",
]
