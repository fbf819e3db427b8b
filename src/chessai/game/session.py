"""GameSession — one board, an optional engine, and move notifications.

Coordinates: Board, IEngine.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessai.core.board import Board
from chessai.core.enums import GameResult
from chessai.core.errors import EngineError, IllegalMoveError, InvalidMoveNotation
from chessai.core.move import Move
from chessai.core.notation import STARTING_FEN
from chessai.core.rules import Rules
from chessai.core.types import Square
from chessai.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str], None]  # move, fen after
GameOverCallback = Callable[[GameResult], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Owns the board for one game and relays moves to and from the engine.

    Single-threaded: call every method from the thread that owns the
    session.  Engine searches started through an ``EngineWorker`` should
    hand their reply back with :meth:`submit_move`.
    """

    __slots__ = ("_board", "_engine", "_start_fen", "events")

    def __init__(self, engine: IEngine | None = None) -> None:
        self._engine = engine
        self._board = Board.initial()
        self._start_fen = STARTING_FEN
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def start_fen(self) -> str:
        return self._start_fen

    @property
    def fen(self) -> str:
        return self._board.export_notation()

    @property
    def result(self) -> GameResult:
        return self._board.state.result

    @property
    def is_game_over(self) -> bool:
        return self._board.state.is_game_over

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from the standard position or from *fen*."""
        if fen is None:
            self._board = Board.initial()
            self._start_fen = STARTING_FEN
        else:
            self._board = Board.from_notation(fen)
            self._start_fen = fen
            # A loaded position may already be decided.
            self._board.state.result = Rules.game_result(self._board)
        _LOGGER.debug("New game from %s", self._start_fen)

    def legal_targets(self, sq: Square) -> list[Square]:
        """Highlight squares for the piece on *sq* (empty if none or not its turn)."""
        piece = self._board[sq]
        if piece is None or piece.color != self._board.state.active_color:
            return []
        return self._board.legal_targets(piece)

    def submit_move(self, move: Move | str) -> bool:
        """Play *move* for the side to move. Returns True if legal and applied."""
        if self.is_game_over:
            return False

        board = self._board
        try:
            parsed = Move.parse(move) if isinstance(move, str) else move
            resolved = board.resolve_move(parsed)
        except (InvalidMoveNotation, IllegalMoveError) as exc:
            _LOGGER.debug("Rejected move %r: %s", move, exc)
            return False

        piece = board[resolved.from_sq]
        if piece is None or piece.color != board.state.active_color:
            return False

        board.apply_move(resolved)
        self._emit_move(resolved)
        return True

    def request_engine_move(self, limits: SearchLimits | None = None) -> Move | None:
        """Ask the engine for a move and play it.

        Returns the applied move, or ``None`` when the game is over or the
        engine has nothing to play.
        """
        if self._engine is None:
            raise EngineError("No engine attached to this session")
        if self.is_game_over:
            return None

        result = self._engine.search(self.fen, limits or SearchLimits())
        if result.best_move is None:
            return None

        try:
            move = self._board.move_from_uci(result.best_move)
        except (InvalidMoveNotation, IllegalMoveError) as exc:
            raise EngineError(f"Engine replied with unusable move {result.best_move!r}") from exc

        self._board.apply_move(move)
        self._emit_move(move)
        return move

    def suggest_moves(self, count: int, limits: SearchLimits | None = None) -> list[Move]:
        """Engine's ranked candidates for the side to move, not played."""
        if self._engine is None:
            raise EngineError("No engine attached to this session")
        codes = self._engine.top_moves(self.fen, count, limits or SearchLimits())
        return [self._board.move_from_uci(code) for code in codes]

    # ── Internal ─────────────────────────────────────────────────────────

    def _emit_move(self, move: Move) -> None:
        fen = self.fen
        for callback in self.events.on_move:
            callback(move, fen)
        if self.is_game_over:
            _LOGGER.info("Game over: %s", self.result.name)
            for game_over_callback in self.events.on_game_over:
                game_over_callback(self.result)
