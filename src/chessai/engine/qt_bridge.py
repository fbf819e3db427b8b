"""Qt bridge to run engine searches in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessai.core.errors import ChessError
from chessai.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that asks the engine for moves on demand.

    Move it to a ``QThread`` and call :meth:`request_move` through a queued
    signal; results come back as UCI strings.
    """

    best_move_ready = pyqtSignal(int, str, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        engine: IEngine,
        *,
        depth: int = 10,
        time_limit_ms: int | None = None,
    ) -> None:
        super().__init__()
        self._engine = engine
        self._limits = SearchLimits(depth=depth, time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()

    @pyqtSlot(str, int)
    def request_move(self, fen: str, request_id: int) -> None:
        """Search the position *fen* and emit the outcome."""
        self._cancel_event.clear()
        try:
            result = self._engine.search(
                fen,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except (ChessError, OSError) as exc:
            _LOGGER.warning("Engine search %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, result.best_move, result.depth)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()
        stop = getattr(self._engine, "stop", None)
        if callable(stop):
            stop()

    @pyqtSlot(int, int)
    def set_limits(self, depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search).

        A non-positive *time_limit_ms* means no time limit.
        """
        self._limits = SearchLimits(
            depth=depth,
            time_limit_ms=time_limit_ms if time_limit_ms > 0 else None,
        )

    @property
    def limits(self) -> SearchLimits:
        return self._limits
