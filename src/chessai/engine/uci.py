"""UCI engine client implementing the ``IEngine`` protocol.

Drives an external engine process (Stockfish or any UCI engine) through
python-chess' :class:`chess.engine.SimpleEngine`, which owns the process,
the handshake and the line protocol.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import chess
import chess.engine

from chessai.core.errors import EngineError
from chessai.engine.search import CancelCheck, EngineOptions, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_ENGINE_ERRORS = (chess.engine.EngineError, asyncio.TimeoutError)


def engine_config(options: EngineOptions) -> dict[str, int | bool]:
    """UCI option values for *options*, in the order they are applied."""
    config: dict[str, int | bool] = {
        "Threads": options.threads,
        "Hash": options.hash_mb,
        "UCI_LimitStrength": options.elo is not None,
    }
    if options.elo is not None:
        config["UCI_Elo"] = options.elo
    return config


def search_limit(limits: SearchLimits) -> chess.engine.Limit:
    """python-chess limit for *limits*; the time cap is given in seconds."""
    time_s = limits.time_limit_ms / 1000 if limits.time_limit_ms is not None else None
    return chess.engine.Limit(depth=limits.depth, time=time_s)


class UciEngine:
    """Search engine running as a child process speaking UCI.

    The process is started lazily on first use (or explicitly with
    :meth:`start`) and must be released with :meth:`close`, or by using the
    engine as a context manager.
    """

    __slots__ = ("_command", "_options", "_engine", "_analysis")

    def __init__(
        self,
        command: str | Sequence[str],
        *,
        options: EngineOptions | None = None,
    ) -> None:
        self._command = command if isinstance(command, str) else list(command)
        self._options = options if options is not None else EngineOptions()
        self._engine: chess.engine.SimpleEngine | None = None
        self._analysis: chess.engine.SimpleAnalysisResult | None = None

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._engine is not None

    def start(self) -> None:
        """Launch the engine and complete the UCI handshake."""
        if self._engine is not None:
            return
        try:
            self._engine = chess.engine.SimpleEngine.popen_uci(self._command)
        except (OSError, *_ENGINE_ERRORS) as exc:
            raise EngineError(f"Cannot start engine {self._command!r}: {exc}") from exc

        _LOGGER.info("Started UCI engine %s", self._command)
        self.set_options(self._options)

    def set_options(self, options: EngineOptions) -> None:
        """Apply difficulty, thread and hash settings.

        Options the engine does not declare are skipped.
        """
        self._options = options
        engine = self._engine
        if engine is None:
            return
        config = {}
        for name, value in engine_config(options).items():
            if name in engine.options:
                config[name] = value
            else:
                _LOGGER.debug("Engine has no %s option, skipping", name)
        try:
            engine.configure(config)
        except _ENGINE_ERRORS as exc:
            raise EngineError(f"Engine rejected options {config}: {exc}") from exc

    def close(self) -> None:
        """Ask the engine to quit and reap the process."""
        engine = self._engine
        if engine is None:
            return
        self._engine = None
        try:
            engine.quit()
        except _ENGINE_ERRORS:
            _LOGGER.warning("Engine did not quit cleanly, killing it")
            engine.close()

    def __enter__(self) -> UciEngine:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── IEngine protocol ─────────────────────────────────────────────────

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Best move for *fen*; ``best_move`` is ``None`` when there is none."""
        if is_cancelled is not None and is_cancelled():
            return SearchResult(best_move=None)

        engine = self._running_engine()
        try:
            with engine.analysis(
                chess.Board(fen), search_limit(limits), info=chess.engine.INFO_BASIC
            ) as analysis:
                self._analysis = analysis
                for _info in analysis:
                    if is_cancelled is not None and is_cancelled():
                        analysis.stop()
                        break
                best = analysis.wait()
                depth = analysis.info.get("depth", 0)
        except _ENGINE_ERRORS as exc:
            raise EngineError(f"Search failed for {fen!r}: {exc}") from exc
        finally:
            self._analysis = None

        best_move = best.move.uci() if best.move is not None else None
        ranked = (best_move,) if best_move is not None else ()
        return SearchResult(best_move=best_move, ranked_moves=ranked, depth=depth)

    def top_moves(self, fen: str, count: int, limits: SearchLimits) -> list[str]:
        """Up to *count* candidate moves, best first, using ``MultiPV``."""
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")

        engine = self._running_engine()
        try:
            infos = engine.analyse(chess.Board(fen), search_limit(limits), multipv=count)
        except _ENGINE_ERRORS as exc:
            raise EngineError(f"Analysis failed for {fen!r}: {exc}") from exc

        return [info["pv"][0].uci() for info in infos if info.get("pv")][:count]

    def stop(self) -> None:
        """Interrupt a running search; the engine still reports a best move."""
        analysis = self._analysis
        if analysis is not None:
            analysis.stop()

    # ── Internal ─────────────────────────────────────────────────────────

    def _running_engine(self) -> chess.engine.SimpleEngine:
        self.start()
        assert self._engine is not None
        return self._engine
