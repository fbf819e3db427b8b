"""Search-engine collaborator contract: limits, options, results, protocol.

The engine is opaque to the core: it receives a FEN string and answers
with UCI move strings.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    depth: int = 10
    time_limit_ms: int | None = None


@dataclass(slots=True, frozen=True)
class EngineOptions:
    """Engine-wide settings applied once after the handshake.

    ``elo=None`` leaves the engine at full strength.
    """

    elo: int | None = None
    threads: int = 1
    hash_mb: int = 16


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: str | None
    ranked_moves: tuple[str, ...] = ()
    depth: int = 0


class IEngine(Protocol):
    """Protocol for search engines used by the game layer."""

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...

    def top_moves(self, fen: str, count: int, limits: SearchLimits) -> list[str]: ...
