"""Engine collaborator package: search contract, UCI client, Qt worker bridge."""

from chessai.engine.search import (
    CancelCheck,
    EngineOptions,
    IEngine,
    SearchLimits,
    SearchResult,
)
from chessai.engine.uci import UciEngine

__all__ = [
    "CancelCheck",
    "EngineOptions",
    "IEngine",
    "SearchLimits",
    "SearchResult",
    "UciEngine",
]
