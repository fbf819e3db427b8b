"""Minimal scripted UCI engine used by the client tests.

Always prefers the same few opening moves.  Reports ``bestmove (none)``
for positions whose placement field starts with ``7k/8/5KQ1``.  With
``--no-strength`` it does not declare the strength-limiting options.
"""

from __future__ import annotations

import sys

CANDIDATES = ("e2e4", "d2d4", "g1f3", "c2c4", "b1c3")
STALEMATE_PREFIX = "7k/8/5KQ1"
STARTPOS = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

OPTIONS = (
    "option name Threads type spin default 1 min 1 max 512",
    "option name Hash type spin default 16 min 1 max 33554432",
    "option name MultiPV type spin default 1 min 1 max 500",
)
STRENGTH_OPTIONS = (
    "option name UCI_LimitStrength type check default false",
    "option name UCI_Elo type spin default 1320 min 1320 max 3190",
)


def reply(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def main(argv: list[str]) -> int:
    multipv = 1
    fen = STARTPOS
    for raw in sys.stdin:
        parts = raw.split()
        if not parts:
            continue
        command = parts[0]
        if command == "uci":
            reply("id name FakeFish")
            for line in OPTIONS:
                reply(line)
            if "--no-strength" not in argv:
                for line in STRENGTH_OPTIONS:
                    reply(line)
            reply("uciok")
        elif command == "isready":
            reply("readyok")
        elif command == "setoption" and parts[2:3] == ["MultiPV"]:
            multipv = int(parts[4])
        elif command == "position":
            fen = STARTPOS if parts[1:2] == ["startpos"] else " ".join(parts[2:8])
        elif command == "go":
            if fen.startswith(STALEMATE_PREFIX):
                reply("info depth 0 score mate 0")
                reply("bestmove (none)")
                continue
            depth = int(parts[parts.index("depth") + 1]) if "depth" in parts else 3
            for d in range(1, depth + 1):
                for rank in range(1, min(multipv, len(CANDIDATES)) + 1):
                    move = CANDIDATES[rank - 1]
                    reply(f"info depth {d} multipv {rank} score cp {40 - rank} pv {move}")
            reply(f"bestmove {CANDIDATES[0]}")
        elif command == "quit":
            return 0
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
