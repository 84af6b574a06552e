"""Moves, game records and the text form in which moves are stored."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Move:
    """One mark placed on the board."""

    row: int
    col: int
    player: str


@dataclass
class GameRecord:
    """A finished game: its mode, winner, moves and when it was played."""

    mode: str
    winner: str
    moves: list[Move] = field(default_factory=list)
    timestamp: str = ""


def encode_moves(moves: Iterable[Move]) -> str:
    """Encode moves as ``row-col-player`` tokens joined by ``;``."""
    return ";".join(f"{move.row}-{move.col}-{move.player}" for move in moves)


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def decode_moves(text: str) -> list[Move]:
    """Parse the output of :func:`encode_moves`, skipping malformed tokens."""
    if not text:
        return []
    moves = []
    for token in text.split(";"):
        parts = token.split("-")
        if len(parts) != 3 or not parts[2]:
            continue
        row, col, player = parts
        moves.append(Move(_to_int(row), _to_int(col), player[0]))
    return moves