"""Timing measurements and aggregate game statistics."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from os import PathLike

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """Collects elapsed-time measurements, in milliseconds, for one named operation."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.measurements: list[float] = []
        self._started_ns: int | None = None

    def start_measurement(self) -> None:
        """Start (or restart) the timer."""
        self._started_ns = time.perf_counter_ns()

    def stop_measurement(self) -> float:
        """Record and return the milliseconds elapsed since the last start."""
        if self._started_ns is None:
            raise RuntimeError(f"measurement of {self.name!r} was never started")
        elapsed = (time.perf_counter_ns() - self._started_ns) / 1_000_000.0
        self.measurements.append(elapsed)
        logger.debug("%s execution time: %s ms", self.name, elapsed)
        return elapsed

    @contextmanager
    def measure(self) -> Iterator[None]:
        """Time the body of a ``with`` block, recording it even if the block raises."""
        self.start_measurement()
        try:
            yield
        finally:
            self.stop_measurement()

    @property
    def average_time(self) -> float:
        if not self.measurements:
            return 0.0
        return sum(self.measurements) / len(self.measurements)

    @property
    def max_time(self) -> float:
        return max(self.measurements, default=0.0)

    @property
    def min_time(self) -> float:
        return min(self.measurements, default=0.0)

    @property
    def count(self) -> int:
        return len(self.measurements)

    def save_to_file(self, filename: str | PathLike[str]) -> None:
        """Write a short summary of the measurements to ``filename``."""
        with open(filename, "w", encoding="utf-8") as handle:
            handle.write(f"Operation: {self.name}\n")
            handle.write(f"Total measurements: {self.count}\n")
            handle.write(f"Average time: {self.average_time:g} ms\n")
            handle.write(f"Maximum time: {self.max_time:g} ms\n")
            handle.write(f"Minimum time: {self.min_time:g} ms\n")


_PLAYER_WINNERS = frozenset({"You", "Player 1", "Player 2"})


class GameMetrics:
    """Counts game outcomes and tracks how long games take."""

    def __init__(self) -> None:
        self.total_games = 0
        self.player_wins = 0
        self.ai_wins = 0
        self.draws = 0
        self.game_durations: list[float] = []
        self.timer = PerformanceMonitor("Game Duration")

    def start_game(self) -> None:
        self.timer.start_measurement()

    def end_game(self, winner: str) -> None:
        """Record the end of a game won by ``winner`` (anything unknown counts as a draw)."""
        self.game_durations.append(self.timer.stop_measurement())
        self.total_games += 1
        if winner in _PLAYER_WINNERS:
            self.player_wins += 1
        elif winner == "AI":
            self.ai_wins += 1
        else:
            self.draws += 1

    @property
    def average_game_duration(self) -> float:
        if not self.game_durations:
            return 0.0
        return sum(self.game_durations) / len(self.game_durations)