from unittest import mock

import pytest

from tictactoe.metrics import GameMetrics, PerformanceMonitor


def test_empty_monitor_reports_zero():
    monitor = PerformanceMonitor("Database Operations")
    assert monitor.count == 0
    assert monitor.average_time == 0.0
    assert monitor.max_time == 0.0
    assert monitor.min_time == 0.0


def test_stop_without_start_raises():
    monitor = PerformanceMonitor("Login Operations")
    with pytest.raises(RuntimeError):
        monitor.stop_measurement()


@mock.patch("time.perf_counter_ns", side_effect=[0, 2_000_000])
def test_stop_returns_milliseconds(_clock):
    monitor = PerformanceMonitor("AI Decision Making")
    monitor.start_measurement()
    assert monitor.stop_measurement() == 2.0
    assert monitor.measurements == [2.0]


@mock.patch(
    "time.perf_counter_ns",
    side_effect=[0, 2_000_000, 10_000_000, 14_000_000, 20_000_000, 23_000_000],
)
def test_statistics_are_consistent(_clock):
    monitor = PerformanceMonitor("Database Operations")
    for _ in range(3):
        monitor.start_measurement()
        monitor.stop_measurement()
    assert monitor.count == 3
    assert monitor.max_time == max(monitor.measurements)
    assert monitor.min_time == min(monitor.measurements)
    assert monitor.min_time <= monitor.average_time <= monitor.max_time
    assert monitor.min_time < monitor.max_time


def test_measure_records_even_on_error():
    monitor = PerformanceMonitor("Login Operations")
    with pytest.raises(ValueError):
        with monitor.measure():
            raise ValueError("boom")
    assert monitor.count == 1
    assert monitor.measurements[0] >= 0.0


def test_measure_records_each_block():
    monitor = PerformanceMonitor("Login Operations")
    for _ in range(4):
        with monitor.measure():
            pass
    assert monitor.count == 4


def test_save_to_file(tmp_path):
    monitor = PerformanceMonitor("Login Operations")
    with monitor.measure():
        pass
    target = tmp_path / "report.txt"
    monitor.save_to_file(target)
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Operation: Login Operations"
    assert lines[1] == "Total measurements: 1"
    assert lines[2].startswith("Average time: ") and lines[2].endswith(" ms")
    assert lines[3].startswith("Maximum time: ")
    assert lines[4].startswith("Minimum time: ")
    assert len(lines) == 5


def test_game_metrics_counts_outcomes():
    metrics = GameMetrics()
    for winner in ["You", "Player 1", "Player 2", "AI", "Draw"]:
        metrics.start_game()
        metrics.end_game(winner)
    assert metrics.total_games == 5
    assert metrics.player_wins == 3
    assert metrics.ai_wins == 1
    assert metrics.draws == 1
    assert len(metrics.game_durations) == 5


def test_game_metrics_unknown_winner_is_draw():
    metrics = GameMetrics()
    metrics.start_game()
    metrics.end_game("Somebody")
    assert metrics.draws == 1
    assert metrics.player_wins == 0


def test_game_metrics_average_duration():
    metrics = GameMetrics()
    assert metrics.average_game_duration == 0.0
    metrics.start_game()
    metrics.end_game("AI")
    assert metrics.average_game_duration == metrics.game_durations[0]


def test_end_game_without_start_raises():
    metrics = GameMetrics()
    with pytest.raises(RuntimeError):
        metrics.end_game("AI")
    assert metrics.total_games == 0