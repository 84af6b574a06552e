"""The tic-tac-toe board, its rules and a minimax opponent."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import IntEnum
from functools import lru_cache

from tictactoe.metrics import PerformanceMonitor

EMPTY = " "
SIZE = 3

Grid = Sequence[Sequence[str]]
MoveCallback = Callable[[int, int, str], None]
GameOverCallback = Callable[[str], None]

_LINES = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class GameMode(IntEnum):
    """Who plays the ``O`` marks."""

    PVP = 1
    PVAI = 2


def is_winner(board: Grid, player: str) -> bool:
    """Return whether ``player`` holds a full row, column or diagonal."""
    return any(all(board[r][c] == player for r, c in line) for line in _LINES)


def is_full(board: Grid) -> bool:
    """Return whether no cell is empty."""
    return all(cell != EMPTY for row in board for cell in row)


def available_moves(board: Grid) -> list[tuple[int, int]]:
    """Return the empty cells in row-major order."""
    return [
        (r, c)
        for r, row in enumerate(board)
        for c, cell in enumerate(row)
        if cell == EMPTY
    ]


def _freeze(board: Grid) -> tuple[tuple[str, ...], ...]:
    return tuple(tuple(row) for row in board)


def _place(
    board: tuple[tuple[str, ...], ...], row: int, col: int, player: str
) -> tuple[tuple[str, ...], ...]:
    cells = [list(r) for r in board]
    cells[row][col] = player
    return _freeze(cells)


@lru_cache(maxsize=None)
def _score(board: tuple[tuple[str, ...], ...], player: str) -> int:
    if is_winner(board, "O"):
        return 10
    if is_winner(board, "X"):
        return -10
    if is_full(board):
        return 0
    if player == "O":
        return max(_score(_place(board, r, c, "O"), "X") for r, c in available_moves(board))
    return min(_score(_place(board, r, c, "X"), "O") for r, c in available_moves(board))


def minimax(board: Grid, player: str) -> int:
    """Score ``board`` with ``player`` to move: 10 if O wins, -10 if X wins, 0 for a draw."""
    return _score(_freeze(board), player)


def find_best_move(board: Grid) -> tuple[int, int] | None:
    """Return the first cell, in row-major order, with the best score for ``O``."""
    frozen = _freeze(board)
    best_score = -1000
    best: tuple[int, int] | None = None
    for r, c in available_moves(frozen):
        score = _score(_place(frozen, r, c, "O"), "X")
        if score > best_score:
            best_score = score
            best = (r, c)
    return best


class GameBoard:
    """A game in progress: the grid, whose turn it is and whether play is open."""

    def __init__(
        self,
        mode: GameMode = GameMode.PVP,
        on_move: MoveCallback | None = None,
        on_game_over: GameOverCallback | None = None,
    ) -> None:
        self.mode = GameMode(mode)
        self.on_move = on_move
        self.on_game_over = on_game_over
        self.ai_performance_monitor = PerformanceMonitor("AI Decision Making")
        self._grid: list[list[str]] = []
        self.current_player = "X"
        self.active = True
        self.reset()

    def reset(self) -> None:
        """Clear the grid and give the first turn to ``X``."""
        self._grid = [[EMPTY] * SIZE for _ in range(SIZE)]
        self.current_player = "X"
        self.active = True

    @property
    def board(self) -> list[list[str]]:
        """A copy of the grid."""
        return [row[:] for row in self._grid]

    def is_empty(self, row: int, col: int) -> bool:
        return 0 <= row < SIZE and 0 <= col < SIZE and self._grid[row][col] == EMPTY

    def make_move(self, row: int, col: int, player: str) -> bool:
        """Place ``player`` at the cell if it is free and play is open."""
        if not self.active or not self.is_empty(row, col):
            return False
        self._grid[row][col] = player
        return True

    def check_winner(self, player: str) -> bool:
        return is_winner(self._grid, player)

    def is_full(self) -> bool:
        return is_full(self._grid)

    def switch_player(self) -> None:
        """Pass the turn; against the AI, ``O`` moves at once."""
        self.current_player = "O" if self.current_player == "X" else "X"
        if self.mode is GameMode.PVAI and self.current_player == "O" and self.active:
            self.ai_move()

    def disable(self) -> None:
        self.active = False

    def enable(self) -> None:
        self.active = True

    def _winner_name(self, player: str) -> str:
        if self.mode is GameMode.PVP:
            return "Player 1" if player == "X" else "Player 2"
        return "You" if player == "X" else "AI"

    def _finish(self, winner: str) -> None:
        if self.on_game_over is not None:
            self.on_game_over(winner)
        self.disable()

    def _after_move(self, row: int, col: int, player: str, winner_name: str) -> None:
        if self.on_move is not None:
            self.on_move(row, col, player)
        if self.check_winner(player):
            self._finish(winner_name)
        elif self.is_full():
            self._finish("Draw")
        else:
            self.switch_player()

    def play(self, row: int, col: int) -> bool:
        """Place the current player's mark as a click on the cell would."""
        if not self.active:
            return False
        player = self.current_player
        if not self.make_move(row, col, player):
            return False
        self._after_move(row, col, player, self._winner_name(player))
        return True

    def ai_move(self) -> tuple[int, int] | None:
        """Let the AI play ``O``; return the cell it chose, if it moved."""
        if not self.active or self.current_player != "O" or self.mode is not GameMode.PVAI:
            return None
        with self.ai_performance_monitor.measure():
            best = find_best_move(self._grid)
        if best is None:
            return None
        row, col = best
        self.make_move(row, col, "O")
        self._after_move(row, col, "O", "AI")
        return best