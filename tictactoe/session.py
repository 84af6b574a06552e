"""Playing games, recording their moves and replaying finished ones."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

from tictactoe.app import App
from tictactoe.board import EMPTY, SIZE, GameBoard, GameMode
from tictactoe.models import GameRecord, Move

NO_GAMES = "No games have been played yet."


def format_history(history: Sequence[GameRecord]) -> list[str]:
    """Return one line per game, or a single line saying there are none."""
    if not history:
        return [NO_GAMES]
    return [
        f"Game {number}: Mode: {record.mode}, Winner: {record.winner}, Time: {record.timestamp}"
        for number, record in enumerate(history, start=1)
    ]


class Replay:
    """Steps through a recorded game one move at a time."""

    def __init__(self, moves: Iterable[Move]) -> None:
        self.moves = list(moves)
        self.position = 0
        self._cells = [EMPTY] * (SIZE * SIZE)

    @property
    def grid(self) -> list[list[str]]:
        """The cells shown so far, as rows."""
        return [self._cells[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]

    @property
    def done(self) -> bool:
        return self.position >= len(self.moves)

    def step(self) -> Move | None:
        """Show the next move and return it, or return None when all are shown."""
        if self.done:
            return None
        move = self.moves[self.position]
        index = move.row * SIZE + move.col
        if 0 <= index < len(self._cells):
            self._cells[index] = move.player
        self.position += 1
        return move

    def __iter__(self) -> Iterator[list[list[str]]]:
        """Yield the grid after each remaining move."""
        while self.step() is not None:
            yield self.grid


class GameSession:
    """One player's sitting: starts games, records moves and files results."""

    def __init__(self, app: App) -> None:
        self.app = app
        self.board: GameBoard | None = None
        self.mode: GameMode | None = None
        self.moves: list[Move] = []
        self.last_record: GameRecord | None = None
        self.last_message = ""

    def start_game(self, mode: GameMode | int) -> GameBoard:
        """Start a fresh board in ``mode`` and return it."""
        self.mode = GameMode(mode)
        self.board = GameBoard(self.mode, on_move=self.record_move, on_game_over=self.finish)
        self.moves.clear()
        self.app.metrics.start_game()
        return self.board

    def record_move(self, row: int, col: int, player: str) -> None:
        self.moves.append(Move(row, col, player))

    def finish(self, winner: str) -> str:
        """File the finished game and return the message announcing the result."""
        message = "It's a draw!" if winner == "Draw" else f"{winner} wins!"
        record = GameRecord(
            mode="PvP" if self.mode is GameMode.PVP else "PvAI",
            winner=winner,
            moves=list(self.moves),
            timestamp=datetime.now().strftime("%a %b %d %H:%M:%S %Y"),
        )
        self.app.record_game(record)
        self.app.metrics.end_game(winner)
        if self.board is not None:
            self.board.reset()
            self.board.enable()
        self.moves.clear()
        self.last_record = record
        self.last_message = message
        return message

    def replay_choices(self) -> list[str]:
        """Return the replay menu entries, or an empty list if there is no game."""
        history = self.app.game_history
        if not history:
            return []
        return ["Select a game..."] + [f"Game {n}" for n in range(1, len(history) + 1)]

    def select_replay(self, index: int) -> Replay:
        """Return a replay of the game at menu ``index`` (1 is the first game)."""
        history = self.app.game_history
        if index <= 0 or index > len(history):
            raise ValueError("Please select a valid game number.")
        record = history[index - 1]
        if not record.moves:
            raise ValueError("No move data available for this game.")
        return Replay(record.moves)