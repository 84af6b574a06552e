# tictactoe

Tic-tac-toe for the terminal. You can play against a friend or against a
computer opponent that uses minimax search and never loses. Each player has
an account stored in a local SQLite database. Every finished game is saved
to that player's history, and you can replay any past game move by move.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Playing

```
tictactoe
tictactoe --db path/to/games.db
```

`--db` sets the SQLite file to use (default: `tictactoe.db` in the current
directory).

1. Sign up, or sign in to an existing account. After three failed sign-in
   attempts you are offered a password reset.
2. Choose from the menu:
   - **Play PvP**: two players take turns at one terminal.
   - **Play PvAI**: you play `X` and the computer plays `O`.
   - **Replay Game**: pick a game by number and see the board after each move.
   - **View History**: list past games with mode, winner and time.
3. Enter a move as a row and a column, each from 1 to 3 (for example `1 2`),
   or `q` to leave the game.

When a game ends it is added to your history and saved to the database.

## Using it as a library

The game logic has no user interface and can be used directly. Here rows and
columns count from 0:

```python
from tictactoe.board import GameBoard, GameMode, find_best_move

board = GameBoard(GameMode.PVAI)
board.play(0, 0)            # X moves; the computer replies with O at once
print(board.board)

print(find_best_move([["X", " ", " "],
                      [" ", " ", " "],
                      [" ", " ", " "]]))
```

`GameBoard` accepts `on_move` and `on_game_over` callbacks. The winner passed
to `on_game_over` is `"Player 1"`/`"Player 2"` in PvP, `"You"`/`"AI"` in PvAI,
or `"Draw"`.

Accounts and history are stored through `tictactoe.database.DatabaseManager`.
Used as a context manager it opens the database and creates its tables;
failures raise `DatabaseError`:

```python
from tictactoe.database import DatabaseManager
from tictactoe.models import GameRecord, Move

with DatabaseManager("tictactoe.db") as db:
    db.save_user("alice", "password")
    print(db.verify_user("alice", "password"))
    db.save_game_record("alice", GameRecord(mode="PvP", winner="Player 1",
                                            moves=[Move(0, 0, "X")]))
    print(db.load_game_history("alice"))    # newest first
```

Passwords are stored as salted SHA-256 hashes, each with a random 32-byte
salt stored as hex.

Other pieces:

- `tictactoe.app.App`: sign-in state, the signed-in user's history and game
  metrics; raises `AuthError` on failed sign-in, sign-up or reset.
- `tictactoe.session.GameSession`: starts games, records their moves and files
  the results; `Replay` steps through a recorded game; `format_history` gives
  one line per game.
- `tictactoe.metrics`: `PerformanceMonitor` times operations in milliseconds
  and can write a summary with `save_to_file`; `GameMetrics` counts wins,
  losses and draws.

## What it does not do

There is no graphical window: the game is played in the terminal only.
Replays print every board state at once rather than animating them.