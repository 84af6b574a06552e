"""Terminal tic-tac-toe with accounts, a minimax opponent, game history and replays."""

__version__ = "0.1.0"