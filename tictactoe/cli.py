"""Interactive text front end: accounts, games, replays and history."""

from __future__ import annotations

import argparse
import getpass
import re
import sys
from collections.abc import Sequence

from tictactoe.app import App, AuthError
from tictactoe.board import GameMode
from tictactoe.database import DatabaseError, DatabaseManager
from tictactoe.session import NO_GAMES, GameSession, Replay, format_history

_MENU = (
    "1) Play PvP (Two Players)\n"
    "2) Play PvAI (Play against AI)\n"
    "3) Replay Game\n"
    "4) View History\n"
    "5) Quit"
)

_LOGIN_PROMPT = "Password: "
_RESET_PROMPT = "Enter new password: "


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _ask_hidden(prompt: str) -> str:
    if sys.stdin.isatty():
        return getpass.getpass(prompt)
    return input(prompt)


def _render(grid: Sequence[Sequence[str]]) -> str:
    return "\n---+---+---\n".join(" " + " | ".join(row) + " " for row in grid)


def _offer_reset(app: App, username: str) -> bool:
    answer = _ask("Would you like to reset your password? [y/N] ").lower()
    if answer not in ("y", "yes"):
        return False
    try:
        app.reset_password(username, _ask_hidden(_RESET_PROMPT))
    except AuthError as exc:
        print(exc)
        return False
    print("Your password has been updated successfully.")
    return True


def _login(app: App) -> bool:
    while True:
        choice = _ask("[s]ign in, sign [u]p or [q]uit: ").lower()
        if choice in ("q", "quit"):
            return False
        if choice not in ("s", "u"):
            print("Unknown choice.")
            continue
        username = _ask("Username: ")
        typed = _ask_hidden(_LOGIN_PROMPT)
        try:
            if choice == "s":
                app.sign_in(username, typed)
                print("Sign in successful!")
            else:
                app.sign_up(username, typed)
                print("Account created successfully!")
            return True
        except AuthError as exc:
            print(exc)
            if choice == "s" and app.sign_in_attempts and app.needs_password_reset():
                if _offer_reset(app, username):
                    return True


def _parse_cell(text: str) -> tuple[int, int] | None:
    parts = [p for p in re.split(r"[\s,]+", text) if p]
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    row, col = (int(p) for p in parts)
    if not (1 <= row <= 3 and 1 <= col <= 3):
        return None
    return row - 1, col - 1


def _play(session: GameSession, mode: GameMode) -> None:
    board = session.start_game(mode)
    finished = session.last_record
    while session.last_record is finished:
        print(_render(board.board))
        text = _ask(f"{board.current_player} to move: row and column (e.g. 1 2), or q: ")
        if text.lower() in ("q", "quit"):
            return
        cell = _parse_cell(text)
        if cell is None:
            print("Enter a row and a column from 1 to 3.")
            continue
        if not board.play(*cell):
            print("That cell is not available.")
    final = Replay(session.last_record.moves)
    for _ in final:
        pass
    print(_render(final.grid))
    print(session.last_message)


def _replay(session: GameSession) -> None:
    choices = session.replay_choices()
    if not choices:
        print(NO_GAMES)
        return
    print("\n".join(choices[1:]))
    text = _ask("Game number: ")
    try:
        replay = session.select_replay(int(text) if text.isdigit() else 0)
    except ValueError as exc:
        print(exc)
        return
    for step, grid in enumerate(replay, start=1):
        print(f"Move {step}:")
        print(_render(grid))


def _menu(app: App, session: GameSession) -> None:
    while True:
        print(_MENU)
        choice = _ask("> ")
        if choice in ("1", "2"):
            try:
                app.require_user()
            except AuthError as exc:
                print(exc)
                continue
            _play(session, GameMode.PVP if choice == "1" else GameMode.PVAI)
        elif choice == "3":
            _replay(session)
        elif choice == "4":
            print("Game History")
            print("\n".join(format_history(app.game_history)))
        elif choice in ("5", "q", "quit"):
            return
        else:
            print("Unknown choice.")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive game; return the exit status."""
    parser = argparse.ArgumentParser(prog="tictactoe", description="Play tic-tac-toe.")
    parser.add_argument("--db", default="tictactoe.db", help="path of the SQLite database")
    args = parser.parse_args(argv)
    try:
        db = DatabaseManager(args.db)
        db.initialize()
    except DatabaseError as exc:
        print(f"Failed to initialize database! {exc}", file=sys.stderr)
        return 1
    with db:
        app = App(db)
        session = GameSession(app)
        try:
            if _login(app):
                _menu(app, session)
        except EOFError:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())