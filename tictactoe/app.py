"""Accounts, sign-in state and the signed-in user's game history."""

from __future__ import annotations

from tictactoe.database import DatabaseError, DatabaseManager
from tictactoe.metrics import GameMetrics, PerformanceMonitor
from tictactoe.models import GameRecord

RESET_AFTER_ATTEMPTS = 3


class AuthError(Exception):
    """Raised when signing in, signing up or resetting a password fails."""


class App:
    """Application state: who is signed in, their games and the running metrics."""

    def __init__(self, db: DatabaseManager) -> None:
        self.db = db
        self.current_user = ""
        self.game_history: list[GameRecord] = []
        self.metrics = GameMetrics()
        self.login_performance_monitor = PerformanceMonitor("Login Operations")
        self.sign_in_attempts = 0

    def _sign_in_as(self, username: str) -> None:
        self.current_user = username
        self.load_game_history()

    def sign_in(self, username: str, password: str) -> None:
        """Sign in; raises AuthError on empty fields or wrong credentials."""
        with self.login_performance_monitor.measure():
            if not username or not password:
                raise AuthError("Username and password cannot be empty.")
            verified = self.db.verify_user(username, password)
        if not verified:
            self.sign_in_attempts += 1
            raise AuthError("Incorrect username or password.")
        self.sign_in_attempts = 0
        self._sign_in_as(username)

    def sign_up(self, username: str, password: str) -> None:
        """Create an account and sign in with it."""
        with self.login_performance_monitor.measure():
            if not username or not password:
                raise AuthError("Username and password cannot be empty.")
            try:
                self.db.save_user(username, password)
            except DatabaseError as exc:
                raise AuthError(
                    "Username already exists or database error occurred."
                ) from exc
        self._sign_in_as(username)

    def needs_password_reset(self) -> bool:
        """Whether enough sign-ins have failed for a reset to be offered."""
        return self.sign_in_attempts >= RESET_AFTER_ATTEMPTS

    def reset_password(self, username: str, new_password: str) -> None:
        """Set a new password after repeated failures, then sign in."""
        if not self.needs_password_reset():
            raise AuthError("A password reset is only offered after repeated failed sign-ins.")
        if not new_password:
            raise AuthError("Password was not updated. Please try signing in again.")
        try:
            self.db.update_user_password(username, new_password)
        except DatabaseError as exc:
            raise AuthError("Failed to update password.") from exc
        self.sign_in_attempts = 0
        self._sign_in_as(username)

    def load_game_history(self) -> None:
        """Replace the in-memory history with the signed-in user's stored games."""
        if self.current_user:
            self.game_history = self.db.load_game_history(self.current_user)

    def save_game_history(self) -> None:
        """Store the most recent game for the signed-in user."""
        if self.current_user and self.game_history:
            self.db.save_game_record(self.current_user, self.game_history[-1])

    def record_game(self, record: GameRecord) -> None:
        """Append a finished game and store it."""
        self.game_history.append(record)
        self.save_game_history()

    def require_user(self) -> str:
        """Return the signed-in user, or raise AuthError if nobody is."""
        if not self.current_user:
            raise AuthError("Please sign in or sign up before playing the game.")
        return self.current_user