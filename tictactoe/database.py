"""SQLite storage for user accounts and game history."""

from __future__ import annotations

import hashlib
import secrets
import sqlite3
from os import PathLike
from types import TracebackType

from tictactoe.metrics import PerformanceMonitor
from tictactoe.models import GameRecord, decode_moves, encode_moves

_CREATE_USERS = (
    "CREATE TABLE IF NOT EXISTS users ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "username TEXT UNIQUE NOT NULL, "
    "password_hash TEXT NOT NULL, "
    "salt TEXT NOT NULL, "
    "created_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
)

_CREATE_GAME_HISTORY = (
    "CREATE TABLE IF NOT EXISTS game_history ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, "
    "username TEXT NOT NULL, "
    "game_mode TEXT NOT NULL, "
    "winner TEXT NOT NULL, "
    "moves TEXT NOT NULL, "
    "timestamp DATETIME DEFAULT CURRENT_TIMESTAMP, "
    "FOREIGN KEY(username) REFERENCES users(username))"
)


class DatabaseError(Exception):
    """Raised when the database cannot be opened or an operation fails."""


def generate_salt() -> str:
    """Return 32 random bytes as lower-case hex."""
    return secrets.token_bytes(32).hex()


def hash_password(password: str, salt: str) -> str:
    """Return the hex SHA-256 digest of the password followed by the salt."""
    return hashlib.sha256((password + salt).encode("utf-8")).hexdigest()


class DatabaseManager:
    """Stores users with salted password hashes, and each user's finished games."""

    def __init__(self, path: str | PathLike[str] = "tictactoe.db") -> None:
        self.path = path
        self.performance_monitor = PerformanceMonitor("Database Operations")
        self._connection: sqlite3.Connection | None = None

    @property
    def _db(self) -> sqlite3.Connection:
        if self._connection is None:
            raise DatabaseError("database is not open")
        return self._connection

    def initialize(self) -> None:
        """Open the database and create the tables if they are missing."""
        with self.performance_monitor.measure():
            try:
                if self._connection is None:
                    self._connection = sqlite3.connect(self.path)
                with self._connection:
                    self._connection.execute(_CREATE_USERS)
                    self._connection.execute(_CREATE_GAME_HISTORY)
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot initialise database: {exc}") from exc

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> DatabaseManager:
        self.initialize()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def save_user(self, username: str, password: str) -> None:
        """Create a user; raises DatabaseError if the name is taken."""
        with self.performance_monitor.measure():
            salt = generate_salt()
            digest = hash_password(password, salt)
            db = self._db
            try:
                with db:
                    db.execute(
                        "INSERT INTO users (username, password_hash, salt) VALUES (?, ?, ?)",
                        (username, digest, salt),
                    )
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot save user {username!r}: {exc}") from exc

    def verify_user(self, username: str, password: str) -> bool:
        """Return whether the user exists and the password matches."""
        with self.performance_monitor.measure():
            try:
                row = self._db.execute(
                    "SELECT password_hash, salt FROM users WHERE username = ?",
                    (username,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot verify user {username!r}: {exc}") from exc
            if row is None:
                return False
            stored_hash, salt = row
            return secrets.compare_digest(stored_hash, hash_password(password, salt))

    def update_user_password(self, username: str, new_password: str) -> None:
        """Set a new password with a fresh salt; raises DatabaseError if no such user."""
        with self.performance_monitor.measure():
            salt = generate_salt()
            digest = hash_password(new_password, salt)
            db = self._db
            try:
                with db:
                    cursor = db.execute(
                        "UPDATE users SET password_hash = ?, salt = ? WHERE username = ?",
                        (digest, salt, username),
                    )
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot update password: {exc}") from exc
            if cursor.rowcount <= 0:
                raise DatabaseError(f"no such user: {username!r}")

    def save_game_record(self, username: str, record: GameRecord) -> None:
        """Append a finished game to the user's history."""
        with self.performance_monitor.measure():
            db = self._db
            try:
                with db:
                    db.execute(
                        "INSERT INTO game_history (username, game_mode, winner, moves) "
                        "VALUES (?, ?, ?, ?)",
                        (username, record.mode, record.winner, encode_moves(record.moves)),
                    )
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot save game record: {exc}") from exc

    def load_game_history(self, username: str) -> list[GameRecord]:
        """Return the user's games, newest first."""
        with self.performance_monitor.measure():
            try:
                rows = self._db.execute(
                    "SELECT game_mode, winner, moves, timestamp FROM game_history "
                    "WHERE username = ? ORDER BY timestamp DESC, id DESC",
                    (username,),
                ).fetchall()
            except sqlite3.Error as exc:
                raise DatabaseError(f"cannot load game history: {exc}") from exc
            return [
                GameRecord(
                    mode=mode,
                    winner=winner,
                    moves=decode_moves(moves or ""),
                    timestamp="" if timestamp is None else str(timestamp),
                )
                for mode, winner, moves, timestamp in rows
            ]