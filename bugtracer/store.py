"""Persistent storage of users and their bugs, plus password hashing."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from os import PathLike
from typing import Optional, Union

import bcrypt

DEFAULT_COST = 12

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS bugs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    description TEXT,
    status TEXT NOT NULL DEFAULT 'open',
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


def hash_password(password: str) -> str:
    """Return a bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=DEFAULT_COST)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def check_password(password: str, hashed: str) -> bool:
    """Tell whether ``password`` matches ``hashed``; ValueError if the hash is malformed."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as exc:
        raise ValueError(f"cannot verify password: {exc}") from exc


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password: str


@dataclass(frozen=True)
class Bug:
    id: int
    user_id: int
    name: str
    description: Optional[str]
    status: str


class BugStore:
    """A SQLite database of users and the bugs they have logged."""

    def __init__(self, path: Union[str, "PathLike[str]"]) -> None:
        self._conn = sqlite3.connect(path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        with self._conn:
            self._conn.executescript(_SCHEMA)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "BugStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _write(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        with self._conn:
            return self._conn.execute(sql, params)

    @staticmethod
    def _bug(row: sqlite3.Row) -> Bug:
        return Bug(row["id"], row["user_id"], row["name"], row["description"], row["status"])

    def purge_closed(self) -> int:
        """Delete bugs closed more than a day ago; return how many went."""
        cursor = self._write(
            "DELETE FROM bugs WHERE status = ? AND updated_at < datetime('now', '-1 day')",
            ("closed",),
        )
        return cursor.rowcount

    def find_user(self, username: str) -> Optional[User]:
        row = self._conn.execute(
            "SELECT id, username, password FROM users WHERE username = ?", (username,)
        ).fetchone()
        return User(row["id"], row["username"], row["password"]) if row else None

    def user_by_id(self, user_id: int) -> User:
        row = self._conn.execute(
            "SELECT id, username, password FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"no user with id {user_id}")
        return User(row["id"], row["username"], row["password"])

    def create_user(self, username: str, password_hash: str) -> User:
        try:
            cursor = self._write(
                "INSERT INTO users (username, password) VALUES (?, ?)",
                (username, password_hash),
            )
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"username {username!r} is already taken") from exc
        return User(cursor.lastrowid, username, password_hash)

    def find_bug(self, user_id: int, name: str) -> Optional[Bug]:
        row = self._conn.execute(
            "SELECT id, user_id, name, description, status FROM bugs "
            "WHERE user_id = ? AND name = ?",
            (user_id, name),
        ).fetchone()
        return self._bug(row) if row else None

    def add_bug(self, user_id: int, name: str, description: Optional[str]) -> Bug:
        cursor = self._write(
            "INSERT INTO bugs (user_id, name, description) VALUES (?, ?, ?)",
            (user_id, name, description),
        )
        row = self._conn.execute(
            "SELECT id, user_id, name, description, status FROM bugs WHERE id = ?",
            (cursor.lastrowid,),
        ).fetchone()
        return self._bug(row)

    def list_bugs(self, user_id: int) -> list[Bug]:
        rows = self._conn.execute(
            "SELECT id, user_id, name, description, status FROM bugs "
            "WHERE user_id = ? ORDER BY id",
            (user_id,),
        )
        return [self._bug(row) for row in rows]

    def bug_status(self, bug_id: int) -> str:
        row = self._conn.execute("SELECT status FROM bugs WHERE id = ?", (bug_id,)).fetchone()
        if row is None:
            raise LookupError(f"no bug with id {bug_id}")
        return row["status"]

    def update_status(self, bug_id: int, user_id: int, status: str) -> int:
        return self._write(
            "UPDATE bugs SET status = ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ? AND user_id = ?",
            (status, bug_id, user_id),
        ).rowcount

    def update_description(self, bug_id: int, user_id: int, description: str) -> int:
        return self._write(
            "UPDATE bugs SET description = ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ? AND user_id = ?",
            (description, bug_id, user_id),
        ).rowcount

    def delete_bug(self, bug_id: int, user_id: int) -> int:
        return self._write(
            "DELETE FROM bugs WHERE id = ? AND user_id = ?", (bug_id, user_id)
        ).rowcount