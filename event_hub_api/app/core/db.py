"""
SQLite database integration and simple migration system.

The ``Database`` object owns the location of the SQLite file and the
per‑call timeout.  It is created once by ``create_app`` and shared by
reference; it holds no open connections.  Every store call opens its
own connection through ``connect`` and runs in a worker thread via
``run`` so that blocking I/O never stalls the event loop.

A call is bounded in two ways: SQLite's busy timeout limits how long
a statement waits for a lock, and a progress handler interrupts any
statement still executing once the deadline has passed.  Any
``sqlite3.Error`` raised while a call runs is re‑raised as
``StoreError``.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import asyncio
import functools
import logging
import os
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, TypeVar

from .config import Settings
from .errors import AppError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest value an SQLite INTEGER column (and so a row id) can hold.
MAX_ROW_ID = 2**63 - 1

# Number of SQLite virtual machine instructions between deadline checks.
_PROGRESS_INTERVAL = 1000

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            owner_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            date_time TEXT NOT NULL,
            location TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS attendees (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            event_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(event_id) REFERENCES events(id) ON DELETE CASCADE,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            UNIQUE(event_id, user_id)
        );
        """,
    ),
    # Migration 2: indices for the attendee joins
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_events_owner_id ON events(owner_id);
        CREATE INDEX IF NOT EXISTS idx_attendees_user_id ON attendees(user_id);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned as is; relative paths are resolved
    against the project root.  Each store call opens its own connection,
    so the database must be a file.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Handle on the SQLite store shared by all requests."""

    def __init__(self, path: str, timeout: float = 3.0) -> None:
        self.path = path
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(resolve_database_path(settings.database_url), settings.db_timeout)

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path, timeout=self.timeout)
        # Rows behave like mappings keyed by column name.
        conn.row_factory = sqlite3.Row
        # Foreign keys are off by default in SQLite and must be enabled per
        # connection for the ON DELETE CASCADE clauses to apply.
        conn.execute("PRAGMA foreign_keys = ON")
        deadline = time.monotonic() + self.timeout
        conn.set_progress_handler(lambda: int(time.monotonic() > deadline), _PROGRESS_INTERVAL)
        return conn

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error, always close."""
        try:
            conn = self._open()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open database: {exc}") from exc
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(str(exc)) from exc
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()

    async def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Execute a blocking store call in a worker thread."""
        try:
            return await asyncio.to_thread(functools.partial(func, *args, **kwargs))
        except AppError:
            raise
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc

    def init_db(self) -> None:
        """Create the database if needed and apply pending migrations."""
        with self.connect() as conn:
            cursor = conn.cursor()
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying migration %s to %s", version, self.path)
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    current_version = version
