"""
Data access for users.

Users are read on every authenticated request (to confirm the token
subject still exists) and when listing attendees.  Creation is only
used by tooling; the HTTP API never mutates users.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import Database
from ..core.errors import Conflict
from ..schemas.user import UserRead

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, email, name"


class UserService:
    """Store for user records.

    Rows are returned as ``UserRead``, so the password hash never leaves
    this class.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    def _insert(self, email: str, name: str, password_hash: str) -> UserRead:
        with self.db.connect() as conn:
            try:
                cursor = conn.execute(
                    "INSERT INTO users (email, name, password) VALUES (?, ?, ?)",
                    (email, name, password_hash),
                )
            except sqlite3.IntegrityError as exc:
                raise Conflict(f"User with email {email} already exists") from exc
            return UserRead(id=cursor.lastrowid, email=email, name=name)

    async def insert(self, email: str, name: str, password_hash: str) -> UserRead:
        """Create a user and return it with its generated id."""
        user = await self.db.run(self._insert, email, name, password_hash)
        logger.info("Registered user %s (%s)", user.id, email)
        return user

    def _get_one(self, where: str, value) -> Optional[UserRead]:
        with self.db.connect() as conn:
            row = conn.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE {where} = ?", (value,)
            ).fetchone()
        return UserRead.model_validate(dict(row)) if row else None

    async def get(self, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID, or ``None`` if there is no such user."""
        return await self.db.run(self._get_one, "id", user_id)

    async def get_by_email(self, email: str) -> Optional[UserRead]:
        return await self.db.run(self._get_one, "email", email)

    def _list_all(self) -> List[UserRead]:
        with self.db.connect() as conn:
            rows = conn.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id").fetchall()
        return [UserRead.model_validate(dict(row)) for row in rows]

    async def list_all(self) -> List[UserRead]:
        """Return every user ordered by id.  An empty store yields ``[]``."""
        return await self.db.run(self._list_all)

