"""
Data access for event memberships.

The ``attendees`` table carries a ``UNIQUE(event_id, user_id)``
constraint, so two concurrent inserts for the same pair can never both
succeed; the loser gets ``DuplicateAttendee``.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import Database
from ..core.errors import DuplicateAttendee, NotFound
from ..schemas.attendee import AttendeeRead
from ..schemas.event import EventRead
from ..schemas.user import UserRead

logger = logging.getLogger(__name__)


class AttendeeService:
    def __init__(self, db: Database) -> None:
        self.db = db

    def _insert(self, event_id: int, user_id: int) -> AttendeeRead:
        with self.db.connect() as conn:
            try:
                cursor = conn.execute(
                    "INSERT INTO attendees (event_id, user_id) VALUES (?, ?)",
                    (event_id, user_id),
                )
            except sqlite3.IntegrityError as exc:
                if "UNIQUE" in str(exc):
                    raise DuplicateAttendee() from exc
                # Foreign key violation: the event or user vanished after
                # the caller checked for it.
                raise NotFound("Event or user not found") from exc
            return AttendeeRead(id=cursor.lastrowid, event_id=event_id, user_id=user_id)

    async def insert(self, event_id: int, user_id: int) -> AttendeeRead:
        """Record ``user_id`` as attending ``event_id``."""
        return await self.db.run(self._insert, event_id, user_id)

    def _get_by_event_and_user(self, event_id: int, user_id: int) -> Optional[AttendeeRead]:
        with self.db.connect() as conn:
            row = conn.execute(
                "SELECT id, event_id, user_id FROM attendees WHERE event_id = ? AND user_id = ?",
                (event_id, user_id),
            ).fetchone()
        return AttendeeRead.model_validate(dict(row)) if row else None

    async def get_by_event_and_user(self, event_id: int, user_id: int) -> Optional[AttendeeRead]:
        return await self.db.run(self._get_by_event_and_user, event_id, user_id)

    def _list_users_for_event(self, event_id: int) -> List[UserRead]:
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT u.id, u.email, u.name
                FROM users u
                JOIN attendees a ON u.id = a.user_id
                WHERE a.event_id = ?
                ORDER BY a.id
                """,
                (event_id,),
            ).fetchall()
        return [UserRead.model_validate(dict(row)) for row in rows]

    async def list_users_for_event(self, event_id: int) -> List[UserRead]:
        """Users attending ``event_id``, in the order they joined."""
        return await self.db.run(self._list_users_for_event, event_id)

    def _list_events_for_user(self, user_id: int) -> List[EventRead]:
        with self.db.connect() as conn:
            rows = conn.execute(
                """
                SELECT e.id, e.owner_id, e.name, e.description, e.date_time, e.location
                FROM events e
                JOIN attendees a ON e.id = a.event_id
                WHERE a.user_id = ?
                ORDER BY e.date_time DESC, e.id DESC
                """,
                (user_id,),
            ).fetchall()
        return [EventRead.model_validate(dict(row)) for row in rows]

    async def list_events_for_user(self, user_id: int) -> List[EventRead]:
        """Events that ``user_id`` attends."""
        return await self.db.run(self._list_events_for_user, user_id)

    def _delete(self, user_id: int, event_id: int) -> int:
        with self.db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM attendees WHERE user_id = ? AND event_id = ?",
                (user_id, event_id),
            )
        return cursor.rowcount

    async def delete(self, user_id: int, event_id: int) -> int:
        """Remove a membership.  Returns the number of rows deleted (0 or 1)."""
        removed = await self.db.run(self._delete, user_id, event_id)
        logger.debug("Removed %s attendee row(s) for user %s on event %s", removed, user_id, event_id)
        return removed
