"""
Data access for events.

All statements are parameterized.  ``update`` only ever writes the
columns listed in ``UPDATABLE_COLUMNS``; the owner of an event is set
once at insert time and never changes.  Deleting an event removes its
attendee rows in the same transaction.
"""

import logging
from typing import Dict, List, Optional

from ..core.db import Database
from ..schemas.event import EventInput, EventRead

logger = logging.getLogger(__name__)

_EVENT_COLUMNS = "id, owner_id, name, description, date_time, location"

UPDATABLE_COLUMNS = ("name", "description", "date_time", "location")


class EventService:
    """Store for events; owner checks are left to the callers."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def _insert(self, owner_id: int, data: EventInput) -> EventRead:
        with self.db.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO events (owner_id, name, description, date_time, location)
                VALUES (?, ?, ?, ?, ?)
                """,
                (owner_id, data.name, data.description, data.date_time, data.location),
            )
            event_id = cursor.lastrowid
        return EventRead(id=event_id, owner_id=owner_id, **data.model_dump())

    async def insert(self, owner_id: int, data: EventInput) -> EventRead:
        """Store a new event owned by ``owner_id`` and return it with its id."""
        return await self.db.run(self._insert, owner_id, data)

    def _get(self, event_id: int) -> Optional[EventRead]:
        with self.db.connect() as conn:
            row = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = ?", (event_id,)
            ).fetchone()
        return EventRead.model_validate(dict(row)) if row else None

    async def get(self, event_id: int) -> Optional[EventRead]:
        """Retrieve a single event by ID, or ``None`` if it does not exist."""
        return await self.db.run(self._get, event_id)

    def _list_all(self) -> List[EventRead]:
        with self.db.connect() as conn:
            rows = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events ORDER BY date_time DESC, id DESC"
            ).fetchall()
        return [EventRead.model_validate(dict(row)) for row in rows]

    async def list_all(self) -> List[EventRead]:
        """Return every event, latest first.  An empty store yields ``[]``."""
        return await self.db.run(self._list_all)

    def _update(self, event_id: int, fields: Dict[str, str]) -> Optional[EventRead]:
        updates = {key: value for key, value in fields.items() if key in UPDATABLE_COLUMNS}
        with self.db.connect() as conn:
            if updates:
                assignments = ", ".join(f"{key} = ?" for key in updates)
                conn.execute(
                    f"UPDATE events SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (*updates.values(), event_id),
                )
            row = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = ?", (event_id,)
            ).fetchone()
        return EventRead.model_validate(dict(row)) if row else None

    async def update(self, event_id: int, fields: Dict[str, str]) -> Optional[EventRead]:
        """Overwrite the given columns and return the stored event.

        Columns absent from ``fields`` keep their values.  Returns
        ``None`` if the event no longer exists.
        """
        return await self.db.run(self._update, event_id, fields)

    def _delete(self, event_id: int) -> bool:
        with self.db.connect() as conn:
            conn.execute("DELETE FROM attendees WHERE event_id = ?", (event_id,))
            cursor = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
        return cursor.rowcount > 0

    async def delete(self, event_id: int) -> bool:
        """Delete an event and its attendees; ``False`` if nothing was deleted."""
        return await self.db.run(self._delete, event_id)
