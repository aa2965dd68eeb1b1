"""Trip logbook: CRUD for the logs table, newest entries first."""

import logging
from typing import Optional

from boat_log.db.database import Database
from boat_log.db.models import LogEntry

logger = logging.getLogger(__name__)

_COLUMNS = ("title", "content", "date", "location", "weather")


class LogRepository:
    def __init__(self, db: Database):
        self.db = db

    def get_all(self) -> list[LogEntry]:
        """Return all entries sorted by date, most recent first."""
        conn = self.db.connect()
        try:
            rows = conn.execute("SELECT * FROM logs ORDER BY date DESC, id DESC").fetchall()
            return [LogEntry(**dict(row)) for row in rows]
        finally:
            conn.close()

    def get(self, log_id: int) -> Optional[LogEntry]:
        conn = self.db.connect()
        try:
            row = conn.execute("SELECT * FROM logs WHERE id = ?", (log_id,)).fetchone()
            return LogEntry(**dict(row)) if row else None
        finally:
            conn.close()

    def add(self, fields: dict) -> LogEntry:
        params = {key: fields.get(key) for key in _COLUMNS}
        conn = self.db.connect()
        try:
            cursor = conn.execute(
                """INSERT INTO logs (title, content, date, location, weather)
                   VALUES (:title, :content, :date, :location, :weather)""",
                params,
            )
            row = conn.execute("SELECT * FROM logs WHERE id = ?", (cursor.lastrowid,)).fetchone()
            conn.commit()
        finally:
            conn.close()
        entry = LogEntry(**dict(row))
        logger.info("Added log entry %s for %s", entry.id, entry.date)
        return entry

    def update(self, log_id: int, fields: dict) -> Optional[LogEntry]:
        """Apply a partial patch. Returns the updated entry, or None if absent."""
        fields = {key: value for key, value in fields.items() if key in _COLUMNS}
        conn = self.db.connect()
        try:
            if fields:
                assignments = ", ".join(f"{key} = :{key}" for key in fields)
                cursor = conn.execute(
                    f"UPDATE logs SET {assignments} WHERE id = :id", {**fields, "id": log_id}
                )
                if cursor.rowcount == 0:
                    return None
            row = conn.execute("SELECT * FROM logs WHERE id = ?", (log_id,)).fetchone()
            conn.commit()
            return LogEntry(**dict(row)) if row else None
        finally:
            conn.close()

    def delete(self, log_id: int) -> None:
        """Delete an entry by ID. Deleting a missing ID is not an error."""
        conn = self.db.connect()
        try:
            cursor = conn.execute("DELETE FROM logs WHERE id = ?", (log_id,))
            conn.commit()
        finally:
            conn.close()
        if cursor.rowcount:
            logger.info("Deleted log entry %s", log_id)
