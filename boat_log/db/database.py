"""SQLite store handle and schema initialization.

A Database is constructed once at application startup and handed to every
repository; nothing in the package reaches for a global connection. Every
repository method calls db.connect(), uses the connection, and closes it in
a finally block.
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

BOOKING_OVERLAP_MESSAGE = "booking overlap"

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS bookings (
        id         INTEGER PRIMARY KEY AUTOINCREMENT,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        person     TEXT NOT NULL,
        start_date TEXT NOT NULL,
        end_date   TEXT NOT NULL,
        comment    TEXT,
        status     TEXT NOT NULL DEFAULT 'confirmed',
        CHECK (start_date <= end_date)
    );

    CREATE INDEX IF NOT EXISTS idx_bookings_dates ON bookings (start_date, end_date);

    CREATE TABLE IF NOT EXISTS inventory (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        created_at  TEXT DEFAULT CURRENT_TIMESTAMP,
        updated_at  TEXT DEFAULT CURRENT_TIMESTAMP,
        name        TEXT NOT NULL,
        quantity    REAL NOT NULL DEFAULT 0 CHECK (quantity >= 0),
        unit        TEXT NOT NULL,
        category    TEXT,
        expiry_date TEXT,
        notes       TEXT,
        to_buy      INTEGER NOT NULL DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS logs (
        id         INTEGER PRIMARY KEY AUTOINCREMENT,
        created_at TEXT DEFAULT CURRENT_TIMESTAMP,
        title      TEXT NOT NULL,
        content    TEXT NOT NULL,
        date       TEXT NOT NULL,
        location   TEXT,
        weather    TEXT
    );

    -- Two confirmed bookings may never share a calendar day.
    CREATE TRIGGER IF NOT EXISTS bookings_no_overlap_insert
    BEFORE INSERT ON bookings
    WHEN NEW.status = 'confirmed' AND EXISTS (
        SELECT 1 FROM bookings
        WHERE status = 'confirmed'
          AND start_date <= NEW.end_date
          AND NEW.start_date <= end_date
    )
    BEGIN
        SELECT RAISE(ABORT, '{overlap}');
    END;

    CREATE TRIGGER IF NOT EXISTS bookings_no_overlap_update
    BEFORE UPDATE OF start_date, end_date, status ON bookings
    WHEN NEW.status = 'confirmed' AND EXISTS (
        SELECT 1 FROM bookings
        WHERE status = 'confirmed'
          AND id != NEW.id
          AND start_date <= NEW.end_date
          AND NEW.start_date <= end_date
    )
    BEGIN
        SELECT RAISE(ABORT, '{overlap}');
    END;
""".format(overlap=BOOKING_OVERLAP_MESSAGE)


class Database:
    """Handle to the SQLite file that backs bookings, inventory and logs."""

    def __init__(self, path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"Database({str(self.path)!r})"

    def connect(self) -> sqlite3.Connection:
        """Return a new connection with Row factory enabled.

        Callers are responsible for closing the connection when done.
        """
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        return conn

    def init_schema(self) -> None:
        """Create tables, indexes and overlap triggers if they don't exist yet.

        Called once at application startup from app.main.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = self.connect()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        finally:
            conn.close()
        logger.info("Database ready at %s", self.path)
