"""Boat calendar: CRUD for the bookings table and the availability rule.

Two inclusive ranges [S1, E1] and [S2, E2] overlap iff S1 <= E2 and
S2 <= E1. Only confirmed bookings take the boat; pending and cancelled ones
never block anything.

Admission is serialized with BEGIN IMMEDIATE: the overlap check and the
write happen under SQLite's reserved lock, so two confirmed bookings for the
same days cannot both get in. The schema triggers enforce the same rule as
a backstop.
"""

import logging
import sqlite3
from typing import Optional

from boat_log.core.errors import BookingConflictError, ValidationError
from boat_log.core.validation import DATE_RANGE_ERROR
from boat_log.db.database import BOOKING_OVERLAP_MESSAGE, Database
from boat_log.db.models import Booking, BookingStatus

logger = logging.getLogger(__name__)

_COLUMNS = ("person", "start_date", "end_date", "comment", "status")
_RECHECK_COLUMNS = {"start_date", "end_date", "status"}


def _has_overlap(conn, start_date: str, end_date: str, exclude_id: Optional[int] = None) -> bool:
    query = """SELECT 1 FROM bookings
               WHERE status = ? AND start_date <= ? AND end_date >= ?"""
    params = [BookingStatus.CONFIRMED.value, end_date, start_date]
    if exclude_id is not None:
        query += " AND id != ?"
        params.append(exclude_id)
    return conn.execute(query + " LIMIT 1", params).fetchone() is not None


def _is_overlap_abort(exc: sqlite3.IntegrityError) -> bool:
    return BOOKING_OVERLAP_MESSAGE in str(exc)


class BookingRepository:
    """Access to the bookings table through an injected Database handle."""

    def __init__(self, db: Database):
        self.db = db

    def _select(self, where: str = "", params=()) -> list[Booking]:
        conn = self.db.connect()
        try:
            rows = conn.execute(
                f"SELECT * FROM bookings {where} ORDER BY start_date, id", params
            ).fetchall()
            return [Booking(**dict(row)) for row in rows]
        finally:
            conn.close()

    def get_all(self) -> list[Booking]:
        """Return every booking, earliest start first."""
        return self._select()

    def get_by_person(self, person: str) -> list[Booking]:
        return self._select("WHERE person = ?", (person,))

    def get_by_date_range(self, start_date: str, end_date: str) -> list[Booking]:
        """Return bookings lying entirely inside [start_date, end_date]."""
        return self._select(
            "WHERE start_date >= ? AND end_date <= ?", (start_date, end_date)
        )

    def get(self, booking_id: int) -> Optional[Booking]:
        """Return a single booking by ID, or None if not found."""
        conn = self.db.connect()
        try:
            row = conn.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,)).fetchone()
            return Booking(**dict(row)) if row else None
        finally:
            conn.close()

    def is_available(self, start_date: str, end_date: str, exclude_id: Optional[int] = None) -> bool:
        """True when no confirmed booking (other than exclude_id) overlaps the range."""
        conn = self.db.connect()
        try:
            return not _has_overlap(conn, start_date, end_date, exclude_id)
        finally:
            conn.close()

    def add(self, fields: dict) -> Booking:
        """Insert a validated booking and return it.

        Confirmed bookings are admitted only if the range is free; raises
        BookingConflictError otherwise.
        """
        conn = self.db.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            confirmed = fields["status"] == BookingStatus.CONFIRMED.value
            if confirmed and _has_overlap(conn, fields["start_date"], fields["end_date"]):
                conn.rollback()
                logger.info(
                    "Rejected booking for %s: %s..%s overlaps a confirmed booking",
                    fields["person"], fields["start_date"], fields["end_date"],
                )
                raise BookingConflictError()
            try:
                cursor = conn.execute(
                    """INSERT INTO bookings (person, start_date, end_date, comment, status)
                       VALUES (:person, :start_date, :end_date, :comment, :status)""",
                    fields,
                )
            except sqlite3.IntegrityError as e:
                conn.rollback()
                if _is_overlap_abort(e):
                    raise BookingConflictError()
                raise
            row = conn.execute("SELECT * FROM bookings WHERE id = ?", (cursor.lastrowid,)).fetchone()
            conn.commit()
        finally:
            conn.close()
        booking = Booking(**dict(row))
        logger.info(
            "Created booking %s for %s (%s..%s, %s)",
            booking.id, booking.person, booking.start_date, booking.end_date, booking.status,
        )
        return booking

    def update(self, booking_id: int, fields: dict) -> Optional[Booking]:
        """Apply a partial patch. Returns the updated booking, or None if absent.

        When the patch touches dates or status and the result is confirmed,
        the merged range must not overlap any other confirmed booking.
        """
        fields = {key: value for key, value in fields.items() if key in _COLUMNS}
        conn = self.db.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            existing = conn.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,)).fetchone()
            if existing is None:
                conn.rollback()
                return None
            merged = {**dict(existing), **fields}
            if merged["start_date"] > merged["end_date"]:
                conn.rollback()
                raise ValidationError(DATE_RANGE_ERROR)
            if (
                fields.keys() & _RECHECK_COLUMNS
                and merged["status"] == BookingStatus.CONFIRMED.value
                and _has_overlap(conn, merged["start_date"], merged["end_date"], booking_id)
            ):
                conn.rollback()
                logger.info("Rejected update of booking %s: new range overlaps", booking_id)
                raise BookingConflictError()
            if fields:
                assignments = ", ".join(f"{key} = :{key}" for key in fields)
                try:
                    conn.execute(
                        f"UPDATE bookings SET {assignments} WHERE id = :id",
                        {**fields, "id": booking_id},
                    )
                except sqlite3.IntegrityError as e:
                    conn.rollback()
                    if _is_overlap_abort(e):
                        raise BookingConflictError()
                    raise
            row = conn.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,)).fetchone()
            conn.commit()
            return Booking(**dict(row))
        finally:
            conn.close()

    def delete(self, booking_id: int) -> None:
        """Delete a booking by ID. Deleting a missing ID is not an error."""
        conn = self.db.connect()
        try:
            cursor = conn.execute("DELETE FROM bookings WHERE id = ?", (booking_id,))
            conn.commit()
        finally:
            conn.close()
        if cursor.rowcount:
            logger.info("Deleted booking %s", booking_id)
