"""Boundary validation for request input.

Every function here either returns cleaned values ready for the store or
raises ValidationError with a message fit for the client. Nothing in this
module touches the database. Required-field presence is always checked
before any value is coerced.
"""

import math
from datetime import date, datetime
from typing import Any, Callable, Optional

from boat_log.core.errors import ValidationError
from boat_log.db.models import BookingPerson, BookingStatus, InventoryUnit

DEFAULT_LOW_STOCK_THRESHOLD = 5.0

PERSON_ERROR = "Invalid person. Must be one of: " + ", ".join(p.value for p in BookingPerson)
STATUS_ERROR = "Invalid status"
UNIT_ERROR = "Invalid unit type"
DATE_RANGE_ERROR = "Start date must be before or equal to end date"

_MIN_ID = -(2 ** 63)
_MAX_ID = 2 ** 63 - 1


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_id(raw: Any, label: str) -> int:
    """Parse a path identifier, e.g. parse_id("12", "booking") -> 12.

    Values outside SQLite's 64-bit INTEGER range are rejected too.
    """
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid {label} ID")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID")
    if not _MIN_ID <= value <= _MAX_ID:
        raise ValidationError(f"Invalid {label} ID")
    return value


def parse_date(value: Any, label: str = "date") -> str:
    """Return value as a YYYY-MM-DD string, dropping any time-of-day part."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {label}: expected YYYY-MM-DD")
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text).isoformat()
        # Anything longer must be a full ISO datetime; only its date is kept.
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date().isoformat()
    except ValueError:
        raise ValidationError(f"Invalid {label}: expected YYYY-MM-DD")


def check_date_range(start_date: str, end_date: str) -> None:
    # ISO dates compare correctly as strings
    if start_date > end_date:
        raise ValidationError(DATE_RANGE_ERROR)


def _parse_member(enum_cls, value: Any, message: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError:
        raise ValidationError(message)


def parse_person(value: Any) -> str:
    return _parse_member(BookingPerson, value, PERSON_ERROR)


def parse_status(value: Any) -> str:
    return _parse_member(BookingStatus, value, STATUS_ERROR)


def parse_unit(value: Any) -> str:
    return _parse_member(InventoryUnit, value, UNIT_ERROR)


def parse_quantity(value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError("Quantity must be a non-negative number")
    try:
        quantity = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Quantity must be a non-negative number")
    if math.isnan(quantity) or math.isinf(quantity) or quantity < 0:
        raise ValidationError("Quantity must be a non-negative number")
    return quantity


def parse_flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError("to_buy must be true or false")
    return value


def parse_threshold(raw: Optional[str]) -> float:
    """Parse the lowStock query value; anything unparseable means the default."""
    try:
        threshold = float(raw)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_LOW_STOCK_THRESHOLD
    if math.isnan(threshold) or math.isinf(threshold):
        return DEFAULT_LOW_STOCK_THRESHOLD
    return threshold


def _text(label: str) -> Callable[[Any], str]:
    def parse(value: Any) -> str:
        if _missing(value):
            raise ValidationError(f"{label} cannot be empty")
        if not isinstance(value, str):
            raise ValidationError(f"{label} must be a string")
        return value.strip()
    return parse


def _optional_text(label: str) -> Callable[[Any], Optional[str]]:
    def parse(value: Any) -> Optional[str]:
        if _missing(value):
            return None
        if not isinstance(value, str):
            raise ValidationError(f"{label} must be a string")
        return value.strip()
    return parse


def _optional_date(label: str) -> Callable[[Any], Optional[str]]:
    def parse(value: Any) -> Optional[str]:
        return None if _missing(value) else parse_date(value, label)
    return parse


def _patch(body: dict, parsers: dict) -> dict:
    """Run each parser on the keys actually present in body; ignore the rest."""
    return {key: parse(body[key]) for key, parse in parsers.items() if key in body}


# ── Bookings ───────────────────────────────────────────────────────────────────

_BOOKING_PARSERS = {
    "person": parse_person,
    "start_date": lambda v: parse_date(v, "start date"),
    "end_date": lambda v: parse_date(v, "end date"),
    "comment": _optional_text("Comment"),
    "status": parse_status,
}


def validate_booking_create(body: dict) -> dict:
    if any(_missing(body.get(key)) for key in ("person", "start_date", "end_date")):
        raise ValidationError("Person, start date, and end date are required")
    body = dict(body)
    if _missing(body.get("status")):
        body["status"] = BookingStatus.CONFIRMED.value
    fields = _patch(body, _BOOKING_PARSERS)
    fields.setdefault("comment", None)
    check_date_range(fields["start_date"], fields["end_date"])
    return fields


def validate_booking_update(body: dict) -> dict:
    """Validate a partial booking patch.

    The date range is checked here only when both ends are supplied; the
    repository checks the merged range against the stored row.
    """
    fields = _patch(body, _BOOKING_PARSERS)
    if "start_date" in fields and "end_date" in fields:
        check_date_range(fields["start_date"], fields["end_date"])
    return fields


def validate_date_range(start: Any, end: Any) -> tuple[str, str]:
    if _missing(start) or _missing(end):
        raise ValidationError("startDate and endDate are required")
    start_date = parse_date(start, "start date")
    end_date = parse_date(end, "end date")
    check_date_range(start_date, end_date)
    return start_date, end_date


# ── Inventory ──────────────────────────────────────────────────────────────────

_INVENTORY_PARSERS = {
    "name": _text("Name"),
    "quantity": parse_quantity,
    "unit": parse_unit,
    "category": _optional_text("Category"),
    "expiry_date": _optional_date("expiry date"),
    "notes": _optional_text("Notes"),
    "to_buy": parse_flag,
}


def validate_inventory_create(body: dict) -> dict:
    if _missing(body.get("name")) or body.get("quantity") is None or _missing(body.get("unit")):
        raise ValidationError("Name, quantity, and unit are required")
    fields = _patch(body, _INVENTORY_PARSERS)
    for key in ("category", "expiry_date", "notes"):
        fields.setdefault(key, None)
    fields.setdefault("to_buy", False)
    return fields


def validate_inventory_update(body: dict) -> dict:
    return _patch(body, _INVENTORY_PARSERS)


# ── Logs ───────────────────────────────────────────────────────────────────────

_LOG_PARSERS = {
    "title": _text("Title"),
    "content": _text("Content"),
    "date": lambda v: parse_date(v, "date"),
    "location": _optional_text("Location"),
    "weather": _optional_text("Weather"),
}


def validate_log_create(body: dict) -> dict:
    if any(_missing(body.get(key)) for key in ("title", "content", "date")):
        raise ValidationError("Title, content, and date are required")
    fields = _patch(body, _LOG_PARSERS)
    fields.setdefault("location", None)
    fields.setdefault("weather", None)
    return fields


def validate_log_update(body: dict) -> dict:
    return _patch(body, _LOG_PARSERS)
