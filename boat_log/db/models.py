"""Dataclass models for the three database tables, plus the closed value sets.

Each dataclass maps 1:1 to a table. Dates are stored and returned as ISO
YYYY-MM-DD strings; timestamps are whatever SQLite's CURRENT_TIMESTAMP wrote.
These are plain data containers with no business logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BookingPerson(str, Enum):
    MAMA = "Mama"
    TATA = "Tata"
    MATIZ = "Matiz"
    MROZIAK = "Mroziak"
    PELA = "Pela"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class InventoryUnit(str, Enum):
    PIECES = "pieces"
    GRAMS = "grams"
    KILOGRAMS = "kg"
    LITERS = "liters"
    MILLILITERS = "ml"
    BOTTLES = "bottles"
    CANS = "cans"
    PACKAGES = "packages"
    METERS = "meters"
    CENTIMETERS = "cm"


@dataclass
class Booking:
    """A reservation of the boat by one family member.

    start_date and end_date are inclusive. Only confirmed bookings block
    the calendar.
    """

    id: Optional[int]
    person: str  # BookingPerson value
    start_date: str
    end_date: str
    comment: Optional[str] = None
    status: str = BookingStatus.CONFIRMED.value
    created_at: Optional[str] = None


@dataclass
class InventoryItem:
    """A consumable kept on board (fuel, water, food, spare parts...).

    to_buy is a manual flag; it is not derived from quantity.
    """

    id: Optional[int]
    name: str
    quantity: float
    unit: str  # InventoryUnit value
    category: Optional[str] = None
    expiry_date: Optional[str] = None
    notes: Optional[str] = None
    to_buy: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class LogEntry:
    """One logbook entry describing a trip or a day on the water."""

    id: Optional[int]
    title: str
    content: str
    date: str
    location: Optional[str] = None
    weather: Optional[str] = None
    created_at: Optional[str] = None
