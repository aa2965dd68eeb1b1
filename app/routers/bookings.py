from fastapi import APIRouter, Body, Depends, Query

from app.dependencies import get_bookings
from boat_log.core.bookings import BookingRepository
from boat_log.core.errors import NotFoundError
from boat_log.core.validation import (
    parse_id,
    validate_booking_create,
    validate_booking_update,
    validate_date_range,
)
from boat_log.db.models import BookingPerson

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("")
def bookings_list(
    person: str = "",
    start_date: str = Query("", alias="startDate"),
    end_date: str = Query("", alias="endDate"),
    bookings: BookingRepository = Depends(get_bookings),
):
    # An unknown person is ignored rather than rejected.
    if person in {p.value for p in BookingPerson}:
        return bookings.get_by_person(person)
    if start_date and end_date:
        start, end = validate_date_range(start_date, end_date)
        return bookings.get_by_date_range(start, end)
    return bookings.get_all()


@router.get("/availability")
def bookings_availability(
    start_date: str = Query("", alias="startDate"),
    end_date: str = Query("", alias="endDate"),
    bookings: BookingRepository = Depends(get_bookings),
):
    start, end = validate_date_range(start_date, end_date)
    return {"start_date": start, "end_date": end, "available": bookings.is_available(start, end)}


@router.post("", status_code=201)
def bookings_create(body: dict = Body(...), bookings: BookingRepository = Depends(get_bookings)):
    return bookings.add(validate_booking_create(body))


@router.get("/{booking_id}")
def bookings_get(booking_id: str, bookings: BookingRepository = Depends(get_bookings)):
    booking = bookings.get(parse_id(booking_id, "booking"))
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


@router.put("/{booking_id}")
def bookings_update(
    booking_id: str,
    body: dict = Body(...),
    bookings: BookingRepository = Depends(get_bookings),
):
    booking_id = parse_id(booking_id, "booking")
    booking = bookings.update(booking_id, validate_booking_update(body))
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


@router.delete("/{booking_id}")
def bookings_delete(booking_id: str, bookings: BookingRepository = Depends(get_bookings)):
    bookings.delete(parse_id(booking_id, "booking"))
    return {"message": "Booking deleted successfully"}
