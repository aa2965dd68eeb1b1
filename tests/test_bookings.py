def _booking(**overrides):
    data = {
        "person": "Mama",
        "start_date": "2024-07-01",
        "end_date": "2024-07-10",
        "status": "confirmed",
    }
    data.update(overrides)
    return data


def test_create_booking_returns_201(api):
    resp = api.post("/bookings", json=_booking(comment="Sailing week"))
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] > 0
    assert body["person"] == "Mama"
    assert body["start_date"] == "2024-07-01"
    assert body["end_date"] == "2024-07-10"
    assert body["comment"] == "Sailing week"
    assert body["status"] == "confirmed"
    assert body["created_at"]


def test_status_defaults_to_confirmed(api):
    data = _booking()
    del data["status"]
    resp = api.post("/bookings", json=data)
    assert resp.status_code == 201
    assert resp.json()["status"] == "confirmed"


def test_overlapping_confirmed_booking_conflicts(api):
    api.post("/bookings", json=_booking())
    resp = api.post("/bookings", json=_booking(
        person="Tata", start_date="2024-07-05", end_date="2024-07-06",
    ))
    assert resp.status_code == 409
    assert resp.json() == {"error": "Boat is not available for the selected dates"}
    assert len(api.get("/bookings").json()) == 1


def test_touching_ranges_conflict_because_ends_are_inclusive(api):
    api.post("/bookings", json=_booking())
    resp = api.post("/bookings", json=_booking(start_date="2024-07-10", end_date="2024-07-12"))
    assert resp.status_code == 409


def test_adjacent_ranges_do_not_conflict(api):
    api.post("/bookings", json=_booking())
    resp = api.post("/bookings", json=_booking(start_date="2024-07-11", end_date="2024-07-12"))
    assert resp.status_code == 201


def test_pending_and_cancelled_bookings_ignore_overlap(api):
    api.post("/bookings", json=_booking())
    for status in ("pending", "cancelled"):
        resp = api.post("/bookings", json=_booking(
            person="Tata", start_date="2024-07-05", end_date="2024-07-06", status=status,
        ))
        assert resp.status_code == 201
        assert resp.json()["status"] == status


def test_pending_booking_does_not_block_confirmed(api):
    api.post("/bookings", json=_booking(status="pending"))
    resp = api.post("/bookings", json=_booking(person="Pela"))
    assert resp.status_code == 201


def test_inverted_range_rejected_and_nothing_created(api):
    resp = api.post("/bookings", json=_booking(start_date="2024-07-10", end_date="2024-07-01"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Start date must be before or equal to end date"}
    assert api.get("/bookings").json() == []


def test_missing_required_field_rejected_and_nothing_created(api):
    resp = api.post("/bookings", json={"person": "Mama", "start_date": "2024-07-01"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Person, start date, and end date are required"}
    assert api.get("/bookings").json() == []


def test_invalid_person_and_status_rejected(api):
    resp = api.post("/bookings", json=_booking(person="Captain"))
    assert resp.status_code == 400
    assert "Must be one of: Mama, Tata, Matiz, Mroziak, Pela" in resp.json()["error"]

    resp = api.post("/bookings", json=_booking(status="maybe"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid status"}


def test_invalid_date_rejected(api):
    resp = api.post("/bookings", json=_booking(start_date="first of july"))
    assert resp.status_code == 400


def test_trailing_garbage_after_date_rejected(api):
    resp = api.post("/bookings", json=_booking(start_date="2024-07-01zzz"))
    assert resp.status_code == 400
    assert api.get("/bookings").json() == []


def test_time_of_day_is_truncated(api):
    resp = api.post("/bookings", json=_booking(
        start_date="2024-07-01T18:00:00", end_date="2024-07-01T09:00:00",
    ))
    assert resp.status_code == 201
    assert resp.json()["start_date"] == "2024-07-01"
    assert resp.json()["end_date"] == "2024-07-01"


def test_body_must_be_json_object(api):
    resp = api.post("/bookings", json=["Mama"])
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_list_is_ordered_by_start_date(api):
    api.post("/bookings", json=_booking(start_date="2024-08-01", end_date="2024-08-02"))
    api.post("/bookings", json=_booking(start_date="2024-06-01", end_date="2024-06-02"))
    starts = [b["start_date"] for b in api.get("/bookings").json()]
    assert starts == ["2024-06-01", "2024-08-01"]


def test_filter_by_person(api):
    api.post("/bookings", json=_booking(person="Matiz"))
    api.post("/bookings", json=_booking(person="Tata", start_date="2024-09-01", end_date="2024-09-02"))
    resp = api.get("/bookings", params={"person": "Tata"})
    assert [b["person"] for b in resp.json()] == ["Tata"]


def test_unknown_person_filter_is_ignored(api):
    api.post("/bookings", json=_booking())
    resp = api.get("/bookings", params={"person": "Nobody"})
    assert resp.status_code == 200
    assert len(resp.json()) == 1


def test_filter_by_date_range_returns_contained_bookings(api):
    api.post("/bookings", json=_booking(start_date="2024-07-01", end_date="2024-07-03"))
    api.post("/bookings", json=_booking(start_date="2024-07-30", end_date="2024-08-02"))
    resp = api.get("/bookings", params={"startDate": "2024-07-01", "endDate": "2024-07-31"})
    assert [b["start_date"] for b in resp.json()] == ["2024-07-01"]


def test_filter_by_invalid_date_range_rejected(api):
    resp = api.get("/bookings", params={"startDate": "bad", "endDate": "2024-07-01"})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_availability_endpoint(api):
    api.post("/bookings", json=_booking())
    busy = api.get("/bookings/availability", params={"startDate": "2024-07-09", "endDate": "2024-07-12"})
    free = api.get("/bookings/availability", params={"startDate": "2024-07-11", "endDate": "2024-07-12"})
    assert busy.json()["available"] is False
    assert free.json()["available"] is True


def test_availability_requires_both_dates(api):
    resp = api.get("/bookings/availability", params={"startDate": "2024-07-09"})
    assert resp.status_code == 400


def test_get_booking(api):
    booking_id = api.post("/bookings", json=_booking()).json()["id"]
    resp = api.get(f"/bookings/{booking_id}")
    assert resp.status_code == 200
    assert resp.json()["id"] == booking_id


def test_get_booking_bad_id_and_missing(api):
    resp = api.get("/bookings/abc")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid booking ID"}
    resp = api.get("/bookings/999999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Booking not found"}


def test_get_booking_id_out_of_range(api):
    resp = api.get("/bookings/" + "9" * 30)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid booking ID"}


def test_update_comment_only_leaves_other_fields(api):
    created = api.post("/bookings", json=_booking(comment="old")).json()
    resp = api.put(f"/bookings/{created['id']}", json={"comment": "new"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["comment"] == "new"
    for key in ("person", "start_date", "end_date", "status", "created_at"):
        assert updated[key] == created[key]


def test_update_validates_merged_date_range(api):
    created = api.post("/bookings", json=_booking()).json()
    resp = api.put(f"/bookings/{created['id']}", json={"end_date": "2024-06-30"})
    assert resp.status_code == 400
    assert api.get(f"/bookings/{created['id']}").json()["end_date"] == "2024-07-10"


def test_update_into_overlap_conflicts(api):
    api.post("/bookings", json=_booking())
    pending = api.post("/bookings", json=_booking(person="Tata", status="pending")).json()
    resp = api.put(f"/bookings/{pending['id']}", json={"status": "confirmed"})
    assert resp.status_code == 409
    assert api.get(f"/bookings/{pending['id']}").json()["status"] == "pending"


def test_update_own_dates_does_not_conflict_with_itself(api):
    created = api.post("/bookings", json=_booking()).json()
    resp = api.put(f"/bookings/{created['id']}", json={"end_date": "2024-07-12"})
    assert resp.status_code == 200
    assert resp.json()["end_date"] == "2024-07-12"


def test_update_rejects_invalid_person(api):
    created = api.post("/bookings", json=_booking()).json()
    resp = api.put(f"/bookings/{created['id']}", json={"person": "Captain"})
    assert resp.status_code == 400


def test_update_missing_booking_returns_404(api):
    resp = api.put("/bookings/999999", json={"comment": "x"})
    assert resp.status_code == 404


def test_delete_booking(api):
    booking_id = api.post("/bookings", json=_booking()).json()["id"]
    resp = api.delete(f"/bookings/{booking_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Booking deleted successfully"}
    assert api.get(f"/bookings/{booking_id}").status_code == 404


def test_delete_missing_booking_still_succeeds(api):
    resp = api.delete("/bookings/999999")
    assert resp.status_code == 200
    assert api.delete("/bookings/nope").status_code == 400
