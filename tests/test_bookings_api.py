from datetime import date, timedelta
from decimal import Decimal

from quickcourt.models import FacilityStatus


def booking_payload(court, start="10:00:00", end="12:00:00", day="2025-08-20"):
    return {"court_id": court.id, "date": day, "start_time": start, "end_time": end}


def test_book_conflict_and_adjacent(client, player, court, auth_headers):
    headers = auth_headers(player)

    first = client.post("/bookings/", json=booking_payload(court), headers=headers)
    conflict = client.post("/bookings/", json=booking_payload(court, "11:00:00", "13:00:00"), headers=headers)
    adjacent = client.post("/bookings/", json=booking_payload(court, "12:00:00", "13:00:00"), headers=headers)

    assert first.status_code == 201, first.text
    assert first.json()["status"] == "confirmed"
    assert Decimal(str(first.json()["total_price"])) == Decimal("1200")
    assert Decimal(str(first.json()["duration"])) == Decimal("2")
    assert first.json()["court"]["name"] == "Court X"

    assert conflict.status_code == 409
    assert conflict.json() == {"detail": "Time slot already booked", "code": "slot_conflict"}

    assert adjacent.status_code == 201
    assert Decimal(str(adjacent.json()["total_price"])) == Decimal("600")


def test_booking_errors(client, player, owner, court, make_facility, make_court, auth_headers):
    headers = auth_headers(player)
    pending_court = make_court(make_facility(owner, status=FacilityStatus.pending))

    backwards = client.post("/bookings/", json=booking_payload(court, "12:00:00", "10:00:00"), headers=headers)
    missing = client.post("/bookings/", json=dict(booking_payload(court), court_id=9999), headers=headers)
    pending = client.post("/bookings/", json=booking_payload(pending_court), headers=headers)
    anonymous = client.post("/bookings/", json=booking_payload(court))

    assert backwards.status_code == 400
    assert backwards.json()["code"] == "validation_error"
    assert missing.status_code == 404
    assert pending.status_code == 400
    assert pending.json()["code"] == "facility_not_approved"
    assert anonymous.status_code == 401


def test_blocked_slot_returns_409(client, owner, player, court, auth_headers):
    client.post(
        f"/courts/{court.id}/block-slots",
        json={"date": "2025-08-20", "start_time": "14:00:00", "end_time": "16:00:00"},
        headers=auth_headers(owner),
    )

    response = client.post("/bookings/", json=booking_payload(court, "15:00:00", "17:00:00"), headers=auth_headers(player))

    assert response.status_code == 409
    assert response.json()["code"] == "slot_blocked"


def test_cancel_flow(client, player, other_player, court, auth_headers):
    day = str(date.today() + timedelta(days=5))
    created = client.post("/bookings/", json=booking_payload(court, day=day), headers=auth_headers(player)).json()

    stranger = client.patch(f"/bookings/{created['id']}/cancel", headers=auth_headers(other_player))
    cancelled = client.patch(
        f"/bookings/{created['id']}/cancel",
        json={"reason": "Match moved"},
        headers=auth_headers(player),
    )
    again = client.patch(f"/bookings/{created['id']}/cancel", headers=auth_headers(player))
    missing = client.patch("/bookings/9999/cancel", headers=auth_headers(player))

    assert stranger.status_code == 403
    assert cancelled.status_code == 200, cancelled.text
    assert cancelled.json()["status"] == "cancelled"
    assert cancelled.json()["cancellation_reason"] == "Match moved"
    assert again.status_code == 400
    assert again.json()["code"] == "already_cancelled"
    assert missing.status_code == 404


def test_cancel_past_booking(client, player, court, auth_headers):
    yesterday = str(date.today() - timedelta(days=1))
    created = client.post("/bookings/", json=booking_payload(court, day=yesterday), headers=auth_headers(player)).json()

    response = client.patch(f"/bookings/{created['id']}/cancel", headers=auth_headers(player))

    assert response.status_code == 400
    assert response.json()["code"] == "booking_in_past"


def test_availability_endpoint(client, player, court, auth_headers):
    client.post("/bookings/", json=booking_payload(court), headers=auth_headers(player))

    response = client.get(f"/bookings/availability/{court.id}/2025-08-20")

    assert response.status_code == 200
    slots = response.json()
    assert len(slots) == 17
    assert slots[0]["start_time"] == "06:00:00"
    assert slots[-1]["end_time"] == "23:00:00"
    taken = [s["start_time"] for s in slots if not s["available"]]
    assert taken == ["10:00:00", "11:00:00"]
    assert Decimal(str(slots[0]["price"])) == Decimal("600")


def test_availability_for_unknown_court(client):
    assert client.get("/bookings/availability/9999/2025-08-20").status_code == 404


def test_my_bookings_is_paginated(client, player, other_player, court, auth_headers):
    for start, end in (("06:00:00", "07:00:00"), ("07:00:00", "08:00:00"), ("08:00:00", "09:00:00")):
        client.post("/bookings/", json=booking_payload(court, start, end), headers=auth_headers(player))
    client.post("/bookings/", json=booking_payload(court, "20:00:00", "21:00:00"), headers=auth_headers(other_player))

    page = client.get("/bookings/my-bookings", params={"limit": 2}, headers=auth_headers(player)).json()
    last = client.get("/bookings/my-bookings", params={"limit": 2, "page": 2}, headers=auth_headers(player)).json()

    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert page["current_page"] == 1
    assert [b["start_time"] for b in page["items"]] == ["08:00:00", "07:00:00"]
    assert [b["start_time"] for b in last["items"]] == ["06:00:00"]

    cancelled = client.get("/bookings/my-bookings", params={"status": "cancelled"}, headers=auth_headers(player)).json()
    assert cancelled["total"] == 0
    assert cancelled["total_pages"] == 0


def test_facility_bookings_for_owner(client, owner, other_owner, player, court, auth_headers):
    client.post("/bookings/", json=booking_payload(court), headers=auth_headers(player))

    mine = client.get("/bookings/facility-bookings", headers=auth_headers(owner))
    theirs = client.get("/bookings/facility-bookings", headers=auth_headers(other_owner))
    as_player = client.get("/bookings/facility-bookings", headers=auth_headers(player))

    assert mine.status_code == 200
    assert mine.json()["total"] == 1
    assert mine.json()["items"][0]["user"]["email"] == player.email
    assert theirs.json()["total"] == 0
    assert as_player.status_code == 403


def test_admin_sees_all_bookings(client, admin, owner, player, court, auth_headers):
    client.post("/bookings/", json=booking_payload(court), headers=auth_headers(player))

    response = client.get("/bookings/admin/all", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert client.get("/bookings/admin/all", headers=auth_headers(owner)).status_code == 403


def test_times_with_timezone_offset_are_rejected(client, player, court, auth_headers):
    response = client.post(
        "/bookings/",
        json=booking_payload(court, "10:00Z", "11:00"),
        headers=auth_headers(player),
    )

    assert response.status_code == 422
    assert client.get("/bookings/my-bookings", headers=auth_headers(player)).json()["total"] == 0


def test_fractional_hour_price_matches_duration(client, player, court, auth_headers):
    response = client.post(
        "/bookings/",
        json=booking_payload(court, "10:00:00", "10:20:00"),
        headers=auth_headers(player),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert Decimal(str(body["duration"])) == Decimal("0.33")
    assert Decimal(str(body["total_price"])) == Decimal("600.00") * Decimal(str(body["duration"]))
