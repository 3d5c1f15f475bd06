from sqlalchemy.exc import OperationalError

import services.submission
from models.audit_log import AuditLog
from models.booking import Booking, BookingService
from models.customer import Customer
from services import check_capacity


def _form(slot_id, services, name="Client A", phone="5551111111", email="", notes=""):
    return {
        "slotId": str(slot_id),
        "name": name,
        "phone": phone,
        "email": email,
        "customNotes": notes,
        "services": [str(s) for s in services],
    }


def test_index_renders_booking_section(client, make_slot, make_service):
    make_slot(label="Tomorrow Morning Glam")
    make_service("Silk Press")
    r = client.get("/")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "Availability Calendar Blocks" in body
    assert "Tomorrow Morning Glam" in body
    assert "Silk Press" in body


def test_index_shows_success_flag(client):
    r = client.get("/?booked=1")
    assert "data-booking-success" in r.get_data(as_text=True)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_booking_created_then_slot_full(client, make_slot, make_service):
    slot = make_slot(max_bookings=1)
    service = make_service()

    r = client.post("/bookings", data=_form(slot.id, [service.id]))
    assert r.status_code == 303
    assert r.headers["Location"].endswith("/?booked=1")
    assert check_capacity(slot.id).current_count == 1

    r2 = client.post("/bookings", data=_form(slot.id, [service.id], name="Client B", phone="5552222222"))
    assert r2.status_code == 400
    assert "This time block is full. Please choose another one." in r2.get_data(as_text=True)
    assert Booking.query.filter_by(slot_id=slot.id).count() == 1
    assert AuditLog.query.filter_by(action="BOOKING_FAIL_FULL").count() == 1


def test_booking_with_unknown_service_leaves_no_rows(client, make_slot, make_service):
    slot = make_slot()
    service = make_service()

    r = client.post("/bookings", data=_form(slot.id, [service.id, 999999]))

    assert r.status_code == 400
    assert "One or more selected services are unavailable." in r.get_data(as_text=True)
    assert Booking.query.count() == 0
    assert BookingService.query.filter_by(service_id=service.id).count() == 0


def test_repeat_customer_keeps_notes(client, make_slot, make_service, make_customer):
    make_customer(name="Old Name", phone="555-0001", notes="allergic to X")
    slot = make_slot()
    service = make_service()

    r = client.post("/bookings", data=_form(slot.id, [service.id], name="New Name", phone="555-0001"))
    assert r.status_code == 303

    customer = Customer.query.one()
    assert customer.notes == "allergic to X"
    assert customer.name == "New Name"
    assert customer.phone == "555-0001"
    assert Booking.query.one().customer_id == customer.id


def test_missing_contact_lists_all_errors(client, make_slot):
    slot = make_slot()
    r = client.post("/bookings", data={"slotId": str(slot.id), "name": ""})

    assert r.status_code == 400
    body = r.get_data(as_text=True)
    assert "Phone or email is required." in body
    assert "Name is required." in body
    assert "Please choose at least one service." in body
    assert Customer.query.count() == 0
    assert Booking.query.count() == 0


def test_unknown_slot_is_reported(client, make_service):
    service = make_service()
    r = client.post("/bookings", data=_form(12345, [service.id]))
    assert r.status_code == 400
    assert "Time block not found." in r.get_data(as_text=True)


def test_storage_failure_shows_generic_message(client, monkeypatch, make_slot, make_service):
    slot = make_slot()
    service = make_service()

    def broken_create_booking(*args, **kwargs):
        raise OperationalError("INSERT INTO bookings", {}, Exception("database is locked"))

    monkeypatch.setattr(services.submission, "create_booking", broken_create_booking)

    r = client.post("/bookings", data=_form(slot.id, [service.id]))
    body = r.get_data(as_text=True)
    assert r.status_code == 400
    assert "We could not complete your booking. Please try again." in body
    assert "database is locked" not in body
    assert Customer.query.count() == 0
    assert AuditLog.query.filter_by(action="BOOKING_FAIL_STORAGE").count() == 1


def test_lookup_requires_phone_or_email(client):
    r = client.get("/api/customer-lookup")
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_lookup_not_found(client):
    r = client.get("/api/customer-lookup?phone=5550000")
    assert r.status_code == 200
    assert r.get_json() == {"found": False}


def test_lookup_returns_name_only(client, make_customer):
    make_customer(name="Client A", phone="5551111111", email="a@example.com", notes="allergic to X")

    r = client.get("/api/customer-lookup?email=a@example.com")
    data = r.get_json()
    assert r.status_code == 200
    assert data == {"found": True, "profile": {"name": "Client A"}}
    raw = r.get_data(as_text=True)
    for leaked in ("5551111111", "a@example.com", "allergic", "phone", "email", "notes"):
        assert leaked not in raw


def test_oversized_slot_id_is_reported_as_missing(client, make_service):
    service = make_service()
    r = client.post("/bookings", data=_form("9" * 30, [service.id]))
    assert r.status_code == 400
    assert "Time block not found." in r.get_data(as_text=True)
    assert Customer.query.count() == 0


def test_oversized_service_id_is_rejected(client, make_slot, make_service):
    slot = make_slot()
    service = make_service()
    r = client.post("/bookings", data=_form(slot.id, [service.id, "9" * 30]))
    assert r.status_code == 400
    assert "One or more selected services are unavailable." in r.get_data(as_text=True)
    assert Booking.query.count() == 0
    assert check_capacity(slot.id).current_count == 0
