import threading

import pytest
from sqlalchemy.exc import OperationalError

import services.submission
from models.booking import Booking, BookingService
from models.customer import Customer
from models.slot import AvailabilitySlot
from services import (
    BookingRequest,
    CapacityExceeded,
    StorageError,
    ValidationError,
    check_capacity,
    create_booking,
    submit_booking,
    unit_of_work,
)


def _request(slot, services, name="Client A", phone="5551111111", email="", notes=""):
    return BookingRequest(
        slot_id=str(slot.id),
        name=name,
        phone=phone,
        email=email,
        custom_notes=notes,
        service_ids=[str(s) for s in services],
    )


def test_submit_books_slot_and_links_services(db, make_slot, make_service):
    slot = make_slot(max_bookings=1)
    cut = make_service("Signature Cut")
    gloss = make_service("Color + Gloss")

    booking = submit_booking(_request(slot, [cut.id, gloss.id], notes="first time"))

    assert booking.status == "confirmed"
    assert booking.custom_notes == "first time"
    assert sorted(s.name for s in booking.services) == ["Color + Gloss", "Signature Cut"]
    assert check_capacity(slot.id).current_count == 1
    assert db.session.get(AvailabilitySlot, slot.id).booked_count == 1


def test_second_booking_on_full_slot_is_rejected(make_slot, make_service):
    slot = make_slot(max_bookings=1)
    service = make_service()
    submit_booking(_request(slot, [service.id]))

    with pytest.raises(CapacityExceeded):
        submit_booking(_request(slot, [service.id], name="Client B", phone="5552222222"))

    assert Booking.query.filter_by(slot_id=slot.id).count() == 1
    assert Customer.query.count() == 1


def test_invalid_service_rejects_whole_request(db, make_slot, make_service):
    slot = make_slot()
    service = make_service()

    with pytest.raises(ValidationError) as excinfo:
        submit_booking(_request(slot, [service.id, 999999]))

    assert excinfo.value.messages == ["One or more selected services are unavailable."]
    assert Booking.query.count() == 0
    assert BookingService.query.count() == 0
    assert Customer.query.count() == 0
    # the seat claim was rolled back too
    assert db.session.get(AvailabilitySlot, slot.id).booked_count == 0


def test_inactive_service_is_rejected(make_slot, make_service):
    slot = make_slot()
    retired = make_service("Retired", is_active=False)
    with pytest.raises(ValidationError):
        submit_booking(_request(slot, [retired.id]))
    assert Booking.query.count() == 0


def test_non_numeric_service_id_is_rejected(make_slot, make_service):
    slot = make_slot()
    service = make_service()
    with pytest.raises(ValidationError):
        submit_booking(_request(slot, [service.id, "abc"]))
    assert BookingService.query.count() == 0


def test_out_of_range_service_id_is_rejected(db, make_slot, make_service):
    slot = make_slot()
    service = make_service()
    with pytest.raises(ValidationError) as excinfo:
        submit_booking(_request(slot, [service.id, "9" * 30]))
    assert excinfo.value.messages == ["One or more selected services are unavailable."]
    assert Booking.query.count() == 0
    assert db.session.get(AvailabilitySlot, slot.id).booked_count == 0


def test_create_booking_rejects_out_of_range_slot(make_service, make_customer):
    service = make_service()
    customer = make_customer(phone="5550000")
    with pytest.raises(ValidationError):
        with unit_of_work():
            create_booking(2**63, customer.id, [service.id])
    assert Booking.query.count() == 0


def test_duplicate_service_ids_collapse(make_slot, make_service):
    slot = make_slot()
    service = make_service()
    booking = submit_booking(_request(slot, [service.id, service.id]))
    assert BookingService.query.filter_by(booking_id=booking.id).count() == 1


def test_structural_errors_accumulate_without_writes(make_slot):
    make_slot()
    req = BookingRequest(slot_id="", name="", phone="", email="", service_ids=[])

    with pytest.raises(ValidationError) as excinfo:
        submit_booking(req)

    assert excinfo.value.messages == [
        "Missing selected time block.",
        "Name is required.",
        "Phone or email is required.",
        "Please choose at least one service.",
    ]
    assert Customer.query.count() == 0
    assert Booking.query.count() == 0


def test_unknown_slot_is_a_validation_error(app, make_service):
    service = make_service()
    req = BookingRequest(slot_id="4242", name="Client", phone="555", service_ids=[str(service.id)])
    with pytest.raises(ValidationError) as excinfo:
        submit_booking(req)
    assert excinfo.value.messages == ["Time block not found."]
    assert Customer.query.count() == 0


def test_seat_claim_rechecks_inside_transaction(db, make_slot, make_service, make_customer):
    # another writer holds the last seat but its booking row is not visible yet
    slot = make_slot(max_bookings=1)
    slot.booked_count = 1
    db.session.commit()
    service = make_service()
    customer = make_customer(phone="5550000")

    assert check_capacity(slot.id).is_bookable
    with pytest.raises(CapacityExceeded):
        with unit_of_work():
            create_booking(slot.id, customer.id, [service.id])
    assert Booking.query.count() == 0


def test_create_booking_requires_services(make_slot, make_customer):
    slot = make_slot()
    customer = make_customer(phone="5550000")
    with pytest.raises(ValidationError):
        with unit_of_work():
            create_booking(slot.id, customer.id, [])


def test_storage_failure_rolls_back_customer(monkeypatch, make_slot, make_service):
    slot = make_slot()
    service = make_service()

    def broken_create_booking(*args, **kwargs):
        raise OperationalError("INSERT INTO bookings", {}, Exception("disk I/O error"))

    monkeypatch.setattr(services.submission, "create_booking", broken_create_booking)

    with pytest.raises(StorageError):
        submit_booking(_request(slot, [service.id]))
    assert Customer.query.count() == 0


def test_sequential_attempts_never_exceed_capacity(make_slot, make_service):
    slot = make_slot(max_bookings=2)
    service = make_service()

    outcomes = []
    for i in range(5):
        try:
            submit_booking(_request(slot, [service.id], name=f"Client {i}", phone=f"555000{i}"))
            outcomes.append("ok")
        except CapacityExceeded:
            outcomes.append("full")

    assert outcomes == ["ok", "ok", "full", "full", "full"]
    assert Booking.query.filter_by(slot_id=slot.id).count() == 2


def test_concurrent_attempts_never_exceed_capacity(app, db, make_slot, make_service):
    slot = make_slot(max_bookings=2)
    service = make_service()
    slot_id, service_id = slot.id, service.id
    db.session.remove()

    outcomes = []
    lock = threading.Lock()
    start = threading.Barrier(6)

    def attempt(i):
        with app.app_context():
            req = BookingRequest(
                slot_id=str(slot_id),
                name=f"Client {i}",
                phone=f"555100{i}",
                service_ids=[str(service_id)],
            )
            start.wait()
            try:
                submit_booking(req)
                outcome = "ok"
            except (CapacityExceeded, StorageError) as exc:
                outcome = type(exc).__name__
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    booked = Booking.query.filter_by(slot_id=slot_id).count()
    assert len(outcomes) == 6
    assert booked <= 2
    assert outcomes.count("ok") == booked
    assert db.session.get(AvailabilitySlot, slot_id).booked_count == booked
