from sqlalchemy import update

from models import db
from models.slot import AvailabilitySlot
from models.service import Service
from models.booking import Booking, BookingService
from services.errors import CapacityExceeded, SlotNotFound, ValidationError
from services.ids import parse_row_id

INVALID_SERVICES_MESSAGE = "One or more selected services are unavailable."


def claim_seat(slot_id: int) -> None:
    """
    Take one seat in the slot with a single conditional increment.

    The capacity test and the write are one statement, so two writers
    racing for the last seat cannot both pass. Must run inside a
    unit_of_work so the seat is given back if the booking fails later.
    """
    stmt = (
        update(AvailabilitySlot)
        .where(
            AvailabilitySlot.id == slot_id,
            AvailabilitySlot.booked_count < AvailabilitySlot.max_bookings,
        )
        .values(booked_count=AvailabilitySlot.booked_count + 1)
        .execution_options(synchronize_session=False)
    )
    result = db.session.execute(stmt)
    if result.rowcount != 1:
        raise CapacityExceeded(slot_id)


def _normalize_service_ids(service_ids):
    """De-duplicate keeping first-seen order. Returns None if any id cannot name a row."""
    ids = []
    for raw in service_ids or []:
        sid = parse_row_id(raw)
        if sid is None:
            return None
        if sid not in ids:
            ids.append(sid)
    return ids


def _active_services(service_ids):
    ids = _normalize_service_ids(service_ids)
    if not ids:
        raise ValidationError(INVALID_SERVICES_MESSAGE)

    found = (
        Service.query
        .filter(Service.id.in_(ids), Service.is_active.is_(True))
        .all()
    )
    # all-or-nothing: one unknown or inactive id rejects the whole request
    if len(found) != len(ids):
        raise ValidationError(INVALID_SERVICES_MESSAGE)
    return ids


def create_booking(slot_id, customer_id, service_ids, notes=None) -> Booking:
    """
    Write one booking plus one association row per service.

    Runs inside the caller's unit_of_work: the seat claim, the booking
    header and the associations commit together or not at all.
    """
    sid = parse_row_id(slot_id)
    if sid is None:
        raise SlotNotFound(slot_id)
    claim_seat(sid)
    ids = _active_services(service_ids)

    booking = Booking(
        slot_id=sid,
        customer_id=customer_id,
        custom_notes=(notes or "").strip() or None,
        status="confirmed",
    )
    db.session.add(booking)
    db.session.flush()

    db.session.add_all([BookingService(booking_id=booking.id, service_id=service_id) for service_id in ids])
    db.session.flush()
    return booking
