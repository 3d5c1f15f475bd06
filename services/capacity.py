from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import func

from models import db
from models.slot import AvailabilitySlot
from models.booking import Booking
from services.errors import SlotNotFound
from services.ids import parse_row_id


@dataclass(frozen=True)
class SlotCapacity:
    slot: AvailabilitySlot
    current_count: int

    @property
    def remaining(self) -> int:
        return max(self.slot.max_bookings - self.current_count, 0)

    @property
    def is_bookable(self) -> bool:
        return self.current_count < self.slot.max_bookings


def check_capacity(slot_id) -> SlotCapacity:
    """
    Point-in-time view of a slot's usage. Every booking row counts,
    whatever its status. Read-only: holding a SlotCapacity reserves nothing.
    """
    sid = parse_row_id(slot_id)
    slot = db.session.get(AvailabilitySlot, sid) if sid is not None else None
    if slot is None:
        raise SlotNotFound(slot_id)

    count = (
        db.session.query(func.count(Booking.id))
        .filter(Booking.slot_id == slot.id)
        .scalar()
    )
    return SlotCapacity(slot=slot, current_count=count or 0)


def list_upcoming_slots(now=None, grace_hours=2, limit=30):
    now = now or datetime.utcnow()
    since = now - timedelta(hours=grace_hours)

    rows = (
        db.session.query(AvailabilitySlot, func.count(Booking.id))
        .outerjoin(Booking, Booking.slot_id == AvailabilitySlot.id)
        .filter(AvailabilitySlot.start_at >= since)
        .group_by(AvailabilitySlot.id)
        .order_by(AvailabilitySlot.start_at.asc())
        .limit(limit)
        .all()
    )
    return [SlotCapacity(slot=s, current_count=c) for s, c in rows]


def list_all_slots():
    rows = (
        db.session.query(AvailabilitySlot, func.count(Booking.id))
        .outerjoin(Booking, Booking.slot_id == AvailabilitySlot.id)
        .group_by(AvailabilitySlot.id)
        .order_by(AvailabilitySlot.start_at.asc())
        .all()
    )
    return [SlotCapacity(slot=s, current_count=c) for s, c in rows]
