from dataclasses import dataclass, field

from services.errors import CapacityExceeded, ValidationError
from services.transaction import unit_of_work
from services.capacity import check_capacity
from services.customers import resolve_customer
from services.bookings import create_booking


@dataclass
class BookingRequest:
    slot_id: str = ""
    name: str = ""
    phone: str = ""
    email: str = ""
    custom_notes: str = ""
    service_ids: list = field(default_factory=list)

    @classmethod
    def from_form(cls, form):
        """Build from a werkzeug MultiDict; `services` may repeat."""
        services = [s for s in form.getlist("services") if (s or "").strip()]
        return cls(
            slot_id=(form.get("slotId") or "").strip(),
            name=(form.get("name") or "").strip(),
            phone=(form.get("phone") or "").strip(),
            email=(form.get("email") or "").strip(),
            custom_notes=(form.get("customNotes") or "").strip(),
            service_ids=[s.strip() for s in services],
        )

    def validate(self):
        errors = []
        if not self.slot_id:
            errors.append("Missing selected time block.")
        if not self.name:
            errors.append("Name is required.")
        if not self.phone and not self.email:
            errors.append("Phone or email is required.")
        if not self.service_ids:
            errors.append("Please choose at least one service.")
        return errors


def submit_booking(req: BookingRequest):
    """
    Validate and allocate a booking.

    Structural problems are reported together before the database is
    touched. After that each step fails fast: missing slot, full slot,
    bad services. Everything from the customer upsert to the association
    rows is one unit of work.
    """
    errors = req.validate()
    if errors:
        raise ValidationError(errors)

    with unit_of_work():
        capacity = check_capacity(req.slot_id)
        if not capacity.is_bookable:
            raise CapacityExceeded(capacity.slot.id)

        customer = resolve_customer(req.name, req.phone, req.email, req.custom_notes)
        booking = create_booking(capacity.slot.id, customer.id, req.service_ids, req.custom_notes)

    return booking
