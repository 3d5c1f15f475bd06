from .errors import BookingError, ValidationError, SlotNotFound, CapacityExceeded, StorageError
from .transaction import unit_of_work
from .capacity import SlotCapacity, check_capacity, list_upcoming_slots
from .customers import find_customer, resolve_customer
from .bookings import claim_seat, create_booking
from .submission import BookingRequest, submit_booking
