"""
Failures raised by the booking allocator.

Routes translate these into HTTP responses; nothing below the route layer
builds a response itself.
"""


class BookingError(Exception):
    """Base class for every allocator failure."""


class ValidationError(BookingError):
    """
    Client input is malformed or incomplete.

    Carries every message collected so the customer can fix all of them
    in one round trip.
    """

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class SlotNotFound(ValidationError):
    def __init__(self, slot_id=None):
        self.slot_id = slot_id
        super().__init__("Time block not found.")


class CapacityExceeded(BookingError):
    def __init__(self, slot_id=None):
        self.slot_id = slot_id
        super().__init__("This time block is full. Please choose another one.")


class StorageError(BookingError):
    """The transaction failed in the database. Never retried."""
