from models.db import db

class AvailabilitySlot(db.Model):
    __tablename__ = "availability_slots"

    id = db.Column(db.Integer, primary_key=True)

    start_at = db.Column(db.DateTime, nullable=False, index=True)
    end_at = db.Column(db.DateTime, nullable=False)
    label = db.Column(db.String(160), nullable=True)

    max_bookings = db.Column(db.Integer, nullable=False, default=1, server_default="1")
    # only ever changed by services.bookings.claim_seat
    booked_count = db.Column(db.Integer, nullable=False, default=0, server_default="0")

    status = db.Column(db.String(20), nullable=False, default="open", server_default="open")
    # status values: open, closed (advisory; capacity decides)

    __table_args__ = (
        db.CheckConstraint("max_bookings >= 1", name="ck_slot_capacity_positive"),
        db.CheckConstraint("booked_count <= max_bookings", name="ck_slot_not_overbooked"),
    )
