from datetime import datetime
from models.db import db

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=False, index=True)
    slot_id = db.Column(db.Integer, db.ForeignKey("availability_slots.id"), nullable=False, index=True)

    status = db.Column(db.String(20), nullable=False, default="confirmed")
    # status values: confirmed (every status still occupies a seat)

    custom_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    customer = db.relationship("Customer")
    slot = db.relationship("AvailabilitySlot")
    services = db.relationship("Service", secondary="booking_services", viewonly=True)


class BookingService(db.Model):
    __tablename__ = "booking_services"

    # composite key: a service is linked to a booking at most once
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id"), primary_key=True)
    service_id = db.Column(db.Integer, db.ForeignKey("services.id"), primary_key=True)
