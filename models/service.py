from models.db import db

class Service(db.Model):
    __tablename__ = "services"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)

    price_cents = db.Column(db.Integer, nullable=False, default=0)  # smallest currency unit
    # inactive services stay referenced by old bookings, hidden from new ones
    is_active = db.Column(db.Boolean, default=True, nullable=False)
