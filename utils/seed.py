from datetime import datetime, timedelta
from flask import current_app

from models import db
from models.admin_user import AdminUser
from models.service import Service
from models.slot import AvailabilitySlot
from security.password import hash_password

DEFAULT_SERVICES = [
    ("Silk Press", "Smooth and sleek natural styling.", 90, 9500),
    ("Color + Gloss", "Custom color with shine enhancement.", 120, 14500),
    ("Signature Cut", "Precision trim or shape-up.", 60, 7000),
    ("Protective Style", "Low-manipulation style with finish.", 150, 16000),
]

def ensure_admin_user():
    username = current_app.config.get("ADMIN_USERNAME")
    password = current_app.config.get("ADMIN_PASSWORD")
    if not username or not password:
        return None

    admin = AdminUser.query.filter_by(username=username).first()
    if not admin:
        admin = AdminUser(username=username, password_hash=hash_password(password))
        db.session.add(admin)
        db.session.commit()
    return admin

def seed_demo_data(now=None):
    """Fill an empty database with a few services and slots (safe & idempotent)."""
    if Service.query.count() == 0:
        for name, description, minutes, cents in DEFAULT_SERVICES:
            db.session.add(Service(name=name, description=description, duration_minutes=minutes, price_cents=cents))

    if AvailabilitySlot.query.count() == 0:
        now = now or datetime.utcnow()

        def at(days, hour):
            day = now + timedelta(days=days)
            return day.replace(hour=hour, minute=0, second=0, microsecond=0)

        db.session.add_all([
            AvailabilitySlot(start_at=at(1, 10), end_at=at(1, 12), label="Tomorrow Morning Glam", max_bookings=1),
            AvailabilitySlot(start_at=at(1, 13), end_at=at(1, 15), label="Tomorrow Afternoon Refresh", max_bookings=1),
            AvailabilitySlot(start_at=at(2, 11), end_at=at(2, 13), label="Premium Weekend Session", max_bookings=2),
        ])

    db.session.commit()
