# tests/conftest.py
from datetime import datetime, timedelta

import pytest

from app import create_app
from config import Config
from models import db as _db
from models.admin_user import AdminUser
from models.customer import Customer
from models.service import Service
from models.slot import AvailabilitySlot
from security.password import hash_password


@pytest.fixture(scope="function")
def app(tmp_path):
    class TestingConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'test.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"check_same_thread": False, "timeout": 15}}
        SEED_DEMO_DATA = False
        ADMIN_PASSWORD = None
        BCRYPT_ROUNDS = 4

    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


# Factories
@pytest.fixture
def make_service(db):
    def _make_service(name="Signature Cut", price_cents=7000, duration_minutes=60, is_active=True):
        s = Service(name=name, price_cents=price_cents, duration_minutes=duration_minutes, is_active=is_active)
        db.session.add(s)
        db.session.commit()
        return s
    return _make_service


@pytest.fixture
def make_slot(db):
    def _make_slot(max_bookings=1, start=None, label="Morning Glam"):
        now = datetime.utcnow().replace(minute=0, second=0, microsecond=0)
        start = start or (now + timedelta(days=1))
        slot = AvailabilitySlot(start_at=start, end_at=start + timedelta(hours=2), label=label, max_bookings=max_bookings)
        db.session.add(slot)
        db.session.commit()
        return slot
    return _make_slot


@pytest.fixture
def make_customer(db):
    def _make_customer(name="Client", phone=None, email=None, notes=None, updated_at=None):
        c = Customer(name=name, phone=phone, email=email, notes=notes)
        if updated_at is not None:
            c.updated_at = updated_at
        db.session.add(c)
        db.session.commit()
        return c
    return _make_customer


@pytest.fixture
def make_admin(db):
    def _make_admin(username="nina", password="test-pass"):
        admin = AdminUser(username=username, password_hash=hash_password(password))
        db.session.add(admin)
        db.session.commit()
        return admin
    return _make_admin


@pytest.fixture
def admin_client(client, make_admin):
    make_admin()
    r = client.post("/admin/login", json={"username": "nina", "password": "test-pass"})
    assert r.status_code == 200
    client.environ_base["HTTP_X_CSRF_TOKEN"] = client.get_cookie("csrf_token").value
    return client
