from datetime import datetime
from flask import Blueprint, jsonify, g, request

from models import db
from models.service import Service
from models.slot import AvailabilitySlot
from models.booking import Booking
from models.customer import Customer
from models.content import GalleryImage, BlogPost
from services.capacity import list_all_slots
from utils.audit import log_event
from utils.auth_context import admin_required

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")

GALLERY_SOURCES = {"upload", "instagram"}


def _payload():
    return request.get_json(silent=True) or request.form

def _parse_iso(dt_str: str):
    # Expect ISO format like "2026-01-20T18:00:00"
    return datetime.fromisoformat(dt_str)

def _slot_json(capacity):
    s = capacity.slot
    return {
        "id": s.id,
        "start_at": s.start_at.isoformat(),
        "end_at": s.end_at.isoformat(),
        "label": s.label,
        "status": s.status,
        "max_bookings": s.max_bookings,
        "booking_count": capacity.current_count,
        "available": capacity.is_bookable,
    }

def _service_json(s):
    return {
        "id": s.id,
        "name": s.name,
        "description": s.description,
        "duration_minutes": s.duration_minutes,
        "price_cents": s.price_cents,
        "is_active": s.is_active,
    }


@admin_bp.get("/dashboard")
@admin_required
def dashboard():
    services = Service.query.order_by(Service.id.desc()).all()
    posts = BlogPost.query.order_by(BlogPost.created_at.desc()).all()
    bookings = (
        db.session.query(Booking, AvailabilitySlot, Customer)
        .join(AvailabilitySlot, Booking.slot_id == AvailabilitySlot.id)
        .join(Customer, Booking.customer_id == Customer.id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .limit(100)
        .all()
    )

    return jsonify(
        slots=[_slot_json(c) for c in list_all_slots()],
        services=[_service_json(s) for s in services],
        posts=[{"id": p.id, "title": p.title, "created_at": p.created_at.isoformat()} for p in posts],
        bookings=[
            {
                "id": b.id,
                "status": b.status,
                "created_at": b.created_at.isoformat(),
                "custom_notes": b.custom_notes,
                "start_at": s.start_at.isoformat(),
                "end_at": s.end_at.isoformat(),
                "name": c.name,
                "phone": c.phone,
                "email": c.email,
                "services": [sv.name for sv in b.services],
            }
            for b, s, c in bookings
        ],
    ), 200


# ---------- ADMIN: create slots ----------
@admin_bp.post("/slots")
@admin_required
def create_slot():
    data = _payload()
    start_at = data.get("startAt")
    end_at = data.get("endAt")
    label = (data.get("label") or "").strip() or None

    if not start_at or not end_at:
        return jsonify(error="startAt and endAt are required"), 400

    try:
        st = _parse_iso(start_at)
        et = _parse_iso(end_at)
    except (TypeError, ValueError):
        return jsonify(error="Invalid datetime format. Use ISO e.g. 2026-01-20T18:00:00"), 400

    if et <= st:
        return jsonify(error="endAt must be after startAt"), 400

    raw_max = data.get("maxBookings")
    try:
        max_bookings = 1 if raw_max in (None, "") else int(raw_max)
    except (TypeError, ValueError):
        return jsonify(error="maxBookings must be a whole number"), 400
    if max_bookings < 1:
        return jsonify(error="maxBookings must be at least 1"), 400

    slot = AvailabilitySlot(start_at=st, end_at=et, label=label, max_bookings=max_bookings)
    db.session.add(slot)
    db.session.commit()

    log_event("SLOT_CREATE", admin_id=g.admin.id, entity="slot", entity_id=slot.id)
    return jsonify(id=slot.id), 201


# ---------- ADMIN: services ----------
@admin_bp.post("/services")
@admin_required
def create_service():
    data = _payload()
    name = (data.get("name") or "").strip()
    description = (data.get("description") or "").strip() or None
    if not name:
        return jsonify(error="Service name required"), 400

    try:
        duration = int(data.get("durationMinutes") or 60)
        price_cents = round(float(data.get("priceDollars") or 0) * 100)
    except (TypeError, ValueError):
        return jsonify(error="durationMinutes and priceDollars must be numbers"), 400
    if duration <= 0 or price_cents < 0:
        return jsonify(error="durationMinutes must be positive and priceDollars not negative"), 400

    service = Service(name=name, description=description, duration_minutes=duration, price_cents=price_cents)
    db.session.add(service)
    db.session.commit()

    log_event("SERVICE_CREATE", admin_id=g.admin.id, entity="service", entity_id=service.id)
    return jsonify(id=service.id, price_cents=service.price_cents), 201


@admin_bp.post("/services/<int:service_id>/deactivate")
@admin_required
def deactivate_service(service_id: int):
    service = db.session.get(Service, service_id)
    if not service:
        return jsonify(error="Service not found"), 404

    service.is_active = False
    db.session.commit()

    log_event("SERVICE_DEACTIVATE", admin_id=g.admin.id, entity="service", entity_id=service_id)
    return jsonify(message="Service deactivated"), 200


# ---------- ADMIN: gallery + blog ----------
@admin_bp.post("/gallery")
@admin_required
def add_gallery_image():
    data = _payload()
    image_url = (data.get("imageUrl") or "").strip()
    title = (data.get("title") or "").strip()
    source = (data.get("source") or "instagram").strip().lower()

    if not image_url:
        return jsonify(error="imageUrl is required"), 400
    if source not in GALLERY_SOURCES:
        return jsonify(error="source must be upload or instagram"), 400

    image = GalleryImage(title=title, image_url=image_url, source=source)
    db.session.add(image)
    db.session.commit()

    log_event("GALLERY_ADD", admin_id=g.admin.id, entity="gallery_image", entity_id=image.id)
    return jsonify(id=image.id), 201


@admin_bp.post("/posts")
@admin_required
def create_post():
    data = _payload()
    title = (data.get("title") or "").strip()
    body = (data.get("body") or "").strip()
    image_url = (data.get("imageUrl") or "").strip() or None

    if not title or not body:
        return jsonify(error="title and body are required"), 400

    post = BlogPost(title=title, body=body, image_url=image_url)
    db.session.add(post)
    db.session.commit()

    log_event("POST_CREATE", admin_id=g.admin.id, entity="blog_post", entity_id=post.id)
    return jsonify(id=post.id), 201
