from datetime import datetime

from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for

from models.service import Service
from models.content import GalleryImage, BlogPost
from services import (
    BookingRequest,
    CapacityExceeded,
    StorageError,
    ValidationError,
    find_customer,
    list_upcoming_slots,
    submit_booking,
)
from utils.audit import log_event

booking_bp = Blueprint("booking", __name__)

STORAGE_FAILURE_MESSAGE = "We could not complete your booking. Please try again."


def _render_booking_page(errors=None, success=False, status=200):
    cfg = current_app.config
    services = Service.query.filter_by(is_active=True).order_by(Service.id.desc()).all()
    slots = list_upcoming_slots(
        now=datetime.utcnow(),
        grace_hours=cfg.get("UPCOMING_SLOT_GRACE_HOURS", 2),
        limit=cfg.get("UPCOMING_SLOT_LIMIT", 30),
    )
    gallery = GalleryImage.query.order_by(GalleryImage.created_at.desc()).limit(18).all()
    posts = BlogPost.query.order_by(BlogPost.created_at.desc()).limit(5).all()
    return render_template(
        "index.html",
        services=services,
        slots=slots,
        gallery=gallery,
        posts=posts,
        errors=errors or [],
        success=success,
    ), status


@booking_bp.get("/")
def index():
    return _render_booking_page(success=request.args.get("booked") == "1")


# ---------- PUBLIC: prefill lookup (name only, never contact details) ----------
@booking_bp.get("/api/customer-lookup")
def customer_lookup():
    phone = (request.args.get("phone") or "").strip()
    email = (request.args.get("email") or "").strip()
    if not phone and not email:
        return jsonify(error="phone or email required"), 400

    customer = find_customer(phone, email)
    if not customer:
        return jsonify(found=False), 200
    return jsonify(found=True, profile={"name": customer.name}), 200


# ---------- PUBLIC: submit booking (capacity safe) ----------
@booking_bp.post("/bookings")
def create_booking():
    req = BookingRequest.from_form(request.form)

    try:
        booking = submit_booking(req)
    except ValidationError as exc:
        return _render_booking_page(errors=exc.messages, status=400)
    except CapacityExceeded as exc:
        log_event("BOOKING_FAIL_FULL", entity="slot", entity_id=exc.slot_id)
        return _render_booking_page(errors=[str(exc)], status=400)
    except StorageError:
        current_app.logger.exception("Booking transaction failed for slot %s", req.slot_id)
        log_event("BOOKING_FAIL_STORAGE", entity="slot", entity_id=req.slot_id)
        return _render_booking_page(errors=[STORAGE_FAILURE_MESSAGE], status=400)

    log_event(
        "BOOKING_CREATE",
        entity="booking",
        entity_id=booking.id,
        metadata={"slot_id": booking.slot_id, "services": len(req.service_ids)},
    )
    return redirect(url_for("booking.index", booked=1), code=303)
