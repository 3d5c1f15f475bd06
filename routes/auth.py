from flask import Blueprint, request, jsonify, current_app, g

from models.admin_user import AdminUser
from security.bruteforce import is_locked, register_failure, reset_attempts
from security.csrf import issue_csrf_token, clear_csrf_token
from security.password import verify_password
from security.rate_limit import check_and_increment_login_rate
from security.session import create_session, revoke_session
from utils.audit import log_event
from utils.auth_context import admin_required


auth_bp = Blueprint("auth", __name__, url_prefix="/admin")


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or request.form
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""

    allowed, retry_after = check_and_increment_login_rate()
    if not allowed:
        log_event("ADMIN_LOGIN_RATE_LIMIT", metadata={"username": username, "retry_after": retry_after})
        return jsonify(error="Too many login requests. Slow down.", retry_after_seconds=retry_after), 429

    locked, seconds_left = is_locked(username)
    if locked:
        log_event("ADMIN_LOGIN_LOCKED", metadata={"username": username, "seconds_left": seconds_left})
        return jsonify(error="Account temporarily locked. Try again later.", retry_after_seconds=seconds_left), 429

    admin = AdminUser.query.filter_by(username=username).first()
    if not admin or not verify_password(password, admin.password_hash):
        fail_count, locked_now = register_failure(username)
        log_event("ADMIN_LOGIN_FAIL", metadata={"username": username, "fail_count": fail_count, "locked_now": locked_now})
        if locked_now:
            return jsonify(
                error="Too many failed attempts. Account locked.",
                lockout_minutes=current_app.config.get("LOCKOUT_MINUTES", 5),
            ), 429
        return jsonify(error="Invalid credentials."), 401

    reset_attempts(username)

    raw_token = create_session(admin.id)
    cookie_name = current_app.config.get("AUTH_COOKIE_NAME", "studio_admin_session")

    resp = jsonify(message="Login OK")
    resp.set_cookie(
        cookie_name,
        raw_token,
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite=current_app.config.get("SESSION_COOKIE_SAMESITE", "Lax"),
        max_age=current_app.config.get("SESSION_LIFETIME_SECONDS", 12 * 60 * 60),
        path="/",
    )
    resp = issue_csrf_token(resp)

    log_event("ADMIN_LOGIN_SUCCESS", admin_id=admin.id)
    return resp, 200


@auth_bp.get("/me")
@admin_required
def me():
    return jsonify(id=g.admin.id, username=g.admin.username), 200


@auth_bp.post("/logout")
@admin_required
def logout():
    cookie_name = current_app.config.get("AUTH_COOKIE_NAME", "studio_admin_session")
    revoke_session(request.cookies.get(cookie_name))
    log_event("ADMIN_LOGOUT", admin_id=g.admin.id)

    resp = jsonify(message="Logged out")
    resp.delete_cookie(cookie_name, path="/")
    return clear_csrf_token(resp), 200
