from datetime import datetime, timedelta
from flask import current_app

from models import db
from models.login_attempt import LoginAttempt
from security.client import client_ip


def _row(username: str):
    return LoginAttempt.query.filter_by(username=username, ip=client_ip()).first()

def is_locked(username: str) -> tuple[bool, int]:
    """Returns (locked, seconds_remaining) for this username from this IP."""
    row = _row(username)
    if not row or not row.locked_until:
        return False, 0

    now = datetime.utcnow()
    if row.locked_until <= now:
        return False, 0
    return True, max(int((row.locked_until - now).total_seconds()), 1)

def register_failure(username: str) -> tuple[int, bool]:
    """Counts a failed password. Returns (fail_count, locked_now)."""
    now = datetime.utcnow()
    row = _row(username)
    if not row:
        row = LoginAttempt(username=username, ip=client_ip(), fail_count=0)
        db.session.add(row)

    # a lock that ran out starts a fresh count
    if row.locked_until and row.locked_until <= now:
        row.fail_count = 0
        row.locked_until = None

    row.fail_count += 1
    row.last_fail_at = now

    locked_now = row.fail_count >= current_app.config.get("MAX_LOGIN_ATTEMPTS", 5)
    if locked_now:
        row.locked_until = now + timedelta(minutes=current_app.config.get("LOCKOUT_MINUTES", 5))

    db.session.commit()
    return row.fail_count, locked_now

def reset_attempts(username: str):
    row = _row(username)
    if not row:
        return
    db.session.delete(row)
    db.session.commit()
