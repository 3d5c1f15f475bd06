from datetime import datetime, timedelta
from flask import current_app

from models import db
from models.ip_rate_limit import IpRateLimit
from security.client import client_ip

def check_and_increment_login_rate() -> tuple[bool, int]:
    """
    Returns (allowed, retry_after_seconds).
    Fixed window per IP, counted before the password is checked.
    """
    ip = client_ip()
    now = datetime.utcnow()
    window = timedelta(seconds=current_app.config.get("LOGIN_RATE_WINDOW_SECONDS", 60))
    max_requests = current_app.config.get("LOGIN_RATE_MAX_REQUESTS", 15)

    row = IpRateLimit.query.filter_by(ip=ip).first()
    if not row:
        row = IpRateLimit(ip=ip, window_start=now, count=0)
        db.session.add(row)
    elif now >= row.window_start + window:
        row.window_start = now
        row.count = 0

    row.count += 1
    db.session.commit()

    if row.count > max_requests:
        retry_after = int((row.window_start + window - now).total_seconds())
        return False, max(retry_after, 1)
    return True, 0
