from datetime import datetime
from models.db import db

class LoginAttempt(db.Model):
    __tablename__ = "login_attempts"

    id = db.Column(db.Integer, primary_key=True)

    # keyed on username + ip: one noisy client cannot lock the owner out everywhere
    username = db.Column(db.String(80), nullable=False)
    ip = db.Column(db.String(64), nullable=False)

    fail_count = db.Column(db.Integer, default=0, server_default="0", nullable=False)
    last_fail_at = db.Column(db.DateTime, nullable=True)
    locked_until = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("username", "ip", name="uq_login_attempt_username_ip"),
    )
