from datetime import datetime
from sqlalchemy import false
from models.db import db

class AdminSession(db.Model):
    """Server-side admin login. The cookie carries the raw token, this row only its hash."""
    __tablename__ = "admin_sessions"

    id = db.Column(db.Integer, primary_key=True)
    admin_id = db.Column(
        db.Integer,
        db.ForeignKey("admin_users.id", ondelete="CASCADE"),
        nullable=False,
    )
    token_hash = db.Column(db.String(64), unique=True, nullable=False)  # sha256 hex

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    last_seen_at = db.Column(db.DateTime, nullable=True)  # drives the idle timeout
    expires_at = db.Column(db.DateTime, nullable=False)   # absolute lifetime

    revoked = db.Column(db.Boolean, default=False, server_default=false(), nullable=False)
    revoked_at = db.Column(db.DateTime, nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)

    admin = db.relationship("AdminUser")

    __table_args__ = (
        # live-session lookups per admin
        db.Index("ix_admin_sessions_admin_live", "admin_id", "revoked"),
    )
