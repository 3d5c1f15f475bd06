from models.db import db

class IpRateLimit(db.Model):
    """Fixed-window request counter for /admin/login, one row per client IP."""
    __tablename__ = "ip_rate_limits"

    id = db.Column(db.Integer, primary_key=True)
    ip = db.Column(db.String(64), unique=True, nullable=False)

    window_start = db.Column(db.DateTime, nullable=False)
    count = db.Column(db.Integer, default=0, server_default="0", nullable=False)
