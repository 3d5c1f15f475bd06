from .health import health_bp
from .auth import auth_bp
from .admin import admin_bp
from .audit_logs import audit_bp
from .booking import booking_bp
from .content import content_bp
