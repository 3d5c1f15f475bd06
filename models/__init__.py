from .db import db
from .admin_user import AdminUser
from .session import AdminSession
from .audit_log import AuditLog
from .service import Service
from .slot import AvailabilitySlot
from .customer import Customer
from .booking import Booking, BookingService
from .content import GalleryImage, BlogPost
from .login_attempt import LoginAttempt
from .ip_rate_limit import IpRateLimit
