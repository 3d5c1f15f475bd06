import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as studio.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "studio.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Create tables on startup (migrations mirror the models)
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true"

    # Fill an empty database with demo services and slots
    SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

    # Bootstrap admin, created at startup if missing
    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "nina")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")

    # Admin session cookie
    AUTH_COOKIE_NAME = "studio_admin_session"

    # 12 hours session lifetime
    SESSION_LIFETIME_SECONDS = 12 * 60 * 60

    # Idle timeout: 60 minutes
    IDLE_TIMEOUT_SECONDS = 60 * 60

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"

    # Brute-force protection on /admin/login (per username + IP)
    MAX_LOGIN_ATTEMPTS = int(os.getenv("MAX_LOGIN_ATTEMPTS", "5"))
    LOCKOUT_MINUTES = int(os.getenv("LOCKOUT_MINUTES", "5"))

    # Simple IP rate limit for the login endpoint
    LOGIN_RATE_WINDOW_SECONDS = 60
    LOGIN_RATE_MAX_REQUESTS = int(os.getenv("LOGIN_RATE_MAX_REQUESTS", "15"))

    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Public booking page
    UPCOMING_SLOT_LIMIT = int(os.getenv("UPCOMING_SLOT_LIMIT", "30"))
    UPCOMING_SLOT_GRACE_HOURS = int(os.getenv("UPCOMING_SLOT_GRACE_HOURS", "2"))

    DEBUG = False
