import click
from flask import Flask, request

from config import Config
from routes import health_bp, auth_bp, admin_bp, audit_bp, booking_bp, content_bp
from models import db
from models.admin_user import AdminUser
from flask_migrate import Migrate
from security.csrf import require_csrf
from security.password import hash_password
from utils.auth_context import load_current_admin, is_admin
from utils.seed import ensure_admin_user, seed_demo_data


CSRF_EXEMPT_PATHS = {"/admin/login"}


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(audit_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(content_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()
            ensure_admin_user()
            if app.config.get("SEED_DEMO_DATA"):
                seed_demo_data()

    @app.before_request
    def _load_admin():
        load_current_admin()

    @app.before_request
    def _csrf_protect():
        # cookie-authenticated admin writes only; /bookings stays a plain public form
        if request.method not in ("POST", "PUT", "PATCH", "DELETE"):
            return None
        if not request.path.startswith("/admin/") or request.path in CSRF_EXEMPT_PATHS:
            return None
        if is_admin():
            return require_csrf()
        return None

    @app.context_processor
    def _template_flags():
        return {"admin": is_admin()}

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        return resp

    register_cli(app)

    return app


def register_cli(app):
    @app.cli.command("create-admin")
    @click.argument("username")
    @click.password_option()
    def create_admin(username, password):
        """Create an admin account, or reset its password if it exists."""
        admin = AdminUser.query.filter_by(username=username.strip()).first()
        if admin:
            admin.password_hash = hash_password(password)
            message = f"Password reset for {admin.username}"
        else:
            admin = AdminUser(username=username.strip(), password_hash=hash_password(password))
            db.session.add(admin)
            message = f"Admin {admin.username} created"
        db.session.commit()
        click.echo(message)

    @app.cli.command("seed-demo")
    def seed_demo():
        """Add demo services and slots to an empty database."""
        seed_demo_data()
        click.echo("Demo data ready")


if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=8080)
