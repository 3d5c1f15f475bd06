from functools import wraps
from flask import g, jsonify
from models import db
from models.admin_user import AdminUser
from security.session import get_session_from_request

def load_current_admin():
    sess = get_session_from_request()
    if not sess:
        g.admin = None
        g.session = None
        return
    g.session = sess
    g.admin = db.session.get(AdminUser, sess.admin_id)

def is_admin() -> bool:
    return getattr(g, "admin", None) is not None

def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not is_admin():
            return jsonify(error="Authentication required"), 401
        return fn(*args, **kwargs)
    return wrapper
