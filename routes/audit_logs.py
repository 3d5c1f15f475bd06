from flask import Blueprint, jsonify, request
from models.audit_log import AuditLog
from utils.auth_context import admin_required

audit_bp = Blueprint("audit", __name__, url_prefix="/admin")


@audit_bp.get("/audit-logs")
@admin_required
def list_audit_logs():
    limit = request.args.get("limit", type=int) or 200
    limit = max(1, min(limit, 500))

    action = request.args.get("action")

    q = AuditLog.query
    if action:
        q = q.filter(AuditLog.action == action)

    rows = q.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
    return jsonify([
        {
            "id": r.id,
            "admin_id": r.admin_id,
            "action": r.action,
            "entity": r.entity,
            "entity_id": r.entity_id,
            "ip": r.ip,
            "metadata": r.metadata_json,
            "timestamp": r.timestamp.isoformat(),
        }
        for r in rows
    ]), 200
