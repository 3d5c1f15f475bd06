import json
from flask import request
from models import db
from models.audit_log import AuditLog
from security.client import client_ip

# customer contact details never reach the audit trail
REDACTED_KEYS = {"phone", "email", "notes", "custom_notes", "customNotes", "password"}


def _redact(metadata):
    if not metadata:
        return None
    clean = {k: v for k, v in metadata.items() if k not in REDACTED_KEYS}
    return clean or None


def log_event(action: str, admin_id=None, entity=None, entity_id=None, metadata=None):
    user_agent = request.headers.get("User-Agent", "")
    metadata = _redact(metadata)

    row = AuditLog(
        admin_id=admin_id,
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=client_ip(),
        user_agent=user_agent[:255] if user_agent else None,
        metadata_json=json.dumps(metadata) if metadata else None,
    )
    db.session.add(row)
    db.session.commit()
