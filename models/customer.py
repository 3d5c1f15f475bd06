from datetime import datetime
from models.db import db

class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)

    # not unique: identity matching is best-effort, see services.customers
    phone = db.Column(db.String(40), nullable=True, index=True)
    email = db.Column(db.String(255), nullable=True, index=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
