from datetime import datetime

from sqlalchemy import or_

from models import db
from models.customer import Customer


def _clean(value):
    value = (value or "").strip()
    return value or None


def find_customer(phone=None, email=None):
    """
    Best-effort identity match.

    Returns the most recently updated customer whose phone equals `phone`
    OR whose email equals `email`; only non-empty values take part. Ties
    on updated_at go to the newest row.

    Known limitation: this is not a unique key. A phone-only request can
    match a record carrying a different email, and when several records
    match, recency wins.
    """
    phone = _clean(phone)
    email = _clean(email)

    conditions = []
    if phone:
        conditions.append(Customer.phone == phone)
    if email:
        conditions.append(Customer.email == email)
    if not conditions:
        return None

    return (
        Customer.query
        .filter(or_(*conditions))
        .order_by(Customer.updated_at.desc(), Customer.id.desc())
        .first()
    )


def resolve_customer(name, phone=None, email=None, notes=None) -> Customer:
    """
    Find-or-create the customer for a booking. Flushes but does not commit;
    the caller's unit of work decides.

    On a match the submitted name, phone and email replace the stored ones,
    even when that blanks a contact channel. Notes are only replaced by
    fresh non-empty notes.
    """
    name = (name or "").strip()
    phone = _clean(phone)
    email = _clean(email)
    notes = _clean(notes)

    customer = find_customer(phone, email)
    if customer is None:
        customer = Customer(name=name, phone=phone, email=email, notes=notes)
        db.session.add(customer)
    else:
        customer.name = name
        customer.phone = phone
        customer.email = email
        customer.notes = notes or customer.notes or None
        customer.updated_at = datetime.utcnow()

    db.session.flush()
    return customer
