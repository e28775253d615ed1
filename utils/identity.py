import uuid

from flask import request

# Placeholder customer for bookings made without a well-formed customer id
GUEST_CUSTOMER_ID = "00000000-0000-0000-0000-000000000000"

CUSTOMER_HEADER = "X-Customer-Id"


def resolve_customer_id(raw) -> str:
    if not raw:
        return GUEST_CUSTOMER_ID
    try:
        return str(uuid.UUID(str(raw).strip()))
    except ValueError:
        return GUEST_CUSTOMER_ID


def customer_id_from_request(data=None):
    """Caller identity from the JSON body, then the X-Customer-Id header."""
    value = (data or {}).get("customer_id")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return (request.headers.get(CUSTOMER_HEADER) or "").strip() or None


def actor_id_from_request(data=None) -> str:
    # audit rows hold at most a UUID
    return resolve_customer_id(customer_id_from_request(data))
