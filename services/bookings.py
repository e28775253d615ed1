from flask import current_app

from models import db
from models.booking import BOOKING_STATUSES, Booking
from services.errors import NotFound, ValidationError, store_errors


def get_booking(booking_id: str) -> Booking:
    with store_errors("load the booking"):
        booking = db.session.get(Booking, booking_id) if booking_id else None
        if not booking:
            raise NotFound("Booking not found")
        return booking


def list_bookings(ground_id=None, customer_id=None, status=None):
    """Newest first, capped at BOOKING_LIST_LIMIT rows."""
    if status and status not in BOOKING_STATUSES:
        raise ValidationError("Unknown booking status", status=status, allowed=list(BOOKING_STATUSES))

    limit = current_app.config.get("BOOKING_LIST_LIMIT", 200)
    with store_errors("load bookings"):
        q = Booking.query
        if ground_id:
            q = q.filter_by(ground_id=ground_id)
        if customer_id:
            q = q.filter_by(customer_id=customer_id)
        if status:
            q = q.filter_by(booking_status=status)
        return q.order_by(Booking.created_at.desc()).limit(limit).all()
