"""Cancellation: mark a booking cancelled and give its slots back.

The booking status is committed before any slot is touched. Slot release is
best effort: a slot that fails to release is logged and reported, and stays
booked until someone reconciles it, but the booking stays cancelled.
"""
import logging
from collections import namedtuple
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.booking import Booking, booking_slots
from models.slot import Slot
from services.errors import NotFound, store_errors
from utils.audit import log_event

logger = logging.getLogger(__name__)

ReleaseReport = namedtuple("ReleaseReport", ["released", "failed"])


def _release_batch(slot_ids: List[str]) -> None:
    Slot.query.filter(Slot.id.in_(slot_ids)).update({Slot.is_booked: False}, synchronize_session=False)
    db.session.commit()


def _release_one(slot_id: str) -> None:
    Slot.query.filter_by(id=slot_id).update({Slot.is_booked: False}, synchronize_session=False)
    db.session.commit()


def release_slots(slot_ids: List[str]) -> ReleaseReport:
    if not slot_ids:
        return ReleaseReport([], [])

    try:
        _release_batch(slot_ids)
        return ReleaseReport(list(slot_ids), [])
    except SQLAlchemyError:
        db.session.rollback()
        logger.warning("Batch release of %d slots failed, retrying one by one", len(slot_ids), exc_info=True)

    released, failed = [], []
    for slot_id in slot_ids:
        try:
            _release_one(slot_id)
            released.append(slot_id)
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Could not release slot %s", slot_id)
            failed.append(slot_id)
    return ReleaseReport(released, failed)


def linked_slot_ids(booking_id: str) -> List[str]:
    rows = db.session.execute(
        select(booking_slots.c.slot_id).where(booking_slots.c.booking_id == booking_id)
    )
    return [row.slot_id for row in rows]


def cancel(booking_id: str, actor_id: Optional[str] = None, reason: Optional[str] = None) -> bool:
    """
    Cancels the booking and frees its slots.
    Returns False when the booking was already cancelled; nothing is released then,
    since its old slots may belong to a newer booking.
    """
    with store_errors("cancel the booking"):
        booking = db.session.get(Booking, booking_id) if booking_id else None
        if not booking:
            raise NotFound("Booking not found")

        if booking.booking_status == "cancelled":
            logger.info("Booking %s is already cancelled", booking_id)
            return False

        slot_ids = linked_slot_ids(booking.id)

        booking.booking_status = "cancelled"
        booking.payment_status = "cancelled"
        booking.cancelled_at = datetime.utcnow()
        booking.cancel_reason = (reason or "")[:120] or None
        db.session.commit()

    report = release_slots(slot_ids)
    if report.failed:
        logger.error(
            "Booking %s cancelled but %d slot(s) are still marked booked: %s",
            booking_id, len(report.failed), report.failed,
        )

    log_event(
        "BOOKING_CANCEL",
        actor_id=actor_id,
        entity="booking",
        entity_id=booking_id,
        metadata={"reason": reason, "released": report.released, "failed": report.failed},
    )
    return True


def expire_pending(older_than: datetime) -> List[str]:
    """Cancels pending bookings created before ``older_than``; returns their ids."""
    with store_errors("load pending bookings"):
        stale = [
            b.id for b in
            Booking.query
            .filter(Booking.booking_status == "pending", Booking.created_at < older_than)
            .order_by(Booking.created_at.asc())
            .all()
        ]

    expired = []
    for booking_id in stale:
        if cancel(booking_id, reason="Expired while pending"):
            expired.append(booking_id)
    logger.info("Expired %d pending booking(s) created before %s", len(expired), older_than)
    return expired
