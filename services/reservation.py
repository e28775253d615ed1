"""Reservation: claim a set of slots for a new booking.

The booking row, its slot links and the slot flips are written in one
transaction. Slots are claimed with a conditional update that only flips
``is_booked`` from false to true; if it matches fewer rows than requested,
some other request got there first and the whole reservation is rolled
back. This is what keeps a slot in at most one active booking even when
several processes race on the same day.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from models import db
from models.booking import Booking, booking_slots
from models.slot import Slot
from models.sub_venue import SubVenue
from services.catalog import get_ground
from services.errors import BookingError, Conflict, NotFound, ValidationError, store_errors
from services.slot_view import is_advisory_slot_id
from utils.audit import log_event
from utils.identity import resolve_customer_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Customer:
    name: str
    phone: str
    id: Optional[str] = None


def _unique(slot_ids: Iterable[str]) -> List[str]:
    seen = []
    for slot_id in slot_ids or []:
        if slot_id and slot_id not in seen:
            seen.append(slot_id)
    return seen


def _validate_customer(customer: Optional[Customer]) -> None:
    if customer is None:
        raise ValidationError("Customer details are required")
    missing = [
        name for name in ("name", "phone")
        if not isinstance(getattr(customer, name), str) or not getattr(customer, name).strip()
    ]
    if missing:
        raise ValidationError("Please enter your name and phone number", missing=missing)


def _claim_slots(slot_ids: List[str]) -> int:
    """Flip free slots to booked; returns how many rows actually changed."""
    return (
        Slot.query
        .filter(Slot.id.in_(slot_ids), Slot.is_booked.is_(False))
        .update({Slot.is_booked: True}, synchronize_session=False)
    )


def reserve(
    ground_id: str,
    day: date,
    slot_ids: Iterable[str],
    customer: Customer,
    sub_venue_id: Optional[str] = None,
    game_ids: Optional[List[str]] = None,
) -> Booking:
    slot_ids = _unique(slot_ids)
    if not slot_ids:
        raise ValidationError("Please select at least one time slot")
    _validate_customer(customer)

    advisory = [slot_id for slot_id in slot_ids if is_advisory_slot_id(slot_id)]
    if advisory:
        raise ValidationError(
            "Availability could not be confirmed, refresh the slots and try again",
            slot_ids=advisory,
        )

    customer_id = resolve_customer_id(customer.id)

    with store_errors("create the booking"):
        ground = get_ground(ground_id)

        if sub_venue_id:
            area = db.session.get(SubVenue, sub_venue_id)
            if not area or area.ground_id != ground.id:
                raise NotFound("Sports area not found", sub_venue_id=sub_venue_id)

        slots = (
            Slot.query
            .filter(Slot.id.in_(slot_ids), Slot.ground_id == ground.id, Slot.date == day)
            .all()
        )
        found = {s.id for s in slots}
        missing = [slot_id for slot_id in slot_ids if slot_id not in found]
        if missing:
            raise NotFound("Some selected slots no longer exist, please reselect", slot_ids=missing)

        if sub_venue_id:
            elsewhere = [s.id for s in slots if s.sub_venue_id not in (None, sub_venue_id)]
            if elsewhere:
                raise ValidationError("Selected slots belong to another sports area", slot_ids=elsewhere)

        taken = [s.id for s in slots if s.is_booked]
        if taken:
            _record_conflict(customer_id, ground.id, taken)
            raise Conflict("Selected slots are no longer available, please refresh", slot_ids=taken)

        total_amount = sum(s.price for s in slots)

        booking = Booking(
            ground_id=ground.id,
            customer_id=customer_id,
            customer_name=customer.name.strip(),
            customer_phone=customer.phone.strip(),
            date=day,
            sub_venue_id=sub_venue_id,
            game_ids=list(game_ids) if game_ids else None,
            total_amount=total_amount,
            booking_status="pending",
            payment_status="pending",
        )
        try:
            db.session.add(booking)
            db.session.flush()

            db.session.execute(
                booking_slots.insert(),
                [
                    {"booking_id": booking.id, "slot_id": slot_id, "position": position}
                    for position, slot_id in enumerate(slot_ids)
                ],
            )

            claimed = _claim_slots(slot_ids)
            if claimed != len(slot_ids):
                raise Conflict("Selected slots were just booked by someone else, please refresh")

            db.session.commit()
        except BookingError:
            db.session.rollback()
            logger.info("Reservation lost a race on ground %s for slots %s", ground_id, slot_ids)
            _record_conflict(customer_id, ground_id, slot_ids)
            raise

    logger.info(
        "Booking %s created for ground %s on %s: %d slots, total %d",
        booking.id, booking.ground_id, day, len(slot_ids), total_amount,
    )
    log_event(
        "BOOKING_CREATE",
        actor_id=customer_id,
        entity="booking",
        entity_id=booking.id,
        metadata={"slot_ids": slot_ids, "total_amount": total_amount},
    )
    return booking


def _record_conflict(customer_id: str, ground_id: str, slot_ids: List[str]) -> None:
    log_event(
        "BOOKING_FAIL_ALREADY_BOOKED",
        actor_id=customer_id,
        entity="ground",
        entity_id=ground_id,
        metadata={"slot_ids": slot_ids},
    )


def confirm(booking_id: str, actor_id: Optional[str] = None) -> Booking:
    """Marks a pending booking as paid; called once payment is settled externally."""
    with store_errors("confirm the booking"):
        booking = db.session.get(Booking, booking_id) if booking_id else None
        if not booking:
            raise NotFound("Booking not found")
        if booking.booking_status == "cancelled":
            raise Conflict("Booking was cancelled and cannot be confirmed")
        if booking.booking_status == "confirmed":
            return booking

        booking.booking_status = "confirmed"
        booking.payment_status = "completed"
        db.session.commit()

    log_event("BOOKING_CONFIRM", actor_id=actor_id, entity="booking", entity_id=booking.id)
    return booking
