from datetime import date

from flask import Blueprint, request, jsonify

from services import availability, bookings, cancellation, consecutive, reservation
from services.errors import ValidationError
from services.serializers import serialize_booking, serialize_slot
from utils import notify
from utils.identity import actor_id_from_request, customer_id_from_request

booking_bp = Blueprint("booking", __name__)


def _parse_date(date_str) -> date:
    # Expect ISO format like "2026-01-20"
    if not date_str:
        raise ValidationError("date is required (YYYY-MM-DD)")
    try:
        return date.fromisoformat(str(date_str))
    except ValueError:
        raise ValidationError("Invalid date. Use YYYY-MM-DD")


def _id_list(value, field):
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of ids")
    return value


def _availability_response(result):
    if result.advisory:
        notify.warning("Live availability could not be loaded; showing estimated slots. Please refresh before booking.")
    return jsonify(
        advisory=result.advisory,
        slots=[serialize_slot(s) for s in result.slots],
    ), 200


# ---------- PLAYERS: view free slots (generates the day on first access) ----------
@booking_bp.get("/grounds/<ground_id>/slots")
def available_slots(ground_id: str):
    day = _parse_date(request.args.get("date"))
    sub_venue_id = (request.args.get("sub_venue_id") or "").strip() or None
    return _availability_response(availability.get_available_slots(ground_id, day, sub_venue_id))


# ---------- STAFF: full day schedule including booked slots ----------
@booking_bp.get("/grounds/<ground_id>/schedule")
def day_schedule(ground_id: str):
    day = _parse_date(request.args.get("date"))
    return _availability_response(availability.get_day_schedule(ground_id, day))


# ---------- PLAYERS: consecutiveness advice while picking slots ----------
@booking_bp.post("/slots/selection")
def selection_advice():
    data = request.get_json(silent=True) or {}
    ground_id = data.get("ground_id")
    slot_id = data.get("slot_id")
    if not ground_id or not slot_id:
        raise ValidationError("ground_id and slot_id are required")
    day = _parse_date(data.get("date"))
    selection = _id_list(data.get("selection"), "selection")

    schedule = availability.get_day_schedule(ground_id, day)
    advice = consecutive.advise_toggle(selection, slot_id, schedule.slots)
    return jsonify(
        selection=advice.selection,
        contiguous=advice.contiguous,
        requires_confirmation=advice.requires_confirmation,
        message=consecutive.NOT_CONSECUTIVE_MESSAGE if advice.requires_confirmation else None,
    ), 200


# ---------- PLAYERS: book slots (DOUBLE-BOOKING SAFE) ----------
@booking_bp.post("/bookings")
def create_booking():
    data = request.get_json(silent=True) or {}
    ground_id = data.get("ground_id")
    if not ground_id:
        raise ValidationError("ground_id required")
    day = _parse_date(data.get("date"))

    customer = reservation.Customer(
        name=data.get("customer_name") or "",
        phone=data.get("customer_phone") or "",
        id=customer_id_from_request(data),
    )
    booking = reservation.reserve(
        ground_id,
        day,
        _id_list(data.get("slot_ids"), "slot_ids"),
        customer,
        sub_venue_id=(data.get("sub_venue_id") or None),
        game_ids=_id_list(data.get("game_ids"), "game_ids"),
    )

    message = notify.success("Your booking request has been received.")
    return jsonify(booking=serialize_booking(booking), message=message), 201


@booking_bp.get("/bookings")
def list_bookings():
    # optional filters: ground_id, customer_id, status (pending/confirmed/cancelled)
    rows = bookings.list_bookings(
        ground_id=request.args.get("ground_id"),
        customer_id=request.args.get("customer_id"),
        status=request.args.get("status"),
    )
    return jsonify([serialize_booking(b) for b in rows]), 200


@booking_bp.get("/bookings/<booking_id>")
def booking_detail(booking_id: str):
    return jsonify(serialize_booking(bookings.get_booking(booking_id))), 200


# ---------- PLAYERS/STAFF: cancel booking ----------
@booking_bp.post("/bookings/<booking_id>/cancel")
def cancel_booking(booking_id: str):
    data = request.get_json(silent=True) or {}
    reason = (data.get("reason") or "").strip() or None

    if not cancellation.cancel(booking_id, actor_id=actor_id_from_request(data), reason=reason):
        return jsonify(error=notify.failure("Booking not cancellable")), 400

    booking = bookings.get_booking(booking_id)
    message = notify.success("Booking cancelled")
    return jsonify(booking=serialize_booking(booking), message=message), 200


# ---------- PAYMENTS: settle a pending booking ----------
@booking_bp.post("/bookings/<booking_id>/confirm")
def confirm_booking(booking_id: str):
    data = request.get_json(silent=True) or {}
    booking = reservation.confirm(booking_id, actor_id=actor_id_from_request(data))
    message = notify.success("Booking confirmed")
    return jsonify(booking=serialize_booking(booking), message=message), 200
