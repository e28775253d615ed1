from utils.timefmt import slot_label


def _hhmm(value):
    return value.strftime("%H:%M")


def serialize_slot(slot):
    return {
        "id": slot.id,
        "ground_id": slot.ground_id,
        "date": slot.date.isoformat(),
        "start_time": _hhmm(slot.start_time),
        "end_time": _hhmm(slot.end_time),
        "label": slot_label(slot.start_time, slot.end_time),
        "price": slot.price,
        "is_booked": slot.is_booked,
        "sub_venue_id": slot.sub_venue_id,
        "advisory": getattr(slot, "advisory", False),
    }


def serialize_booking(booking):
    return {
        "id": booking.id,
        "ground_id": booking.ground_id,
        "ground_name": booking.ground.name if booking.ground else "Unknown Ground",
        "customer_id": booking.customer_id,
        "customer_name": booking.customer_name,
        "customer_phone": booking.customer_phone,
        "date": booking.date.isoformat(),
        "sub_venue_id": booking.sub_venue_id,
        "game_ids": booking.game_ids or [],
        "slots": [serialize_slot(s) for s in booking.slots],
        "total_amount": booking.total_amount,
        "booking_status": booking.booking_status,
        "payment_status": booking.payment_status,
        "created_at": booking.created_at.isoformat(),
        "cancelled_at": booking.cancelled_at.isoformat() if booking.cancelled_at else None,
    }


def serialize_ground(ground):
    return {
        "id": ground.id,
        "name": ground.name,
        "location": ground.location,
        "base_price": ground.base_price,
        "is_active": ground.is_active,
        "sub_venues": [serialize_sub_venue(v) for v in ground.sub_venues],
        "created_at": ground.created_at.isoformat(),
    }


def serialize_sub_venue(sub_venue):
    return {
        "id": sub_venue.id,
        "ground_id": sub_venue.ground_id,
        "name": sub_venue.name,
    }
