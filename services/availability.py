"""Availability: free slots of a ground for a day, with a degraded read mode.

When the store cannot be reached the caller still gets a price list built
locally with the catalog's pricing. Those slots carry advisory ids and the
response is flagged ``advisory``; they must never be treated as bookable.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from services.catalog import build_day_slots, default_base_price, ensure_slots_exist, list_slots
from services.errors import BackendUnavailable, store_errors
from services.slot_view import SlotView, advisory_slot_id

logger = logging.getLogger(__name__)


@dataclass
class Availability:
    slots: List[SlotView] = field(default_factory=list)
    advisory: bool = False


def advisory_slots(ground_id: str, day: date) -> List[SlotView]:
    rows = build_day_slots(ground_id, day, default_base_price())
    return [
        SlotView(
            id=advisory_slot_id(ground_id, day, row["start_time"].hour),
            advisory=True,
            **row,
        )
        for row in rows
    ]


def _read(ground_id, day, sub_venue_id, only_free) -> Availability:
    try:
        ensure_slots_exist(ground_id, day)
        with store_errors("read available slots"):
            rows = list_slots(ground_id, day, sub_venue_id=sub_venue_id, only_free=only_free)
            return Availability(slots=[SlotView.from_model(s) for s in rows])
    except BackendUnavailable:
        logger.warning(
            "Store unavailable, serving advisory slots for ground %s on %s",
            ground_id, day, exc_info=True,
        )
        return Availability(slots=advisory_slots(ground_id, day), advisory=True)


def get_available_slots(ground_id: str, day: date, sub_venue_id: Optional[str] = None) -> Availability:
    """
    Unbooked slots ordered by start time. With a sub-venue, only its own
    slots and general slots are returned.
    """
    return _read(ground_id, day, sub_venue_id, only_free=True)


def get_day_schedule(ground_id: str, day: date) -> Availability:
    """Every slot of the day, booked or not."""
    return _read(ground_id, day, None, only_free=False)
