from dataclasses import dataclass
from datetime import date, time
from typing import Optional

# Ids of locally synthesized slots start with this; they are never bookable
ADVISORY_SLOT_PREFIX = "advisory-"


def is_advisory_slot_id(slot_id) -> bool:
    return isinstance(slot_id, str) and slot_id.startswith(ADVISORY_SLOT_PREFIX)


def advisory_slot_id(ground_id: str, day: date, hour: int) -> str:
    return f"{ADVISORY_SLOT_PREFIX}{ground_id}-{day.isoformat()}-{hour}"


@dataclass(frozen=True)
class SlotView:
    """Read-only snapshot of a slot, detached from the session."""

    id: str
    ground_id: str
    date: date
    start_time: time
    end_time: time
    price: int
    is_booked: bool = False
    sub_venue_id: Optional[str] = None
    advisory: bool = False

    @classmethod
    def from_model(cls, slot) -> "SlotView":
        return cls(
            id=slot.id,
            ground_id=slot.ground_id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            price=slot.price,
            is_booked=slot.is_booked,
            sub_venue_id=slot.sub_venue_id,
        )
