"""Slot catalog: the canonical hourly slots of a ground for one day.

Slots are generated lazily the first time a (ground, date) pair is asked
for, priced by the time-of-day band table in services.pricing.
"""
import logging
from datetime import date

from flask import current_app
from sqlalchemy.exc import IntegrityError

from models import db
from models.ground import Ground
from models.slot import Slot
from services.errors import NotFound, store_errors
from services.pricing import hourly_windows, parse_bands, price_for_hour, validate_bands
from utils.audit import log_event

logger = logging.getLogger(__name__)


def catalog_settings():
    """Returns (start_hour, end_hour, bands) from the app config, validated."""
    cfg = current_app.config
    start_hour = int(cfg.get("SLOT_DAY_START_HOUR", 0))
    end_hour = int(cfg.get("SLOT_DAY_END_HOUR", 24))
    bands = parse_bands(cfg.get("SLOT_PRICING_BANDS", ""))
    validate_bands(bands, start_hour, end_hour)
    return start_hour, end_hour, bands


def default_base_price() -> int:
    return int(current_app.config.get("SLOT_BASE_PRICE", 500))


def base_price_for(ground: Ground) -> int:
    if ground.base_price is not None:
        return ground.base_price
    return default_base_price()


def get_ground(ground_id: str) -> Ground:
    ground = db.session.get(Ground, ground_id) if ground_id else None
    if not ground or not ground.is_active:
        raise NotFound("Ground not found")
    return ground


def build_day_slots(ground_id: str, day: date, base_price: int, sub_venue_id=None):
    """Unpersisted slot rows covering the configured horizon, one per hour."""
    start_hour, end_hour, bands = catalog_settings()
    return [
        {
            "ground_id": ground_id,
            "date": day,
            "start_time": start,
            "end_time": end,
            "price": price_for_hour(start.hour, base_price, bands),
            "is_booked": False,
            "sub_venue_id": sub_venue_id,
        }
        for start, end in hourly_windows(start_hour, end_hour)
    ]


def ensure_slots_exist(ground_id: str, day: date) -> int:
    """
    Generate the day's slots if the pair has none yet.
    Returns how many slots were created (0 if they already existed).
    """
    with store_errors("load the slot catalog"):
        ground = get_ground(ground_id)
        existing = Slot.query.filter_by(ground_id=ground_id, date=day).count()
        if existing:
            return 0

        # TODO: ask product whether each sub-venue should get its own set of slots;
        # for now every generated slot is tied to the first registered sub-venue.
        first_sub_venue_id = ground.sub_venues[0].id if ground.sub_venues else None
        rows = build_day_slots(ground_id, day, base_price_for(ground), first_sub_venue_id)

        db.session.add_all([Slot(**row) for row in rows])
        try:
            db.session.commit()
        except IntegrityError:
            # another request generated the same day first
            db.session.rollback()
            logger.info("Slots for ground %s on %s already generated concurrently", ground_id, day)
            return 0

    logger.info("Created %d default slots for ground %s on %s", len(rows), ground_id, day)
    log_event(
        "SLOTS_GENERATED",
        entity="ground",
        entity_id=ground_id,
        metadata={"date": day.isoformat(), "count": len(rows)},
    )
    return len(rows)


def list_slots(ground_id: str, day: date, sub_venue_id=None, only_free=False):
    """Slots for the pair ordered by start time, as Slot rows."""
    q = Slot.query.filter(Slot.ground_id == ground_id, Slot.date == day)
    if only_free:
        q = q.filter(Slot.is_booked.is_(False))
    if sub_venue_id:
        # general slots (no sub-venue) are offered for every sub-venue
        q = q.filter(db.or_(Slot.sub_venue_id == sub_venue_id, Slot.sub_venue_id.is_(None)))
    return q.order_by(Slot.start_time.asc()).all()
