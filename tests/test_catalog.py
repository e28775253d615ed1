import pytest

from models import db
from models.slot import Slot
from services.catalog import ensure_slots_exist, list_slots
from services.errors import NotFound
from services.pricing import minutes_of_day, price_for_hour

from conftest import DAY


def _assert_contiguous_cover(slots, start_hour, end_hour):
    assert minutes_of_day(slots[0].start_time) == start_hour * 60
    assert minutes_of_day(slots[-1].end_time, is_end=True) == end_hour * 60
    for prev, cur in zip(slots, slots[1:]):
        assert minutes_of_day(cur.start_time) == minutes_of_day(prev.end_time, is_end=True)


def test_first_access_generates_full_day(ground):
    assert ensure_slots_exist(ground.id, DAY) == 24

    slots = list_slots(ground.id, DAY)
    assert len(slots) == 24
    _assert_contiguous_cover(slots, 0, 24)
    assert all(not s.is_booked for s in slots)


def test_generated_prices_follow_bands(ground):
    ensure_slots_exist(ground.id, DAY)
    for slot in list_slots(ground.id, DAY):
        assert slot.price == price_for_hour(slot.start_time.hour, 500)


def test_generation_is_idempotent(ground):
    ensure_slots_exist(ground.id, DAY)
    assert ensure_slots_exist(ground.id, DAY) == 0
    assert Slot.query.filter_by(ground_id=ground.id, date=DAY).count() == 24


def test_ground_base_price_overrides_default(app, ground):
    ground.base_price = 1000
    db.session.commit()

    ensure_slots_exist(ground.id, DAY)
    prices = {s.start_time.hour: s.price for s in list_slots(ground.id, DAY)}
    assert prices[2] == 900
    assert prices[9] == 1000
    assert prices[18] == 1200


def test_shorter_horizon_from_config(app, ground):
    app.config["SLOT_DAY_START_HOUR"] = 5
    app.config["SLOT_DAY_END_HOUR"] = 24

    assert ensure_slots_exist(ground.id, DAY) == 19
    _assert_contiguous_cover(list_slots(ground.id, DAY), 5, 24)


def test_generated_slots_use_first_sub_venue(ground_with_courts):
    first = ground_with_courts.sub_venues[0]
    ensure_slots_exist(ground_with_courts.id, DAY)
    assert {s.sub_venue_id for s in list_slots(ground_with_courts.id, DAY)} == {first.id}


def test_unknown_ground_is_not_found(app):
    with pytest.raises(NotFound):
        ensure_slots_exist("missing-ground", DAY)


def test_inactive_ground_is_not_found(ground):
    ground.is_active = False
    db.session.commit()
    with pytest.raises(NotFound):
        ensure_slots_exist(ground.id, DAY)
