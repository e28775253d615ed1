import uuid

import pytest
from sqlalchemy import func, select

from models import db
from models.audit_log import AuditLog
from models.booking import Booking, booking_slots
from models.slot import Slot
from services import reservation
from services.availability import get_available_slots
from services.errors import BackendUnavailable, Conflict, NotFound, ValidationError
from services.reservation import Customer, reserve
from utils.identity import GUEST_CUSTOMER_ID

from conftest import DAY, slot_at


def _slot_ids(ground, *hours):
    slots = get_available_slots(ground.id, DAY).slots
    return [slot_at(slots, h).id for h in hours]


def _link_count():
    return db.session.execute(select(func.count()).select_from(booking_slots)).scalar()


def test_reserve_two_morning_slots(ground, customer):
    ids = _slot_ids(ground, 9, 10)

    booking = reserve(ground.id, DAY, ids, customer)

    assert booking.total_amount == 1000
    assert booking.booking_status == "pending"
    assert booking.payment_status == "pending"
    assert booking.customer_id == GUEST_CUSTOMER_ID
    assert [s.id for s in booking.slots] == ids
    assert all(s.is_booked for s in booking.slots)
    assert booking.ground.name == "City Arena"
    assert _link_count() == 2


def test_total_is_sum_of_slot_prices(ground, customer):
    ids = _slot_ids(ground, 5, 12, 18, 23)
    booking = reserve(ground.id, DAY, ids, customer)
    assert booking.total_amount == 400 + 600 + 700 + 400


def test_well_formed_customer_id_is_kept(ground):
    customer_id = str(uuid.uuid4())
    booking = reserve(
        ground.id, DAY, _slot_ids(ground, 7),
        Customer(name="Bikash", phone="9811111111", id=customer_id),
    )
    assert booking.customer_id == customer_id


def test_malformed_customer_id_falls_back_to_guest(ground):
    booking = reserve(
        ground.id, DAY, _slot_ids(ground, 7),
        Customer(name="Bikash", phone="9811111111", id="user-42"),
    )
    assert booking.customer_id == GUEST_CUSTOMER_ID


def test_game_ids_and_duplicates(ground, customer):
    ids = _slot_ids(ground, 14)
    booking = reserve(ground.id, DAY, ids + ids, customer, game_ids=["futsal", "cricket"])
    assert booking.game_ids == ["futsal", "cricket"]
    assert len(booking.slots) == 1
    assert booking.total_amount == 600


def test_empty_selection_is_rejected(ground, customer):
    with pytest.raises(ValidationError):
        reserve(ground.id, DAY, [], customer)


@pytest.mark.parametrize("name,phone", [("", "9800000000"), ("Asha", "  "), (None, None)])
def test_customer_fields_are_required(ground, name, phone):
    with pytest.raises(ValidationError):
        reserve(ground.id, DAY, _slot_ids(ground, 9), Customer(name=name, phone=phone))


def test_advisory_slots_are_never_booked(ground, customer):
    with pytest.raises(ValidationError):
        reserve(ground.id, DAY, [f"advisory-{ground.id}-{DAY.isoformat()}-9"], customer)
    assert Booking.query.count() == 0


def test_unknown_slot_is_not_found(ground, customer):
    ids = _slot_ids(ground, 9)
    with pytest.raises(NotFound) as exc:
        reserve(ground.id, DAY, ids + ["missing-slot"], customer)
    assert exc.value.details["slot_ids"] == ["missing-slot"]
    assert Booking.query.count() == 0
    assert not db.session.get(Slot, ids[0]).is_booked


def test_slot_from_another_day_is_not_found(ground, customer):
    ids = _slot_ids(ground, 9)
    with pytest.raises(NotFound):
        reserve(ground.id, DAY.replace(day=DAY.day + 1), ids, customer)


def test_unknown_ground_is_not_found(app, customer):
    with pytest.raises(NotFound):
        reserve("missing-ground", DAY, ["slot"], customer)


def test_overlapping_reservation_gets_conflict(ground, customer):
    first = reserve(ground.id, DAY, _slot_ids(ground, 9, 10), customer)
    free_eleven = _slot_ids(ground, 11)[0]
    taken_ten = [s.id for s in first.slots][1]

    with pytest.raises(Conflict) as exc:
        reserve(ground.id, DAY, [taken_ten, free_eleven], Customer(name="Late", phone="9822222222"))

    assert exc.value.details["slot_ids"] == [taken_ten]
    assert Booking.query.count() == 1
    assert not db.session.get(Slot, free_eleven).is_booked
    assert _link_count() == 2


def test_lost_race_rolls_back_everything(ground, customer, monkeypatch):
    ids = _slot_ids(ground, 9, 10)
    original_claim = reservation._claim_slots

    def claim_after_competitor(slot_ids):
        # a competing request flips the second slot between our read and our write
        Slot.query.filter_by(id=slot_ids[1]).update({Slot.is_booked: True}, synchronize_session=False)
        return original_claim(slot_ids)

    monkeypatch.setattr(reservation, "_claim_slots", claim_after_competitor)

    with pytest.raises(Conflict):
        reserve(ground.id, DAY, ids, customer)

    assert Booking.query.count() == 0
    assert _link_count() == 0
    assert not db.session.get(Slot, ids[0]).is_booked
    assert AuditLog.query.filter_by(action="BOOKING_FAIL_ALREADY_BOOKED").count() == 1


def test_sub_venue_mismatch_is_rejected(ground_with_courts, customer):
    court_1, court_2 = ground_with_courts.sub_venues
    slots = get_available_slots(ground_with_courts.id, DAY).slots
    court_1_slot = slot_at(slots, 9)
    assert court_1_slot.sub_venue_id == court_1.id

    with pytest.raises(ValidationError):
        reserve(ground_with_courts.id, DAY, [court_1_slot.id], customer, sub_venue_id=court_2.id)

    booking = reserve(ground_with_courts.id, DAY, [court_1_slot.id], customer, sub_venue_id=court_1.id)
    assert booking.sub_venue_id == court_1.id


def test_unknown_sub_venue_is_not_found(ground, customer):
    ids = _slot_ids(ground, 9)

    with pytest.raises(NotFound) as exc:
        reserve(ground.id, DAY, ids, customer, sub_venue_id="no-such-area")

    assert exc.value.details["sub_venue_id"] == "no-such-area"
    assert Booking.query.count() == 0
    assert not db.session.get(Slot, ids[0]).is_booked


def test_sub_venue_of_another_ground_is_not_found(ground, ground_with_courts, customer):
    other_court = ground_with_courts.sub_venues[0]
    ids = _slot_ids(ground, 9)

    with pytest.raises(NotFound):
        reserve(ground.id, DAY, ids, customer, sub_venue_id=other_court.id)
    assert Booking.query.count() == 0


def test_slots_keep_requested_order(ground, customer):
    ids = _slot_ids(ground, 11, 9)

    booking = reserve(ground.id, DAY, ids, customer)

    db.session.expire_all()
    reloaded = db.session.get(Booking, booking.id)
    assert [s.id for s in reloaded.slots] == ids
    assert [s.start_time.hour for s in reloaded.slots] == [11, 9]


def test_store_outage_fails_the_write(ground, customer):
    ids = _slot_ids(ground, 9)
    ground_id = ground.id
    db.session.remove()
    db.drop_all()

    with pytest.raises(BackendUnavailable):
        reserve(ground_id, DAY, ids, customer)


def test_reservation_is_audited(ground, customer):
    booking = reserve(ground.id, DAY, _slot_ids(ground, 9), customer)
    row = AuditLog.query.filter_by(action="BOOKING_CREATE").one()
    assert row.entity_id == booking.id
    assert row.actor_id == GUEST_CUSTOMER_ID


def test_confirm_marks_payment_completed(ground, customer):
    booking = reserve(ground.id, DAY, _slot_ids(ground, 9), customer)

    confirmed = reservation.confirm(booking.id)

    assert confirmed.booking_status == "confirmed"
    assert confirmed.payment_status == "completed"
    assert reservation.confirm(booking.id).booking_status == "confirmed"


def test_confirm_unknown_booking(app):
    with pytest.raises(NotFound):
        reservation.confirm("missing")
