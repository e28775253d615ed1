from datetime import date

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.ground import Ground
from models.sub_venue import SubVenue
from services.reservation import Customer

DAY = date(2026, 11, 2)


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ground(app):
    row = Ground(name="City Arena", location="Ring Road")
    db.session.add(row)
    db.session.commit()
    return row


@pytest.fixture
def ground_with_courts(app):
    row = Ground(name="Riverside Sports Hub", location="Riverside")
    db.session.add(row)
    db.session.flush()
    db.session.add_all([
        SubVenue(ground_id=row.id, name="Court 1", sort_order=0),
        SubVenue(ground_id=row.id, name="Court 2", sort_order=1),
    ])
    db.session.commit()
    return row


@pytest.fixture
def customer():
    return Customer(name="Asha Rai", phone="9800000000")


def slot_at(slots, hour):
    return next(s for s in slots if s.start_time.hour == hour)
