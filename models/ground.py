from datetime import datetime
from models.db import db
from models.ids import new_id

class Ground(db.Model):
    __tablename__ = "grounds"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(120), nullable=False)
    location = db.Column(db.String(160), nullable=True)

    # per-ground override of the catalog base price; falls back to SLOT_BASE_PRICE
    base_price = db.Column(db.Integer, nullable=True)

    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    sub_venues = db.relationship(
        "SubVenue",
        back_populates="ground",
        order_by="SubVenue.sort_order",
    )
