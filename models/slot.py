from datetime import datetime
from models.db import db
from models.ids import new_id

class Slot(db.Model):
    __tablename__ = "slots"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    ground_id = db.Column(db.String(36), db.ForeignKey("grounds.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)  # 00:00 for the slot that ends at midnight

    price = db.Column(db.Integer, nullable=False, default=0)  # smallest currency unit
    is_booked = db.Column(db.Boolean, default=False, nullable=False)

    # null means a general slot, shown for every sub-venue
    sub_venue_id = db.Column(db.String(36), db.ForeignKey("sub_venues.id"), nullable=True, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Only one slot per hour per ground and day; also makes default generation race-safe
        db.UniqueConstraint("ground_id", "date", "start_time", name="uq_ground_day_slot"),
    )
