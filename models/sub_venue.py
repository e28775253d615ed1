from datetime import datetime
from models.db import db
from models.ids import new_id

class SubVenue(db.Model):
    """A named subdivision of a ground ("Court 1", "Net 2")."""
    __tablename__ = "sub_venues"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    ground_id = db.Column(db.String(36), db.ForeignKey("grounds.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)

    # registration order within the ground; 0 is the first sub-venue
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    ground = db.relationship("Ground", back_populates="sub_venues")

    __table_args__ = (
        db.UniqueConstraint("ground_id", "name", name="uq_sub_venue_ground_name"),
    )
