from datetime import datetime
from models.db import db
from models.ids import new_id

BOOKING_STATUSES = ("pending", "confirmed", "cancelled")

booking_slots = db.Table(
    "booking_slots",
    db.Column("booking_id", db.String(36), db.ForeignKey("bookings.id"), primary_key=True),
    db.Column("slot_id", db.String(36), db.ForeignKey("slots.id"), primary_key=True, index=True),
    # order the slots were requested in
    db.Column("position", db.Integer, nullable=False, default=0),
)

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    ground_id = db.Column(db.String(36), db.ForeignKey("grounds.id"), nullable=False, index=True)
    customer_id = db.Column(db.String(36), nullable=False, index=True)  # guest sentinel for anonymous bookings
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(30), nullable=False)

    date = db.Column(db.Date, nullable=False)
    sub_venue_id = db.Column(db.String(36), db.ForeignKey("sub_venues.id"), nullable=True)
    game_ids = db.Column(db.JSON, nullable=True)

    total_amount = db.Column(db.Integer, nullable=False, default=0)

    booking_status = db.Column(db.String(20), nullable=False, default="pending")
    payment_status = db.Column(db.String(20), nullable=False, default="pending")

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    cancelled_at = db.Column(db.DateTime, nullable=True)
    cancel_reason = db.Column(db.String(120), nullable=True)

    ground = db.relationship("Ground")
    slots = db.relationship("Slot", secondary=booking_slots, order_by=booking_slots.c.position)
