from .db import db
from .audit_log import AuditLog
from .ground import Ground
from .sub_venue import SubVenue
from .slot import Slot
from .booking import Booking, booking_slots
