from .health import health_bp
from .grounds import grounds_bp
from .booking import booking_bp
