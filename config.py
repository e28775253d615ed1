import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as groundslot.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "groundslot.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Slot catalog: hourly slots from START to END hour (0..24 is a full day)
    SLOT_DAY_START_HOUR = int(os.getenv("SLOT_DAY_START_HOUR", "0"))
    SLOT_DAY_END_HOUR = int(os.getenv("SLOT_DAY_END_HOUR", "24"))

    # Base price for generated slots, smallest currency unit
    SLOT_BASE_PRICE = int(os.getenv("SLOT_BASE_PRICE", "500"))

    # Price bands as "start-end:offset,..." e.g. "0-6:-100,6-12:0,12-17:100,17-22:200,22-24:-100"
    # Empty means services.pricing.DEFAULT_BANDS
    SLOT_PRICING_BANDS = os.getenv("SLOT_PRICING_BANDS", "")

    # Pending bookings older than this are cancelled by `flask expire-pending`.
    # Unset means the sweep only runs with an explicit --older-than-minutes.
    PENDING_BOOKING_TTL_MINUTES = (
        int(os.getenv("PENDING_BOOKING_TTL_MINUTES"))
        if os.getenv("PENDING_BOOKING_TTL_MINUTES")
        else None
    )

    # Listing cap for booking queries
    BOOKING_LIST_LIMIT = 200

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SLOT_DAY_START_HOUR = 0
    SLOT_DAY_END_HOUR = 24
    SLOT_BASE_PRICE = 500
    SLOT_PRICING_BANDS = ""
    PENDING_BOOKING_TTL_MINUTES = None
