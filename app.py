import logging

from flask import Flask, jsonify
from config import Config
from routes import health_bp, grounds_bp, booking_bp

from models import db
from flask_migrate import Migrate
from services.errors import BookingError
from utils import notify


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(grounds_bp)
    app.register_blueprint(booking_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.errorhandler(BookingError)
    def _booking_error(err):
        notify.failure(err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        # API only, nothing to frame or load
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp


    register_cli(app)


    return app

#-------------------------
from datetime import date, datetime, timedelta

import click
from services.catalog import ensure_slots_exist
from services.cancellation import expire_pending

def register_cli(app):
    @app.cli.command("generate-slots")
    @click.argument("ground_id")
    @click.argument("day")
    def generate_slots(ground_id, day):
        """Create the default hourly slots for GROUND_ID on DAY (YYYY-MM-DD)."""
        try:
            created = ensure_slots_exist(ground_id, date.fromisoformat(day))
        except ValueError:
            raise click.BadParameter("Use YYYY-MM-DD", param_hint="DAY")
        except BookingError as err:
            raise click.ClickException(err.message)

        if created:
            click.echo(f"Created {created} slots for {ground_id} on {day}")
        else:
            click.echo("Slots already exist")

    @app.cli.command("expire-pending")
    @click.option("--older-than-minutes", type=int, default=None,
                  help="Cancel pending bookings older than this. Defaults to PENDING_BOOKING_TTL_MINUTES.")
    def expire_pending_bookings(older_than_minutes):
        """Cancel pending bookings that were never confirmed and free their slots."""
        minutes = older_than_minutes
        if minutes is None:
            minutes = app.config.get("PENDING_BOOKING_TTL_MINUTES")
        if minutes is None:
            raise click.UsageError("Pass --older-than-minutes or set PENDING_BOOKING_TTL_MINUTES")

        cutoff = datetime.utcnow() - timedelta(minutes=minutes)
        try:
            expired = expire_pending(cutoff)
        except BookingError as err:
            raise click.ClickException(err.message)
        click.echo(f"Expired {len(expired)} pending booking(s)")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
