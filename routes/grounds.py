from flask import Blueprint, request, jsonify
from sqlalchemy.exc import IntegrityError

from models import db
from models.ground import Ground
from models.sub_venue import SubVenue
from services.catalog import get_ground
from services.errors import ValidationError, Conflict, store_errors
from services.serializers import serialize_ground, serialize_sub_venue
from utils.audit import log_event
from utils.identity import actor_id_from_request

grounds_bp = Blueprint("grounds", __name__, url_prefix="/grounds")


def _optional_price(value):
    if value is None or value == "":
        return None
    try:
        price = int(value)
    except (TypeError, ValueError):
        raise ValidationError("base_price must be a whole number")
    if price < 0:
        raise ValidationError("base_price cannot be negative")
    return price


@grounds_bp.post("")
def create_ground():
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    location = (data.get("location") or "").strip() or None
    if not name:
        raise ValidationError("Ground name required")

    ground = Ground(name=name, location=location, base_price=_optional_price(data.get("base_price")))
    with store_errors("create the ground"):
        db.session.add(ground)
        db.session.commit()

    log_event("GROUND_CREATE", actor_id=actor_id_from_request(data), entity="ground", entity_id=ground.id)
    return jsonify(serialize_ground(ground)), 201


@grounds_bp.get("")
def list_grounds():
    name_query = (request.args.get("name") or "").strip()
    with store_errors("load grounds"):
        q = Ground.query.filter(Ground.is_active.is_(True))
        if name_query:
            q = q.filter(Ground.name.ilike(f"%{name_query}%"))
        rows = q.order_by(Ground.created_at.desc()).limit(200).all()
        return jsonify([serialize_ground(g) for g in rows]), 200


@grounds_bp.get("/<ground_id>")
def ground_detail(ground_id: str):
    with store_errors("load the ground"):
        return jsonify(serialize_ground(get_ground(ground_id))), 200


@grounds_bp.post("/<ground_id>/sub-venues")
def create_sub_venue(ground_id: str):
    data = request.get_json(silent=True) or {}
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Sports area name required")

    with store_errors("create the sports area"):
        ground = get_ground(ground_id)
        sub_venue = SubVenue(ground_id=ground.id, name=name, sort_order=len(ground.sub_venues))
        db.session.add(sub_venue)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise Conflict("Sports area already exists for this ground")

    log_event("SUB_VENUE_CREATE", actor_id=actor_id_from_request(data), entity="sub_venue", entity_id=sub_venue.id)
    return jsonify(serialize_sub_venue(sub_venue)), 201


@grounds_bp.get("/<ground_id>/sub-venues")
def list_sub_venues(ground_id: str):
    with store_errors("load sports areas"):
        ground = get_ground(ground_id)
        return jsonify([serialize_sub_venue(v) for v in ground.sub_venues]), 200
