from flask import Blueprint, current_app, jsonify
from sqlalchemy import inspect

import db
from api.schemas.api_responses import SeedStatus, fail, ok
from install.bootstrap import collect_properties
from install.stores import Stores
from logging_utils import get_logger

logger = get_logger(__name__)

seed_status_bp = Blueprint("seed_status", __name__)


@seed_status_bp.route("/seed-status", methods=["GET"])
def seed_status():
    """Report whether the default context exists and how much data it holds."""

    # Same layering as startup seeding: settings, then SEED_* environment.
    props = collect_properties(current_app.config.get("SEED_PROPERTIES"))
    context_name = props.get("defaultContextName") or "DEFAULT"

    session = db.SessionLocal()
    try:
        unseeded = SeedStatus(seeded=False, context=context_name)
        if not inspect(session.bind).has_table("operators"):
            return jsonify(ok(unseeded.model_dump()))

        stores = Stores.from_session(session)
        context = stores.operators.find_by_name(context_name)
        if context is None:
            return jsonify(ok(unseeded.model_dump()))

        status = SeedStatus(
            seeded=True,
            context=context_name,
            countries=stores.countries.count(context),
            states=stores.states.count(context),
            cities=stores.cities.count(context),
            entities=stores.entities.count(context),
            users=stores.users.count(context),
        )
        return jsonify(ok(status.model_dump()))
    except Exception as e:
        logger.exception("seed-status failed")
        return jsonify(fail(str(e), code="seed_status_failed")), 500
    finally:
        session.close()
