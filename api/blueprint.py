from flask import Blueprint

from api.pages.seed_status import seed_status_bp


def create_api_blueprint() -> Blueprint:
    """Create the main API blueprint and register page blueprints.

    Keep this as the single registration point to avoid double-registering routes.
    """
    api_bp = Blueprint("api", __name__)

    api_bp.register_blueprint(seed_status_bp)

    return api_bp
