import os

from flask import Flask

import db
from api.blueprint import create_api_blueprint
from config import configure_logging, _env_bool
from db import Base
from install.bootstrap import collect_properties, run_install
from logging_utils import configure_app_logging, get_logger


def init_db() -> None:
    """Create any missing tables."""

    Base.metadata.create_all(bind=db.engine)


def seed_on_startup(app: Flask) -> dict:
    """Create the schema and run the first-boot installer.

    Errors propagate: an app that cannot resolve its root context must not start.
    """

    init_db()
    properties = collect_properties(app.config.get("SEED_PROPERTIES"))
    return run_install(
        db.SessionLocal,
        properties,
        resource_root=app.config.get("SEED_RESOURCE_ROOT"),
    )


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__)

    # Load config from file, then apply caller overrides (tests, embedding apps).
    app.config.from_pyfile("settings.py")
    if config_overrides:
        app.config.update(config_overrides)

    configure_app_logging(app.config.get("LOG_LEVEL", "INFO"))
    logger = get_logger(__name__)
    configure_logging(app.logger, app.config.get("LOG_LEVEL", "INFO"))

    app.register_blueprint(create_api_blueprint())

    if _env_bool("SEED_ON_STARTUP", bool(app.config.get("SEED_ON_STARTUP"))):
        summary = seed_on_startup(app)
        if summary["seeded"]:
            logger.info(
                "Installed context %s (warnings=%s)",
                summary["context"],
                len(summary["warnings"]),
            )
        else:
            logger.info("Context %s already installed", summary["context"])

    return app


# NOTE: Do not instantiate the Flask app at import time.
# Tests patch the DB engine/sessionmaker before calling create_app().
app: Flask | None = None


if __name__ == "__main__":
    app = create_app()
    get_logger(__name__).info("Starting Flask app")
    app.run(debug=True, use_reloader=False, port=int(os.getenv("PORT", "5000")))
