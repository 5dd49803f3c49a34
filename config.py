import logging
import os
from collections.abc import Mapping


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


def _camel(name: str) -> str:
    # ROOT_ENTITY_CITY_CODE -> rootEntityCityCode
    head, *rest = name.lower().split("_")
    return head + "".join(p.capitalize() for p in rest if p)


def properties_from_env(
    environ: Mapping[str, str] | None = None, prefix: str = "SEED_"
) -> dict[str, str]:
    """Translate ``SEED_ROOT_PRINCIPAL`` style variables into installer properties.

    ``SEED_ON_STARTUP`` is a switch, not a property, and is skipped.
    """

    environ = os.environ if environ is None else environ
    out: dict[str, str] = {}
    for key, value in environ.items():
        if not key.startswith(prefix) or key == "SEED_ON_STARTUP":
            continue
        name = key[len(prefix):]
        if not name:
            continue
        out[_camel(name)] = value
    return out


def configure_logging(app_logger: logging.Logger, level_name: str) -> None:
    """Configure application logging in a simple, predictable way."""

    level = getattr(logging, level_name, logging.INFO)

    # Avoid duplicate handlers (e.g., in tests or reload scenarios)
    if app_logger.handlers:
        app_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)

    app_logger.addHandler(handler)
    app_logger.setLevel(level)
