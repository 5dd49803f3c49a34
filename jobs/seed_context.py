from __future__ import annotations

import argparse

from sqlalchemy.orm import sessionmaker

import db
from db import Base
from install.bootstrap import collect_properties, run_install
from logging_utils import get_logger
from settings import SEED_PROPERTIES

logger = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Create the root context, reference data and root user if missing"
    )
    p.add_argument("--database-url", default=None, help="SQLAlchemy URL (default: db.py)")
    p.add_argument(
        "--resource-root",
        default=None,
        help="Directory that contextDataPath is resolved against",
    )
    p.add_argument(
        "--property",
        "-p",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Installer property override, e.g. -p rootPrincipal=alice@example.com",
    )
    return p.parse_args(argv)


def _parse_overrides(pairs: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise SystemExit(f"Invalid --property {pair!r}; expected KEY=VALUE")
        out[key.strip()] = value
    return out


def main(argv: list[str] | None = None) -> dict:
    args = _parse_args(argv)
    overrides = _parse_overrides(args.property)

    engine = db.make_engine(args.database_url) if args.database_url else db.engine
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # settings.py < environment < command line
    properties = collect_properties(SEED_PROPERTIES)
    properties.update(overrides)

    summary = run_install(
        session_factory, properties, resource_root=args.resource_root
    )

    logger.info(
        "seed_context complete | context=%s seeded=%s countries=%s states=%s "
        "cities=%s warnings=%s",
        summary["context"],
        summary["seeded"],
        summary.get("countries", 0),
        summary.get("states", 0),
        summary.get("cities", 0),
        len(summary["warnings"]),
    )
    if args.database_url:
        engine.dispose()
    return summary


if __name__ == "__main__":
    main()
