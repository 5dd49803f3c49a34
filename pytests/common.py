"""Shared helpers for tests.

Intended usage:
- spin up a temporary SQLite database
- create all SQLAlchemy tables
- lay out a small XML resource tree for the installer

These utilities keep tests small and consistent.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

import db as db_module
from models import Base

__all__ = [
    "make_sqlite_engine",
    "create_empty_sqlite_db",
    "patch_app_db",
    "write_reference_data",
    "BASE_PROPERTIES",
]


BASE_PROPERTIES: dict[str, str] = {
    "stateFile": "states.xml",
    "defaultCountry": "BR",
    "rootEntityStateCode": "SP",
    "rootEntityCityCode": "3550308",
    "rootPrincipal": "alice@example.com",
    "rootFirstName": "Alice",
    "rootLastName": "Doe",
    "initialSecret": "s3cret-initial",
}


def make_sqlite_engine(db_path: Path | str) -> Engine:
    """Create a SQLite engine suitable for tests."""

    if isinstance(db_path, Path):
        db_path = str(db_path)
    return create_engine(f"sqlite:///{db_path}")


def create_empty_sqlite_db(db_path: Path) -> tuple[Session, Engine]:
    """Create an empty SQLite DB file and initialize all models.

    Returns (session, engine).
    """

    engine = make_sqlite_engine(db_path)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    return SessionLocal(), engine


def patch_app_db(monkeypatch, engine: Engine) -> None:
    """Point the app's global engine/sessionmaker at a test engine."""

    monkeypatch.setattr(db_module, "engine", engine)
    monkeypatch.setattr(
        db_module,
        "SessionLocal",
        sessionmaker(autocommit=False, autoflush=False, bind=engine),
    )


_COUNTRIES = """<?xml version='1.0' encoding='UTF-8'?>
<countries>
  <country code="BR" name="Brasil"/>
  <country code="ar" name="Argentina"/>
  <country code="PT" name="Portugal"/>
</countries>
"""

_STATES = """<?xml version='1.0' encoding='UTF-8'?>
<states>
  <state code="SP" name="São Paulo"/>
  <state code="RJ" name="Rio de Janeiro"/>
  <state code="MG" name="Minas Gerais"/>
</states>
"""

_CITIES = {
    "SP": """<?xml version='1.0' encoding='UTF-8'?>
<cities>
  <city code="3550308" name="São Paulo" capital="true"/>
  <city code="3509502" name="Campinas"/>
</cities>
""",
    "RJ": """<?xml version='1.0' encoding='UTF-8'?>
<cities>
  <city code="3304557" name="Rio de Janeiro" capital="true"/>
</cities>
""",
}


def write_reference_data(
    root: Path, *, data_path: str = "META-INF/data", cities: dict | None = None
) -> Path:
    """Write countries.xml, states.xml and per-state city files under `root`.

    MG deliberately has no city file. Returns `root` for use as resource root.
    """

    base = root / data_path
    (base / "BR").mkdir(parents=True, exist_ok=True)
    (base / "countries.xml").write_text(_COUNTRIES, encoding="utf-8")
    (base / "states.xml").write_text(_STATES, encoding="utf-8")
    for state_code, xml in (_CITIES if cities is None else cities).items():
        (base / "BR" / f"cities-{state_code}.xml").write_text(xml, encoding="utf-8")
    return root
