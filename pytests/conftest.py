from __future__ import annotations

from typing import Generator

import pytest
from sqlalchemy import event
from sqlalchemy.orm import Session

from install.resources import ResourceLoader
from install.settings import InstallSettings
from install.stores import Stores
from pytests.common import BASE_PROPERTIES, create_empty_sqlite_db, write_reference_data


@pytest.fixture()
def db_session(tmp_path) -> Generator[Session, None, None]:
    """Session on a fresh, fully migrated temp SQLite DB."""

    session, engine = create_empty_sqlite_db(tmp_path / "seed.sqlite")
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def stores(db_session) -> Stores:
    return Stores.from_session(db_session)


@pytest.fixture()
def resource_root(tmp_path):
    return write_reference_data(tmp_path / "resources")


@pytest.fixture()
def resources(resource_root) -> ResourceLoader:
    return ResourceLoader(resource_root)


@pytest.fixture()
def properties() -> dict[str, str]:
    return dict(BASE_PROPERTIES)


@pytest.fixture()
def settings(properties) -> InstallSettings:
    return InstallSettings.from_properties(properties)


@pytest.fixture()
def write_log(db_session) -> Generator[list[str], None, None]:
    """Collects INSERT/UPDATE/DELETE statements issued through the session's engine."""

    statements: list[str] = []

    def _before_execute(conn, cursor, statement, parameters, context, executemany):
        verb = statement.lstrip().split(None, 1)[0].upper()
        if verb in {"INSERT", "UPDATE", "DELETE"}:
            statements.append(statement)

    engine = db_session.get_bind()
    event.listen(engine, "before_cursor_execute", _before_execute)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", _before_execute)
