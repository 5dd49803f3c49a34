from __future__ import annotations

import pytest

from app import create_app
from pytests.common import (
    BASE_PROPERTIES,
    create_empty_sqlite_db,
    make_sqlite_engine,
    patch_app_db,
)


@pytest.fixture(autouse=True)
def _no_seed_env(monkeypatch):
    monkeypatch.delenv("SEED_ON_STARTUP", raising=False)
    monkeypatch.delenv("SEED_ROOT_PRINCIPAL", raising=False)
    monkeypatch.delenv("SEED_DEFAULT_CONTEXT_NAME", raising=False)


def test_status_before_tables_exist(tmp_path, monkeypatch) -> None:
    engine = make_sqlite_engine(tmp_path / "empty.sqlite")
    patch_app_db(monkeypatch, engine)

    client = create_app().test_client()
    try:
        resp = client.get("/seed-status")
        assert resp.status_code == 200
        payload = resp.get_json()
        assert payload["ok"] is True
        assert payload["data"]["seeded"] is False
        assert payload["data"]["context"] == "DEFAULT"
    finally:
        engine.dispose()


def test_status_on_migrated_but_empty_db(tmp_path, monkeypatch) -> None:
    session, engine = create_empty_sqlite_db(tmp_path / "migrated.sqlite")
    session.close()
    patch_app_db(monkeypatch, engine)

    client = create_app().test_client()
    try:
        assert client.get("/seed-status").get_json()["data"]["seeded"] is False
    finally:
        engine.dispose()


def test_create_app_seeds_on_startup(tmp_path, monkeypatch, resource_root) -> None:
    engine = make_sqlite_engine(tmp_path / "startup.sqlite")
    patch_app_db(monkeypatch, engine)

    overrides = {
        "SEED_ON_STARTUP": True,
        "SEED_PROPERTIES": dict(BASE_PROPERTIES),
        "SEED_RESOURCE_ROOT": str(resource_root),
    }
    app = create_app(overrides)
    try:
        payload = app.test_client().get("/seed-status").get_json()
        assert payload["ok"] is True
        assert payload["data"] == {
            "seeded": True,
            "context": "DEFAULT",
            "countries": 3,
            "states": 3,
            "cities": 3,
            "entities": 1,
            "users": 1,
        }

        # Restarting against the same store must not fail or duplicate.
        create_app(overrides)
        again = app.test_client().get("/seed-status").get_json()
        assert again["data"]["users"] == 1
    finally:
        engine.dispose()


def test_create_app_fails_fast_on_bad_root_state(
    tmp_path, monkeypatch, resource_root
) -> None:
    engine = make_sqlite_engine(tmp_path / "bad.sqlite")
    patch_app_db(monkeypatch, engine)

    overrides = {
        "SEED_ON_STARTUP": True,
        "SEED_PROPERTIES": {**BASE_PROPERTIES, "rootEntityStateCode": "XX"},
        "SEED_RESOURCE_ROOT": str(resource_root),
    }
    try:
        with pytest.raises(ValueError, match="State 'XX'"):
            create_app(overrides)
    finally:
        engine.dispose()


def test_status_follows_context_name_from_env(
    tmp_path, monkeypatch, resource_root
) -> None:
    engine = make_sqlite_engine(tmp_path / "env-context.sqlite")
    patch_app_db(monkeypatch, engine)
    monkeypatch.setenv("SEED_DEFAULT_CONTEXT_NAME", "ACME")

    app = create_app(
        {
            "SEED_ON_STARTUP": True,
            "SEED_PROPERTIES": dict(BASE_PROPERTIES),
            "SEED_RESOURCE_ROOT": str(resource_root),
        }
    )
    try:
        data = app.test_client().get("/seed-status").get_json()["data"]
        assert data["context"] == "ACME"
        assert data["seeded"] is True
        assert data["users"] == 1
    finally:
        engine.dispose()
