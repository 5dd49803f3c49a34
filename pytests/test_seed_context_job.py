from __future__ import annotations

import os

import pytest
from sqlalchemy.orm import sessionmaker

import jobs.seed_context as job
from models.entities import Entity
from models.identities import Identity
from pytests.common import BASE_PROPERTIES, make_sqlite_engine


def _argv(db_path, resource_root, props) -> list[str]:
    argv = ["--database-url", f"sqlite:///{db_path}", "--resource-root", str(resource_root)]
    for key, value in props.items():
        argv += ["-p", f"{key}={value}"]
    return argv


@pytest.fixture(autouse=True)
def _no_seed_env(monkeypatch):
    for key in [k for k in os.environ if k.startswith("SEED_")]:
        monkeypatch.delenv(key)


def test_job_seeds_then_reports_already_installed(tmp_path, resource_root) -> None:
    db_path = tmp_path / "job.sqlite"

    summary = job.main(_argv(db_path, resource_root, BASE_PROPERTIES))
    assert summary["seeded"] is True
    assert summary["context"] == "DEFAULT"
    assert summary["root_user"] == "alice@example.com"
    assert summary["cities"] == 3
    assert len(summary["warnings"]) == 1

    again = job.main(_argv(db_path, resource_root, BASE_PROPERTIES))
    assert again["seeded"] is False

    engine = make_sqlite_engine(db_path)
    try:
        with sessionmaker(bind=engine)() as s:
            assert s.query(Identity).count() == 1
            assert s.query(Entity).count() == 1
    finally:
        engine.dispose()


def test_env_overrides_settings_file(tmp_path, resource_root, monkeypatch) -> None:
    monkeypatch.setenv("SEED_ROOT_PRINCIPAL", "carol@example.com")
    props = {k: v for k, v in BASE_PROPERTIES.items() if k != "rootPrincipal"}

    summary = job.main(_argv(tmp_path / "env.sqlite", resource_root, props))

    assert summary["root_user"] == "carol@example.com"


def test_invalid_property_argument_exits(tmp_path, resource_root) -> None:
    with pytest.raises(SystemExit):
        job.main(
            ["--database-url", f"sqlite:///{tmp_path / 'x.sqlite'}", "-p", "novalue"]
        )
