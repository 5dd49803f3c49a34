from __future__ import annotations

import secrets
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from sqlalchemy.orm import Session

from config import properties_from_env
from install.installer import EntityInstaller, InstallResult, InstallStrategy
from install.resources import ResourceLoader
from install.settings import InstallSettings
from install.stores import Stores
from logging_utils import get_logger

logger = get_logger(__name__)


def default_strategy(initial_secret: str | None = None) -> InstallStrategy:
    """Strategy used when the application does not supply one.

    Without a configured initial secret a random one is generated and logged
    once, after the root user exists, so a fresh install still yields a usable
    root login.
    """

    generated = None if initial_secret else secrets.token_urlsafe(12)

    def run_once(context, root_entity, root_user) -> None:
        if generated:
            logger.warning(
                "Root user %s created with generated initial secret %s; "
                "change it after the first login.",
                root_user.user_key,
                generated,
            )

    return InstallStrategy(
        default_country="BR",
        default_state_file="BR/states.xml",
        initial_secret=generated,
        run_once=run_once,
    )


def collect_properties(
    *layers: Mapping[str, Any] | None, environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Merge property layers left to right, then environment overrides on top."""

    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    merged.update(properties_from_env(environ))
    return merged


def build_installer(
    session: Session,
    properties: Mapping[str, Any],
    *,
    resource_root: Path | str | None = None,
    strategy: InstallStrategy | None = None,
) -> EntityInstaller:
    settings = InstallSettings.from_properties(properties)
    return EntityInstaller(
        settings,
        Stores.from_session(session),
        strategy=strategy or default_strategy(settings.initial_secret),
        resources=ResourceLoader(resource_root),
    )


def run_install(
    session_factory: Callable[[], Session],
    properties: Mapping[str, Any],
    *,
    resource_root: Path | str | None = None,
    strategy: InstallStrategy | None = None,
) -> dict[str, Any]:
    """Run ``ensure_seeded`` in a fresh session and return a plain summary.

    The summary holds no ORM objects so it stays valid after the session closes.
    """

    with session_factory() as session:
        installer = build_installer(
            session, properties, resource_root=resource_root, strategy=strategy
        )
        result: InstallResult = installer.ensure_seeded()
        return {
            "seeded": result.seeded,
            "context": result.context.operator_name,
            "root_entity": result.root_entity.alias if result.root_entity else None,
            "root_user": result.root_user.user_key if result.root_user else None,
            "warnings": list(result.warnings),
            **result.counts,
        }
