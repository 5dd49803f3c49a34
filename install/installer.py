"""First-boot installer.

On a clean database ``EntityInstaller.ensure_seeded()`` creates the root
operator, loads countries, states and cities from the bundled XML resources,
then creates the root identity, root entity and root user. When the operator
already exists it returns immediately without writing anything.

Each phase commits on its own. A failure part way (e.g. the configured root
state is not in the state file) leaves the rows of earlier phases in place and
propagates to the caller; there is no rollback of a partial install.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from install.credentials import IdentityCrypto
from install.parsers import parse_cities, parse_countries, parse_states
from install.resources import ResourceLoader, city_data_path
from install.settings import InstallSettings
from install.stores import Stores
from install.user_install import UserInstallService
from logging_utils import get_logger
from models.cities import City
from models.countries import Country
from models.entities import Entity
from models.identities import Identity
from models.operators import Operator
from models.states import State
from models.users import User

logger = get_logger(__name__)


class InstallConfigurationError(ValueError):
    """Required configuration or reference data is missing."""


def _noop_run_once(context: Operator, root_entity: Entity, root_user: User) -> None:
    return None


@dataclass(frozen=True)
class InstallStrategy:
    """Application-specific defaults and post-install hook.

    Values here are used only when the matching property is not configured.
    """

    default_country: Optional[str] = None
    default_state_file: Optional[str] = None
    initial_secret: Optional[str] = None
    run_once: Callable[[Operator, Entity, User], None] = _noop_run_once


@dataclass
class InstallResult:
    seeded: bool
    context: Operator
    root_entity: Optional[Entity] = None
    root_user: Optional[User] = None
    warnings: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


class EntityInstaller:
    def __init__(
        self,
        settings: InstallSettings,
        stores: Stores,
        *,
        strategy: InstallStrategy | None = None,
        crypto: IdentityCrypto | None = None,
        user_install: UserInstallService | None = None,
        resources: ResourceLoader | None = None,
    ) -> None:
        self.settings = settings
        self.stores = stores
        self.strategy = strategy or InstallStrategy()
        self.crypto = crypto or IdentityCrypto(stores.session)
        self.user_install = user_install or UserInstallService(
            stores.identities, stores.users
        )
        self.resources = resources or ResourceLoader()

        self.context_data_path = settings.context_data_path
        self.default_country = settings.default_country or self.strategy.default_country
        self.state_file = settings.state_file or self.strategy.default_state_file
        self.initial_secret = settings.initial_secret or self.strategy.initial_secret

        missing = [
            name
            for name, value in (
                ("defaultCountry", self.default_country),
                ("stateFile", self.state_file),
                ("initialSecret", self.initial_secret),
            )
            if not value
        ]
        if missing:
            raise InstallConfigurationError(
                "Missing installer properties: " + ", ".join(missing)
            )

    @property
    def session(self):
        return self.stores.session

    def ensure_seeded(self) -> InstallResult:
        context_name = self.settings.default_context_name
        context = self.stores.operators.find_by_name(context_name)
        if context is not None:
            logger.debug("Context %s already installed; nothing to do", context_name)
            return InstallResult(seeded=False, context=context)

        context = self.stores.operators.save(Operator(operator_name=context_name))
        self.session.commit()
        logger.info("Created %s.", context)

        country = self.install_countries(context)
        city, warnings = self.install_states_and_cities(context, country)
        root_entity, root_user = self.install_root(context, city)

        counts = {
            "countries": self.stores.countries.count(context),
            "states": self.stores.states.count(context),
            "cities": self.stores.cities.count(context),
        }
        logger.info(
            "Installed context %s | countries=%s states=%s cities=%s warnings=%s",
            context_name,
            counts["countries"],
            counts["states"],
            counts["cities"],
            len(warnings),
        )
        return InstallResult(
            seeded=True,
            context=context,
            root_entity=root_entity,
            root_user=root_user,
            warnings=warnings,
            counts=counts,
        )

    def install_countries(self, context: Operator) -> Country | None:
        """Install all countries, return the configured default country (if any)."""

        path = self.resources.resolve(self.context_data_path + self.settings.country_file)
        countries = parse_countries(context, path)
        managed = self.stores.countries.save_all(countries)
        self.session.commit()
        logger.info("Saved %s countries.", len(managed))

        return self.stores.countries.find_by_code(context, self.default_country.upper())

    def install_states_and_cities(
        self, context: Operator, country: Country | None
    ) -> tuple[City, list[str]]:
        """Install states and their cities, return (root city, warnings).

        A state whose city file is missing or broken is skipped with a warning;
        only the root city has to be present afterwards.
        """

        state_code = self.settings.root_entity_state_code.upper()
        city_code = self.settings.root_entity_city_code

        if country is None:
            raise InstallConfigurationError(
                f"Country {self.default_country!r} not found; "
                "it is required to resolve the root city."
            )

        path = self.resources.resolve(self.context_data_path + self.state_file)
        states = parse_states(context, country, path)
        managed_states = self.stores.states.save_all(states)
        self.session.commit()
        logger.info("Saved %s states.", len(managed_states))

        if self.stores.states.find_by_code(context, state_code) is None:
            raise InstallConfigurationError(
                f"State {state_code!r} not found; "
                "it is required to resolve the root city."
            )

        warnings: list[str] = []
        for state in managed_states:
            city_path = self.resolve_city_data_path(country, state)
            try:
                cities = parse_cities(context, state, self.resources.resolve(city_path))
                self.stores.cities.save_all(cities)
                self.session.commit()
                logger.info("Saved %s cities for state %s.", len(cities), state.state_code)
            except Exception as exc:
                self.session.rollback()
                msg = f"Skipped cities of state {state.state_code} ({city_path}): {exc}"
                logger.warning(msg)
                warnings.append(msg)

        city = self.stores.cities.find_by_code(context, city_code)
        if city is None:
            raise InstallConfigurationError(
                f"City {city_code!r} not found; it is required for the root entity."
            )
        return city, warnings

    def install_root(self, context: Operator, root_city: City) -> tuple[Entity, User]:
        """Create root identity, entity and user, then run the strategy hook."""

        s = self.settings
        identity = self.stores.identities.find_by_principal(s.root_principal)
        if identity is None:
            identity = self.stores.identities.save(
                Identity(
                    principal=s.root_principal,
                    display_name=s.root_display_name or s.root_first_name,
                    first_name=s.root_first_name,
                    last_name=s.root_last_name,
                )
            )
            logger.info("Created root identity %s.", identity)
            self.crypto.create_identity_secret(identity, self.initial_secret, False)
            self.session.commit()

        prototype = self.create_prototype(s.root_entity_alias)
        prototype.city = root_city
        root_entity = self.install_entity(context, prototype)

        root_user = self.user_install.install_user(root_entity, identity.principal)
        self.session.commit()

        self.strategy.run_once(context, root_entity, root_user)
        self.session.commit()
        return root_entity, root_user

    def resolve_city_data_path(self, country: Country, state: State) -> str:
        return city_data_path(
            self.context_data_path, country.country_code, state.state_code
        )

    @staticmethod
    def create_prototype(alias: str, summary: str = "", entity_type: str = "C") -> Entity:
        """Unsaved Entity carrying only the fields a prototype defines."""

        return Entity(alias=alias, summary=summary or None, entity_type=entity_type)

    def install_entity(self, context: Operator, prototype: Entity) -> Entity:
        """Find the (context, alias) entity or create it from the prototype."""

        if context is None:
            raise InstallConfigurationError("Unable to find context")

        entity = self.stores.entities.find_by_alias(context, prototype.alias)
        if entity is not None:
            logger.debug(
                "Found existing entity for context %s and alias %s.",
                context.operator_name,
                prototype.alias,
            )
            return entity

        logger.info(
            "Will install entity for context %s and alias %s.",
            context.operator_name,
            prototype.alias,
        )
        entity = self.stores.entities.save(
            Entity(
                operator=context,
                alias=prototype.alias,
                summary=prototype.summary,
                entity_type=prototype.entity_type or "C",
                city=prototype.city,
            )
        )
        self.session.commit()
        return entity
