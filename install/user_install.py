from __future__ import annotations

from install.stores import IdentityStore, UserStore
from logging_utils import get_logger
from models.entities import Entity
from models.users import User

logger = get_logger(__name__)


class UserInstallService:
    """Materializes a User for an (entity, principal) pair."""

    def __init__(self, identities: IdentityStore, users: UserStore) -> None:
        self.identities = identities
        self.users = users

    def install_user(self, entity: Entity, principal: str) -> User:
        identity = self.identities.find_by_principal(principal)
        if identity is None:
            raise LookupError(f"No identity found for principal {principal!r}")

        user = self.users.find_by_entity_and_identity(entity, identity)
        if user is not None:
            logger.debug("Found existing user %s in entity %s", principal, entity.alias)
            return user

        user = self.users.save(
            User(
                entity=entity,
                identity=identity,
                user_key=identity.principal,
                user_state="A",
            )
        )
        logger.info("Created user %s in entity %s", identity.principal, entity.alias)
        return user
