from __future__ import annotations

from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from logging_utils import get_logger
from models.identities import Identity, IdentitySecret

logger = get_logger(__name__)


class IdentityCrypto:
    """Derives and checks stored identity secrets.

    Plaintext is never persisted; only the werkzeug hash string is stored.
    """

    def __init__(self, session: Session, method: str = "scrypt") -> None:
        self.session = session
        self.method = method

    def create_identity_secret(
        self, identity: Identity, plaintext: str, expired: bool = False
    ) -> IdentitySecret:
        if not plaintext:
            raise ValueError("An initial secret is required to create credentials")

        if identity.secret is not None:
            logger.debug("Identity %s already has a secret", identity.principal)
            return identity.secret

        secret = IdentitySecret(
            identity=identity,
            secret_hash=generate_password_hash(plaintext, method=self.method),
            expired=expired,
        )
        self.session.add(secret)
        self.session.flush()
        logger.info("Created secret for identity %s", identity.principal)
        return secret

    def verify(self, identity: Identity, plaintext: str) -> bool:
        if identity.secret is None:
            return False
        return check_password_hash(identity.secret.secret_hash, plaintext)
