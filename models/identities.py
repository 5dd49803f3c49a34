from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from models import Base
from utils.time_utils import utcnow_sa_default


class Identity(Base):
    """A person, identified globally (not per operator) by its principal.

    The principal is normalized to lower case by the stores before lookup.
    """

    __tablename__ = "identities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    principal = Column(String, unique=True, nullable=False, index=True)
    display_name = Column(String, nullable=True)

    # Personal data.
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)

    secret = relationship("IdentitySecret", uselist=False, back_populates="identity")

    def __repr__(self) -> str:
        return f"Identity(id={self.id!r}, principal={self.principal!r})"


class IdentitySecret(Base):
    """Stored credential for an Identity; only the derived hash is kept."""

    __tablename__ = "identity_secrets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    identity_id = Column(
        Integer,
        ForeignKey("identities.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    secret_hash = Column(String, nullable=False)

    # Expired secrets must be changed on first login.
    expired = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)

    identity = relationship("Identity", back_populates="secret")
