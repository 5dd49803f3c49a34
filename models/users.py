from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from models import Base
from utils.time_utils import utcnow_sa_default


class User(Base):
    """Membership of an Identity in an Entity."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("entity_id", "identity_id", name="uq_users_entity_identity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(
        Integer,
        ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    identity_id = Column(
        Integer,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_key = Column(String, nullable=False)
    # 'A' active, 'I' inactive.
    user_state = Column(String(1), nullable=False, default="A")
    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)

    entity = relationship("Entity")
    identity = relationship("Identity")

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, user_key={self.user_key!r})"
