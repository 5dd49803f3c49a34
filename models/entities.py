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


class Entity(Base):
    """Business unit under an Operator, unique per (operator, alias).

    entity_type is a one-letter code: 'C' corporation, 'B' branch,
    'P' person, 'O' other.
    """

    __tablename__ = "entities"
    __table_args__ = (
        UniqueConstraint("operator_id", "alias", name="uq_entities_operator_alias"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    operator_id = Column(
        Integer, ForeignKey("operators.id", ondelete="CASCADE"), nullable=False
    )
    alias = Column(String(32), nullable=False)
    summary = Column(String, nullable=True)
    entity_type = Column(String(1), nullable=False, default="C")
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)

    operator = relationship("Operator")
    city = relationship("City")

    def __repr__(self) -> str:
        return f"Entity(id={self.id!r}, alias={self.alias!r})"
