from sqlalchemy import Column, DateTime, Integer, String

from models import Base
from utils.time_utils import utcnow_sa_default


class Operator(Base):
    """Root tenant scope; every other seeded row hangs off one of these."""

    __tablename__ = "operators"

    id = Column(Integer, primary_key=True, autoincrement=True)
    operator_name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow_sa_default)

    def __repr__(self) -> str:
        return f"Operator(id={self.id!r}, operator_name={self.operator_name!r})"
