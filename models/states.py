from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models import Base


class State(Base):
    """First-level subdivision of a Country.

    State codes are unique per operator, not per country, so lookups only need
    (operator, state_code).
    """

    __tablename__ = "states"
    __table_args__ = (
        UniqueConstraint("operator_id", "state_code", name="uq_states_operator_code"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    operator_id = Column(
        Integer, ForeignKey("operators.id", ondelete="CASCADE"), nullable=False
    )
    country_id = Column(
        Integer,
        ForeignKey("countries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    state_code = Column(String(8), nullable=False)
    state_name = Column(String, nullable=True)

    operator = relationship("Operator")
    country = relationship("Country")

    def __repr__(self) -> str:
        return f"State(state_code={self.state_code!r})"
