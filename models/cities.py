from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from models import Base


class City(Base):
    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("operator_id", "city_code", name="uq_cities_operator_code"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    operator_id = Column(
        Integer, ForeignKey("operators.id", ondelete="CASCADE"), nullable=False
    )
    state_id = Column(
        Integer, ForeignKey("states.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Official municipality code (e.g. IBGE 3550308 for São Paulo).
    city_code = Column(String(16), nullable=False)
    city_name = Column(String, nullable=True)
    capital = Column(Boolean, nullable=False, default=False)

    operator = relationship("Operator")
    state = relationship("State")

    def __repr__(self) -> str:
        return f"City(city_code={self.city_code!r}, city_name={self.city_name!r})"
