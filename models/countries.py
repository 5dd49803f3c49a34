from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models import Base


class Country(Base):
    __tablename__ = "countries"
    __table_args__ = (
        UniqueConstraint(
            "operator_id", "country_code", name="uq_countries_operator_code"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    operator_id = Column(
        Integer, ForeignKey("operators.id", ondelete="CASCADE"), nullable=False
    )
    # ISO 3166 alpha-2, stored upper-case.
    country_code = Column(String(8), nullable=False)
    country_name = Column(String, nullable=True)

    operator = relationship("Operator")

    def __repr__(self) -> str:
        return f"Country(country_code={self.country_code!r})"
