from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from flightwatch.database import Base
from flightwatch.utils.timeutil import utcnow


class PriceRecord(Base):
    """
    One observed price for a flight search. Append-only.

    ``price`` is in minor currency units (cents). Conversion to a display
    amount happens when history is read, never on write.
    """
    __tablename__ = "price_records"

    id = Column(Integer, primary_key=True, index=True)
    flight_search_id = Column(
        Integer,
        ForeignKey("flight_searches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    price = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    provider = Column(String(100), nullable=False)

    recorded_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    flight_search = relationship("FlightSearch", back_populates="price_records")

    def __repr__(self) -> str:
        return f"<PriceRecord {self.id}: {self.price} {self.currency} at {self.recorded_at}>"
