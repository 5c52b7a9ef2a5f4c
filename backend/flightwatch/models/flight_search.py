from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from flightwatch.database import Base
from flightwatch.utils.timeutil import utcnow


class FlightSearch(Base):
    """
    A user's standing request to monitor prices for one route and date range.

    Searches are never hard-deleted by the services; setting ``is_active``
    to False pauses monitoring. Deleting the row (or its owner) cascades to
    the price records and alerts hanging off it.
    """
    __tablename__ = "flight_searches"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    origin_city = Column(String(100), nullable=False)
    destination_city = Column(String(100), nullable=False)
    departure_date = Column(DateTime, nullable=False, index=True)
    return_date = Column(DateTime, nullable=True)  # Null for one-way

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="flight_searches")
    price_records = relationship(
        "PriceRecord",
        back_populates="flight_search",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    alerts = relationship(
        "Alert",
        back_populates="flight_search",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_one_way(self) -> bool:
        return self.return_date is None

    @property
    def route_label(self) -> str:
        return f"{self.origin_city} → {self.destination_city}"

    def __repr__(self) -> str:
        return f"<FlightSearch {self.id}: {self.route_label} on {self.departure_date:%Y-%m-%d}>"
