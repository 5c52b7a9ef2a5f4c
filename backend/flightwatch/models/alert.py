import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from flightwatch.database import Base
from flightwatch.utils.timeutil import utcnow


class AlertType(str, enum.Enum):
    PRICE_DROP = "price_drop"
    PRICE_INCREASE = "price_increase"
    PRICE_TARGET_REACHED = "price_target_reached"


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    flight_search_id = Column(
        Integer,
        ForeignKey("flight_searches.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    alert_type = Column(
        SQLEnum(AlertType, name="alert_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    old_price = Column(Integer, nullable=True)  # Null when there is nothing to compare against
    new_price = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    flight_search = relationship("FlightSearch", back_populates="alerts")

    def __repr__(self) -> str:
        return f"<Alert {self.id}: {self.alert_type.value} {self.old_price} -> {self.new_price}>"
