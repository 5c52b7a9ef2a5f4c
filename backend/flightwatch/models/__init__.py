# SQLAlchemy models
from flightwatch.models.user import User
from flightwatch.models.flight_search import FlightSearch
from flightwatch.models.price_record import PriceRecord
from flightwatch.models.alert import Alert, AlertType

__all__ = [
    "User",
    "FlightSearch",
    "PriceRecord",
    "Alert",
    # Enums
    "AlertType",
]
