from flightwatch.schemas.user import UserCreate, UserResponse
from flightwatch.schemas.flight_search import FlightSearchCreate, FlightSearchUpdate, FlightSearchResponse
from flightwatch.schemas.price import PriceRecordCreate, PriceRecordResponse, PriceHistoryEntry
from flightwatch.schemas.alert import AlertCreate, AlertResponse, AlertFilter, UnreadCount

__all__ = [
    "UserCreate",
    "UserResponse",
    "FlightSearchCreate",
    "FlightSearchUpdate",
    "FlightSearchResponse",
    "PriceRecordCreate",
    "PriceRecordResponse",
    "PriceHistoryEntry",
    "AlertCreate",
    "AlertResponse",
    "AlertFilter",
    "UnreadCount",
]
