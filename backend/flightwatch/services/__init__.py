from flightwatch.services.users import UserService
from flightwatch.services.search_registry import SearchRegistry
from flightwatch.services.price_ledger import PriceLedger
from flightwatch.services.alert_engine import AlertEngine, classify_price_change, build_alert_message
from flightwatch.services.alert_queries import AlertQuery

__all__ = [
    "UserService",
    "SearchRegistry",
    "PriceLedger",
    "AlertEngine",
    "AlertQuery",
    "classify_price_change",
    "build_alert_message",
]
