from typing import List, Optional

from sqlalchemy.orm import Query, Session

from flightwatch.models import Alert, FlightSearch
from flightwatch.schemas import AlertFilter


class AlertQuery:
    """
    Read side for alerts.

    Every query runs over alerts joined to their flight search, so a user
    filter is just another predicate on ``flight_searches.user_id``.
    """

    # AlertFilter field -> column it constrains
    PREDICATE_COLUMNS = {
        "user_id": FlightSearch.user_id,
        "flight_search_id": Alert.flight_search_id,
        "is_read": Alert.is_read,
    }

    def __init__(self, db: Session):
        self.db = db

    @classmethod
    def predicates(cls, filters: AlertFilter) -> list:
        supplied = filters.model_dump(exclude_none=True)
        return [cls.PREDICATE_COLUMNS[name] == value for name, value in supplied.items()]

    def _joined(self, filters: AlertFilter) -> Query:
        return self.db.query(Alert).join(
            FlightSearch, Alert.flight_search_id == FlightSearch.id
        ).filter(*self.predicates(filters))

    def get_alerts(self, filters: Optional[AlertFilter] = None) -> List[Alert]:
        """Alerts matching all supplied filters, newest first."""
        filters = filters or AlertFilter()
        return self._joined(filters).order_by(Alert.created_at.desc(), Alert.id.desc()).all()

    def count_unread(self, user_id: int) -> int:
        return self._joined(AlertFilter(user_id=user_id, is_read=False)).count()
