"""
Search registry: lifecycle of flight searches.

Concurrent updates to the same search are last-write-wins; there is no
version column. The only guarantee is that ``updated_at`` reflects the
most recently applied write.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flightwatch.exceptions import InvalidTemporalRange, NotFound, ReferentialViolation
from flightwatch.models import FlightSearch, User
from flightwatch.schemas import FlightSearchCreate, FlightSearchUpdate
from flightwatch.utils.timeutil import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


def check_temporal_range(
    departure_date: datetime,
    return_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> None:
    """
    Raise InvalidTemporalRange unless the dates describe a valid trip.

    With ``now`` given, departure must also be strictly in the future.
    Return, when present, must be strictly after departure.
    """
    if now is not None and departure_date <= now:
        raise InvalidTemporalRange("Departure date must be in the future")
    if return_date is not None and return_date <= departure_date:
        raise InvalidTemporalRange("Return date must be after departure date")


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward if the clock has not moved past ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class SearchRegistry:
    def __init__(self, db: Session):
        self.db = db

    def create_search(self, data: FlightSearchCreate) -> FlightSearch:
        user = self.db.query(User).filter(User.id == data.user_id).first()
        if not user:
            raise NotFound("User", data.user_id)

        now = utcnow()
        departure_date = to_naive_utc(data.departure_date)
        return_date = to_naive_utc(data.return_date)
        check_temporal_range(departure_date, return_date, now=now)

        search = FlightSearch(
            user_id=data.user_id,
            origin_city=data.origin_city,
            destination_city=data.destination_city,
            departure_date=departure_date,
            return_date=return_date,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.db.add(search)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"User {data.user_id} vanished before flight search insert")
            raise ReferentialViolation(f"User with id {data.user_id} no longer exists") from e
        self.db.refresh(search)

        logger.info(f"Created flight search {search.id} for user {user.id}: {search.route_label}")
        return search

    def get_search(self, search_id: int) -> FlightSearch:
        search = self.db.query(FlightSearch).filter(FlightSearch.id == search_id).first()
        if not search:
            raise NotFound("FlightSearch", search_id)
        return search

    def update_search(self, search_id: int, update: FlightSearchUpdate) -> FlightSearch:
        search = self.get_search(search_id)

        changes = update.changes()
        for key in ("departure_date", "return_date"):
            if key in changes:
                changes[key] = to_naive_utc(changes[key])

        # Validate the merged result before touching the row
        check_temporal_range(
            changes.get("departure_date", search.departure_date),
            changes.get("return_date", search.return_date),
        )

        for field, value in changes.items():
            setattr(search, field, value)
        # An empty update is still a write: it only moves the timestamp
        search.updated_at = next_timestamp(search.updated_at)

        self.db.commit()
        self.db.refresh(search)

        logger.info(f"Updated flight search {search_id}: {sorted(changes) or 'timestamp only'}")
        return search

    def list_by_user(self, user_id: int, is_active: Optional[bool] = None) -> List[FlightSearch]:
        query = self.db.query(FlightSearch).filter(FlightSearch.user_id == user_id)
        if is_active is not None:
            query = query.filter(FlightSearch.is_active == is_active)
        return query.order_by(FlightSearch.id).all()

    def list_active_upcoming(self, now: Optional[datetime] = None) -> List[FlightSearch]:
        """
        Every search the poller should price right now.

        Searches whose departure has passed stay flagged active but are left
        out here; nothing prunes them.
        """
        now = to_naive_utc(now) if now is not None else utcnow()
        return self.db.query(FlightSearch).filter(
            FlightSearch.is_active == True,
            FlightSearch.departure_date >= now,
        ).order_by(FlightSearch.departure_date, FlightSearch.id).all()
