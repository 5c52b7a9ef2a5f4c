import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from flightwatch.exceptions import Inactive, NotFound, ReferentialViolation
from flightwatch.models import FlightSearch, PriceRecord
from flightwatch.schemas import PriceHistoryEntry, PriceRecordCreate
from flightwatch.utils.money import to_major_units

logger = logging.getLogger(__name__)


class PriceLedger:
    """
    Append-only price history per flight search.

    Records are never updated or deleted here. Newest first means
    ``recorded_at`` descending, with ``id`` breaking ties.
    """

    def __init__(self, db: Session):
        self.db = db

    def record_price(self, data: PriceRecordCreate) -> PriceRecord:
        search = self.db.query(FlightSearch).filter(
            FlightSearch.id == data.flight_search_id
        ).first()
        if not search:
            raise NotFound("FlightSearch", data.flight_search_id)
        if not search.is_active:
            logger.warning(f"Refusing price for paused flight search {search.id}")
            raise Inactive(search.id)

        # Check-then-insert: a search paused by another request in between
        # still gets this one record.
        record = PriceRecord(
            flight_search_id=search.id,
            price=data.price,
            currency=data.currency,
            provider=data.provider,
        )
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ReferentialViolation(
                f"Flight search with id {data.flight_search_id} no longer exists"
            ) from e

        self.db.refresh(record)
        logger.info(
            f"Recorded {record.price} {record.currency} from {record.provider} "
            f"for flight search {search.id}"
        )
        return record

    def _newest_first(self, flight_search_id: int) -> Query:
        return self.db.query(PriceRecord).filter(
            PriceRecord.flight_search_id == flight_search_id
        ).order_by(PriceRecord.recorded_at.desc(), PriceRecord.id.desc())

    def history(self, flight_search_id: int, limit: Optional[int] = None) -> List[PriceHistoryEntry]:
        """
        Price history for display, newest first.

        Prices come back in major units (50000 cents -> 500.00). An unknown
        search simply has no history.
        """
        if limit is not None and limit < 1:
            raise ValueError("limit must be a positive integer")

        query = self._newest_first(flight_search_id)
        if limit is not None:
            query = query.limit(limit)

        return [
            PriceHistoryEntry(
                id=record.id,
                flight_search_id=record.flight_search_id,
                price=to_major_units(record.price),
                currency=record.currency,
                provider=record.provider,
                recorded_at=record.recorded_at,
            )
            for record in query.all()
        ]

    def latest_pair(self, flight_search_id: int) -> Tuple[Optional[PriceRecord], Optional[PriceRecord]]:
        """(newest, the one before it), in minor units; either may be None."""
        rows = self._newest_first(flight_search_id).limit(2).all()
        current = rows[0] if rows else None
        previous = rows[1] if len(rows) > 1 else None
        return current, previous
