"""
Alert engine: stores price alerts and owns their read state.

An alert moves Unread -> Read exactly once; marking a read alert again is
a no-op. The engine never deduplicates, so a caller that evaluates the
same transition twice gets two alerts.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flightwatch.exceptions import NotFound, ReferentialViolation
from flightwatch.models import Alert, AlertType
from flightwatch.schemas import AlertCreate
from flightwatch.services.price_ledger import PriceLedger
from flightwatch.utils.money import format_money

logger = logging.getLogger(__name__)


def classify_price_change(
    old_price: Optional[int],
    new_price: int,
    target_price: Optional[int] = None,
) -> Optional[AlertType]:
    """
    Decide which alert, if any, a price transition deserves.

    All prices are in minor units. A target counts as reached only when the
    new price is at or below it and the old price was not, so a price that
    stays under the target does not fire again. Reaching the target wins
    over a plain drop. Without an old price only a target crossing can fire.
    """
    if target_price is not None and new_price <= target_price:
        if old_price is None or old_price > target_price:
            return AlertType.PRICE_TARGET_REACHED

    if old_price is None:
        return None
    if new_price < old_price:
        return AlertType.PRICE_DROP
    if new_price > old_price:
        return AlertType.PRICE_INCREASE
    return None


def build_alert_message(
    alert_type: AlertType,
    old_price: Optional[int],
    new_price: int,
    currency: str,
    route_label: Optional[str] = None,
) -> str:
    where = f" for {route_label}" if route_label else ""
    new = format_money(new_price, currency)

    if alert_type == AlertType.PRICE_TARGET_REACHED:
        return f"Target price reached{where}: now {new}"

    verb = "dropped" if alert_type == AlertType.PRICE_DROP else "increased"
    if old_price is None:
        return f"Price {verb}{where}: now {new}"

    old = format_money(old_price, currency)
    if old_price:
        pct = abs(new_price - old_price) * 100 / old_price
        return f"Price {verb} {pct:.1f}%{where}: {old} → {new}"
    return f"Price {verb}{where}: {old} → {new}"


class AlertEngine:
    def __init__(self, db: Session):
        self.db = db

    def create_alert(self, data: AlertCreate) -> Alert:
        """
        Store a new unread alert.

        The flight search id is not looked up first; the foreign key does
        the checking and a bad id surfaces as ReferentialViolation.
        """
        alert = Alert(
            flight_search_id=data.flight_search_id,
            alert_type=data.alert_type,
            old_price=data.old_price,
            new_price=data.new_price,
            currency=data.currency,
            message=data.message,
            is_read=False,
        )
        self.db.add(alert)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Alert rejected for unknown flight search {data.flight_search_id}")
            raise ReferentialViolation(
                f"Flight search with id {data.flight_search_id} does not exist"
            ) from e

        self.db.refresh(alert)
        logger.info(f"Created {alert.alert_type.value} alert {alert.id} for flight search {alert.flight_search_id}")
        return alert

    def mark_read(self, alert_id: int) -> Alert:
        alert = self.db.query(Alert).filter(Alert.id == alert_id).first()
        if not alert:
            raise NotFound("Alert", alert_id)

        if not alert.is_read:
            alert.is_read = True
            self.db.commit()
            self.db.refresh(alert)
        return alert

    def evaluate_latest(self, flight_search_id: int, target_price: Optional[int] = None) -> Optional[Alert]:
        """
        Compare the two newest price records of a search and store an alert
        if the transition qualifies.

        ``target_price`` (minor units) is supplied by the caller; targets are
        not stored anywhere. Records in different currencies are not
        compared, so only a target crossing can fire across a currency
        change.
        """
        current, previous = PriceLedger(self.db).latest_pair(flight_search_id)
        if current is None:
            return None

        old_price = None
        if previous is not None and previous.currency == current.currency:
            old_price = previous.price

        alert_type = classify_price_change(old_price, current.price, target_price)
        if alert_type is None:
            return None

        message = build_alert_message(
            alert_type,
            old_price,
            current.price,
            current.currency,
            route_label=current.flight_search.route_label,
        )
        return self.create_alert(AlertCreate(
            flight_search_id=flight_search_id,
            alert_type=alert_type,
            old_price=old_price,
            new_price=current.price,
            currency=current.currency,
            message=message,
        ))
