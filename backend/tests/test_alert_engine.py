"""Tests for alert creation, read state and the price comparison policy."""
import pytest
from pydantic import ValidationError

from flightwatch.exceptions import NotFound, ReferentialViolation
from flightwatch.models import Alert, AlertType
from flightwatch.schemas import AlertCreate, PriceRecordCreate
from flightwatch.schemas.price import MAX_PRICE
from flightwatch.services import AlertEngine, PriceLedger, build_alert_message, classify_price_change
from flightwatch.utils.timeutil import utcnow


def _alert(search_id, alert_type=AlertType.PRICE_DROP, old_price=50000, new_price=45000, **kwargs):
    data = dict(
        flight_search_id=search_id,
        alert_type=alert_type,
        old_price=old_price,
        new_price=new_price,
        currency="USD",
        message="Price dropped",
    )
    data.update(kwargs)
    return AlertCreate(**data)


class TestClassifyPriceChange:
    def test_drop(self):
        assert classify_price_change(50000, 45000) == AlertType.PRICE_DROP

    def test_increase(self):
        assert classify_price_change(45000, 50000) == AlertType.PRICE_INCREASE

    def test_unchanged(self):
        assert classify_price_change(45000, 45000) is None

    def test_first_observation(self):
        assert classify_price_change(None, 45000) is None

    def test_target_crossed(self):
        assert classify_price_change(50000, 40000, target_price=42000) == AlertType.PRICE_TARGET_REACHED

    def test_target_hit_exactly(self):
        assert classify_price_change(50000, 42000, target_price=42000) == AlertType.PRICE_TARGET_REACHED

    def test_first_observation_under_target(self):
        assert classify_price_change(None, 40000, target_price=42000) == AlertType.PRICE_TARGET_REACHED

    def test_already_under_target_is_plain_drop(self):
        assert classify_price_change(41000, 40000, target_price=42000) == AlertType.PRICE_DROP

    def test_above_target_falls_back_to_delta(self):
        assert classify_price_change(50000, 48000, target_price=42000) == AlertType.PRICE_DROP
        assert classify_price_change(48000, 50000, target_price=42000) == AlertType.PRICE_INCREASE


class TestBuildAlertMessage:
    def test_drop(self):
        message = build_alert_message(AlertType.PRICE_DROP, 50000, 45000, "USD", route_label="NYC → LON")
        assert message == "Price dropped 10.0% for NYC → LON: USD 500.00 → USD 450.00"

    def test_increase_without_route(self):
        message = build_alert_message(AlertType.PRICE_INCREASE, 40000, 50000, "EUR")
        assert message == "Price increased 25.0%: EUR 400.00 → EUR 500.00"

    def test_increase_from_zero(self):
        assert build_alert_message(AlertType.PRICE_INCREASE, 0, 100, "USD") == "Price increased: USD 0.00 → USD 1.00"

    def test_target(self):
        message = build_alert_message(AlertType.PRICE_TARGET_REACHED, None, 39900, "USD")
        assert message == "Target price reached: now USD 399.00"


class TestCreateAlert:
    def test_creates_unread_alert(self, db_session, flight_search):
        alert = AlertEngine(db_session).create_alert(_alert(flight_search.id))
        assert alert.id is not None
        assert alert.is_read is False
        assert alert.alert_type == AlertType.PRICE_DROP
        assert alert.old_price == 50000
        assert alert.new_price == 45000
        assert alert.created_at <= utcnow()

    def test_without_old_price(self, db_session, flight_search):
        alert = AlertEngine(db_session).create_alert(
            _alert(flight_search.id, alert_type=AlertType.PRICE_TARGET_REACHED, old_price=None)
        )
        assert alert.old_price is None

    def test_zero_old_price_kept(self, db_session, flight_search):
        alert = AlertEngine(db_session).create_alert(
            _alert(flight_search.id, alert_type=AlertType.PRICE_INCREASE, old_price=0, new_price=100)
        )
        assert alert.old_price == 0

    def test_unknown_search_is_referential_violation(self, db_session):
        with pytest.raises(ReferentialViolation):
            AlertEngine(db_session).create_alert(_alert(999))
        assert db_session.query(Alert).count() == 0

    def test_no_deduplication(self, db_session, flight_search):
        engine = AlertEngine(db_session)
        engine.create_alert(_alert(flight_search.id))
        engine.create_alert(_alert(flight_search.id))
        assert db_session.query(Alert).count() == 2

    def test_unknown_alert_type_rejected(self, flight_search):
        with pytest.raises(ValidationError):
            _alert(flight_search.id, alert_type="price_sideways")

    def test_empty_message_rejected(self, flight_search):
        with pytest.raises(ValidationError):
            _alert(flight_search.id, message="")

    @pytest.mark.parametrize("field", ["old_price", "new_price"])
    def test_prices_beyond_column_range_rejected(self, flight_search, field):
        with pytest.raises(ValidationError):
            _alert(flight_search.id, **{field: MAX_PRICE + 1})

    def test_bool_price_rejected(self, flight_search):
        with pytest.raises(ValidationError):
            _alert(flight_search.id, new_price=True)

    def test_currency_must_be_letters(self, flight_search):
        with pytest.raises(ValidationError):
            _alert(flight_search.id, currency="1$x")


class TestMarkRead:
    def test_marks_read_and_keeps_other_fields(self, db_session, flight_search):
        engine = AlertEngine(db_session)
        alert = engine.create_alert(_alert(flight_search.id))
        before = (alert.id, alert.alert_type, alert.old_price, alert.new_price,
                  alert.currency, alert.message, alert.created_at)

        read = engine.mark_read(alert.id)

        assert read.is_read is True
        assert (read.id, read.alert_type, read.old_price, read.new_price,
                read.currency, read.message, read.created_at) == before

    def test_idempotent(self, db_session, flight_search):
        engine = AlertEngine(db_session)
        alert = engine.create_alert(_alert(flight_search.id))

        first = engine.mark_read(alert.id)
        first_state = (first.is_read, first.message, first.created_at)
        second = engine.mark_read(alert.id)

        assert (second.is_read, second.message, second.created_at) == first_state
        assert second.is_read is True

    def test_unknown_alert(self, db_session):
        with pytest.raises(NotFound):
            AlertEngine(db_session).mark_read(999)


class TestEvaluateLatest:
    def _record(self, db_session, search_id, price, currency="USD"):
        return PriceLedger(db_session).record_price(PriceRecordCreate(
            flight_search_id=search_id, price=price, currency=currency, provider="test",
        ))

    def test_no_prices(self, db_session, flight_search):
        assert AlertEngine(db_session).evaluate_latest(flight_search.id) is None

    def test_first_price_without_target(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 50000)
        assert AlertEngine(db_session).evaluate_latest(flight_search.id) is None

    def test_drop_creates_alert(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 50000)
        self._record(db_session, flight_search.id, 45000)

        alert = AlertEngine(db_session).evaluate_latest(flight_search.id)

        assert alert.alert_type == AlertType.PRICE_DROP
        assert (alert.old_price, alert.new_price) == (50000, 45000)
        assert alert.currency == "USD"
        assert "NYC → LON" in alert.message
        assert alert.is_read is False

    def test_increase_creates_alert(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 45000)
        self._record(db_session, flight_search.id, 50000)
        alert = AlertEngine(db_session).evaluate_latest(flight_search.id)
        assert alert.alert_type == AlertType.PRICE_INCREASE

    def test_unchanged_price_creates_nothing(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 45000)
        self._record(db_session, flight_search.id, 45000)
        assert AlertEngine(db_session).evaluate_latest(flight_search.id) is None
        assert db_session.query(Alert).count() == 0

    def test_target_reached(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 50000)
        self._record(db_session, flight_search.id, 39900)
        alert = AlertEngine(db_session).evaluate_latest(flight_search.id, target_price=40000)
        assert alert.alert_type == AlertType.PRICE_TARGET_REACHED
        assert alert.new_price == 39900

    def test_currency_change_is_not_compared(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 50000, currency="USD")
        self._record(db_session, flight_search.id, 40000, currency="EUR")
        assert AlertEngine(db_session).evaluate_latest(flight_search.id) is None

    def test_evaluating_twice_creates_two_alerts(self, db_session, flight_search):
        self._record(db_session, flight_search.id, 50000)
        self._record(db_session, flight_search.id, 45000)
        engine = AlertEngine(db_session)
        engine.evaluate_latest(flight_search.id)
        engine.evaluate_latest(flight_search.id)
        assert db_session.query(Alert).count() == 2
