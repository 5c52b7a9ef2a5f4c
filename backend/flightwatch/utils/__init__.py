from flightwatch.utils.timeutil import utcnow, to_naive_utc
from flightwatch.utils.money import to_major_units, format_money

__all__ = ["utcnow", "to_naive_utc", "to_major_units", "format_money"]
