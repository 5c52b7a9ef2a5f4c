from decimal import Decimal

MINOR_UNITS_PER_MAJOR = 100
_CENTS = Decimal("0.01")


def to_major_units(minor: int) -> Decimal:
    """50000 -> Decimal('500.00')."""
    return (Decimal(minor) / MINOR_UNITS_PER_MAJOR).quantize(_CENTS)


def format_money(minor: int, currency: str) -> str:
    return f"{currency} {to_major_units(minor):,.2f}"
