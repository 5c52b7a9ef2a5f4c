from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal

# Price columns are 32-bit integers
MAX_PRICE = 2_147_483_647
CURRENCY_PATTERN = r"^[A-Za-z]{3}$"


class PriceRecordCreate(BaseModel):
    flight_search_id: int
    price: int = Field(ge=0, le=MAX_PRICE, strict=True)  # Minor units (cents); zero is allowed
    currency: str = Field(pattern=CURRENCY_PATTERN)
    provider: str = Field(min_length=1, max_length=100)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class PriceRecordResponse(BaseModel):
    """A stored price record, price in minor units."""
    id: int
    flight_search_id: int
    price: int
    currency: str
    provider: str
    recorded_at: datetime

    class Config:
        from_attributes = True


class PriceHistoryEntry(BaseModel):
    """A price record as shown to users, price in major units (500.00)."""
    id: int
    flight_search_id: int
    price: Decimal
    currency: str
    provider: str
    recorded_at: datetime
