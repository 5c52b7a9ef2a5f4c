from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from flightwatch.models.alert import AlertType
from flightwatch.schemas.price import CURRENCY_PATTERN, MAX_PRICE


class AlertCreate(BaseModel):
    flight_search_id: int
    alert_type: AlertType
    old_price: Optional[int] = Field(default=None, ge=0, le=MAX_PRICE, strict=True)  # Null when there is no prior price
    new_price: int = Field(ge=0, le=MAX_PRICE, strict=True)
    currency: str = Field(pattern=CURRENCY_PATTERN)
    message: str = Field(min_length=1)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class AlertResponse(BaseModel):
    id: int
    flight_search_id: int
    alert_type: AlertType
    old_price: Optional[int] = None
    new_price: int
    currency: str
    message: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class AlertFilter(BaseModel):
    """Every supplied field must match; unset fields do not filter."""
    user_id: Optional[int] = None
    flight_search_id: Optional[int] = None
    is_read: Optional[bool] = None


class UnreadCount(BaseModel):
    user_id: int
    unread: int
