from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Any, Dict, Optional


class FlightSearchCreate(BaseModel):
    user_id: int
    origin_city: str = Field(min_length=1, max_length=100)
    destination_city: str = Field(min_length=1, max_length=100)
    departure_date: datetime
    return_date: Optional[datetime] = None  # Omitted or null means one-way


class FlightSearchUpdate(BaseModel):
    """
    Partial update. Presence matters, not just value: a field left out of the
    payload keeps its stored value, while ``return_date: null`` turns the
    search into a one-way trip. Only ``return_date`` may be set to null.
    """
    origin_city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    destination_city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    departure_date: Optional[datetime] = None
    return_date: Optional[datetime] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_for_required_fields(self):
        for name in ("origin_city", "destination_city", "departure_date", "is_active"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)


class FlightSearchResponse(BaseModel):
    id: int
    user_id: int
    origin_city: str
    destination_city: str
    departure_date: datetime
    return_date: Optional[datetime] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
