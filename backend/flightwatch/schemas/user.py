from pydantic import BaseModel, EmailStr
from datetime import datetime
from typing import Optional


class UserCreate(BaseModel):
    email: EmailStr
    telegram_chat_id: Optional[str] = None
    notification_enabled: bool = True


class UserResponse(BaseModel):
    id: int
    email: str
    telegram_chat_id: Optional[str] = None
    notification_enabled: bool
    created_at: datetime

    class Config:
        from_attributes = True
