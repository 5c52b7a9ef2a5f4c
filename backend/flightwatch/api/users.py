from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from flightwatch.database import get_db
from flightwatch.schemas import UserCreate, UserResponse, FlightSearchResponse, UnreadCount
from flightwatch.services import UserService, SearchRegistry, AlertQuery

router = APIRouter()


@router.post("", response_model=UserResponse)
async def create_user(
    user: UserCreate,
    db: Session = Depends(get_db),
):
    return UserService(db).create_user(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: Session = Depends(get_db),
):
    return UserService(db).get_user(user_id)


@router.get("/{user_id}/searches", response_model=List[FlightSearchResponse])
async def list_user_searches(
    user_id: int,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    return SearchRegistry(db).list_by_user(user_id, is_active=is_active)


@router.get("/{user_id}/alerts/unread-count", response_model=UnreadCount)
async def unread_alert_count(
    user_id: int,
    db: Session = Depends(get_db),
):
    return UnreadCount(user_id=user_id, unread=AlertQuery(db).count_unread(user_id))
