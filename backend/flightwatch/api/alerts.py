from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from flightwatch.database import get_db
from flightwatch.schemas import AlertCreate, AlertResponse, AlertFilter
from flightwatch.services import AlertEngine, AlertQuery

router = APIRouter()


@router.post("", response_model=AlertResponse)
async def create_alert(
    alert: AlertCreate,
    db: Session = Depends(get_db),
):
    return AlertEngine(db).create_alert(alert)


@router.get("", response_model=List[AlertResponse])
async def list_alerts(
    user_id: Optional[int] = None,
    flight_search_id: Optional[int] = None,
    is_read: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    filters = AlertFilter(user_id=user_id, flight_search_id=flight_search_id, is_read=is_read)
    return AlertQuery(db).get_alerts(filters)


@router.post("/{alert_id}/read", response_model=AlertResponse)
async def mark_alert_read(
    alert_id: int,
    db: Session = Depends(get_db),
):
    return AlertEngine(db).mark_read(alert_id)
