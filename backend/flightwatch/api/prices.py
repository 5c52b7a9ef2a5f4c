from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from flightwatch.config import get_settings
from flightwatch.database import get_db
from flightwatch.schemas import PriceRecordCreate, PriceRecordResponse, PriceHistoryEntry
from flightwatch.services import PriceLedger

router = APIRouter()
settings = get_settings()


@router.post("/prices", response_model=PriceRecordResponse)
async def create_price_record(
    record: PriceRecordCreate,
    db: Session = Depends(get_db),
):
    return PriceLedger(db).record_price(record)


@router.get("/searches/{search_id}/prices", response_model=List[PriceHistoryEntry])
async def get_price_history(
    search_id: int,
    limit: Optional[int] = Query(default=None, ge=1, le=settings.price_history_max_limit),
    db: Session = Depends(get_db),
):
    return PriceLedger(db).history(search_id, limit=limit)
