from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from flightwatch.database import get_db
from flightwatch.schemas import FlightSearchCreate, FlightSearchUpdate, FlightSearchResponse
from flightwatch.services import SearchRegistry

router = APIRouter()


@router.post("", response_model=FlightSearchResponse)
async def create_search(
    search: FlightSearchCreate,
    db: Session = Depends(get_db),
):
    return SearchRegistry(db).create_search(search)


@router.get("/active", response_model=List[FlightSearchResponse])
async def list_active_searches(db: Session = Depends(get_db)):
    """Active searches with a departure still ahead; the price poller's work list."""
    return SearchRegistry(db).list_active_upcoming()


@router.get("/{search_id}", response_model=FlightSearchResponse)
async def get_search(
    search_id: int,
    db: Session = Depends(get_db),
):
    return SearchRegistry(db).get_search(search_id)


@router.patch("/{search_id}", response_model=FlightSearchResponse)
async def update_search(
    search_id: int,
    search_update: FlightSearchUpdate,
    db: Session = Depends(get_db),
):
    return SearchRegistry(db).update_search(search_id, search_update)
