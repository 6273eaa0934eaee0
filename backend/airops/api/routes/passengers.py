"""
Passenger API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.models.passenger import SeatClass
from airops.services import PassengerService
from airops.schemas import PassengerCreate, PassengerUpdate, PassengerResponse

router = APIRouter()


def get_passenger_service(db: AsyncSession = Depends(get_db)) -> PassengerService:
    return PassengerService(db)


@router.get("/", response_model=List[PassengerResponse])
async def list_passengers(
    flight_id: Optional[str] = Query(None),
    human_id: Optional[str] = Query(None),
    seat: Optional[str] = Query(None, max_length=4),
    seat_class: Optional[SeatClass] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: PassengerService = Depends(get_passenger_service),
):
    return await service.list(
        limit, offset,
        flight_id=flight_id,
        human_id=human_id,
        seat=seat.strip().upper() if seat else None,
        seat_class=seat_class,
    )


@router.get("/{passenger_id}", response_model=PassengerResponse)
async def get_passenger(passenger_id: str, service: PassengerService = Depends(get_passenger_service)):
    return await service.get(passenger_id)


@router.post("/", response_model=PassengerResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_passenger(request: PassengerCreate, service: PassengerService = Depends(get_passenger_service)):
    """
    Book a human onto a flight. A seat holds one passenger and a human
    appears at most once per flight.
    """
    return await service.create(request.model_dump())


@router.patch("/{passenger_id}", response_model=PassengerResponse, dependencies=[Depends(require_editor)])
async def update_passenger(
    passenger_id: str,
    request: PassengerUpdate,
    service: PassengerService = Depends(get_passenger_service),
):
    return await service.update(passenger_id, request.model_dump(exclude_unset=True))


@router.delete("/{passenger_id}", response_model=PassengerResponse, dependencies=[Depends(require_editor)])
async def delete_passenger(passenger_id: str, service: PassengerService = Depends(get_passenger_service)):
    return await service.delete(passenger_id)
