"""
Flight API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.models.flight import FlightStatus
from airops.scheduling import FlightFilter, FlightPatch, FlightService
from airops.schemas import (
    FlightCreate, FlightUpdate, FlightResponse, FlightDetailResponse, AvailabilityResponse
)

router = APIRouter()


def get_flight_service(db: AsyncSession = Depends(get_db)) -> FlightService:
    return FlightService(db)


@router.get("/", response_model=List[FlightResponse])
async def list_flights(
    flight_number: Optional[str] = Query(None, max_length=6),
    departure_airport_id: Optional[str] = Query(None),
    arrival_airport_id: Optional[str] = Query(None),
    pilot_id: Optional[str] = Query(None),
    copilot_id: Optional[str] = Query(None),
    crew_member_id: Optional[str] = Query(None, description="Pilot or copilot"),
    airline_id: Optional[str] = Query(None),
    aircraft_id: Optional[str] = Query(None),
    status: Optional[FlightStatus] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: FlightService = Depends(get_flight_service),
):
    """
    List flights with optional filters.
    """
    return await service.list_flights(FlightFilter(
        flight_number=flight_number.strip().upper() if flight_number else None,
        departure_airport_id=departure_airport_id,
        arrival_airport_id=arrival_airport_id,
        pilot_id=pilot_id,
        copilot_id=copilot_id,
        crew_member_id=crew_member_id,
        airline_id=airline_id,
        aircraft_id=aircraft_id,
        status=status,
        limit=limit,
        offset=offset,
    ))


@router.get("/availability", response_model=AvailabilityResponse)
async def check_availability(
    departure_time: str = Query(..., description="ISO 8601 date-time"),
    arrival_time: str = Query(..., description="ISO 8601 date-time"),
    aircraft_id: Optional[str] = Query(None),
    pilot_id: Optional[str] = Query(None),
    copilot_id: Optional[str] = Query(None),
    flight_number: Optional[str] = Query(None),
    exclude_flight_id: Optional[str] = Query(None),
    service: FlightService = Depends(get_flight_service),
):
    """
    Check whether resources are free for a proposed time window.
    Nothing is written.
    """
    return await service.check_availability(
        departure_time,
        arrival_time,
        aircraft_id=aircraft_id,
        pilot_id=pilot_id,
        copilot_id=copilot_id,
        flight_number=flight_number,
        exclude_flight_id=exclude_flight_id,
    )


@router.get("/{flight_id}", response_model=FlightDetailResponse)
async def get_flight(
    flight_id: str,
    service: FlightService = Depends(get_flight_service),
):
    """
    Get a flight with its airports, crew, airline and aircraft.
    """
    return await service.get_flight(flight_id, detail=True)


@router.post("/", response_model=FlightResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_flight(
    request: FlightCreate,
    service: FlightService = Depends(get_flight_service),
):
    """
    Schedule a new flight. Rejected if the aircraft, either crew member or the
    flight number is already committed to an overlapping window.
    """
    return await service.add_flight(request.model_dump())


@router.patch("/{flight_id}", response_model=FlightResponse, dependencies=[Depends(require_editor)])
async def update_flight(
    flight_id: str,
    request: FlightUpdate,
    service: FlightService = Depends(get_flight_service),
):
    """
    Partially update a flight. Omitted fields keep their stored values.
    """
    patch = FlightPatch.from_dict(request.model_dump(exclude_unset=True))
    return await service.update_flight(flight_id, patch)


@router.delete("/{flight_id}", response_model=FlightResponse, dependencies=[Depends(require_editor)])
async def delete_flight(
    flight_id: str,
    service: FlightService = Depends(get_flight_service),
):
    return await service.delete_flight(flight_id)
