"""
Aircraft API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.services import AircraftService
from airops.schemas import AircraftCreate, AircraftUpdate, AircraftResponse

router = APIRouter()


def get_aircraft_service(db: AsyncSession = Depends(get_db)) -> AircraftService:
    return AircraftService(db)


@router.get("/", response_model=List[AircraftResponse])
async def list_aircraft(
    registration: Optional[str] = Query(None),
    icao_type: Optional[str] = Query(None, max_length=4),
    model: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: AircraftService = Depends(get_aircraft_service),
):
    """
    List aircraft. Registration and model match by prefix, ICAO type exactly.
    """
    return await service.list(
        limit, offset,
        registration=registration,
        icao_type=icao_type.strip().upper() if icao_type else None,
        model=model,
    )


@router.get("/{aircraft_id}", response_model=AircraftResponse)
async def get_aircraft(aircraft_id: str, service: AircraftService = Depends(get_aircraft_service)):
    return await service.get(aircraft_id)


@router.post("/", response_model=AircraftResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_aircraft(request: AircraftCreate, service: AircraftService = Depends(get_aircraft_service)):
    return await service.create(request.model_dump())


@router.patch("/{aircraft_id}", response_model=AircraftResponse, dependencies=[Depends(require_editor)])
async def update_aircraft(
    aircraft_id: str,
    request: AircraftUpdate,
    service: AircraftService = Depends(get_aircraft_service),
):
    return await service.update(aircraft_id, request.model_dump(exclude_unset=True))


@router.delete("/{aircraft_id}", response_model=AircraftResponse, dependencies=[Depends(require_editor)])
async def delete_aircraft(aircraft_id: str, service: AircraftService = Depends(get_aircraft_service)):
    return await service.delete(aircraft_id)
