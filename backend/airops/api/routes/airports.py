"""
Airport API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.services import AirportService
from airops.schemas import AirportCreate, AirportUpdate, AirportResponse

router = APIRouter()


def get_airport_service(db: AsyncSession = Depends(get_db)) -> AirportService:
    return AirportService(db)


@router.get("/", response_model=List[AirportResponse])
async def list_airports(
    icao: Optional[str] = Query(None, max_length=4),
    name: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: AirportService = Depends(get_airport_service),
):
    """
    List airports. Filters match by prefix.
    """
    return await service.list(limit, offset, icao=icao, name=name, country=country)


@router.get("/icao/{icao}", response_model=AirportResponse)
async def get_airport_by_icao(icao: str, service: AirportService = Depends(get_airport_service)):
    return await service.get_by_icao(icao)


@router.get("/{airport_id}", response_model=AirportResponse)
async def get_airport(airport_id: str, service: AirportService = Depends(get_airport_service)):
    return await service.get(airport_id)


@router.post("/", response_model=AirportResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_airport(request: AirportCreate, service: AirportService = Depends(get_airport_service)):
    return await service.create(request.model_dump())


@router.patch("/{airport_id}", response_model=AirportResponse, dependencies=[Depends(require_editor)])
async def update_airport(
    airport_id: str,
    request: AirportUpdate,
    service: AirportService = Depends(get_airport_service),
):
    return await service.update(airport_id, request.model_dump(exclude_unset=True))


@router.delete("/{airport_id}", response_model=AirportResponse, dependencies=[Depends(require_editor)])
async def delete_airport(airport_id: str, service: AirportService = Depends(get_airport_service)):
    return await service.delete(airport_id)
