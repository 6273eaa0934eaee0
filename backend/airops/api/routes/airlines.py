"""
Airline API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.services import AirlineService
from airops.schemas import AirlineCreate, AirlineUpdate, AirlineResponse

router = APIRouter()


def get_airline_service(db: AsyncSession = Depends(get_db)) -> AirlineService:
    return AirlineService(db)


@router.get("/", response_model=List[AirlineResponse])
async def list_airlines(
    name: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: AirlineService = Depends(get_airline_service),
):
    return await service.list(limit, offset, name=name)


@router.get("/{airline_id}", response_model=AirlineResponse)
async def get_airline(airline_id: str, service: AirlineService = Depends(get_airline_service)):
    return await service.get(airline_id)


@router.post("/", response_model=AirlineResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_airline(request: AirlineCreate, service: AirlineService = Depends(get_airline_service)):
    return await service.create(request.model_dump())


@router.patch("/{airline_id}", response_model=AirlineResponse, dependencies=[Depends(require_editor)])
async def update_airline(
    airline_id: str,
    request: AirlineUpdate,
    service: AirlineService = Depends(get_airline_service),
):
    return await service.update(airline_id, request.model_dump(exclude_unset=True))


@router.delete("/{airline_id}", response_model=AirlineResponse, dependencies=[Depends(require_editor)])
async def delete_airline(airline_id: str, service: AirlineService = Depends(get_airline_service)):
    return await service.delete(airline_id)
