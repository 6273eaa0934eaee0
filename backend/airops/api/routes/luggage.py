"""
Luggage API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from airops.auth import require_editor
from airops.db.database import get_db
from airops.models.luggage import LuggageType
from airops.services import LuggageService
from airops.schemas import LuggageCreate, LuggageUpdate, LuggageResponse

router = APIRouter()


def get_luggage_service(db: AsyncSession = Depends(get_db)) -> LuggageService:
    return LuggageService(db)


@router.get("/", response_model=List[LuggageResponse])
async def list_luggage(
    passenger_id: Optional[str] = Query(None),
    type: Optional[LuggageType] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: LuggageService = Depends(get_luggage_service),
):
    return await service.list(limit, offset, passenger_id=passenger_id, type=type)


@router.get("/{luggage_id}", response_model=LuggageResponse)
async def get_luggage(luggage_id: str, service: LuggageService = Depends(get_luggage_service)):
    return await service.get(luggage_id)


@router.post("/", response_model=LuggageResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_luggage(request: LuggageCreate, service: LuggageService = Depends(get_luggage_service)):
    return await service.create(request.model_dump())


@router.patch("/{luggage_id}", response_model=LuggageResponse, dependencies=[Depends(require_editor)])
async def update_luggage(
    luggage_id: str,
    request: LuggageUpdate,
    service: LuggageService = Depends(get_luggage_service),
):
    return await service.update(luggage_id, request.model_dump(exclude_unset=True))


@router.delete("/{luggage_id}", response_model=LuggageResponse, dependencies=[Depends(require_editor)])
async def delete_luggage(luggage_id: str, service: LuggageService = Depends(get_luggage_service)):
    return await service.delete(luggage_id)
