"""
Human API Routes
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from datetime import date

from airops.auth import require_editor
from airops.db.database import get_db
from airops.services import HumanService
from airops.schemas import HumanCreate, HumanUpdate, HumanResponse

router = APIRouter()


def get_human_service(db: AsyncSession = Depends(get_db)) -> HumanService:
    return HumanService(db)


@router.get("/", response_model=List[HumanResponse])
async def list_humans(
    firstname: Optional[str] = Query(None),
    lastname: Optional[str] = Query(None),
    birthdate: Optional[date] = Query(None),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: HumanService = Depends(get_human_service),
):
    """
    List humans, matching names case-insensitively.
    """
    return await service.list(limit, offset, firstname=firstname, lastname=lastname, birthdate=birthdate)


@router.get("/{human_id}", response_model=HumanResponse)
async def get_human(human_id: str, service: HumanService = Depends(get_human_service)):
    return await service.get(human_id)


@router.post("/", response_model=HumanResponse, status_code=201, dependencies=[Depends(require_editor)])
async def add_human(request: HumanCreate, service: HumanService = Depends(get_human_service)):
    return await service.create(request.model_dump())


@router.patch("/{human_id}", response_model=HumanResponse, dependencies=[Depends(require_editor)])
async def update_human(human_id: str, request: HumanUpdate, service: HumanService = Depends(get_human_service)):
    return await service.update(human_id, request.model_dump(exclude_unset=True))


@router.delete("/{human_id}", response_model=HumanResponse, dependencies=[Depends(require_editor)])
async def delete_human(human_id: str, service: HumanService = Depends(get_human_service)):
    return await service.delete(human_id)
