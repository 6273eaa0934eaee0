"""
Validated Entity Service

Generic list/get/create/update/delete for the catalog tables. Subclasses
declare the model, one normalizer per writable field, which fields must be
unique, which foreign key columns block a delete and how list filters match.
Normalizers return the cleaned value or raise ServiceError.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from airops.errors import ServiceError, db_error, not_found
from airops.utils import ensure_uuid, generate_uuid

logger = structlog.get_logger()

# Filter match modes
EXACT = "exact"
IEXACT = "iexact"
PREFIX = "prefix"


class EntityService:
    """Base CRUD service for a single model keyed by a UUID string id."""

    model = None
    label: str = "Entity"
    code_prefix: str = "entity"
    fields: Dict[str, Callable[[Any], Any]] = {}
    unique_fields: Tuple[str, ...] = ()
    referenced_by: Tuple[Any, ...] = ()
    filters: Dict[str, str] = {}
    order_by: str = "id"

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def check_create(self, values: Dict[str, Any]) -> None:
        """Extra checks on a fully normalized new row."""

    async def check_update(self, existing, values: Dict[str, Any]) -> None:
        """Extra checks on the normalized changes of an update."""

    async def check_delete(self, existing) -> None:
        """Refuse to delete a row that other rows still point at."""
        for column in self.referenced_by:
            result = await self.session.execute(
                select(column.class_.id).where(column == existing.id).limit(1)
            )
            if result.first() is not None:
                raise ServiceError(
                    f"{self.label} is in use",
                    status_code=400,
                    code=f"{self.code_prefix}_in_use",
                    details={
                        "id": existing.id,
                        "description": f"{self.label} is still referenced by {column.class_.__tablename__}",
                    },
                )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list(self, limit: int = 20, offset: int = 0, **criteria: Any) -> List[Any]:
        query = select(self.model).order_by(getattr(self.model, self.order_by).asc())

        for field, value in criteria.items():
            if value is None or field not in self.filters:
                continue
            column = getattr(self.model, field)
            mode = self.filters[field]
            if mode == PREFIX:
                query = query.where(column.ilike(f"{str(value).strip()}%"))
            elif mode == IEXACT:
                query = query.where(func.lower(column) == str(value).strip().lower())
            else:
                query = query.where(column == value)

        query = query.limit(limit).offset(offset)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError:
            logger.exception("Failed to list entities", entity=self.code_prefix)
            raise db_error(f"Failed to get {self.label.lower()} list")
        return list(result.scalars().all())

    async def get(self, entity_id: str):
        ensure_uuid(entity_id)
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise not_found(f"{self.label} not found", id=entity_id)
        return entity

    async def find_by_id(self, entity_id: str):
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def find_by(self, **criteria: Any):
        query = select(self.model)
        for field, value in criteria.items():
            query = query.where(getattr(self.model, field) == value)
        result = await self.session.execute(query.limit(1))
        return result.scalars().first()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, data: Dict[str, Any]):
        values = self._normalize(data, partial=False)
        await self._ensure_unique(values)
        await self.check_create(values)

        entity = self.model(id=generate_uuid(), **values)
        self.session.add(entity)
        await self._commit(f"Failed to add {self.label.lower()}")
        logger.info("entity_created", entity=self.code_prefix, id=entity.id)
        return entity

    async def update(self, entity_id: str, data: Dict[str, Any]):
        existing = await self.get(entity_id)

        values = self._normalize(data, partial=True)
        if not values:
            raise ServiceError("No values to update", status_code=400, code="no_update_data",
                               details={"id": entity_id})
        await self._ensure_unique(values, exclude_id=existing.id)
        await self.check_update(existing, values)

        for field, value in values.items():
            setattr(existing, field, value)
        await self._commit(f"Failed to update {self.label.lower()}")
        logger.info("entity_updated", entity=self.code_prefix, id=existing.id, fields=sorted(values))
        return existing

    async def delete(self, entity_id: str):
        existing = await self.get(entity_id)
        await self.check_delete(existing)
        await self.session.delete(existing)
        await self._commit(f"Failed to delete {self.label.lower()}")
        logger.info("entity_deleted", entity=self.code_prefix, id=entity_id)
        return existing

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize(self, data: Dict[str, Any], partial: bool) -> Dict[str, Any]:
        values = {}
        for field, normalize in self.fields.items():
            if data.get(field) is None:
                if partial:
                    continue
                raise ServiceError(
                    f"Invalid {field}", status_code=400, code="invalid_data",
                    details={field: None, "description": f"{field} is required"},
                )
            values[field] = normalize(data[field])
        return values

    async def _ensure_unique(self, values: Dict[str, Any], exclude_id: Optional[str] = None) -> None:
        for field in self.unique_fields:
            if field not in values:
                continue
            clash = await self.find_by(**{field: values[field]})
            if clash is not None and clash.id != exclude_id:
                raise ServiceError(
                    f"{self.label} already exists",
                    status_code=400,
                    code=f"{self.code_prefix}_exists",
                    details={
                        field: values[field],
                        "description": f"A {self.label.lower()} with the same {field} already exists",
                    },
                )

    async def _commit(self, failure: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(failure, entity=self.code_prefix)
            raise db_error(failure)
