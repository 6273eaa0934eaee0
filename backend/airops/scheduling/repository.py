"""
Flight Storage Access

Thin async repository over the flights table plus existence lookups for the
entities a flight references.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from airops.models.flight import Flight, FlightStatus


@dataclass
class FlightFilter:
    """Equality filters for flight queries. None means "any"."""
    flight_number: Optional[str] = None
    aircraft_id: Optional[str] = None
    crew_member_id: Optional[str] = None  # matches pilot OR copilot
    pilot_id: Optional[str] = None
    copilot_id: Optional[str] = None
    airline_id: Optional[str] = None
    departure_airport_id: Optional[str] = None
    arrival_airport_id: Optional[str] = None
    status: Optional[FlightStatus] = None
    exclude_id: Optional[str] = None
    limit: Optional[int] = None
    offset: int = 0


class SqlFlightRepository:
    """Flight persistence backed by an AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, flight_id: str) -> Optional[Flight]:
        result = await self.session.execute(
            select(Flight).where(Flight.id == flight_id)
        )
        return result.scalar_one_or_none()

    async def get_detail(self, flight_id: str) -> Optional[Flight]:
        """Load a flight together with its airports, crew, airline and aircraft."""
        result = await self.session.execute(
            select(Flight)
            .where(Flight.id == flight_id)
            .options(
                selectinload(Flight.departure_airport),
                selectinload(Flight.arrival_airport),
                selectinload(Flight.pilot),
                selectinload(Flight.copilot),
                selectinload(Flight.airline),
                selectinload(Flight.aircraft),
            )
        )
        return result.scalar_one_or_none()

    async def find_many(self, flight_filter: FlightFilter) -> List[Flight]:
        query = select(Flight).order_by(Flight.departure_time.asc(), Flight.id.asc())

        if flight_filter.flight_number:
            query = query.where(Flight.flight_number == flight_filter.flight_number)
        if flight_filter.aircraft_id:
            query = query.where(Flight.aircraft_id == flight_filter.aircraft_id)
        if flight_filter.crew_member_id:
            query = query.where(or_(
                Flight.pilot_id == flight_filter.crew_member_id,
                Flight.copilot_id == flight_filter.crew_member_id,
            ))
        if flight_filter.pilot_id:
            query = query.where(Flight.pilot_id == flight_filter.pilot_id)
        if flight_filter.copilot_id:
            query = query.where(Flight.copilot_id == flight_filter.copilot_id)
        if flight_filter.airline_id:
            query = query.where(Flight.airline_id == flight_filter.airline_id)
        if flight_filter.departure_airport_id:
            query = query.where(Flight.departure_airport_id == flight_filter.departure_airport_id)
        if flight_filter.arrival_airport_id:
            query = query.where(Flight.arrival_airport_id == flight_filter.arrival_airport_id)
        if flight_filter.status:
            query = query.where(Flight.status == flight_filter.status)
        if flight_filter.exclude_id:
            query = query.where(Flight.id != flight_filter.exclude_id)

        if flight_filter.limit is not None:
            query = query.limit(flight_filter.limit)
        if flight_filter.offset:
            query = query.offset(flight_filter.offset)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def insert(self, values: Dict[str, Any]) -> Flight:
        flight = Flight(**values)
        self.session.add(flight)
        await self.session.flush()
        return flight

    async def update(self, flight_id: str, values: Dict[str, Any]) -> Optional[Flight]:
        flight = await self.find_by_id(flight_id)
        if flight is None:
            return None
        for field, value in values.items():
            setattr(flight, field, value)
        await self.session.flush()
        return flight

    async def delete(self, flight_id: str) -> Optional[Flight]:
        flight = await self.find_by_id(flight_id)
        if flight is None:
            return None
        await self.session.delete(flight)
        await self.session.flush()
        return flight


class EntityLookup:
    """Existence check for rows of a single model keyed by id."""

    def __init__(self, session: AsyncSession, model):
        self.session = session
        self.model = model

    async def exists(self, entity_id: str) -> bool:
        if not entity_id:
            return False
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none() is not None
