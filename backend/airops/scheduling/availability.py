"""
Resource Availability

Read-only answers to "is this aircraft / crew member / flight number free
for this window?". Equality filtering is pushed to storage; the overlap test
always runs here so its boundary semantics cannot drift from overlaps().
"""
from datetime import datetime
from typing import List, Optional

import structlog

from airops.models.flight import Flight
from airops.scheduling.intervals import overlaps
from airops.scheduling.repository import FlightFilter, SqlFlightRepository

logger = structlog.get_logger()


class AvailabilityOracle:
    """Conflict scans against the existing flight set."""

    def __init__(self, repository: SqlFlightRepository):
        self.repository = repository

    async def find_conflicts(
        self,
        flight_filter: FlightFilter,
        start: datetime,
        end: datetime,
    ) -> List[Flight]:
        """Return every flight matching the filter whose window overlaps [start, end]."""
        candidates = await self.repository.find_many(flight_filter)
        return [
            flight for flight in candidates
            if overlaps(flight.departure_time, flight.arrival_time, start, end)
        ]

    async def is_aircraft_available(
        self,
        aircraft_id: str,
        start: datetime,
        end: datetime,
        exclude_flight_id: Optional[str] = None,
    ) -> bool:
        conflicts = await self.find_conflicts(
            FlightFilter(aircraft_id=aircraft_id, exclude_id=exclude_flight_id),
            start,
            end,
        )
        if conflicts:
            logger.debug("Aircraft busy", aircraft_id=aircraft_id, conflicting_flight_id=conflicts[0].id)
        return not conflicts

    async def is_human_available(
        self,
        human_id: str,
        start: datetime,
        end: datetime,
        exclude_flight_id: Optional[str] = None,
    ) -> bool:
        """A human is busy if they are pilot or copilot on any overlapping flight."""
        conflicts = await self.find_conflicts(
            FlightFilter(crew_member_id=human_id, exclude_id=exclude_flight_id),
            start,
            end,
        )
        if conflicts:
            logger.debug("Crew member busy", human_id=human_id, conflicting_flight_id=conflicts[0].id)
        return not conflicts

    async def has_flight_number_conflict(
        self,
        flight_number: str,
        start: datetime,
        end: datetime,
        exclude_flight_id: Optional[str] = None,
    ) -> bool:
        conflicts = await self.find_conflicts(
            FlightFilter(flight_number=flight_number, exclude_id=exclude_flight_id),
            start,
            end,
        )
        return bool(conflicts)
