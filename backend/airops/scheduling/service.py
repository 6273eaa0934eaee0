"""
Flight Mutation Service

Sequences validation, conflict scans and the single write for
addFlight / updateFlight / deleteFlight. Either the whole chain passes and
exactly one write is committed, or nothing is written.
"""
import asyncio
from dataclasses import dataclass, fields as dataclass_fields
from datetime import timedelta
from typing import Any, Awaitable, Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from airops.config import settings
from airops.errors import ServiceError, db_error, not_found
from airops.models import Aircraft, Airline, Airport, Flight, FlightStatus, Human
from airops.scheduling.availability import AvailabilityOracle
from airops.scheduling.repository import EntityLookup, FlightFilter, SqlFlightRepository
from airops.scheduling.validation import FlightDraft, FlightValidator
from airops.utils import ensure_uuid, generate_uuid, parse_timestamp, to_iso

logger = structlog.get_logger()

# Serializes conflict-scan-then-write within this process. Multiple worker
# processes still need a storage-level constraint to be fully safe.
_schedule_lock: Optional[asyncio.Lock] = None
_schedule_lock_loop: Optional[asyncio.AbstractEventLoop] = None


def get_schedule_lock() -> asyncio.Lock:
    """Process-wide scheduling lock, created for the running event loop on first use."""
    global _schedule_lock, _schedule_lock_loop
    loop = asyncio.get_running_loop()
    if _schedule_lock is None or _schedule_lock_loop is not loop:
        _schedule_lock = asyncio.Lock()
        _schedule_lock_loop = loop
    return _schedule_lock


@dataclass
class FlightPatch:
    """Sparse update: None means "keep the existing value"."""
    flight_number: Optional[str] = None
    departure_airport_id: Optional[str] = None
    arrival_airport_id: Optional[str] = None
    departure_time: Optional[Any] = None
    arrival_time: Optional[Any] = None
    pilot_id: Optional[str] = None
    copilot_id: Optional[str] = None
    airline_id: Optional[str] = None
    aircraft_id: Optional[str] = None
    status: Optional[FlightStatus] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlightPatch":
        known = {f.name for f in dataclass_fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def provided(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in dataclass_fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.provided()


class FlightService:
    """Validated create/update/delete and queries for flights."""

    def __init__(
        self,
        session: AsyncSession,
        repository: Optional[SqlFlightRepository] = None,
        validator: Optional[FlightValidator] = None,
        oracle: Optional[AvailabilityOracle] = None,
        lock: Optional[asyncio.Lock] = None,
    ):
        self.session = session
        self.flights = repository or SqlFlightRepository(session)
        self.validator = validator or FlightValidator(
            airports=EntityLookup(session, Airport),
            humans=EntityLookup(session, Human),
            airlines=EntityLookup(session, Airline),
            aircraft=EntityLookup(session, Aircraft),
            min_duration=timedelta(minutes=settings.min_flight_duration_minutes),
            max_duration=timedelta(hours=settings.max_flight_duration_hours),
        )
        self.oracle = oracle or AvailabilityOracle(self.flights)
        self._lock_override = lock

    @property
    def lock(self) -> asyncio.Lock:
        # Route dependencies build services off the event loop
        return self._lock_override or get_schedule_lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_flights(self, flight_filter: FlightFilter) -> List[Flight]:
        try:
            return await self.flights.find_many(flight_filter)
        except SQLAlchemyError:
            logger.exception("Failed to list flights")
            raise db_error("Failed to get flights")

    async def get_flight(self, flight_id: str, detail: bool = False) -> Flight:
        ensure_uuid(flight_id, "id", code="invalid_data")
        try:
            if detail:
                flight = await self.flights.get_detail(flight_id)
            else:
                flight = await self.flights.find_by_id(flight_id)
        except SQLAlchemyError:
            logger.exception("Failed to get flight", flight_id=flight_id)
            raise db_error("Failed to get flight")
        if flight is None:
            raise not_found("Flight not found", id=flight_id)
        return flight

    async def check_availability(
        self,
        departure_time,
        arrival_time,
        aircraft_id: Optional[str] = None,
        pilot_id: Optional[str] = None,
        copilot_id: Optional[str] = None,
        flight_number: Optional[str] = None,
        exclude_flight_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Answer the oracle questions for a proposed window without writing anything."""
        start = parse_timestamp(departure_time, "departure_time")
        end = parse_timestamp(arrival_time, "arrival_time")
        self.validator.check_window(start, end)

        report: Dict[str, Any] = {
            "departure_time": to_iso(start),
            "arrival_time": to_iso(end),
        }
        if aircraft_id:
            report["aircraft_available"] = await self.oracle.is_aircraft_available(
                aircraft_id, start, end, exclude_flight_id)
        if pilot_id:
            report["pilot_available"] = await self.oracle.is_human_available(
                pilot_id, start, end, exclude_flight_id)
        if copilot_id:
            report["copilot_available"] = await self.oracle.is_human_available(
                copilot_id, start, end, exclude_flight_id)
        if flight_number:
            number = self.validator.normalize_flight_number(flight_number)
            report["flight_number_available"] = not await self.oracle.has_flight_number_conflict(
                number, start, end, exclude_flight_id)
        return report

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_flight(self, data: Dict[str, Any]) -> Flight:
        """
        Create a flight after full validation and conflict checks.

        Args:
            data: All flight fields; status defaults to scheduled.

        Returns:
            The stored flight
        """
        fields = {k: v for k, v in data.items() if v is not None}
        fields.setdefault("status", FlightStatus.SCHEDULED)

        try:
            changes = await self.validator.validate(fields)
            draft = FlightDraft(**changes)

            async with self.lock:
                await self._ensure_available(draft)
                values = {"id": generate_uuid(), **draft.as_values()}
                flight = await self._commit(self.flights.insert, values, failure="Failed to add flight")
        except ServiceError as e:
            _log_rejection("add", e)
            raise

        logger.info(
            "flight_created",
            flight_id=flight.id,
            flight_number=flight.flight_number,
            aircraft_id=flight.aircraft_id,
            departure_time=to_iso(flight.departure_time),
            arrival_time=to_iso(flight.arrival_time),
        )
        return flight

    async def update_flight(self, flight_id: str, patch: FlightPatch) -> Flight:
        """
        Apply a sparse patch to an existing flight.

        Provided fields are checked individually, then the merged view (existing
        values overridden by the patch) is re-checked for cross-field rules and
        conflicts, excluding the flight itself. Only the patched columns are written.
        """
        try:
            existing = await self.get_flight(flight_id)

            if patch.is_empty:
                raise ServiceError("No values to update", status_code=400, code="no_update_data",
                                   details={"id": flight_id})

            base = FlightDraft.from_flight(existing)
            changes = await self.validator.validate(patch.provided(), base=base)
            merged = base.apply(changes)

            async with self.lock:
                await self._ensure_available(merged, exclude_flight_id=existing.id)
                flight = await self._commit(self.flights.update, existing.id, changes,
                                            failure="Failed to update flight")
        except ServiceError as e:
            _log_rejection("update", e, flight_id=flight_id)
            raise

        logger.info("flight_updated", flight_id=flight.id, fields=sorted(changes))
        return flight

    async def delete_flight(self, flight_id: str) -> Flight:
        """Remove a flight. Deleting can only relax scheduling constraints."""
        existing = await self.get_flight(flight_id)
        flight = await self._commit(self.flights.delete, existing.id, failure="Failed to delete flight")
        logger.info("flight_deleted", flight_id=flight_id, flight_number=existing.flight_number)
        return flight

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _ensure_available(self, draft: FlightDraft, exclude_flight_id: Optional[str] = None) -> None:
        start, end = draft.departure_time, draft.arrival_time
        window = {"departure_time": to_iso(start), "arrival_time": to_iso(end)}

        if not await self.oracle.is_aircraft_available(draft.aircraft_id, start, end, exclude_flight_id):
            raise _unavailable("Aircraft not available", "aircraft_not_available",
                               "Aircraft is not available during this time",
                               aircraft_id=draft.aircraft_id, **window)

        if not await self.oracle.is_human_available(draft.pilot_id, start, end, exclude_flight_id):
            raise _unavailable("Pilot not available", "pilot_not_available",
                               "Pilot is not available during this time",
                               pilot_id=draft.pilot_id, **window)

        if not await self.oracle.is_human_available(draft.copilot_id, start, end, exclude_flight_id):
            raise _unavailable("Copilot not available", "copilot_not_available",
                               "Copilot is not available during this time",
                               copilot_id=draft.copilot_id, **window)

        if await self.oracle.has_flight_number_conflict(draft.flight_number, start, end, exclude_flight_id):
            raise _unavailable("Conflicting flight", "flight_number_not_available",
                               "A flight with this number already exists during the specified time range",
                               flight_number=draft.flight_number, **window)

    async def _commit(self, operation: Callable[..., Awaitable[Optional[Flight]]], *args, failure: str) -> Flight:
        try:
            flight = await operation(*args)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.exception(failure)
            raise db_error(failure)
        if flight is None:
            # Row vanished between the existence check and the write
            raise not_found("Flight not found", id=args[0] if args else None)
        return flight


def _unavailable(message: str, code: str, description: str, **fields: Any) -> ServiceError:
    return ServiceError(message, status_code=400, code=code, details={**fields, "description": description})


def _log_rejection(operation: str, error: ServiceError, **context: Any) -> None:
    if error.code == "db_error":
        return
    logger.info("flight_rejected", operation=operation, code=error.code, reason=error.message, **context)
