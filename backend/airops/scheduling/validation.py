"""
Flight Consistency Validation

Shape, range and referential checks for flight fields. Checks run in a fixed
order and stop at the first failure:

    flight number -> departure airport -> arrival airport -> airports distinct
    -> pilot -> copilot -> crew distinct -> airline -> aircraft
    -> time validity -> duration bounds

The same walk serves creates (every field provided) and updates (only the
provided fields are checked, cross-field rules run on the merged view).
"""
import string
from dataclasses import dataclass, fields as dataclass_fields, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from airops.errors import invalid_data, not_found
from airops.models.flight import Flight, FlightStatus
from airops.scheduling.repository import EntityLookup
from airops.utils import parse_timestamp, to_iso

FLIGHT_NUMBER_MIN_LENGTH = 4
FLIGHT_NUMBER_MAX_LENGTH = 6


@dataclass(frozen=True)
class FlightDraft:
    """Full set of flight field values, normalized and ready to check or persist."""
    flight_number: str
    departure_airport_id: str
    arrival_airport_id: str
    departure_time: datetime
    arrival_time: datetime
    pilot_id: str
    copilot_id: str
    airline_id: str
    aircraft_id: str
    status: FlightStatus = FlightStatus.SCHEDULED

    @classmethod
    def from_flight(cls, flight: Flight) -> "FlightDraft":
        return cls(**{f.name: getattr(flight, f.name) for f in dataclass_fields(cls)})

    def apply(self, changes: Dict[str, Any]) -> "FlightDraft":
        return replace(self, **changes)

    def as_values(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}


class FlightValidator:
    """Stateless, query-only checks for flight fields."""

    def __init__(
        self,
        airports: EntityLookup,
        humans: EntityLookup,
        airlines: EntityLookup,
        aircraft: EntityLookup,
        min_duration: timedelta = timedelta(minutes=30),
        max_duration: timedelta = timedelta(hours=24),
    ):
        self.airports = airports
        self.humans = humans
        self.airlines = airlines
        self.aircraft = aircraft
        self.min_duration = min_duration
        self.max_duration = max_duration

    # ------------------------------------------------------------------
    # Single-field checks
    # ------------------------------------------------------------------

    @staticmethod
    def normalize_flight_number(flight_number: str) -> str:
        """
        Trim and upper-case a flight number, then check its shape.

        Raises:
            ServiceError(invalid_data) if the length is outside [4, 6] or either
            of the first two characters is an ASCII digit.
        """
        value = (flight_number or "").strip().upper()

        if len(value) < FLIGHT_NUMBER_MIN_LENGTH or len(value) > FLIGHT_NUMBER_MAX_LENGTH:
            raise invalid_data(
                "Invalid flight number",
                f"Flight number must be between {FLIGHT_NUMBER_MIN_LENGTH} "
                f"and {FLIGHT_NUMBER_MAX_LENGTH} characters",
                flight_number=value,
            )

        if any(char in string.digits for char in value[:2]):
            raise invalid_data(
                "Invalid flight number",
                "Flight number must start with two letters",
                flight_number=value,
            )

        return value

    @staticmethod
    def normalize_status(status) -> FlightStatus:
        try:
            return FlightStatus(status)
        except ValueError:
            raise invalid_data(
                "Invalid status",
                "Status must be one of: " + ", ".join(s.value for s in FlightStatus),
                status=status,
            )

    async def _ensure_exists(self, lookup: EntityLookup, entity_id: str, message: str, field: str) -> str:
        if not await lookup.exists(entity_id):
            raise not_found(message, **{field: entity_id})
        return entity_id

    # ------------------------------------------------------------------
    # Cross-field checks
    # ------------------------------------------------------------------

    @staticmethod
    def check_airports_distinct(departure_airport_id: str, arrival_airport_id: str) -> None:
        if departure_airport_id == arrival_airport_id:
            raise invalid_data(
                "Invalid airports",
                "Departure and arrival airports must be different",
                departure_airport_id=departure_airport_id,
                arrival_airport_id=arrival_airport_id,
            )

    @staticmethod
    def check_crew_distinct(pilot_id: str, copilot_id: str) -> None:
        if pilot_id == copilot_id:
            raise invalid_data(
                "Invalid crew",
                "Pilot and copilot must be different people",
                pilot_id=pilot_id,
                copilot_id=copilot_id,
            )

    def check_window(self, departure_time: datetime, arrival_time: datetime) -> None:
        """Departure strictly before arrival, duration within [min, max] inclusive."""
        if departure_time >= arrival_time:
            raise invalid_data(
                "Invalid times",
                "Departure time must be before arrival time",
                departure_time=to_iso(departure_time),
                arrival_time=to_iso(arrival_time),
            )

        duration = arrival_time - departure_time
        if duration < self.min_duration or duration > self.max_duration:
            raise invalid_data(
                "Invalid flight duration",
                f"Flight duration must be between {_describe(self.min_duration)} "
                f"and {_describe(self.max_duration)}",
                departure_time=to_iso(departure_time),
                arrival_time=to_iso(arrival_time),
            )

    # ------------------------------------------------------------------
    # Full walk
    # ------------------------------------------------------------------

    async def validate(self, fields: Dict[str, Any], base: Optional[FlightDraft] = None) -> Dict[str, Any]:
        """
        Check the provided fields and the cross-field rules of the merged view.

        Args:
            fields: Provided field values (raw input). Absent keys keep the base value.
            base: Existing flight state for updates, None for creates.

        Returns:
            Normalized values for the provided fields only.
        """
        changes: Dict[str, Any] = {}

        def current(name: str):
            if name in changes:
                return changes[name]
            return getattr(base, name) if base is not None else None

        if "flight_number" in fields:
            changes["flight_number"] = self.normalize_flight_number(fields["flight_number"])

        if "departure_airport_id" in fields:
            changes["departure_airport_id"] = await self._ensure_exists(
                self.airports, fields["departure_airport_id"],
                "Departure airport not found", "departure_airport_id",
            )
        if "arrival_airport_id" in fields:
            changes["arrival_airport_id"] = await self._ensure_exists(
                self.airports, fields["arrival_airport_id"],
                "Arrival airport not found", "arrival_airport_id",
            )
        self.check_airports_distinct(current("departure_airport_id"), current("arrival_airport_id"))

        if "pilot_id" in fields:
            changes["pilot_id"] = await self._ensure_exists(
                self.humans, fields["pilot_id"], "Pilot not found", "pilot_id",
            )
        if "copilot_id" in fields:
            changes["copilot_id"] = await self._ensure_exists(
                self.humans, fields["copilot_id"], "Copilot not found", "copilot_id",
            )
        self.check_crew_distinct(current("pilot_id"), current("copilot_id"))

        if "airline_id" in fields:
            changes["airline_id"] = await self._ensure_exists(
                self.airlines, fields["airline_id"], "Airline not found", "airline_id",
            )
        if "aircraft_id" in fields:
            changes["aircraft_id"] = await self._ensure_exists(
                self.aircraft, fields["aircraft_id"], "Aircraft not found", "aircraft_id",
            )

        if "departure_time" in fields:
            changes["departure_time"] = parse_timestamp(fields["departure_time"], "departure_time")
        if "arrival_time" in fields:
            changes["arrival_time"] = parse_timestamp(fields["arrival_time"], "arrival_time")
        self.check_window(current("departure_time"), current("arrival_time"))

        if "status" in fields:
            changes["status"] = self.normalize_status(fields["status"])

        return changes


def _describe(duration: timedelta) -> str:
    minutes = int(duration.total_seconds() // 60)
    if minutes % 60 == 0:
        hours = minutes // 60
        return f"{hours} hour" + ("s" if hours != 1 else "")
    return f"{minutes} minutes"
