"""
Catalog Services: humans, airports, airlines and aircraft.
"""
from datetime import date
from typing import Optional

from airops.errors import ServiceError, invalid_data, not_found
from airops.models import Aircraft, Airline, Airport, Flight, Human, Passenger
from airops.services.entities import EntityService, EXACT, IEXACT, PREFIX
from airops.utils import validate_name


def _name(field: str, min_length: int = 1):
    return lambda value: validate_name(value, field, min_length)


def _upper_code(field: str, min_length: int, max_length: int):
    def normalize(value: str) -> str:
        code = (value or "").strip().upper()
        if len(code) < min_length or len(code) > max_length:
            if min_length == max_length:
                description = f"{field} must be exactly {min_length} characters"
            else:
                description = f"{field} must be between {min_length} and {max_length} characters"
            raise ServiceError(
                f"Invalid {field}", status_code=400, code=f"invalid_{field}",
                details={field: value, "description": description},
            )
        return code
    return normalize


def _birthdate(value) -> date:
    if not isinstance(value, date):
        try:
            value = date.fromisoformat(str(value))
        except ValueError:
            raise invalid_data("Invalid birthdate", "birthdate must be formatted as YYYY-MM-DD", birthdate=value)
    if value > date.today():
        raise invalid_data("Invalid birthdate", "birthdate cannot be in the future", birthdate=value.isoformat())
    return value


class HumanService(EntityService):
    model = Human
    label = "Human"
    code_prefix = "human"
    fields = {
        "firstname": _name("firstname"),
        "lastname": _name("lastname"),
        "birthdate": _birthdate,
    }
    referenced_by = (Flight.pilot_id, Flight.copilot_id, Passenger.human_id)
    filters = {"firstname": IEXACT, "lastname": IEXACT, "birthdate": EXACT}
    order_by = "lastname"


class AirportService(EntityService):
    model = Airport
    label = "Airport"
    code_prefix = "airport"
    fields = {
        "icao": _upper_code("icao", 4, 4),
        "name": _name("name", 5),
        "country": _name("country", 5),
    }
    unique_fields = ("icao",)
    referenced_by = (Flight.departure_airport_id, Flight.arrival_airport_id)
    filters = {"icao": PREFIX, "name": PREFIX, "country": PREFIX}
    order_by = "icao"

    async def get_by_icao(self, icao: str) -> Airport:
        code = _upper_code("icao", 4, 4)(icao)
        airport = await self.find_by(icao=code)
        if airport is None:
            raise not_found("Airport not found", icao=code)
        return airport


class AirlineService(EntityService):
    model = Airline
    label = "Airline"
    code_prefix = "airline"
    fields = {"name": _name("name", 5)}
    unique_fields = ("name",)
    referenced_by = (Flight.airline_id,)
    filters = {"name": PREFIX}
    order_by = "name"


class AircraftService(EntityService):
    model = Aircraft
    label = "Aircraft"
    code_prefix = "aircraft"
    fields = {
        "registration": _upper_code("registration", 3, 10),
        "icao_type": _upper_code("icao_type", 2, 4),
        "model": _name("model", 2),
    }
    unique_fields = ("registration",)
    referenced_by = (Flight.aircraft_id,)
    filters = {"registration": PREFIX, "icao_type": EXACT, "model": PREFIX}
    order_by = "registration"

    async def find_by_registration(self, registration: str) -> Optional[Aircraft]:
        return await self.find_by(registration=registration.strip().upper())
