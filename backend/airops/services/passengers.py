"""
Passenger and Luggage Services
"""
from typing import Any, Dict

from airops.errors import ServiceError, invalid_data, not_found
from airops.models import Flight, Human, Luggage, LuggageType, Passenger, SeatClass
from airops.scheduling.repository import EntityLookup
from airops.services.entities import EntityService, EXACT


def _seat(value: str) -> str:
    seat = (value or "").strip().upper()
    if len(seat) < 2 or len(seat) > 4:
        raise invalid_data("Invalid seat", "Seat must be between 2 and 4 characters", seat=value)
    return seat


def _choice(enum_cls, field: str):
    def normalize(value):
        try:
            return enum_cls(value)
        except ValueError:
            raise invalid_data(
                f"Invalid {field}",
                f"{field} must be one of: " + ", ".join(item.value for item in enum_cls),
                **{field: value},
            )
    return normalize


def _reference(field: str):
    def normalize(value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise invalid_data(f"Invalid {field}", f"{field} is required", **{field: value})
        return value.strip()
    return normalize


def _weight(value) -> float:
    try:
        weight = float(value)
    except (TypeError, ValueError):
        weight = 0.0
    if weight <= 0:
        raise invalid_data("Invalid luggage data", "Weight must be a positive number of kilograms", weight=value)
    return weight


def _description(value: str) -> str:
    text = (value or "").strip()
    if not text:
        raise invalid_data("Invalid luggage data", "Description must not be empty", description=value)
    return text


class PassengerService(EntityService):
    model = Passenger
    label = "Passenger"
    code_prefix = "passenger"
    fields = {
        "human_id": _reference("human_id"),
        "flight_id": _reference("flight_id"),
        "seat": _seat,
        "seat_class": _choice(SeatClass, "seat_class"),
    }
    filters = {"flight_id": EXACT, "human_id": EXACT, "seat": EXACT, "seat_class": EXACT}
    order_by = "seat"

    async def check_create(self, values: Dict[str, Any]) -> None:
        await self._check_booking(values["human_id"], values["flight_id"], values["seat"])

    async def check_update(self, existing: Passenger, values: Dict[str, Any]) -> None:
        await self._check_booking(
            values.get("human_id", existing.human_id),
            values.get("flight_id", existing.flight_id),
            values.get("seat", existing.seat),
            exclude_id=existing.id,
            changed=values,
        )

    async def _check_booking(self, human_id, flight_id, seat, exclude_id=None, changed=None) -> None:
        changed = changed if changed is not None else {"human_id", "flight_id", "seat"}

        if "flight_id" in changed and not await EntityLookup(self.session, Flight).exists(flight_id):
            raise not_found("Flight not found", flight_id=flight_id)

        if "human_id" in changed and not await EntityLookup(self.session, Human).exists(human_id):
            raise not_found("Human not found", human_id=human_id)

        if {"flight_id", "seat"} & set(changed):
            taken = await self.find_by(flight_id=flight_id, seat=seat)
            if taken is not None and taken.id != exclude_id:
                raise ServiceError("Seat is already taken", status_code=400, code="seat_taken",
                                   details={"flight_id": flight_id, "seat": seat})

        if {"flight_id", "human_id"} & set(changed):
            booked = await self.find_by(flight_id=flight_id, human_id=human_id)
            if booked is not None and booked.id != exclude_id:
                raise ServiceError("Human is already on the flight", status_code=400, code="human_on_flight",
                                   details={"flight_id": flight_id, "human_id": human_id})


class LuggageService(EntityService):
    model = Luggage
    label = "Luggage"
    code_prefix = "luggage"
    fields = {
        "passenger_id": _reference("passenger_id"),
        "weight": _weight,
        "type": _choice(LuggageType, "type"),
        "description": _description,
    }
    filters = {"passenger_id": EXACT, "type": EXACT}
    order_by = "created_at"

    async def check_create(self, values: Dict[str, Any]) -> None:
        if not await EntityLookup(self.session, Passenger).exists(values["passenger_id"]):
            raise not_found("Passenger not found", passenger_id=values["passenger_id"])

    async def check_update(self, existing: Luggage, values: Dict[str, Any]) -> None:
        if "passenger_id" in values and not await EntityLookup(self.session, Passenger).exists(values["passenger_id"]):
            raise not_found("Passenger not found", passenger_id=values["passenger_id"])
