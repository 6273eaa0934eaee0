"""
Pydantic Schemas for API Request/Response
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from airops.models.flight import FlightStatus as FlightStatusEnum
from airops.models.passenger import SeatClass as SeatClassEnum
from airops.models.luggage import LuggageType as LuggageTypeEnum


# ==================== Human Schemas ====================

class HumanBase(BaseModel):
    firstname: str
    lastname: str
    birthdate: date


class HumanCreate(HumanBase):
    pass


class HumanUpdate(BaseModel):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    birthdate: Optional[date] = None


class HumanResponse(HumanBase):
    id: str

    class Config:
        from_attributes = True


# ==================== Airport Schemas ====================

class AirportBase(BaseModel):
    icao: str
    name: str
    country: str


class AirportCreate(AirportBase):
    pass


class AirportUpdate(BaseModel):
    icao: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None


class AirportResponse(AirportBase):
    id: str

    class Config:
        from_attributes = True


# ==================== Airline Schemas ====================

class AirlineCreate(BaseModel):
    name: str


class AirlineUpdate(BaseModel):
    name: Optional[str] = None


class AirlineResponse(AirlineCreate):
    id: str

    class Config:
        from_attributes = True


# ==================== Aircraft Schemas ====================

class AircraftBase(BaseModel):
    registration: str
    icao_type: str
    model: str


class AircraftCreate(AircraftBase):
    pass


class AircraftUpdate(BaseModel):
    registration: Optional[str] = None
    icao_type: Optional[str] = None
    model: Optional[str] = None


class AircraftResponse(AircraftBase):
    id: str

    class Config:
        from_attributes = True


# ==================== Flight Schemas ====================

class FlightCreate(BaseModel):
    flight_number: str
    departure_airport_id: str
    arrival_airport_id: str
    departure_time: str = Field(description="ISO 8601 date-time")
    arrival_time: str = Field(description="ISO 8601 date-time")
    pilot_id: str
    copilot_id: str
    airline_id: str
    aircraft_id: str
    status: FlightStatusEnum = FlightStatusEnum.SCHEDULED


class FlightUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""
    flight_number: Optional[str] = None
    departure_airport_id: Optional[str] = None
    arrival_airport_id: Optional[str] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    pilot_id: Optional[str] = None
    copilot_id: Optional[str] = None
    airline_id: Optional[str] = None
    aircraft_id: Optional[str] = None
    status: Optional[FlightStatusEnum] = None


class FlightResponse(BaseModel):
    id: str
    flight_number: str
    departure_airport_id: str
    arrival_airport_id: str
    departure_time: datetime
    arrival_time: datetime
    pilot_id: str
    copilot_id: str
    airline_id: str
    aircraft_id: str
    status: FlightStatusEnum

    class Config:
        from_attributes = True


class FlightDetailResponse(FlightResponse):
    departure_airport: AirportResponse
    arrival_airport: AirportResponse
    pilot: HumanResponse
    copilot: HumanResponse
    airline: AirlineResponse
    aircraft: AircraftResponse


class AvailabilityResponse(BaseModel):
    departure_time: str
    arrival_time: str
    aircraft_available: Optional[bool] = None
    pilot_available: Optional[bool] = None
    copilot_available: Optional[bool] = None
    flight_number_available: Optional[bool] = None


# ==================== Passenger Schemas ====================

class PassengerBase(BaseModel):
    human_id: str
    flight_id: str
    seat: str
    seat_class: SeatClassEnum = SeatClassEnum.ECONOMY


class PassengerCreate(PassengerBase):
    pass


class PassengerUpdate(BaseModel):
    human_id: Optional[str] = None
    flight_id: Optional[str] = None
    seat: Optional[str] = None
    seat_class: Optional[SeatClassEnum] = None


class PassengerResponse(PassengerBase):
    id: str

    class Config:
        from_attributes = True


# ==================== Luggage Schemas ====================

class LuggageBase(BaseModel):
    passenger_id: str
    weight: float = Field(description="Weight in kg")
    type: LuggageTypeEnum
    description: str


class LuggageCreate(LuggageBase):
    pass


class LuggageUpdate(BaseModel):
    weight: Optional[float] = None
    type: Optional[LuggageTypeEnum] = None
    description: Optional[str] = None


class LuggageResponse(LuggageBase):
    id: str

    class Config:
        from_attributes = True
