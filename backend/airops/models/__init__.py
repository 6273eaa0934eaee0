"""
Database Models Package
"""
from airops.models.human import Human
from airops.models.airport import Airport
from airops.models.airline import Airline
from airops.models.aircraft import Aircraft
from airops.models.flight import Flight, FlightStatus
from airops.models.passenger import Passenger, SeatClass
from airops.models.luggage import Luggage, LuggageType

__all__ = [
    "Human", "Airport", "Airline", "Aircraft",
    "Flight", "FlightStatus",
    "Passenger", "SeatClass",
    "Luggage", "LuggageType",
]
