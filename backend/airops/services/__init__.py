"""
Catalog services built on the generic EntityService.
"""
from airops.services.entities import EntityService
from airops.services.catalog import HumanService, AirportService, AirlineService, AircraftService
from airops.services.passengers import PassengerService, LuggageService

__all__ = [
    "EntityService",
    "HumanService", "AirportService", "AirlineService", "AircraftService",
    "PassengerService", "LuggageService",
]
