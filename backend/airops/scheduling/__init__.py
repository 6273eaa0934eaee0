"""
Flight scheduling: conflict detection and validated flight mutations.
"""
from airops.scheduling.intervals import overlaps
from airops.scheduling.repository import FlightFilter, SqlFlightRepository, EntityLookup
from airops.scheduling.availability import AvailabilityOracle
from airops.scheduling.validation import FlightValidator, FlightDraft
from airops.scheduling.service import FlightService, FlightPatch

__all__ = [
    "overlaps",
    "FlightFilter", "SqlFlightRepository", "EntityLookup",
    "AvailabilityOracle",
    "FlightValidator", "FlightDraft",
    "FlightService", "FlightPatch",
]
