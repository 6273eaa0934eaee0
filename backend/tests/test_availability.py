"""Tests for conflict scans against stored flights."""

from datetime import datetime

import pytest

from airops.models import FlightStatus
from airops.scheduling import AvailabilityOracle, FlightFilter, SqlFlightRepository
from airops.utils import generate_uuid


def at(hour, minute=0):
    return datetime(2024, 1, 1, hour, minute)


@pytest.fixture
def repository(session):
    return SqlFlightRepository(session)


@pytest.fixture
def oracle(repository):
    return AvailabilityOracle(repository)


@pytest.fixture
def store(session, repository, catalog):
    """Insert a flight row directly, bypassing validation."""
    async def insert(**overrides):
        values = {
            "id": generate_uuid(),
            "flight_number": "LH100",
            "departure_airport_id": catalog.fra,
            "arrival_airport_id": catalog.lhr,
            "departure_time": at(8),
            "arrival_time": at(10),
            "pilot_id": catalog.p1,
            "copilot_id": catalog.p2,
            "airline_id": catalog.airline,
            "aircraft_id": catalog.a1,
            "status": FlightStatus.SCHEDULED,
        }
        values.update(overrides)
        flight = await repository.insert(values)
        await session.commit()
        return flight
    return insert


class TestAircraftAvailability:

    async def test_free_with_no_flights(self, oracle, catalog):
        assert await oracle.is_aircraft_available(catalog.a1, at(8), at(10))

    async def test_busy_during_overlap(self, oracle, store, catalog):
        await store()
        assert not await oracle.is_aircraft_available(catalog.a1, at(9), at(11))

    async def test_busy_on_shared_boundary(self, oracle, store, catalog):
        await store()
        assert not await oracle.is_aircraft_available(catalog.a1, at(10), at(12))

    async def test_free_after_gap(self, oracle, store, catalog):
        await store()
        assert await oracle.is_aircraft_available(catalog.a1, at(10, 1), at(12))

    async def test_other_aircraft_unaffected(self, oracle, store, catalog):
        await store()
        assert await oracle.is_aircraft_available(catalog.a2, at(8), at(10))

    async def test_excluded_flight_is_ignored(self, oracle, store, catalog):
        flight = await store()
        assert await oracle.is_aircraft_available(catalog.a1, at(9), at(11), exclude_flight_id=flight.id)

    async def test_cancelled_flights_still_block(self, oracle, store, catalog):
        await store(status=FlightStatus.CANCELLED)
        assert not await oracle.is_aircraft_available(catalog.a1, at(9), at(11))


class TestHumanAvailability:

    async def test_pilot_busy(self, oracle, store, catalog):
        await store()
        assert not await oracle.is_human_available(catalog.p1, at(9), at(11))

    async def test_copilot_seat_counts(self, oracle, store, catalog):
        await store()
        assert not await oracle.is_human_available(catalog.p2, at(9), at(11))

    async def test_uninvolved_human_free(self, oracle, store, catalog):
        await store()
        assert await oracle.is_human_available(catalog.p3, at(9), at(11))

    async def test_excluding_self(self, oracle, store, catalog):
        flight = await store()
        assert await oracle.is_human_available(catalog.p1, at(8), at(10), exclude_flight_id=flight.id)


class TestFlightNumberConflict:

    async def test_same_number_overlapping(self, oracle, store):
        await store()
        assert await oracle.has_flight_number_conflict("LH100", at(9), at(11))

    async def test_same_number_disjoint(self, oracle, store):
        await store()
        assert not await oracle.has_flight_number_conflict("LH100", at(12), at(14))

    async def test_different_number(self, oracle, store):
        await store()
        assert not await oracle.has_flight_number_conflict("LH101", at(8), at(10))


class TestFindConflicts:

    async def test_returns_only_overlapping(self, oracle, store, catalog):
        early = await store(departure_time=at(6), arrival_time=at(7))
        late = await store(departure_time=at(12), arrival_time=at(13))

        conflicts = await oracle.find_conflicts(FlightFilter(aircraft_id=catalog.a1), at(6, 30), at(11))
        assert [flight.id for flight in conflicts] == [early.id]

        conflicts = await oracle.find_conflicts(FlightFilter(aircraft_id=catalog.a1), at(5), at(14))
        assert {flight.id for flight in conflicts} == {early.id, late.id}
