"""Tests for flight create/update/delete orchestration."""

import asyncio
from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from airops.errors import ServiceError
from airops.models import FlightStatus
from airops.scheduling import FlightFilter, FlightPatch, FlightService
from airops.scheduling.service import get_schedule_lock
from airops.services import LuggageService, PassengerService
from airops.utils import generate_uuid


async def stored_flights(service):
    return await service.list_flights(FlightFilter())


class TestAddFlight:

    async def test_creates_flight(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        assert flight.id
        assert flight.flight_number == "LH100"
        assert flight.departure_time == datetime(2024, 1, 1, 8, 0)
        assert flight.arrival_time == datetime(2024, 1, 1, 10, 0)
        assert flight.status == FlightStatus.SCHEDULED
        assert [f.id for f in await stored_flights(flight_service)] == [flight.id]

    async def test_aircraft_overlap_rejected(self, flight_service, flight_data):
        await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                flight_number="LH200",
                departure_time="2024-01-01T09:00:00Z",
                arrival_time="2024-01-01T11:00:00Z",
            ))
        assert exc.value.code == "aircraft_not_available"
        assert len(await stored_flights(flight_service)) == 1

    async def test_pilot_overlap_rejected(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                flight_number="LH300",
                aircraft_id=catalog.a2,
                copilot_id=catalog.p3,
                departure_time="2024-01-01T09:30:00Z",
                arrival_time="2024-01-01T10:30:00Z",
            ))
        assert exc.value.code == "pilot_not_available"
        assert exc.value.details["pilot_id"] == catalog.p1

    async def test_copilot_flying_as_pilot_elsewhere(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                flight_number="LH300",
                aircraft_id=catalog.a2,
                pilot_id=catalog.p3,
                copilot_id=catalog.p1,
            ))
        assert exc.value.code == "copilot_not_available"

    async def test_short_duration_rejected(self, flight_service, flight_data, catalog):
        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                aircraft_id=catalog.a2,
                pilot_id=catalog.p3,
                copilot_id=catalog.p4,
                departure_time="2024-01-01T10:00:00Z",
                arrival_time="2024-01-01T10:15:00Z",
            ))
        assert exc.value.code == "invalid_data"
        assert exc.value.message == "Invalid flight duration"
        assert await stored_flights(flight_service) == []

    async def test_same_airports_rejected(self, flight_service, flight_data, catalog):
        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(arrival_airport_id=catalog.fra))
        assert exc.value.code == "invalid_data"
        assert exc.value.message == "Invalid airports"

    async def test_same_crew_member_twice_rejected(self, flight_service, flight_data, catalog):
        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(copilot_id=catalog.p1))
        assert exc.value.message == "Invalid crew"

    async def test_back_to_back_conflicts(self, flight_service, flight_data):
        await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                flight_number="LH101",
                departure_time="2024-01-01T10:00:00Z",
                arrival_time="2024-01-01T12:00:00Z",
            ))
        assert exc.value.code == "aircraft_not_available"

    async def test_flight_number_reuse_in_window(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(
                flight_number="lh100",
                aircraft_id=catalog.a2,
                pilot_id=catalog.p3,
                copilot_id=catalog.p4,
            ))
        assert exc.value.code == "flight_number_not_available"

    async def test_flight_number_reuse_next_day(self, flight_service, flight_data):
        await flight_service.add_flight(flight_data())
        flight = await flight_service.add_flight(flight_data(
            departure_time="2024-01-02T08:00:00Z",
            arrival_time="2024-01-02T10:00:00Z",
        ))
        assert flight.flight_number == "LH100"

    async def test_unknown_aircraft(self, flight_service, flight_data):
        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data(aircraft_id=generate_uuid()))
        assert exc.value.status_code == 404
        assert exc.value.message == "Aircraft not found"

    async def test_storage_failure_becomes_db_error(self, flight_service, flight_data, monkeypatch):
        async def broken_insert(values):
            raise OperationalError("INSERT INTO flights", {}, Exception("disk I/O error"))

        monkeypatch.setattr(flight_service.flights, "insert", broken_insert)

        with pytest.raises(ServiceError) as exc:
            await flight_service.add_flight(flight_data())
        assert exc.value.code == "db_error"
        assert exc.value.status_code == 500
        assert exc.value.details == {}

        monkeypatch.undo()
        assert await stored_flights(flight_service) == []


class TestUpdateFlight:

    async def test_status_only_update(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        updated = await flight_service.update_flight(flight.id, FlightPatch(status=FlightStatus.BOARDING))
        assert updated.status == FlightStatus.BOARDING
        assert updated.departure_time == datetime(2024, 1, 1, 8, 0)

    async def test_shift_own_window(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        updated = await flight_service.update_flight(flight.id, FlightPatch(
            departure_time="2024-01-01T09:00:00Z",
            arrival_time="2024-01-01T11:00:00Z",
        ))
        assert updated.arrival_time == datetime(2024, 1, 1, 11, 0)

    async def test_empty_patch(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.update_flight(flight.id, FlightPatch())
        assert exc.value.code == "no_update_data"

        stored = await flight_service.get_flight(flight.id)
        assert stored.status == FlightStatus.SCHEDULED
        assert stored.flight_number == "LH100"

    async def test_missing_flight_wins_over_empty_patch(self, flight_service, catalog):
        with pytest.raises(ServiceError) as exc:
            await flight_service.update_flight(generate_uuid(), FlightPatch())
        assert exc.value.code == "not_found"

    async def test_merged_window_checked(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        with pytest.raises(ServiceError) as exc:
            await flight_service.update_flight(flight.id, FlightPatch(arrival_time="2024-01-01T07:00:00Z"))
        assert exc.value.message == "Invalid times"

    async def test_move_onto_busy_aircraft(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())
        other = await flight_service.add_flight(flight_data(
            flight_number="LH200",
            aircraft_id=catalog.a2,
            pilot_id=catalog.p3,
            copilot_id=catalog.p4,
        ))

        with pytest.raises(ServiceError) as exc:
            await flight_service.update_flight(other.id, FlightPatch(aircraft_id=catalog.a1))
        assert exc.value.code == "aircraft_not_available"

        stored = await flight_service.get_flight(other.id)
        assert stored.aircraft_id == catalog.a2

    async def test_move_pilot_onto_busy_window(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())
        other = await flight_service.add_flight(flight_data(
            flight_number="LH200",
            aircraft_id=catalog.a2,
            pilot_id=catalog.p3,
            copilot_id=catalog.p4,
            departure_time="2024-01-01T09:00:00Z",
            arrival_time="2024-01-01T11:00:00Z",
        ))

        with pytest.raises(ServiceError) as exc:
            await flight_service.update_flight(other.id, FlightPatch(pilot_id=catalog.p1))
        assert exc.value.code == "pilot_not_available"

        stored = await flight_service.get_flight(other.id)
        assert stored.pilot_id == catalog.p3

    async def test_writes_only_patched_fields(self, flight_service, flight_data, monkeypatch):
        flight = await flight_service.add_flight(flight_data())
        written = []
        original = flight_service.flights.update

        async def spy(flight_id, values):
            written.append(dict(values))
            return await original(flight_id, values)

        monkeypatch.setattr(flight_service.flights, "update", spy)
        await flight_service.update_flight(flight.id, FlightPatch(flight_number=" lh555 "))

        assert written == [{"flight_number": "LH555"}]

    async def test_patch_from_dict_ignores_unknown_keys(self):
        patch = FlightPatch.from_dict({"status": "arrived", "gate": "A12", "pilot_id": None})
        assert patch.provided() == {"status": "arrived"}


class TestDeleteAndGet:

    async def test_delete_frees_slot(self, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())
        await flight_service.delete_flight(flight.id)

        replacement = await flight_service.add_flight(flight_data(flight_number="LH200"))
        assert [f.id for f in await stored_flights(flight_service)] == [replacement.id]

    async def test_delete_removes_bookings_and_luggage(self, session, flight_service, flight_data, catalog):
        flight = await flight_service.add_flight(flight_data())
        passenger = await PassengerService(session).create({
            "human_id": catalog.p3, "flight_id": flight.id, "seat": "12A", "seat_class": "economy",
        })
        bag = await LuggageService(session).create({
            "passenger_id": passenger.id, "weight": 20, "type": "checked", "description": "Red suitcase",
        })

        await flight_service.delete_flight(flight.id)

        assert await PassengerService(session).find_by_id(passenger.id) is None
        assert await LuggageService(session).find_by_id(bag.id) is None

    async def test_delete_missing(self, flight_service):
        with pytest.raises(ServiceError) as exc:
            await flight_service.delete_flight(generate_uuid())
        assert exc.value.status_code == 404

    async def test_get_invalid_id(self, flight_service):
        with pytest.raises(ServiceError) as exc:
            await flight_service.get_flight("not-a-uuid")
        assert exc.value.code == "invalid_data"

    async def test_get_detail_loads_relations(self, session_maker, flight_service, flight_data):
        flight = await flight_service.add_flight(flight_data())

        async with session_maker() as fresh:
            detail = await FlightService(fresh).get_flight(flight.id, detail=True)
            assert detail.departure_airport.icao == "EDDF"
            assert detail.pilot.lastname == "Doe"
            assert detail.aircraft.registration == "D-AIUA"


class TestListAndAvailability:

    async def test_list_filters(self, flight_service, flight_data, catalog):
        first = await flight_service.add_flight(flight_data())
        second = await flight_service.add_flight(flight_data(
            flight_number="LH200",
            aircraft_id=catalog.a2,
            pilot_id=catalog.p3,
            copilot_id=catalog.p4,
            departure_time="2024-01-01T12:00:00Z",
            arrival_time="2024-01-01T14:00:00Z",
        ))

        by_crew = await flight_service.list_flights(FlightFilter(crew_member_id=catalog.p4))
        assert [f.id for f in by_crew] == [second.id]

        page = await flight_service.list_flights(FlightFilter(limit=1))
        assert [f.id for f in page] == [first.id]

    async def test_check_availability_report(self, flight_service, flight_data, catalog):
        await flight_service.add_flight(flight_data())

        report = await flight_service.check_availability(
            "2024-01-01T09:00:00Z",
            "2024-01-01T11:00:00Z",
            aircraft_id=catalog.a1,
            pilot_id=catalog.p3,
            flight_number="LH100",
        )
        assert report == {
            "departure_time": "2024-01-01T09:00:00Z",
            "arrival_time": "2024-01-01T11:00:00Z",
            "aircraft_available": False,
            "pilot_available": True,
            "flight_number_available": False,
        }


class TestScheduleLock:

    async def test_concurrent_adds_for_same_aircraft(self, session_maker, flight_data):
        async def attempt(flight_number):
            async with session_maker() as session:
                try:
                    flight = await FlightService(session).add_flight(flight_data(flight_number=flight_number))
                except ServiceError as e:
                    return e.code
                return flight.id

        results = await asyncio.gather(attempt("LH100"), attempt("LH200"))

        assert results.count("aircraft_not_available") == 1
        async with session_maker() as session:
            assert len(await FlightService(session).list_flights(FlightFilter())) == 1

    async def test_one_lock_per_event_loop(self):
        assert get_schedule_lock() is get_schedule_lock()

    def test_lock_follows_new_event_loop(self):
        async def contend():
            lock = get_schedule_lock()
            async with lock:
                waiter = asyncio.ensure_future(lock.acquire())
                await asyncio.sleep(0)
            await waiter
            lock.release()
            return lock

        first = asyncio.run(contend())
        second = asyncio.run(contend())
        assert first is not second
