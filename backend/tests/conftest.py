"""Pytest fixtures for AirOps tests."""

import asyncio
from datetime import date
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from airops.db.database import Base, enable_sqlite_foreign_keys
from airops.models import Aircraft, Airline, Airport, Human
from airops.scheduling import FlightService
from airops.utils import generate_uuid


@pytest.fixture
async def engine():
    """In-memory SQLite shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def catalog(session):
    """Three airports, four humans, one airline and two aircraft."""
    ids = SimpleNamespace(
        fra=generate_uuid(), lhr=generate_uuid(), cdg=generate_uuid(),
        p1=generate_uuid(), p2=generate_uuid(), p3=generate_uuid(), p4=generate_uuid(),
        airline=generate_uuid(),
        a1=generate_uuid(), a2=generate_uuid(),
    )
    session.add_all([
        Airport(id=ids.fra, icao="EDDF", name="Frankfurt am Main Airport", country="Germany"),
        Airport(id=ids.lhr, icao="EGLL", name="London Heathrow Airport", country="United Kingdom"),
        Airport(id=ids.cdg, icao="LFPG", name="Charles de Gaulle Airport", country="France"),
        Human(id=ids.p1, firstname="John", lastname="Doe", birthdate=date(1985, 6, 15)),
        Human(id=ids.p2, firstname="Jane", lastname="Smith", birthdate=date(1990, 9, 20)),
        Human(id=ids.p3, firstname="Alice", lastname="Johnson", birthdate=date(1982, 12, 1)),
        Human(id=ids.p4, firstname="Bob", lastname="Williams", birthdate=date(1979, 3, 10)),
        Airline(id=ids.airline, name="Lufthansa"),
        Aircraft(id=ids.a1, registration="D-AIUA", icao_type="A320", model="Airbus A320-214"),
        Aircraft(id=ids.a2, registration="D-AIUB", icao_type="A320", model="Airbus A320-214"),
    ])
    await session.commit()
    return ids


@pytest.fixture
async def flight_service(session):
    return FlightService(session, lock=asyncio.Lock())


@pytest.fixture
def flight_data(catalog):
    """Factory for a valid create payload; keyword overrides replace fields."""
    def make(**overrides):
        data = {
            "flight_number": "LH100",
            "departure_airport_id": catalog.fra,
            "arrival_airport_id": catalog.lhr,
            "departure_time": "2024-01-01T08:00:00Z",
            "arrival_time": "2024-01-01T10:00:00Z",
            "pilot_id": catalog.p1,
            "copilot_id": catalog.p2,
            "airline_id": catalog.airline,
            "aircraft_id": catalog.a1,
        }
        data.update(overrides)
        return data
    return make
