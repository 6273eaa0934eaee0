"""
Database seeding script for AirOps
Recreates tables and loads a small, conflict-free fixture catalog

Usage (from backend/):
    python -m scripts.seed
"""
import asyncio
from datetime import datetime, timedelta

from airops.db.database import Base, engine, get_async_session
from airops.models import FlightStatus
from airops.scheduling import FlightService
from airops.services import AircraftService, AirlineService, AirportService, HumanService, PassengerService
from airops.utils import to_iso

AIRPORTS = [
    ("EDDF", "Frankfurt am Main Airport", "Germany"),
    ("EGLL", "London Heathrow Airport", "United Kingdom"),
    ("LFPG", "Charles de Gaulle Airport", "France"),
    ("EHAM", "Amsterdam Airport Schiphol", "Netherlands"),
    ("LEMD", "Adolfo Suarez Madrid-Barajas Airport", "Spain"),
    ("KJFK", "John F. Kennedy International Airport", "United States"),
]

AIRLINES = ["Lufthansa", "British Airways", "Air France", "Iberia Express"]

AIRCRAFT = [
    ("D-AIUA", "A320", "Airbus A320-214"),
    ("G-EUYA", "A320", "Airbus A320-232"),
    ("F-GKXA", "A320", "Airbus A320-211"),
    ("EC-MXV", "A21N", "Airbus A321neo"),
    ("D-ABYA", "B748", "Boeing 747-8"),
]

HUMANS = [
    ("John", "Doe", "1985-06-15"),
    ("Jane", "Smith", "1990-09-20"),
    ("Alice", "Johnson", "1982-12-01"),
    ("Bob", "Williams", "1979-03-10"),
    ("Charlie", "Brown", "1995-07-07"),
    ("David", "Miller", "2000-11-30"),
    ("Eve", "Davis", "1992-04-17"),
    ("Frank", "Garcia", "1987-08-25"),
    ("Grace", "Martinez", "1994-01-22"),
    ("Hank", "Rodriguez", "1980-05-19"),
    ("Ivy", "Wilson", "1975-10-14"),
    ("Jack", "Lopez", "1983-02-23"),
]

# (flight number, from, to, departure offset hours, duration minutes,
#  pilot idx, copilot idx, airline idx, aircraft idx)
FLIGHTS = [
    ("LH900", "EDDF", "EGLL", 6, 95, 0, 1, 0, 0),
    ("LH901", "EGLL", "EDDF", 10, 90, 0, 1, 0, 0),
    ("BA304", "EGLL", "LFPG", 7, 75, 2, 3, 1, 1),
    ("BA305", "LFPG", "EGLL", 11, 80, 2, 3, 1, 1),
    ("AF1240", "LFPG", "EHAM", 8, 85, 4, 5, 2, 2),
    ("IB3170", "LEMD", "EDDF", 9, 160, 6, 7, 3, 3),
    ("LH400", "EDDF", "KJFK", 12, 510, 8, 9, 0, 4),
]


async def reset_schema():
    """Drop and recreate all ORM tables."""
    async with engine.begin() as conn:
        from airops.models import human, airport, airline, aircraft, flight, passenger, luggage  # noqa: F401
        print("Dropping existing tables...")
        await conn.run_sync(Base.metadata.drop_all)
        print("Creating tables...")
        await conn.run_sync(Base.metadata.create_all)


async def seed():
    await reset_schema()

    day = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)

    async with get_async_session() as db:
        airports = {}
        for icao, name, country in AIRPORTS:
            airport = await AirportService(db).create({"icao": icao, "name": name, "country": country})
            airports[icao] = airport.id
        print(f"Seeded {len(airports)} airports")

        airlines = [(await AirlineService(db).create({"name": name})).id for name in AIRLINES]
        print(f"Seeded {len(airlines)} airlines")

        aircraft = [
            (await AircraftService(db).create({"registration": reg, "icao_type": icao_type, "model": model})).id
            for reg, icao_type, model in AIRCRAFT
        ]
        print(f"Seeded {len(aircraft)} aircraft")

        humans = [
            (await HumanService(db).create({"firstname": first, "lastname": last, "birthdate": born})).id
            for first, last, born in HUMANS
        ]
        print(f"Seeded {len(humans)} humans")

        flights = FlightService(db)
        flight_ids = []
        for number, origin, destination, offset, minutes, pilot, copilot, airline, plane in FLIGHTS:
            departure = day + timedelta(hours=offset)
            flight = await flights.add_flight({
                "flight_number": number,
                "departure_airport_id": airports[origin],
                "arrival_airport_id": airports[destination],
                "departure_time": to_iso(departure),
                "arrival_time": to_iso(departure + timedelta(minutes=minutes)),
                "pilot_id": humans[pilot],
                "copilot_id": humans[copilot],
                "airline_id": airlines[airline],
                "aircraft_id": aircraft[plane],
                "status": FlightStatus.SCHEDULED,
            })
            flight_ids.append(flight.id)
        print(f"Seeded {len(flight_ids)} flights")

        passengers = PassengerService(db)
        await passengers.create({"human_id": humans[10], "flight_id": flight_ids[0], "seat": "12A", "seat_class": "economy"})
        await passengers.create({"human_id": humans[11], "flight_id": flight_ids[0], "seat": "2C", "seat_class": "business"})
        print("Seeded passengers")

    await engine.dispose()
    print("Done")


if __name__ == "__main__":
    asyncio.run(seed())
