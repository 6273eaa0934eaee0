"""
API Routes Package
"""
from fastapi import APIRouter

from .flights import router as flights_router
from .humans import router as humans_router
from .airports import router as airports_router
from .airlines import router as airlines_router
from .aircraft import router as aircraft_router
from .passengers import router as passengers_router
from .luggage import router as luggage_router

api_router = APIRouter()

api_router.include_router(flights_router, prefix="/flights", tags=["Flights"])
api_router.include_router(humans_router, prefix="/humans", tags=["Humans"])
api_router.include_router(airports_router, prefix="/airports", tags=["Airports"])
api_router.include_router(airlines_router, prefix="/airlines", tags=["Airlines"])
api_router.include_router(aircraft_router, prefix="/aircraft", tags=["Aircraft"])
api_router.include_router(passengers_router, prefix="/passengers", tags=["Passengers"])
api_router.include_router(luggage_router, prefix="/luggage", tags=["Luggage"])
