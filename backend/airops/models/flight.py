"""
Flight Database Model
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from airops.db.database import Base


class FlightStatus(str, enum.Enum):
    """Flight status label. Any status may be set directly."""
    SCHEDULED = "scheduled"
    BOARDING = "boarding"
    DEPARTED = "departed"
    ARRIVED = "arrived"
    CANCELLED = "cancelled"


class Flight(Base):
    """Scheduled flight reserving an aircraft and two crew members for a time window."""
    
    __tablename__ = "flights"
    
    id = Column(String(36), primary_key=True)
    flight_number = Column(String(6), nullable=False, index=True)
    
    # Route
    departure_airport_id = Column(String(36), ForeignKey("airports.id"), nullable=False, index=True)
    arrival_airport_id = Column(String(36), ForeignKey("airports.id"), nullable=False, index=True)
    
    # Schedule (naive UTC)
    departure_time = Column(DateTime, nullable=False, index=True)
    arrival_time = Column(DateTime, nullable=False)
    
    # Resources
    pilot_id = Column(String(36), ForeignKey("humans.id"), nullable=False, index=True)
    copilot_id = Column(String(36), ForeignKey("humans.id"), nullable=False, index=True)
    airline_id = Column(String(36), ForeignKey("airlines.id"), nullable=False, index=True)
    aircraft_id = Column(String(36), ForeignKey("aircraft.id"), nullable=False, index=True)
    
    status = Column(SQLEnum(FlightStatus), default=FlightStatus.SCHEDULED, nullable=False, index=True)
    
    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships (loaded explicitly, never lazily)
    departure_airport = relationship("Airport", foreign_keys=[departure_airport_id], lazy="raise")
    arrival_airport = relationship("Airport", foreign_keys=[arrival_airport_id], lazy="raise")
    pilot = relationship("Human", foreign_keys=[pilot_id], lazy="raise")
    copilot = relationship("Human", foreign_keys=[copilot_id], lazy="raise")
    airline = relationship("Airline", lazy="raise")
    aircraft = relationship("Aircraft", lazy="raise")
    
    __table_args__ = (
        Index("ix_flights_aircraft_window", "aircraft_id", "departure_time", "arrival_time"),
    )
    
    def __repr__(self):
        return f"<Flight {self.flight_number} {self.departure_time} - {self.arrival_time}>"
    
    @property
    def duration_minutes(self) -> float:
        return (self.arrival_time - self.departure_time).total_seconds() / 60
    
    @property
    def is_cancelled(self) -> bool:
        return self.status == FlightStatus.CANCELLED
