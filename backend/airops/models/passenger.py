"""
Passenger Database Model
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum, UniqueConstraint
from datetime import datetime
import enum

from airops.db.database import Base


class SeatClass(str, enum.Enum):
    ECONOMY = "economy"
    BUSINESS = "business"
    FIRST = "first"


class Passenger(Base):
    """A human booked onto a flight in a specific seat."""
    
    __tablename__ = "passengers"
    
    id = Column(String(36), primary_key=True)
    human_id = Column(String(36), ForeignKey("humans.id"), nullable=False, index=True)
    flight_id = Column(String(36), ForeignKey("flights.id", ondelete="CASCADE"), nullable=False, index=True)
    seat = Column(String(4), nullable=False)
    seat_class = Column(SQLEnum(SeatClass), default=SeatClass.ECONOMY, nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    __table_args__ = (
        UniqueConstraint("flight_id", "seat", name="uq_passengers_flight_seat"),
        UniqueConstraint("flight_id", "human_id", name="uq_passengers_flight_human"),
    )
    
    def __repr__(self):
        return f"<Passenger {self.seat} on {self.flight_id}>"
