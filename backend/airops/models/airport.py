"""
Airport Database Model
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime

from airops.db.database import Base


class Airport(Base):
    """Airport identified by its ICAO code."""
    
    __tablename__ = "airports"
    
    id = Column(String(36), primary_key=True)
    icao = Column(String(4), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    country = Column(String(255), nullable=False, index=True)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Airport {self.icao} {self.name}>"
