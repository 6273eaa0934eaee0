"""
Aircraft Database Model
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime

from airops.db.database import Base


class Aircraft(Base):
    """A single airframe; flights reserve it for their whole time window."""
    
    __tablename__ = "aircraft"
    
    id = Column(String(36), primary_key=True)
    registration = Column(String(10), nullable=False, unique=True, index=True)
    icao_type = Column(String(4), nullable=False, index=True)  # e.g. A320, B738
    model = Column(String(255), nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Aircraft {self.registration} {self.icao_type}>"
