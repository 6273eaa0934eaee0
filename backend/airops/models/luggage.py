"""
Luggage Database Model
"""
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Enum as SQLEnum, Text
from datetime import datetime
import enum

from airops.db.database import Base


class LuggageType(str, enum.Enum):
    HAND = "hand"
    CHECKED = "checked"


class Luggage(Base):
    
    __tablename__ = "luggage"
    
    id = Column(String(36), primary_key=True)
    passenger_id = Column(String(36), ForeignKey("passengers.id", ondelete="CASCADE"), nullable=False, index=True)
    weight = Column(Float, nullable=False)  # kg
    type = Column(SQLEnum(LuggageType), nullable=False)
    description = Column(Text, nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Luggage {self.type} {self.weight}kg>"
