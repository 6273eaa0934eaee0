"""
Airline Database Model
"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime

from airops.db.database import Base


class Airline(Base):
    
    __tablename__ = "airlines"
    
    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Airline {self.name}>"
