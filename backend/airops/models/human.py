"""
Human Database Model
"""
from sqlalchemy import Column, String, Date, DateTime
from datetime import datetime

from airops.db.database import Base


class Human(Base):
    """A person who can fly as crew or travel as a passenger."""
    
    __tablename__ = "humans"
    
    id = Column(String(36), primary_key=True)
    firstname = Column(String(255), nullable=False, index=True)
    lastname = Column(String(255), nullable=False, index=True)
    birthdate = Column(Date, nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<Human {self.firstname} {self.lastname}>"
