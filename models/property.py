from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class Property(Base):
     """
     Property model - a boarding house building.
     Owned by the property/room subsystem; the finance service only reads it.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     address = Column(Text, nullable=True)

     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     rooms = relationship("Room", back_populates="property")
     utility_bills = relationship("UtilityBill", back_populates="property")

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}')>"
