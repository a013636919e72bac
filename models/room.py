from typing import List

from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class Room(Base):
     """
     Room model - a rentable room inside a property.

     Occupancy is kept in the room_occupants table rather than an embedded
     list, so moving a tenant is a single row change.
     """
     __tablename__ = "rooms"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     room_no = Column(String(50), nullable=False)
     base_rent = Column(Numeric(12, 2), nullable=True)  # whole currency units per month
     is_active = Column(Boolean, default=True, nullable=False, index=True)

     # Declared before the relationships: "property" is rebound below.
     @property
     def occupants(self) -> List[str]:
          """Tenant ids in the order they were placed in the room."""
          return [link.tenant_id for link in self.occupant_links]

     # Relationships
     property = relationship("Property", back_populates="rooms")
     occupant_links = relationship(
          "RoomOccupant",
          back_populates="room",
          order_by="RoomOccupant.position",
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<Room(id={self.id}, room_no='{self.room_no}', property_id={self.property_id})>"


class RoomOccupant(Base):
     """One tenant occupying one room. position preserves occupant order."""
     __tablename__ = "room_occupants"
     __table_args__ = (
          UniqueConstraint("room_id", "tenant_id", name="uq_room_occupants_room_tenant"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
     tenant_id = Column(String(64), nullable=False, index=True)  # opaque user id
     position = Column(Integer, default=0, nullable=False)

     room = relationship("Room", back_populates="occupant_links")

     def __repr__(self):
          return f"<RoomOccupant(room_id={self.room_id}, tenant_id='{self.tenant_id}')>"
