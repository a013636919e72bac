import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum
from .base import Base, utcnow


class OrderStatus(str, enum.Enum):
     """Lifecycle of a meal order."""
     PENDING = "PENDING"
     PREPARING = "PREPARING"
     DELIVERED = "DELIVERED"
     CANCELLED = "CANCELLED"


class Order(Base):
     """
     Meal order placed by a tenant. Owned by the meal subsystem.

     Totals are stored in minor currency units (cents).
     """
     __tablename__ = "orders"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(String(64), nullable=False, index=True)  # tenant id
     total_cents = Column(Integer, default=0, nullable=False)
     status = Column(
          Enum(OrderStatus, name="order_status", create_constraint=True),
          default=OrderStatus.PENDING,
          nullable=False,
          index=True
     )
     created_at = Column(DateTime, default=utcnow, nullable=False, index=True)  # UTC

     def __repr__(self):
          return f"<Order(id={self.id}, user_id='{self.user_id}', total_cents={self.total_cents}, status='{self.status.value}')>"
