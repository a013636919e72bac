import enum
from datetime import date
from typing import Optional

from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class UtilityType(str, enum.Enum):
     WATER = "water"
     ELECTRICITY = "electricity"


class UtilityBillStatus(str, enum.Enum):
     UNPAID = "unpaid"
     PAID = "paid"


class UtilityBill(TimestampMixin, Base):
     """
     UtilityBill model - a property's water or electricity bill for a month.

     Bills are summed per property and split evenly across the property's
     tenants when rent invoices are generated, whether or not they are paid.
     """
     __tablename__ = "utility_bills"
     __table_args__ = (
          UniqueConstraint("property_id", "month", "type", name="uq_utility_bills_property_month_type"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     bill_code = Column(String(20), unique=True, nullable=False, index=True)  # UBW0001 / UBE0001
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     month = Column(String(7), nullable=False, index=True)  # YYYY-MM
     type = Column(
          Enum(
               UtilityType,
               name="utility_type",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          nullable=False
     )
     amount = Column(Integer, nullable=False)
     due_date = Column(Date, nullable=False)
     status = Column(
          Enum(
               UtilityBillStatus,
               name="utility_bill_status",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          default=UtilityBillStatus.UNPAID,
          nullable=False
     )
     notes = Column(Text, default="", nullable=False)

     def status_on(self, today: Optional[date] = None) -> str:
          if self.status == UtilityBillStatus.PAID:
               return self.status.value
          if self.due_date is not None and self.due_date < (today or date.today()):
               return "overdue"
          return self.status.value

     # Relationships
     property = relationship("Property", back_populates="utility_bills")
     payments = relationship("UtilityPayment", back_populates="bill")

     def __repr__(self):
          return f"<UtilityBill(code='{self.bill_code}', property_id={self.property_id}, month='{self.month}', type='{self.type.value}')>"
