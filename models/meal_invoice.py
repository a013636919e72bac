import enum
from datetime import date
from typing import Optional

from sqlalchemy import Column, Integer, String, Text, Date, Enum
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class MealInvoiceStatus(str, enum.Enum):
     UNPAID = "unpaid"
     PAID = "paid"


class MealInvoice(TimestampMixin, Base):
     """
     MealInvoice model - what the owner owes a meal supplier for a month.

     Amounts are kept in cents, as meal orders are.
     """
     __tablename__ = "meal_invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. MINV001
     month = Column(String(7), nullable=False, index=True)  # YYYY-MM
     supplier_id = Column(String(64), nullable=False, index=True)
     order_count = Column(Integer, default=0, nullable=False)
     amount_cents = Column(Integer, nullable=False)
     status = Column(
          Enum(
               MealInvoiceStatus,
               name="meal_invoice_status",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          default=MealInvoiceStatus.UNPAID,
          nullable=False,
          index=True
     )
     due_date = Column(Date, nullable=True)
     notes = Column(Text, default="", nullable=False)

     def is_overdue_on(self, today: Optional[date] = None) -> bool:
          return (
               self.status == MealInvoiceStatus.UNPAID
               and self.due_date is not None
               and self.due_date < (today or date.today())
          )

     # Relationships
     payment = relationship("MealPayment", back_populates="invoice", uselist=False)

     def __repr__(self):
          return f"<MealInvoice(code='{self.invoice_code}', supplier_id='{self.supplier_id}', month='{self.month}')>"
