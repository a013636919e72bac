import enum
from datetime import date
from typing import Optional

from sqlalchemy import Column, Integer, String, Date, ForeignKey, Enum, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class InvoiceStatus(str, enum.Enum):
     """Enumeration for rent invoice payment status."""
     PENDING = "pending"
     PAID = "paid"


class RentInvoice(TimestampMixin, Base):
     """
     RentInvoice model - one monthly bill per tenant.

     total is always base_rent + utility_share + meal_cost, all in whole
     currency units. The (tenant_id, month) unique constraint makes invoice
     generation idempotent even when two generators race.
     """
     __tablename__ = "rent_invoices"
     __table_args__ = (
          UniqueConstraint("tenant_id", "month", name="uq_rent_invoices_tenant_month"),
          Index("ix_rent_invoices_month_property_tenant", "month", "property_id", "tenant_id"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     invoice_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. INV001

     # tenant_id is an opaque user id, not a foreign key
     tenant_id = Column(String(64), nullable=False, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)

     month = Column(String(7), nullable=False, index=True)  # YYYY-MM

     # Amounts
     base_rent = Column(Integer, default=0, nullable=False)
     utility_share = Column(Integer, default=0, nullable=False)
     meal_cost = Column(Integer, default=0, nullable=False)
     total = Column(Integer, nullable=False)

     status = Column(
          Enum(
               InvoiceStatus,
               name="rent_invoice_status",
               create_constraint=True,
               values_callable=lambda e: [m.value for m in e],
          ),
          default=InvoiceStatus.PENDING,
          nullable=False,
          index=True
     )
     due_date = Column(Date, nullable=False)

     def status_on(self, today: Optional[date] = None) -> str:
          """'overdue' for a pending invoice past its due date, else the stored status."""
          if self.is_overdue_on(today or date.today()):
               return "overdue"
          return self.status.value

     def is_overdue_on(self, today: date) -> bool:
          return self.status == InvoiceStatus.PENDING and self.due_date is not None and self.due_date < today

     # Relationships
     property = relationship("Property")
     room = relationship("Room")
     payment = relationship("Payment", back_populates="invoice", uselist=False)

     def __repr__(self):
          return f"<RentInvoice(code='{self.invoice_code}', tenant_id='{self.tenant_id}', month='{self.month}', total={self.total}, status='{self.status.value}')>"
