"""
Payment model - the receipt recorded when a rent invoice is paid in full.

Exactly one payment exists per paid invoice (unique invoice_id). Payments
are written once and never updated.
"""
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow


class PaymentMethod(str, enum.Enum):
     CASH = "Cash"
     BANK_TRANSFER = "Bank Transfer"
     CARD = "Card"
     ONLINE = "Online"


def payment_method_column(name: str) -> Enum:
     """Enum type storing the human-readable method labels."""
     return Enum(
          PaymentMethod,
          name=name,
          create_constraint=True,
          values_callable=lambda e: [m.value for m in e],
     )


class Payment(Base):
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     payment_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. PMT001
     invoice_id = Column(
          Integer,
          ForeignKey("rent_invoices.id", ondelete="RESTRICT"),  # Prevent delete if paid
          nullable=False,
          unique=True,  # One payment per invoice
          index=True
     )
     amount_paid = Column(Integer, nullable=False)
     payment_method = Column(payment_method_column("payment_method"), nullable=False)
     payment_date = Column(DateTime, default=utcnow, nullable=False, index=True)
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     invoice = relationship("RentInvoice", back_populates="payment")

     def __repr__(self):
          return f"<Payment(code='{self.payment_code}', invoice_id={self.invoice_id}, amount_paid={self.amount_paid})>"
