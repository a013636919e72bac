from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow
from .payment import payment_method_column


class MealPayment(Base):
     """
     MealPayment model - settlement of one meal invoice, always for its full amount.
     """
     __tablename__ = "meal_payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     payment_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. MPMT001
     invoice_id = Column(
          Integer,
          ForeignKey("meal_invoices.id", ondelete="RESTRICT"),
          nullable=False,
          unique=True,
          index=True
     )
     supplier_id = Column(String(64), nullable=False, index=True)
     amount_cents = Column(Integer, nullable=False)
     payment_method = Column(payment_method_column("meal_payment_method"), nullable=False)
     payment_date = Column(DateTime, default=utcnow, nullable=False)
     notes = Column(Text, default="", nullable=False)
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     invoice = relationship("MealInvoice", back_populates="payment")

     def __repr__(self):
          return f"<MealPayment(code='{self.payment_code}', invoice_id={self.invoice_id}, amount_cents={self.amount_cents})>"
