from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, utcnow
from .payment import payment_method_column
from .utility_bill import UtilityType


class UtilityPayment(Base):
     """
     UtilityPayment model - settlement of one utility bill.
     Copies property/month/type from the bill so payments can be filtered without a join.
     """
     __tablename__ = "utility_payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     payment_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. UPM001
     bill_id = Column(Integer, ForeignKey("utility_bills.id"), nullable=False, unique=True, index=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
     month = Column(String(7), nullable=False, index=True)
     type = Column(String(20), nullable=False)  # UtilityType value
     amount_paid = Column(Integer, nullable=False)
     payment_method = Column(payment_method_column("utility_payment_method"), nullable=False)
     payment_date = Column(DateTime, default=utcnow, nullable=False)
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     # Relationships
     bill = relationship("UtilityBill", back_populates="payments")

     @classmethod
     def for_bill(cls, bill, payment_code: str, payment_method) -> "UtilityPayment":
          return cls(
               payment_code=payment_code,
               bill_id=bill.id,
               property_id=bill.property_id,
               month=bill.month,
               type=UtilityType(bill.type).value,
               amount_paid=bill.amount,
               payment_method=payment_method,
          )

     def __repr__(self):
          return f"<UtilityPayment(code='{self.payment_code}', bill_id={self.bill_id}, amount_paid={self.amount_paid})>"
