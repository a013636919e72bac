# services/utility_service.py
"""
Utility Service - property utility bills and their settlement.

Bills recorded here feed the utility share of rent invoices: each
property's monthly total is split evenly between its tenants.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Property, UtilityBill, UtilityPayment, PaymentMethod
from models.base import utcnow
from models.utility_bill import UtilityBillStatus, UtilityType
from services import rent_calc
from services.errors import Conflict, InvalidState, NotFound, ValidationError
from services.sequence_service import next_code

logger = logging.getLogger(__name__)

BILL_COUNTERS = {
     UtilityType.WATER: ("utilityBill_water", "UBW", 4),
     UtilityType.ELECTRICITY: ("utilityBill_electricity", "UBE", 4),
}
UTILITY_PAYMENT_COUNTER = ("utilityPayment", "UPM", 3)


def _parse_type(value) -> UtilityType:
     try:
          return UtilityType(str(value).strip().lower())
     except ValueError:
          raise ValidationError("type must be 'water' or 'electricity'")


def create_bill(
     db: Session,
     property_id: Optional[int],
     month: Optional[str],
     type: Optional[str],
     amount: Optional[int],
     due_date: Optional[date],
     notes: str = "",
) -> UtilityBill:
     """
     Record a utility bill for a property and month.

     Raises:
          ValidationError: missing field, bad type/month, negative amount
          NotFound: property does not exist
          Conflict: a bill of this type already exists for the property and month
     """
     if property_id is None or not month or not type or amount is None or due_date is None:
          raise ValidationError("propertyId, month, type, amount, dueDate required")

     utility_type = _parse_type(type)
     if not rent_calc.is_valid_month(month):
          raise ValidationError("month must be YYYY-MM")
     if amount < 0:
          raise ValidationError("amount cannot be negative")

     if db.get(Property, property_id) is None:
          raise NotFound("Property not found")

     duplicate = (
          db.query(UtilityBill.id)
          .filter(
               UtilityBill.property_id == property_id,
               UtilityBill.month == month,
               UtilityBill.type == utility_type,
          )
          .first()
     )
     if duplicate:
          raise Conflict(f"A {utility_type.value} bill already exists for this property in {month}.")

     bill = UtilityBill(
          bill_code=next_code(db, *BILL_COUNTERS[utility_type]),
          property_id=property_id,
          month=month,
          type=utility_type,
          amount=amount,
          due_date=due_date,
          status=UtilityBillStatus.UNPAID,
          notes=notes or "",
     )
     try:
          with db.begin_nested():
               db.add(bill)
     except IntegrityError:
          raise Conflict("A bill for this property/month/type already exists.")

     logger.info("Recorded %s bill %s for property %s in %s", utility_type.value, bill.bill_code, property_id, month)
     return bill


def list_bills(
     db: Session,
     property_id: Optional[int] = None,
     month: Optional[str] = None,
     type: Optional[str] = None,
     status: Optional[str] = None,
) -> List[UtilityBill]:
     """Bills matching the filters, newest first. status matches the derived status (unpaid, paid, overdue)."""
     query = db.query(UtilityBill)
     if property_id is not None:
          query = query.filter(UtilityBill.property_id == property_id)
     if month:
          if not rent_calc.is_valid_month(month):
               raise ValidationError("month must be YYYY-MM")
          query = query.filter(UtilityBill.month == month)
     if type:
          query = query.filter(UtilityBill.type == _parse_type(type))

     bills = query.order_by(UtilityBill.created_at.desc(), UtilityBill.id.desc()).all()
     if status:
          today = date.today()
          bills = [bill for bill in bills if bill.status_on(today) == status]
     return bills


def pay_bill(
     db: Session,
     bill_id: int,
     payment_method: Optional[PaymentMethod] = None,
) -> Tuple[UtilityPayment, UtilityBill]:
     """Settle a bill in full; the payment amount is always the bill amount."""
     bill = db.get(UtilityBill, bill_id)
     if bill is None:
          raise NotFound("Bill not found")
     if bill.status == UtilityBillStatus.PAID:
          raise InvalidState("Bill already paid")

     transition = db.execute(
          update(UtilityBill)
          .where(UtilityBill.id == bill.id, UtilityBill.status == UtilityBillStatus.UNPAID)
          .values(status=UtilityBillStatus.PAID, updated_at=utcnow())
          .execution_options(synchronize_session=False)
     )
     if transition.rowcount != 1:
          raise InvalidState("Bill already paid")

     payment = UtilityPayment.for_bill(
          bill,
          payment_code=next_code(db, *UTILITY_PAYMENT_COUNTER),
          payment_method=PaymentMethod(payment_method or PaymentMethod.CASH),
     )
     db.add(payment)
     db.flush()
     db.refresh(bill)

     logger.info("Utility bill %s paid by %s", bill.bill_code, payment.payment_code)
     return payment, bill


def list_payments(
     db: Session,
     property_id: Optional[int] = None,
     month: Optional[str] = None,
     type: Optional[str] = None,
     bill_id: Optional[str] = None,
) -> List[UtilityPayment]:
     """
     Utility payments matching the filters, newest first.

     bill_id accepts either the numeric bill id or a bill code such as UBW0003
     (case-insensitive).
     """
     query = db.query(UtilityPayment)
     if bill_id:
          trimmed = str(bill_id).strip()
          if trimmed.isdigit():
               query = query.filter(UtilityPayment.bill_id == int(trimmed))
          else:
               bill = (
                    db.query(UtilityBill.id)
                    .filter(UtilityBill.bill_code == trimmed.upper())
                    .first()
               )
               if bill is None:
                    return []
               query = query.filter(UtilityPayment.bill_id == bill.id)
     if property_id is not None:
          query = query.filter(UtilityPayment.property_id == property_id)
     if month:
          if not rent_calc.is_valid_month(month):
               raise ValidationError("month must be YYYY-MM")
          query = query.filter(UtilityPayment.month == month)
     if type:
          query = query.filter(UtilityPayment.type == _parse_type(type).value)

     return query.order_by(UtilityPayment.created_at.desc(), UtilityPayment.id.desc()).all()
