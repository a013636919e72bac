# services/meal_service.py
"""
Meal Service - what the owner owes meal suppliers, and paying it.

A meal invoice covers one supplier's orders for a month and is settled in
one full payment; there are no partial payments.
"""
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from models import MealInvoice, MealInvoiceStatus, MealPayment, PaymentMethod
from models.base import utcnow
from services import rent_calc
from services.errors import InvalidState, NotFound, ValidationError
from services.sequence_service import next_code

logger = logging.getLogger(__name__)

MEAL_INVOICE_COUNTER = ("mealInvoice", "MINV", 3)
MEAL_PAYMENT_COUNTER = ("mealPayment", "MPMT", 3)


def _validate_month(month) -> str:
     if not rent_calc.is_valid_month(month):
          raise ValidationError("month must be YYYY-MM")
     return month


def create_invoice(
     db: Session,
     month: Optional[str],
     supplier_id: Optional[str],
     amount_cents: Optional[int],
     order_count: int = 0,
     due_date: Optional[date] = None,
     notes: str = "",
) -> MealInvoice:
     """
     Record a supplier's meal invoice for a month.

     Raises:
          ValidationError: missing field, bad month, negative amount or order count
     """
     if not month or not supplier_id or amount_cents is None:
          raise ValidationError("month, supplierId, amountCents required")
     _validate_month(month)
     if amount_cents < 0:
          raise ValidationError("amountCents cannot be negative")
     if order_count is not None and order_count < 0:
          raise ValidationError("orderCount cannot be negative")

     invoice = MealInvoice(
          invoice_code=next_code(db, *MEAL_INVOICE_COUNTER),
          month=month,
          supplier_id=str(supplier_id),
          order_count=order_count or 0,
          amount_cents=amount_cents,
          status=MealInvoiceStatus.UNPAID,
          due_date=due_date,
          notes=notes or "",
     )
     db.add(invoice)
     db.flush()

     logger.info("Recorded meal invoice %s for supplier %s in %s", invoice.invoice_code, invoice.supplier_id, month)
     return invoice


def list_invoices(
     db: Session,
     month: Optional[str] = None,
     status: Optional[str] = None,
     supplier_id: Optional[str] = None,
) -> List[MealInvoice]:
     """Meal invoices matching the filters, newest first."""
     query = db.query(MealInvoice)
     if month:
          query = query.filter(MealInvoice.month == _validate_month(month))
     if status:
          try:
               query = query.filter(MealInvoice.status == MealInvoiceStatus(status))
          except ValueError:
               raise ValidationError("status must be 'unpaid' or 'paid'")
     if supplier_id:
          query = query.filter(MealInvoice.supplier_id == str(supplier_id))
     return query.order_by(MealInvoice.created_at.desc(), MealInvoice.id.desc()).all()


def pay_invoice(
     db: Session,
     invoice_id: Optional[int],
     payment_method: Optional[PaymentMethod],
     notes: str = "",
) -> Tuple[MealPayment, MealInvoice]:
     """
     Pay a meal invoice in full; the payment amount is always the invoice amount.

     Raises:
          ValidationError: invoice id or payment method missing
          NotFound: invoice does not exist
          InvalidState: invoice is already paid
     """
     if invoice_id is None or not payment_method:
          raise ValidationError("invoiceId, paymentMethod required")

     invoice = db.get(MealInvoice, invoice_id)
     if invoice is None:
          raise NotFound("Invoice not found")
     if invoice.status == MealInvoiceStatus.PAID:
          raise InvalidState("Invoice already paid")

     transition = db.execute(
          update(MealInvoice)
          .where(MealInvoice.id == invoice.id, MealInvoice.status == MealInvoiceStatus.UNPAID)
          .values(status=MealInvoiceStatus.PAID, updated_at=utcnow())
          .execution_options(synchronize_session=False)
     )
     if transition.rowcount != 1:
          raise InvalidState("Invoice already paid")

     payment = MealPayment(
          payment_code=next_code(db, *MEAL_PAYMENT_COUNTER),
          invoice_id=invoice.id,
          supplier_id=invoice.supplier_id,
          amount_cents=invoice.amount_cents,
          payment_method=PaymentMethod(payment_method),
          notes=notes or "",
     )
     db.add(payment)
     db.flush()
     db.refresh(invoice)

     logger.info("Meal invoice %s paid by %s", invoice.invoice_code, payment.payment_code)
     return payment, invoice


def list_payments(
     db: Session,
     month: Optional[str] = None,
     supplier_id: Optional[str] = None,
) -> List[MealPayment]:
     """Meal payments, newest first. month matches the paid invoice's month."""
     query = db.query(MealPayment)
     if supplier_id:
          query = query.filter(MealPayment.supplier_id == str(supplier_id))
     if month:
          query = query.join(MealInvoice, MealPayment.invoice_id == MealInvoice.id).filter(
               MealInvoice.month == _validate_month(month)
          )
     return query.order_by(MealPayment.payment_date.desc(), MealPayment.id.desc()).all()
