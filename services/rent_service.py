# services/rent_service.py
"""
Rent Service - business logic for rent invoices and their payments.

This service handles monthly invoice generation, receipt recording and
invoice queries, separate from the API layer. Domain rule violations are
raised as services.errors exceptions.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import config
from models import Payment, PaymentMethod, RentInvoice
from models.base import utcnow
from models.rent_invoice import InvoiceStatus
from services import rent_calc
from services.errors import InvalidState, NotFound, ValidationError
from services.sequence_service import next_code

logger = logging.getLogger(__name__)

INVOICE_COUNTER = ("invoice", "INV", 3)
PAYMENT_COUNTER = ("payment", "PMT", 3)


@dataclass
class GenerationResult:
     """Outcome of one generation run: every invoice for the month and the subset created now."""
     invoices: List[RentInvoice] = field(default_factory=list)
     created: List[RentInvoice] = field(default_factory=list)
     message: Optional[str] = None

     @property
     def created_count(self) -> int:
          return len(self.created)


class RentService:
     """Service class for rent-invoice business logic."""

     @staticmethod
     def validate_month(month) -> str:
          if not rent_calc.is_valid_month(month):
               raise ValidationError("month must be YYYY-MM")
          return month

     @staticmethod
     def validate_due_date(due_date: Optional[date], today: Optional[date] = None) -> date:
          """dueDate is required and may not be earlier than today (date-only comparison)."""
          if due_date is None:
               raise ValidationError("dueDate required")
          if due_date < (today or date.today()):
               raise ValidationError("dueDate cannot be in the past")
          return due_date

     @staticmethod
     def find_invoice(db: Session, tenant_id: str, month: str) -> Optional[RentInvoice]:
          return (
               db.query(RentInvoice)
               .filter(RentInvoice.tenant_id == tenant_id, RentInvoice.month == month)
               .first()
          )

     @staticmethod
     def create_invoice(
          db: Session,
          assignment: rent_calc.Assignment,
          month: str,
          due_date: date
     ) -> Tuple[RentInvoice, bool]:
          """
          Persist a pending invoice for an allocated assignment.

          The insert runs in a savepoint. If another generator created the
          (tenant, month) invoice first, the unique constraint fires, the
          savepoint is rolled back and the existing invoice is returned.

          Returns:
               (invoice, created) - created is False when an existing invoice won
          """
          invoice = RentInvoice(
               invoice_code=next_code(db, *INVOICE_COUNTER),
               tenant_id=assignment.tenant_id,
               property_id=assignment.property_id,
               room_id=assignment.room_id,
               month=month,
               base_rent=int(assignment.base_rent),
               utility_share=assignment.utility_share,
               meal_cost=assignment.meal_cost,
               total=assignment.total,
               status=InvoiceStatus.PENDING,
               due_date=due_date,
          )

          try:
               with db.begin_nested():
                    db.add(invoice)
          except IntegrityError:
               existing = RentService.find_invoice(db, assignment.tenant_id, month)
               if existing is None:
                    raise
               logger.info(
                    "Invoice for tenant %s in %s was created concurrently; keeping %s",
                    assignment.tenant_id, month, existing.invoice_code,
               )
               return existing, False

          return invoice, True

     @staticmethod
     def generate_invoices(
          db: Session,
          month,
          due_date: Optional[date],
          property_id: Optional[int] = None,
     ) -> GenerationResult:
          """
          Generate the month's rent invoices for every occupant of an active room.

          Existing (tenant, month) invoices are returned unchanged, so a rerun
          is a no-op. The service owns the transaction here: each new invoice is
          committed as soon as it is created, so a failure later in the loop
          leaves earlier invoices in place and callers need not commit.

          Args:
               db: SQLAlchemy database session
               month: Billing month, "YYYY-MM"
               due_date: Due date stamped on new invoices (today or later)
               property_id: Optional property to restrict generation to

          Returns:
               GenerationResult with all invoices and the newly created ones
          """
          month = RentService.validate_month(month)
          due_date = RentService.validate_due_date(due_date)

          assignments = rent_calc.resolve_assignments(db, month, property_id=property_id)
          if not assignments:
               logger.info("No occupants found for %s; nothing to invoice", month)
               return GenerationResult(message="No occupants found")

          property_ids = {a.property_id for a in assignments}
          utility_totals = rent_calc.utility_totals_by_property(db, month, property_ids)
          meal_totals = rent_calc.meal_totals_by_tenant(
               db, month, include_statuses=config.MEAL_INVOICE_STATUSES
          )
          computed = rent_calc.allocate(assignments, utility_totals, meal_totals)

          result = GenerationResult()
          for assignment in computed:
               existing = RentService.find_invoice(db, assignment.tenant_id, month)
               if existing:
                    result.invoices.append(existing)
                    continue

               invoice, created = RentService.create_invoice(db, assignment, month, due_date)
               db.commit()
               result.invoices.append(invoice)
               if created:
                    result.created.append(invoice)

          logger.info(
               "Generated %d rent invoice(s) for %s (%d assignment(s))",
               result.created_count, month, len(computed),
          )
          return result

     @staticmethod
     def pay_invoice(
          db: Session,
          invoice_id: Optional[int],
          amount_paid,
          payment_method: Optional[PaymentMethod],
     ) -> Tuple[Payment, RentInvoice]:
          """
          Record a full payment against a pending invoice.

          Raises:
               ValidationError: missing fields, or amount_paid differs from the invoice total
               NotFound: invoice does not exist
               InvalidState: invoice is already paid
          """
          if invoice_id is None or amount_paid is None or not payment_method:
               raise ValidationError("invoiceId, amountPaid, paymentMethod required")

          invoice = db.get(RentInvoice, invoice_id)
          if invoice is None:
               raise NotFound("Invoice not found")
          if invoice.status == InvoiceStatus.PAID:
               raise InvalidState("Invoice already paid")

          try:
               amount = Decimal(str(amount_paid))
          except (InvalidOperation, ValueError):
               raise ValidationError("amountPaid must be a number")
          if amount != Decimal(invoice.total):
               raise ValidationError("Partial payments are not allowed")

          # pending -> paid as a compare-and-swap so two receipts can't both win
          transition = db.execute(
               update(RentInvoice)
               .where(RentInvoice.id == invoice.id, RentInvoice.status == InvoiceStatus.PENDING)
               .values(status=InvoiceStatus.PAID, updated_at=utcnow())
               .execution_options(synchronize_session=False)
          )
          if transition.rowcount != 1:
               raise InvalidState("Invoice already paid")

          payment = Payment(
               payment_code=next_code(db, *PAYMENT_COUNTER),
               invoice_id=invoice.id,
               amount_paid=invoice.total,
               payment_method=PaymentMethod(payment_method),
          )
          db.add(payment)
          db.flush()
          db.refresh(invoice)

          logger.info("Invoice %s paid by %s (%s)", invoice.invoice_code, payment.payment_code, payment.payment_method.value)
          return payment, invoice

     @staticmethod
     def list_invoices(
          db: Session,
          property_id: Optional[int] = None,
          tenant_id: Optional[str] = None,
          month: Optional[str] = None,
          status: Optional[str] = None,
     ) -> List[RentInvoice]:
          """
          Invoices matching the filters, newest first.

          status filters on the derived status: pending, paid or overdue;
          "unpaid" matches both pending and overdue.
          """
          query = db.query(RentInvoice)
          if property_id is not None:
               query = query.filter(RentInvoice.property_id == property_id)
          if tenant_id:
               query = query.filter(RentInvoice.tenant_id == str(tenant_id))
          if month:
               query = query.filter(RentInvoice.month == RentService.validate_month(month))

          invoices = query.order_by(RentInvoice.created_at.desc(), RentInvoice.id.desc()).all()

          if status:
               today = date.today()
               if status == "unpaid":
                    invoices = [i for i in invoices if i.status_on(today) in ("pending", "overdue")]
               else:
                    invoices = [i for i in invoices if i.status_on(today) == status]
          return invoices

     @staticmethod
     def list_payments(
          db: Session,
          property_id: Optional[int] = None,
          tenant_id: Optional[str] = None,
          month: Optional[str] = None,
     ) -> List[Payment]:
          """Payments for the invoices matching the filters, newest first."""
          invoice_ids = [
               invoice.id
               for invoice in RentService.list_invoices(db, property_id=property_id, tenant_id=tenant_id, month=month)
          ]
          if not invoice_ids:
               return []

          return (
               db.query(Payment)
               .filter(Payment.invoice_id.in_(invoice_ids))
               .order_by(Payment.created_at.desc(), Payment.id.desc())
               .all()
          )

     @staticmethod
     def delete_invoice(db: Session, invoice_id: int) -> None:
          """Delete an unpaid invoice. Paid invoices and invoices with a payment are kept."""
          invoice = db.get(RentInvoice, invoice_id)
          if invoice is None:
               raise NotFound("Invoice not found")
          if invoice.status == InvoiceStatus.PAID:
               raise ValidationError("Cannot delete a paid invoice")
          has_payment = db.query(Payment.id).filter(Payment.invoice_id == invoice.id).first()
          if has_payment:
               raise ValidationError("Cannot delete invoice with recorded payment")

          db.delete(invoice)
          db.flush()
          logger.info("Deleted invoice %s", invoice.invoice_code)

     @staticmethod
     def calculate_tenant_balance(db: Session, tenant_id: str) -> dict:
          """
          Calculate the balance owed by a tenant.

          Returns:
               Dictionary with counts and amounts per derived status
          """
          invoices = db.query(RentInvoice).filter(RentInvoice.tenant_id == str(tenant_id)).all()
          today = date.today()

          pending = [inv for inv in invoices if inv.status_on(today) == "pending"]
          overdue = [inv for inv in invoices if inv.status_on(today) == "overdue"]
          paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]

          return {
               "tenant_id": str(tenant_id),
               "total_owed": sum(inv.total for inv in pending + overdue),
               "pending_amount": sum(inv.total for inv in pending),
               "overdue_amount": sum(inv.total for inv in overdue),
               "paid_amount": sum(inv.total for inv in paid),
               "total_invoices": len(invoices),
               "pending_count": len(pending),
               "overdue_count": len(overdue),
               "paid_count": len(paid),
          }
