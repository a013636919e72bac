# services/notification_service.py
"""
Best-effort email notifications for finance events.

Emails are queued as FastAPI background tasks and sent after the response.
A failed send is logged and dropped; it never affects the request that
triggered it.
"""
import logging
from typing import Callable, Dict, Iterable

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

import config
from models import Payment, RentInvoice, User
from utils import email

logger = logging.getLogger(__name__)


def deliver(send: Callable, *args) -> None:
     """Run one send, swallowing and logging any failure."""
     if not config.BREVO_API_KEY:
          logger.warning("BREVO_API_KEY is not set; skipping %s", send.__name__)
          return
     try:
          send(*args)
     except Exception:
          logger.warning("Email notification %s failed", send.__name__, exc_info=True)


def _emails_for(db: Session, tenant_ids: Iterable[str]) -> Dict[str, str]:
     ids = {str(t) for t in tenant_ids}
     if not ids:
          return {}
     rows = db.query(User.id, User.email).filter(User.id.in_(ids)).all()
     return {user_id: address for user_id, address in rows if address}


def queue_invoice_notifications(background_tasks: BackgroundTasks, db: Session, invoices: Iterable[RentInvoice]) -> int:
     """Queue an invoice email for every tenant with a known address. Returns the number queued."""
     invoices = list(invoices)
     addresses = _emails_for(db, (inv.tenant_id for inv in invoices))

     queued = 0
     for invoice in invoices:
          to_email = addresses.get(invoice.tenant_id)
          if not to_email:
               logger.debug("No email for tenant %s; invoice %s not announced", invoice.tenant_id, invoice.invoice_code)
               continue
          background_tasks.add_task(
               deliver,
               email.send_invoice_email,
               to_email,
               invoice.invoice_code,
               invoice.month,
               invoice.total,
               invoice.due_date.isoformat(),
          )
          queued += 1
     return queued


def queue_receipt_notification(background_tasks: BackgroundTasks, db: Session, payment: Payment, invoice: RentInvoice) -> bool:
     to_email = _emails_for(db, [invoice.tenant_id]).get(invoice.tenant_id)
     if not to_email:
          return False
     background_tasks.add_task(
          deliver,
          email.send_payment_receipt_email,
          to_email,
          payment.payment_code,
          invoice.invoice_code,
          payment.amount_paid,
          payment.payment_method.value,
     )
     return True
