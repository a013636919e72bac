# routers/rent.py
"""
Rent API routes for the boarding house owner.

- Monthly invoice generation (base rent + utility share + meal cost)
- Invoice and payment listings with on-the-fly overdue status
- Receipt recording (full payment only)

All routes require an owner or admin token.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_owner
from models import RentInvoice
from schemas.invoice import (
     RentGenerateRequest,
     RentGenerateResponse,
     RentInvoiceResponse,
     TenantBalanceResponse,
)
from schemas.payment import PaymentResponse, ReceiptRequest, ReceiptResponse
from services import notification_service
from services.rent_service import RentService

router = APIRouter(
     prefix="/api/owner/rent",
     tags=["rent"],
     dependencies=[Depends(require_owner)],
)


def _build_invoice_response(invoice: RentInvoice, today: Optional[date] = None) -> RentInvoiceResponse:
     """Build invoice response with derived status and property/room labels."""
     response = RentInvoiceResponse.model_validate(invoice)
     response.derived_status = invoice.status_on(today or date.today())
     if invoice.property:
          response.property_name = invoice.property.name
     if invoice.room:
          response.room_number = invoice.room.room_no
     return response


@router.post(
     "/generate",
     response_model=RentGenerateResponse,
     summary="Generate monthly rent invoices"
)
def generate_invoices(
     body: RentGenerateRequest,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
):
     """
     Create one invoice per tenant for the month.

     - **month**: billing month, YYYY-MM
     - **dueDate**: due date for new invoices, not in the past
     - **propertyId**: optional, only bill rooms of this property

     Tenants already invoiced for the month are returned unchanged.
     """
     result = RentService.generate_invoices(
          db,
          month=body.month,
          due_date=body.due_date,
          property_id=body.property_id,
     )

     notification_service.queue_invoice_notifications(background_tasks, db, result.created)

     today = date.today()
     return RentGenerateResponse(
          created_count=result.created_count,
          invoices=[_build_invoice_response(inv, today) for inv in result.invoices],
          message=result.message,
     )


@router.get(
     "/invoices",
     response_model=List[RentInvoiceResponse],
     summary="List rent invoices"
)
def list_invoices(
     property_id: Optional[int] = Query(None, alias="propertyId", description="Filter by property"),
     tenant_id: Optional[str] = Query(None, alias="tenantId", description="Filter by tenant"),
     month: Optional[str] = Query(None, description="Filter by month, YYYY-MM"),
     status: Optional[str] = Query(None, description="pending, paid, overdue or unpaid"),
     db: Session = Depends(get_session),
):
     invoices = RentService.list_invoices(
          db,
          property_id=property_id,
          tenant_id=tenant_id,
          month=month,
          status=status,
     )
     today = date.today()
     return [_build_invoice_response(inv, today) for inv in invoices]


@router.get(
     "/payments",
     response_model=List[PaymentResponse],
     summary="List rent payments"
)
def list_payments(
     property_id: Optional[int] = Query(None, alias="propertyId"),
     tenant_id: Optional[str] = Query(None, alias="tenantId"),
     month: Optional[str] = Query(None),
     db: Session = Depends(get_session),
):
     return RentService.list_payments(db, property_id=property_id, tenant_id=tenant_id, month=month)


@router.post(
     "/receipt",
     response_model=ReceiptResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a rent payment"
)
def record_receipt(
     body: ReceiptRequest,
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
):
     """
     Record a full payment for a pending invoice and mark it paid.

     amountPaid must equal the invoice total; partial payments are rejected.
     """
     payment, invoice = RentService.pay_invoice(
          db,
          invoice_id=body.invoice_id,
          amount_paid=body.amount_paid,
          payment_method=body.payment_method,
     )
     db.commit()

     notification_service.queue_receipt_notification(background_tasks, db, payment, invoice)

     return ReceiptResponse(
          payment=PaymentResponse.model_validate(payment),
          invoice=_build_invoice_response(invoice),
     )


@router.delete(
     "/invoices/{invoice_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete an unpaid invoice"
)
def delete_invoice(
     invoice_id: int,
     db: Session = Depends(get_session),
):
     RentService.delete_invoice(db, invoice_id)
     db.commit()


@router.get(
     "/tenants/{tenant_id}/summary",
     response_model=TenantBalanceResponse,
     summary="Get a tenant's balance"
)
def get_tenant_summary(
     tenant_id: str,
     db: Session = Depends(get_session),
):
     """Pending, overdue and paid totals across all of a tenant's invoices."""
     return RentService.calculate_tenant_balance(db, tenant_id)
