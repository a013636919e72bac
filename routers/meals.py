# routers/meals.py
"""
Meal supplier invoice and payment API routes.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_owner
from models import MealInvoice
from schemas.meal import (
     MealInvoiceCreate,
     MealInvoiceResponse,
     MealPaymentResponse,
     MealPayRequest,
     MealPayResponse,
)
from services import meal_service

router = APIRouter(
     prefix="/api/owner/meal-payments",
     tags=["meal-payments"],
     dependencies=[Depends(require_owner)],
)


def _build_invoice_response(invoice: MealInvoice, today: Optional[date] = None) -> MealInvoiceResponse:
     response = MealInvoiceResponse.model_validate(invoice)
     response.overdue = invoice.is_overdue_on(today or date.today())
     return response


@router.get(
     "/invoices",
     response_model=List[MealInvoiceResponse],
     summary="List meal invoices"
)
def list_invoices(
     month: Optional[str] = Query(None, description="YYYY-MM"),
     status: Optional[str] = Query(None, description="unpaid or paid"),
     supplier_id: Optional[str] = Query(None, alias="supplierId"),
     db: Session = Depends(get_session),
):
     invoices = meal_service.list_invoices(db, month=month, status=status, supplier_id=supplier_id)
     today = date.today()
     return [_build_invoice_response(invoice, today) for invoice in invoices]


@router.post(
     "/invoices",
     response_model=MealInvoiceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a meal invoice"
)
def create_invoice(
     body: MealInvoiceCreate,
     db: Session = Depends(get_session),
):
     invoice = meal_service.create_invoice(
          db,
          month=body.month,
          supplier_id=body.supplier_id,
          amount_cents=body.amount_cents,
          order_count=body.order_count,
          due_date=body.due_date,
          notes=body.notes,
     )
     db.commit()
     return _build_invoice_response(invoice)


@router.post(
     "/payments",
     response_model=MealPayResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Pay a meal invoice"
)
def pay_invoice(
     body: MealPayRequest,
     db: Session = Depends(get_session),
):
     """
     Pay a meal invoice in full.

     - **invoiceId**: the meal invoice to settle
     - **paymentMethod**: Cash, Bank Transfer, Card or Online
     """
     payment, invoice = meal_service.pay_invoice(
          db,
          body.invoice_id,
          body.payment_method,
          notes=body.notes,
     )
     db.commit()
     return MealPayResponse(
          payment=MealPaymentResponse.model_validate(payment),
          invoice=_build_invoice_response(invoice),
     )


@router.get(
     "/payments",
     response_model=List[MealPaymentResponse],
     summary="List meal payments"
)
def list_payments(
     month: Optional[str] = Query(None, description="Month of the paid invoice, YYYY-MM"),
     supplier_id: Optional[str] = Query(None, alias="supplierId"),
     db: Session = Depends(get_session),
):
     return meal_service.list_payments(db, month=month, supplier_id=supplier_id)
