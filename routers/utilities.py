# routers/utilities.py
"""
Utility bill API routes.

Owners record each property's monthly water and electricity bills here;
the totals are split across tenants when rent invoices are generated.
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_owner
from models import UtilityBill
from schemas.utility import (
     UtilityBillCreate,
     UtilityBillResponse,
     UtilityPaymentResponse,
     UtilityPayRequest,
     UtilityPayResponse,
)
from services import utility_service

router = APIRouter(
     prefix="/api/owner/utility",
     tags=["utilities"],
     dependencies=[Depends(require_owner)],
)


def _build_bill_response(bill: UtilityBill, today: Optional[date] = None) -> UtilityBillResponse:
     response = UtilityBillResponse.model_validate(bill)
     response.derived_status = bill.status_on(today or date.today())
     if bill.property:
          response.property_name = bill.property.name
     return response


@router.get(
     "/bills",
     response_model=List[UtilityBillResponse],
     summary="List utility bills"
)
def list_bills(
     property_id: Optional[int] = Query(None, alias="propertyId"),
     month: Optional[str] = Query(None),
     type: Optional[str] = Query(None, description="water or electricity"),
     status: Optional[str] = Query(None, description="unpaid, paid or overdue"),
     db: Session = Depends(get_session),
):
     bills = utility_service.list_bills(db, property_id=property_id, month=month, type=type, status=status)
     today = date.today()
     return [_build_bill_response(bill, today) for bill in bills]


@router.post(
     "/bills",
     response_model=UtilityBillResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a utility bill"
)
def create_bill(
     body: UtilityBillCreate,
     db: Session = Depends(get_session),
):
     """
     Record a property's bill for a month.

     Only one water and one electricity bill may exist per property and month.
     """
     bill = utility_service.create_bill(
          db,
          property_id=body.property_id,
          month=body.month,
          type=body.type,
          amount=body.amount,
          due_date=body.due_date,
          notes=body.notes,
     )
     db.commit()
     return _build_bill_response(bill)


@router.post(
     "/bills/{bill_id}/pay",
     response_model=UtilityPayResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Pay a utility bill"
)
def pay_bill(
     bill_id: int,
     body: Optional[UtilityPayRequest] = None,
     db: Session = Depends(get_session),
):
     payment, bill = utility_service.pay_bill(
          db,
          bill_id,
          payment_method=body.payment_method if body else None,
     )
     db.commit()
     return UtilityPayResponse(
          payment=UtilityPaymentResponse.model_validate(payment),
          bill=_build_bill_response(bill),
     )


@router.get(
     "/payments",
     response_model=List[UtilityPaymentResponse],
     summary="List utility payments"
)
def list_payments(
     property_id: Optional[int] = Query(None, alias="propertyId"),
     month: Optional[str] = Query(None),
     type: Optional[str] = Query(None),
     bill_id: Optional[str] = Query(None, alias="billId", description="Bill id or bill code"),
     db: Session = Depends(get_session),
):
     return utility_service.list_payments(db, property_id=property_id, month=month, type=type, bill_id=bill_id)
