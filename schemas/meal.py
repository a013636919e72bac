"""
Pydantic schemas for meal supplier invoices and their payments.
"""
from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field

from models.meal_invoice import MealInvoiceStatus
from models.payment import PaymentMethod
from .base import CamelModel


class MealInvoiceCreate(CamelModel):
     """Body of POST /api/owner/meal-payments/invoices. Required fields are enforced by the service."""
     month: Optional[str] = Field(None, description="YYYY-MM")
     supplier_id: Optional[str] = None
     order_count: int = 0
     amount_cents: Optional[int] = Field(None, description="Amount owed, in cents")
     due_date: Optional[date] = None
     notes: str = ""

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "month": "2024-05",
                    "supplierId": "sup1",
                    "orderCount": 42,
                    "amountCents": 126000,
                    "dueDate": "2024-06-10",
               }
          }
     )


class MealInvoiceResponse(CamelModel):
     id: int
     invoice_code: str
     month: str
     supplier_id: str
     order_count: int
     amount_cents: int
     status: MealInvoiceStatus
     due_date: Optional[date] = None
     notes: str = ""
     created_at: datetime
     updated_at: datetime

     overdue: bool = False


class MealPayRequest(CamelModel):
     invoice_id: Optional[int] = None
     payment_method: Optional[PaymentMethod] = None
     notes: str = ""


class MealPaymentResponse(CamelModel):
     id: int
     payment_code: str
     invoice_id: int
     supplier_id: str
     amount_cents: int
     payment_method: PaymentMethod
     payment_date: datetime
     notes: str = ""
     created_at: datetime


class MealPayResponse(CamelModel):
     payment: MealPaymentResponse
     invoice: MealInvoiceResponse
