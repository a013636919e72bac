"""
Pydantic schemas for the rent receipt API.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field

from models.payment import PaymentMethod
from .base import CamelModel
from .invoice import RentInvoiceResponse


class ReceiptRequest(CamelModel):
     """Request body for POST /api/owner/rent/receipt. Missing fields are reported by the service."""

     invoice_id: Optional[int] = Field(None, description="Invoice being paid")
     amount_paid: Optional[Decimal] = Field(None, description="Must equal the invoice total exactly")
     payment_method: Optional[PaymentMethod] = Field(None, description="Cash, Bank Transfer, Card or Online")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "invoiceId": 1,
                    "amountPaid": 11015,
                    "paymentMethod": "Cash",
               }
          }
     )


class PaymentResponse(CamelModel):
     id: int
     payment_code: str
     invoice_id: int
     amount_paid: int
     payment_method: PaymentMethod
     payment_date: datetime
     created_at: datetime


class ReceiptResponse(CamelModel):
     """Response for POST /api/owner/rent/receipt."""

     payment: PaymentResponse
     invoice: RentInvoiceResponse
