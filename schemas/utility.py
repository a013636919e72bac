"""
Pydantic schemas for property utility bills and their payments.
"""
from datetime import date, datetime
from typing import Optional

from pydantic import ConfigDict, Field

from models.payment import PaymentMethod
from models.utility_bill import UtilityBillStatus, UtilityType
from .base import CamelModel


class UtilityBillCreate(CamelModel):
     """Body of POST /api/owner/utility/bills. Required fields are enforced by the service."""
     property_id: Optional[int] = None
     month: Optional[str] = Field(None, description="YYYY-MM")
     type: Optional[str] = Field(None, description="water or electricity")
     amount: Optional[int] = None
     due_date: Optional[date] = None
     notes: str = ""

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "propertyId": 1,
                    "month": "2024-05",
                    "type": "water",
                    "amount": 1500,
                    "dueDate": "2024-06-05",
               }
          }
     )


class UtilityBillResponse(CamelModel):
     id: int
     bill_code: str
     property_id: int
     month: str
     type: UtilityType
     amount: int
     due_date: date
     status: UtilityBillStatus
     notes: str = ""
     created_at: datetime
     updated_at: datetime

     derived_status: Optional[str] = None
     property_name: Optional[str] = None


class UtilityPayRequest(CamelModel):
     payment_method: Optional[PaymentMethod] = None


class UtilityPaymentResponse(CamelModel):
     id: int
     payment_code: str
     bill_id: int
     property_id: int
     month: str
     type: str
     amount_paid: int
     payment_method: PaymentMethod
     payment_date: datetime
     created_at: datetime


class UtilityPayResponse(CamelModel):
     payment: UtilityPaymentResponse
     bill: UtilityBillResponse
