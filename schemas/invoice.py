"""
Pydantic schemas for rent invoice API request/response validation.
"""
from datetime import date, datetime
from typing import Optional, List

from pydantic import ConfigDict, Field

from models.rent_invoice import InvoiceStatus
from .base import CamelModel


class RentGenerateRequest(CamelModel):
     """Body of POST /api/owner/rent/generate. Presence rules are checked by the service."""
     month: Optional[str] = Field(None, description="Billing month, YYYY-MM")
     due_date: Optional[date] = Field(None, description="Due date for new invoices (today or later)")
     property_id: Optional[int] = Field(None, description="Only bill rooms of this property")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "month": "2024-05",
                    "dueDate": "2024-06-10"
               }
          }
     )


class RentInvoiceResponse(CamelModel):
     """Schema for rent invoice response."""
     id: int
     invoice_code: str
     tenant_id: str
     property_id: int
     room_id: int
     month: str
     base_rent: int
     utility_share: int
     meal_cost: int
     total: int
     status: InvoiceStatus
     due_date: date
     created_at: datetime
     updated_at: datetime

     # Optional related data
     derived_status: Optional[str] = None
     property_name: Optional[str] = None
     room_number: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "id": 1,
                    "invoiceCode": "INV001",
                    "tenantId": "t1",
                    "propertyId": 1,
                    "roomId": 1,
                    "month": "2024-05",
                    "baseRent": 10000,
                    "utilityShare": 1000,
                    "mealCost": 15,
                    "total": 11015,
                    "status": "pending",
                    "dueDate": "2024-06-10",
                    "createdAt": "2024-05-31T10:30:00",
                    "updatedAt": "2024-05-31T10:30:00",
                    "derivedStatus": "pending",
                    "propertyName": "Lakeside House",
                    "roomNumber": "A-101"
               }
          }
     )


class RentGenerateResponse(CamelModel):
     """Schema for the generation result."""
     created_count: int
     invoices: List[RentInvoiceResponse]
     message: Optional[str] = None


class TenantBalanceResponse(CamelModel):
     """Schema for a tenant's invoice balance summary."""
     tenant_id: str
     total_owed: int
     pending_amount: int
     overdue_amount: int
     paid_amount: int
     total_invoices: int
     pending_count: int
     overdue_count: int
     paid_count: int
