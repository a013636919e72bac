# schemas/__init__.py
from .invoice import (
     RentGenerateRequest,
     RentGenerateResponse,
     RentInvoiceResponse,
     TenantBalanceResponse,
)
from .meal import (
     MealInvoiceCreate,
     MealInvoiceResponse,
     MealPaymentResponse,
     MealPayRequest,
     MealPayResponse,
)
from .payment import PaymentResponse, ReceiptRequest, ReceiptResponse
from .report import FinanceReportCreate, FinanceReportResponse
from .utility import (
     UtilityBillCreate,
     UtilityBillResponse,
     UtilityPaymentResponse,
     UtilityPayRequest,
     UtilityPayResponse,
)

__all__ = [
     "RentGenerateRequest",
     "RentGenerateResponse",
     "RentInvoiceResponse",
     "TenantBalanceResponse",
     "MealInvoiceCreate",
     "MealInvoiceResponse",
     "MealPaymentResponse",
     "MealPayRequest",
     "MealPayResponse",
     "PaymentResponse",
     "ReceiptRequest",
     "ReceiptResponse",
     "FinanceReportCreate",
     "FinanceReportResponse",
     "UtilityBillCreate",
     "UtilityBillResponse",
     "UtilityPaymentResponse",
     "UtilityPayRequest",
     "UtilityPayResponse",
]
