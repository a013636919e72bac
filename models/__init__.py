from .base import Base
from .user import User
from .property import Property
from .room import Room, RoomOccupant
from .order import Order, OrderStatus
from .counter import Counter
from .rent_invoice import RentInvoice, InvoiceStatus
from .payment import Payment, PaymentMethod
from .utility_bill import UtilityBill, UtilityBillStatus, UtilityType
from .utility_payment import UtilityPayment
from .meal_invoice import MealInvoice, MealInvoiceStatus
from .meal_payment import MealPayment
from .finance_report import FinanceReport

__all__ = [
     "Base",
     "User",
     "Property",
     "Room",
     "RoomOccupant",
     "Order",
     "OrderStatus",
     "Counter",
     "RentInvoice",
     "InvoiceStatus",
     "Payment",
     "PaymentMethod",
     "UtilityBill",
     "UtilityBillStatus",
     "UtilityType",
     "UtilityPayment",
     "MealInvoice",
     "MealInvoiceStatus",
     "MealPayment",
     "FinanceReport",
]
