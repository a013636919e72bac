# services/report_service.py
"""
Finance report generation.

A report freezes one month's finance data as JSON so later edits to
invoices or bills don't change what was reported. Only one report per
(type, month) may exist.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import config
from models import FinanceReport, RentInvoice, UtilityBill, UtilityPayment
from models.utility_bill import UtilityType
from schemas.invoice import RentInvoiceResponse
from schemas.utility import UtilityBillResponse, UtilityPaymentResponse
from services import rent_calc
from services.errors import NotFound, ValidationError
from services.sequence_service import next_code

logger = logging.getLogger(__name__)

REPORT_TYPES = ("summary", "rent", "utilities", "meals")
REPORT_COUNTER = ("financeReport", "FREP", 4)
INCOME_TAX_RATE = Decimal("0.06")


def is_future_month(month: str, today: Optional[date] = None) -> bool:
     today = today or date.today()
     year, mon = (int(part) for part in month.split("-"))
     return (year, mon) > (today.year, today.month)


def _dump(schema, rows) -> list:
     return [schema.model_validate(row).model_dump(mode="json", by_alias=True) for row in rows]


def summarize_month(db: Session, month: str) -> dict:
     """
     Income and spending totals for a month.

     Income is the base rent billed. Spending is utility bills, meal cost and
     a 6% income tax on positive pre-tax profit.
     """
     invoices = db.query(RentInvoice).filter(RentInvoice.month == month).all()
     bills = db.query(UtilityBill).filter(UtilityBill.month == month).all()

     total_base_rent_income = sum(inv.base_rent for inv in invoices)
     total_water_cost = sum(b.amount for b in bills if b.type == UtilityType.WATER)
     total_electricity_cost = sum(b.amount for b in bills if b.type == UtilityType.ELECTRICITY)
     total_meal_cost = rent_calc.total_meal_cost(db, month, config.MEAL_INVOICE_STATUSES)

     pre_tax_profit = total_base_rent_income - (total_water_cost + total_electricity_cost + total_meal_cost)
     income_tax = rent_calc.round_half_up(pre_tax_profit * INCOME_TAX_RATE) if pre_tax_profit > 0 else 0
     total_spendings = total_water_cost + total_electricity_cost + total_meal_cost + income_tax

     return {
          "totalBaseRentIncome": total_base_rent_income,
          "totalWaterCost": total_water_cost,
          "totalElectricityCost": total_electricity_cost,
          "totalMealCost": total_meal_cost,
          "incomeTax": income_tax,
          "totalSpendings": total_spendings,
          "profit": total_base_rent_income - total_spendings,
     }


def _build_report_data(db: Session, report_type: str, month: str) -> dict:
     if report_type == "rent":
          invoices = db.query(RentInvoice).filter(RentInvoice.month == month).all()
          return {"invoices": _dump(RentInvoiceResponse, invoices)}

     if report_type == "utilities":
          bills = db.query(UtilityBill).filter(UtilityBill.month == month).all()
          payments = db.query(UtilityPayment).filter(UtilityPayment.month == month).all()
          return {
               "bills": _dump(UtilityBillResponse, bills),
               "payments": _dump(UtilityPaymentResponse, payments),
          }

     if report_type == "meals":
          return {
               "ordersSummary": {
                    "totalMealCost": rent_calc.total_meal_cost(db, month, config.MEAL_INVOICE_STATUSES)
               }
          }

     invoices = db.query(RentInvoice).filter(RentInvoice.month == month).all()
     bills = db.query(UtilityBill).filter(UtilityBill.month == month).all()
     payments = db.query(UtilityPayment).filter(UtilityPayment.month == month).all()
     return {
          "rent": _dump(RentInvoiceResponse, invoices),
          "utilityBills": _dump(UtilityBillResponse, bills),
          "utilityPayments": _dump(UtilityPaymentResponse, payments),
          "totals": summarize_month(db, month),
     }


def generate_report(
     db: Session,
     month: Optional[str],
     report_type: str = "summary",
     notes: str = "",
     generated_by: Optional[str] = None,
) -> FinanceReport:
     """
     Build and store a finance report.

     Raises:
          ValidationError: bad or future month, unknown type, or a report of
               this type already exists for the month
     """
     if not rent_calc.is_valid_month(month):
          raise ValidationError("month must be in YYYY-MM format")
     if is_future_month(month):
          raise ValidationError("month cannot be in the future")
     if report_type not in REPORT_TYPES:
          raise ValidationError("Invalid reportType")

     existing = (
          db.query(FinanceReport.id)
          .filter(FinanceReport.report_type == report_type, FinanceReport.month == month)
          .first()
     )
     if existing:
          raise ValidationError("report for this month has already been created")

     report = FinanceReport(
          report_code=next_code(db, *REPORT_COUNTER),
          report_type=report_type,
          month=month,
          generated_by=str(generated_by) if generated_by is not None else None,
          data=_build_report_data(db, report_type, month),
          notes=notes or "",
     )
     try:
          with db.begin_nested():
               db.add(report)
     except IntegrityError:
          raise ValidationError("report for this month has already been created")

     logger.info("Generated %s finance report %s for %s", report_type, report.report_code, month)
     return report


def list_reports(db: Session, month: Optional[str] = None, report_type: Optional[str] = None) -> List[FinanceReport]:
     query = db.query(FinanceReport)
     if month:
          query = query.filter(FinanceReport.month == month)
     if report_type:
          query = query.filter(FinanceReport.report_type == report_type)
     return query.order_by(FinanceReport.created_at.desc(), FinanceReport.id.desc()).all()


def get_report(db: Session, id_or_code: str) -> FinanceReport:
     """Look a report up by numeric id or by its code (FREP0001)."""
     if str(id_or_code).isdigit():
          report = db.get(FinanceReport, int(id_or_code))
     else:
          report = db.query(FinanceReport).filter(FinanceReport.report_code == id_or_code).first()
     if report is None:
          raise NotFound("Not found")
     return report
