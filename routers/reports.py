# routers/reports.py
"""
Finance report API routes.

Reports are immutable monthly snapshots; one per report type and month.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_owner
from schemas.report import FinanceReportCreate, FinanceReportResponse
from services import report_service

router = APIRouter(prefix="/api/owner/finance/reports", tags=["reports"])


@router.post(
     "",
     response_model=FinanceReportResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Generate a finance report"
)
def create_report(
     body: FinanceReportCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_owner),
):
     report = report_service.generate_report(
          db,
          month=body.month,
          report_type=body.report_type,
          notes=body.notes,
          generated_by=token.get("id"),
     )
     db.commit()
     return report


@router.get(
     "",
     response_model=List[FinanceReportResponse],
     summary="List finance reports"
)
def list_reports(
     month: Optional[str] = Query(None),
     report_type: Optional[str] = Query(None, alias="reportType"),
     db: Session = Depends(get_session),
     token: dict = Depends(require_owner),
):
     return report_service.list_reports(db, month=month, report_type=report_type)


@router.get(
     "/{id_or_code}",
     response_model=FinanceReportResponse,
     summary="Get a finance report by id or code"
)
def get_report(
     id_or_code: str,
     db: Session = Depends(get_session),
     token: dict = Depends(require_owner),
):
     return report_service.get_report(db, id_or_code)
