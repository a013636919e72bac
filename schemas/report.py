"""
Pydantic schemas for stored finance reports.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .base import CamelModel


class FinanceReportCreate(CamelModel):
     report_type: str = Field("summary", description="summary, rent, utilities or meals")
     month: Optional[str] = Field(None, description="YYYY-MM, not in the future")
     notes: str = ""


class FinanceReportResponse(CamelModel):
     id: int
     report_code: str
     report_type: str
     month: str
     generated_by: Optional[str] = None
     data: Dict[str, Any]
     notes: str = ""
     created_at: datetime
