from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, UniqueConstraint, func
from .base import Base, utcnow


class FinanceReport(Base):
     """
     FinanceReport model - a frozen snapshot of one month's finance data.
     data holds the JSON payload built at generation time.
     """
     __tablename__ = "finance_reports"
     __table_args__ = (
          UniqueConstraint("report_type", "month", name="uq_finance_reports_type_month"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     report_code = Column(String(20), unique=True, nullable=False, index=True)  # e.g. FREP0001
     report_type = Column(String(20), nullable=False)  # summary, rent, utilities, meals
     month = Column(String(7), nullable=False, index=True)
     generated_by = Column(String(64), nullable=True)
     data = Column(JSON, nullable=False, default=dict)
     notes = Column(Text, default="", nullable=False)
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<FinanceReport(code='{self.report_code}', type='{self.report_type}', month='{self.month}')>"
