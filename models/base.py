import re
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, declared_attr
from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
     """Naive UTC timestamp, the form every DateTime column stores."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: UtilityBill -> utility_bills
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


class TimestampMixin:
     """created_at / updated_at pair shared by the finance documents."""

     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, server_default=func.now(), nullable=False)
