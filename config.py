# config.py
"""
Environment configuration for the boarding house finance backend.

Values are read once at import time, after a local .env file (if any)
has been loaded. Every module imports its settings from here instead of
calling os.getenv on its own.
"""
import os
from typing import FrozenSet, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _parse_statuses(raw: Optional[str]) -> Optional[FrozenSet[str]]:
     """
     Parse a comma-separated list of order statuses.

     An empty value means "no status filter" and is returned as None.
     """
     if raw is None:
          return None
     statuses = frozenset(part.strip().upper() for part in raw.split(",") if part.strip())
     return statuses or None


# Database
DATABASE_URL = os.getenv("DATABASE_URL")
DB_SERVER = os.getenv("DB_SERVER")
DB_PORT = os.getenv("DB_PORT", "1433")
DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_NAME = os.getenv("DB_NAME")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "10000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
JWT_ALGORITHM = "HS256"

# Email (Brevo transactional API)
BREVO_API_KEY = os.getenv("BREVO_API_KEY")
BREVO_API_URL = os.getenv("BREVO_API_URL", "https://api.brevo.com/v3/smtp/email")
EMAIL_SENDER_NAME = os.getenv("EMAIL_SENDER_NAME", "Boarding House Finance")
EMAIL_SENDER = os.getenv("EMAIL_SENDER", "noreply@boardinghouse.local")

# Billing policy: which order statuses count toward a tenant's meal cost.
# Unset defaults to delivered orders only; an explicit empty value counts all orders.
MEAL_INVOICE_STATUSES = _parse_statuses(os.getenv("MEAL_INVOICE_STATUSES", "DELIVERED"))
