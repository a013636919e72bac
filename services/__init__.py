# services/__init__.py
from .errors import BillingError, Conflict, InvalidState, NotFound, ValidationError
from .rent_service import RentService, GenerationResult
from .sequence_service import next_code

__all__ = [
     "BillingError",
     "Conflict",
     "InvalidState",
     "NotFound",
     "ValidationError",
     "RentService",
     "GenerationResult",
     "next_code",
]
