# routers/__init__.py
from .meals import router as meals_router
from .rent import router as rent_router
from .reports import router as reports_router
from .utilities import router as utilities_router

__all__ = ["meals_router", "rent_router", "reports_router", "utilities_router"]
