"""API Routers."""
from .dashboard import router as dashboard_router
from .stock import router as stock_router

__all__ = ["dashboard_router", "stock_router"]
