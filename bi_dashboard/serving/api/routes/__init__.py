"""
API Routes Module
"""
from .health import router as health_router
from .dashboard import router as dashboard_router
from .orders import router as orders_router
from .customers import router as customers_router
from .products import router as products_router
from .revenue import router as revenue_router
from .employees import router as employees_router
from .offices import router as offices_router

__all__ = [
    "health_router",
    "dashboard_router",
    "orders_router",
    "customers_router",
    "products_router",
    "revenue_router",
    "employees_router",
    "offices_router",
]
