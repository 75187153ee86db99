# backend/modules/analytics/routers/__init__.py

from .loyalty_analytics_router import router as loyalty_analytics_router

__all__ = ["loyalty_analytics_router"]
