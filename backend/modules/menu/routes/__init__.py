# backend/modules/menu/routes/__init__.py

from .menu_item_routes import router

__all__ = ["router"]
