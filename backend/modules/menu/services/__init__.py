# backend/modules/menu/services/__init__.py

from .menu_item_service import MenuItemService, calculate_item_points

__all__ = ["MenuItemService", "calculate_item_points"]
