# backend/modules/menu/data/sample_menu.py

from typing import Any, Dict, List


# Starter menu created for restaurants with no items yet
SAMPLE_MENU_ITEMS: List[Dict[str, Any]] = [
    {
        "name": "Grilled Chicken Platter",
        "description": "Marinated chicken breast with rice and grilled vegetables",
        "category": "main",
        "cost_price": 18.0,
        "selling_price": 55.0,
        "loyalty_mode": "smart",
        "loyalty_settings": {"profit_allocation_percent": 20},
    },
    {
        "name": "Beef Burger",
        "description": "Angus patty, cheddar, caramelised onions and fries",
        "category": "main",
        "cost_price": 15.0,
        "selling_price": 48.0,
        "loyalty_mode": "smart",
        "loyalty_settings": {"profit_allocation_percent": 15},
    },
    {
        "name": "Caesar Salad",
        "description": "Romaine, parmesan, croutons and house dressing",
        "category": "salad",
        "cost_price": 8.0,
        "selling_price": 32.0,
        "loyalty_mode": "smart",
        "loyalty_settings": {"profit_allocation_percent": 20},
    },
    {
        "name": "Hummus & Pita",
        "description": "Classic hummus with warm pita bread",
        "category": "appetizer",
        "cost_price": 4.0,
        "selling_price": 22.0,
        "loyalty_mode": "manual",
        "loyalty_settings": {"fixed_points": 2},
    },
    {
        "name": "Fresh Orange Juice",
        "description": "Freshly squeezed, no added sugar",
        "category": "beverage",
        "cost_price": 3.0,
        "selling_price": 18.0,
        "loyalty_mode": "manual",
        "loyalty_settings": {"fixed_points": 1},
    },
    {
        "name": "Cappuccino",
        "description": "Double shot espresso with steamed milk",
        "category": "beverage",
        "cost_price": 2.5,
        "selling_price": 16.0,
        "loyalty_mode": "smart",
        "loyalty_settings": {"profit_allocation_percent": 25},
    },
    {
        "name": "Chocolate Lava Cake",
        "description": "Warm chocolate cake with vanilla ice cream",
        "category": "dessert",
        "cost_price": 7.0,
        "selling_price": 30.0,
        "loyalty_mode": "smart",
        "loyalty_settings": {"profit_allocation_percent": 20},
    },
    {
        "name": "Bottled Water",
        "description": None,
        "category": "beverage",
        "cost_price": 1.0,
        "selling_price": 5.0,
        "loyalty_mode": "none",
        "loyalty_settings": {},
    },
]
