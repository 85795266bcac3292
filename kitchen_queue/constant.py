"""Editable static menu configuration."""

from __future__ import annotations

CATEGORY_LABELS: dict[str, str] = {
    "drink": "Drinks",
    "appetizer": "Appetizers",
    "entree": "Entrees",
    "dessert": "Desserts",
}

# Item codes are written to the order file; never renumber them.
MENU_ITEMS_BY_CODE: dict[int, dict[str, str]] = {
    0: {"name": "Water", "price": "0.00", "category": "drink"},
    1: {"name": "Soda", "price": "1.99", "category": "drink"},
    2: {"name": "Tea", "price": "2.99", "category": "drink"},
    3: {"name": "Coffee", "price": "2.99", "category": "drink"},
    4: {"name": "Beer", "price": "5.99", "category": "drink"},
    5: {"name": "Mixed Drink", "price": "6.99", "category": "drink"},
    6: {"name": "Wings", "price": "8.99", "category": "appetizer"},
    7: {"name": "Quesadillas", "price": "7.99", "category": "appetizer"},
    8: {"name": "Fried Mozzarella", "price": "7.99", "category": "appetizer"},
    9: {"name": "Hamburger", "price": "10.99", "category": "entree"},
    10: {"name": "Cheeseburger", "price": "11.99", "category": "entree"},
    11: {"name": "Four Chicken Tenders", "price": "6.99", "category": "entree"},
    12: {"name": "Grilled Salmon", "price": "12.99", "category": "entree"},
    13: {"name": "Vegetable Rice Bowl", "price": "9.99", "category": "entree"},
    14: {"name": "Apple Pie", "price": "8.99", "category": "dessert"},
    15: {"name": "Lava Cake", "price": "9.99", "category": "dessert"},
    16: {"name": "Ice Cream", "price": "6.99", "category": "dessert"},
}

CHANNEL_LABELS: dict[int, str] = {
    0: "Drive Through",
    1: "Onsite",
    2: "Phone",
    3: "DoorDash",
}

STATUS_LABELS: dict[int, str] = {
    0: "Placed",
    1: "Cooking",
    2: "Complete",
    3: "Ready for pickup",
}
