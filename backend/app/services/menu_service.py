"""Static concession menu."""

from decimal import Decimal
from typing import List, Optional

from app.models.order import MenuItem

MENU_ITEMS: List[MenuItem] = [
    MenuItem(
        id="1",
        name="Stadium Burger",
        description="Juicy beef patty with lettuce, tomato, and special sauce",
        price=Decimal("12.99"),
        category="Burgers",
    ),
    MenuItem(
        id="2",
        name="Chicken Tenders",
        description="Crispy chicken tenders with your choice of dipping sauce",
        price=Decimal("10.99"),
        category="Chicken",
    ),
    MenuItem(
        id="3",
        name="Loaded Nachos",
        description="Tortilla chips topped with cheese, jalapeños, and sour cream",
        price=Decimal("8.99"),
        category="Snacks",
    ),
    MenuItem(
        id="4",
        name="Hot Dog",
        description="Classic stadium hot dog with mustard and relish",
        price=Decimal("6.99"),
        category="Hot Dogs",
    ),
    MenuItem(
        id="5",
        name="Pizza Slice",
        description="Fresh pepperoni pizza slice",
        price=Decimal("7.99"),
        category="Pizza",
    ),
    MenuItem(
        id="6",
        name="Soft Pretzel",
        description="Warm soft pretzel with cheese sauce",
        price=Decimal("5.99"),
        category="Snacks",
    ),
    MenuItem(
        id="7",
        name="Beer",
        description="Domestic beer (21+ only)",
        price=Decimal("8.99"),
        category="Beverages",
    ),
    MenuItem(
        id="8",
        name="Soda",
        description="Fountain drink - Coke, Pepsi, Sprite",
        price=Decimal("4.99"),
        category="Beverages",
    ),
]


class MenuService:
    def __init__(self, items: Optional[List[MenuItem]] = None):
        self.items = list(items) if items is not None else list(MENU_ITEMS)

    def list_items(self, category: Optional[str] = None, available_only: bool = False) -> List[MenuItem]:
        items = self.items
        if category:
            items = [i for i in items if i.category.lower() == category.lower()]
        if available_only:
            items = [i for i in items if i.available]
        return items

    def get_item(self, item_id: str) -> Optional[MenuItem]:
        return next((i for i in self.items if i.id == item_id), None)
