"""In-memory shop catalogue and cart state."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Item:
    """Catalogue item."""
    id: int
    name: str
    price: float
    image: str
    description: str
    category: str


@dataclass
class CartItem:
    """Cart line."""
    item: Item
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return round(self.item.price * self.quantity, 2)


MOCK_ITEMS: List[Item] = [
    Item(1, "Wireless Headphones", 99.99, "🎧",
         "High-quality wireless headphones with noise cancellation", "electronics"),
    Item(2, "Smart Watch", 299.99, "⌚",
         "Advanced smartwatch with health tracking features", "electronics"),
    Item(3, "Laptop Stand", 49.99, "💻",
         "Ergonomic laptop stand for better posture", "office"),
    Item(4, "Coffee Mug", 19.99, "☕",
         "Ceramic coffee mug with temperature control", "kitchen"),
    Item(5, "Desk Lamp", 79.99, "💡",
         "LED desk lamp with adjustable brightness", "office"),
    Item(6, "Phone Case", 24.99, "📱",
         "Protective phone case with wireless charging support", "electronics"),
]


@dataclass
class ShopStore:
    """Catalogue plus cart for one session. Nothing is persisted."""
    items: List[Item] = field(default_factory=lambda: list(MOCK_ITEMS))
    cart: List[CartItem] = field(default_factory=list)
    is_cart_open: bool = False

    def __post_init__(self):
        self.logger = logging.getLogger("shop_store")

    def get_item(self, item_id: int) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)

    def _find_line(self, item_id: int) -> Optional[CartItem]:
        return next((line for line in self.cart if line.item.id == item_id), None)

    def add_to_cart(self, item: Item, quantity: int = 1) -> CartItem:
        """Add ``quantity`` units of ``item``, merging with an existing line."""
        if quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")
        line = self._find_line(item.id)
        if line is None:
            line = CartItem(item=item, quantity=quantity)
            self.cart.append(line)
        else:
            line.quantity += quantity
        self.logger.debug(f"Cart: {line.quantity}x {item.name}")
        return line

    def remove_from_cart(self, item_id: int) -> None:
        self.cart = [line for line in self.cart if line.item.id != item_id]

    def update_quantity(self, item_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_from_cart(item_id)
            return
        line = self._find_line(item_id)
        if line is not None:
            line.quantity = quantity

    def clear_cart(self) -> None:
        self.cart = []

    def toggle_cart(self) -> None:
        self.is_cart_open = not self.is_cart_open

    def set_cart_open(self, is_open: bool) -> None:
        self.is_cart_open = is_open

    def get_total_price(self) -> float:
        return round(sum(line.item.price * line.quantity for line in self.cart), 2)

    def get_cart_items_count(self) -> int:
        return sum(line.quantity for line in self.cart)
