"""Shop tools exposed to the chat assistant."""

from typing import Any, Dict, List

from .models import InputSchema, Tool, ToolResult
from .store import ShopStore


def create_shop_tools(store: ShopStore) -> List[Tool]:
    """Create the shop tools bound to ``store``."""

    def get_products(params: Dict[str, Any]) -> ToolResult:
        products = store.items
        if params.get("category"):
            products = [item for item in products if item.category == params["category"]]
        if params.get("limit"):
            products = products[:int(params["limit"])]

        if not products:
            return ToolResult.text("No products match your search.")

        lines = "\n".join(
            f"• {item.name} - ${item.price:.2f} ({item.category}) [id: {item.id}]"
            for item in products
        )
        return ToolResult.text(f"Here are the available products:\n\n{lines}")

    async def add_to_cart(params: Dict[str, Any]) -> ToolResult:
        product_id = params["productId"]
        quantity = int(params.get("quantity") or 1)

        item = store.get_item(product_id)
        if item is None:
            return ToolResult.text(f"Product {product_id} not found", is_error=True)
        if quantity <= 0:
            return ToolResult.text("Quantity must be at least 1", is_error=True)

        store.add_to_cart(item, quantity)
        return ToolResult.text(
            f"Successfully added {quantity} unit(s) of {item.name} to your cart! 🛒"
        )

    async def get_cart_status(params: Dict[str, Any]) -> ToolResult:
        if not store.cart:
            return ToolResult.text("Your cart is empty.")

        lines = "\n".join(
            f"• {line.quantity}x {line.item.name} (${line.line_total:.2f})"
            for line in store.cart
        )
        return ToolResult.text(
            f"Your cart contains:\n{lines}\n\nTotal: ${store.get_total_price():.2f}"
        )

    return [
        Tool(
            name="get_products",
            description="Get a list of available products in the shop",
            inputSchema=InputSchema(
                properties={
                    "category": {
                        "type": "string",
                        "description": "Filter by product category (optional)",
                        "enum": sorted({item.category for item in store.items}),
                    },
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of products to return (optional)",
                    },
                },
                required=[],
            ),
            handler=get_products,
        ),
        Tool(
            name="add_to_cart",
            description="Add a product to the shopping cart",
            inputSchema=InputSchema(
                properties={
                    "productId": {
                        "type": "number",
                        "description": "The ID of the product to add to cart",
                    },
                    "quantity": {
                        "type": "number",
                        "description": "The quantity to add (optional, defaults to 1)",
                        "default": 1,
                    },
                },
                required=["productId"],
            ),
            handler=add_to_cart,
        ),
        Tool(
            name="get_cart_status",
            description="Get current cart status and items",
            inputSchema=InputSchema(properties={}, required=[]),
            handler=get_cart_status,
        ),
    ]
