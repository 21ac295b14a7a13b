"""Fixed product catalog and server-side pricing."""

from typing import Any

from printshop.models.product import CatalogProduct, ProductColor

# Base prices are never accepted from the client
PRODUCTS: dict[str, CatalogProduct] = {
    "tshirt": {"type": "tshirt", "name": "Футболка", "price": 1299, "customizable": True},
    "underwear": {"type": "underwear", "name": "Нижнее белье", "price": 699, "customizable": True},
    "hoodie": {"type": "hoodie", "name": "Худи", "price": 2599, "customizable": True},
    "tank": {"type": "tank", "name": "Майка", "price": 999, "customizable": True},
}

COLORS: dict[str, ProductColor] = {
    "white": {"code": "white", "name": "Белый", "hex": "#FFFFFF"},
    "black": {"code": "black", "name": "Черный", "hex": "#000000"},
    "navy": {"code": "navy", "name": "Темно-синий", "hex": "#1F2A44"},
    "gray": {"code": "gray", "name": "Серый", "hex": "#808080"},
    "red": {"code": "red", "name": "Красный", "hex": "#D32F2F"},
    "green": {"code": "green", "name": "Зеленый", "hex": "#2E7D32"},
}

SIZES: tuple[str, ...] = ("XS", "S", "M", "L", "XL", "XXL")

# Fixed add-on costs per order
PRINTING_COST = 500
SHIPPING_COST = 300


def is_known_product(product_type: str | None) -> bool:
    return product_type in PRODUCTS


def is_known_color(color: str | None) -> bool:
    return color in COLORS


def is_known_size(size: str | None) -> bool:
    """Sizes are matched case-insensitively."""
    return bool(size) and size.upper() in SIZES


def catalog_price(product_type: str) -> int:
    """Get the base price for a product type.

    Raises:
        KeyError: If the product type is not in the catalog.
    """
    return PRODUCTS[product_type]["price"]


def product_name(product_type: str) -> str:
    return PRODUCTS[product_type]["name"]


def color_name(color: str) -> str:
    return COLORS[color]["name"]


def calculate_total_price(product_type: str) -> int:
    """Total charged for one customized item, delivery included."""
    return catalog_price(product_type) + PRINTING_COST + SHIPPING_COST


def get_product(product_type: str) -> dict[str, Any] | None:
    """Get a catalog entry with its variant options.

    Args:
        product_type: Catalog key, e.g. "tshirt".

    Returns:
        dict | None: Product data with colors and sizes, or None if unknown.
    """
    product = PRODUCTS.get(product_type)
    if product is None:
        return None

    return {
        **product,
        "colors": list(COLORS.values()),
        "sizes": list(SIZES),
        "printing_cost": PRINTING_COST,
        "shipping_cost": SHIPPING_COST,
    }


def list_products() -> list[dict[str, Any]]:
    """List every catalog entry in catalog order."""
    return [get_product(product_type) for product_type in PRODUCTS]
