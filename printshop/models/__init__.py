"""Record type definitions."""

from printshop.models.order import (
    ORDER_STATUS_PENDING_REVIEW,
    EmailNotifications,
    Order,
    OrderCustomer,
    OrderPricing,
    OrderProduct,
    OrderUpdate,
    StatusHistoryEntry,
    StoredUpload,
)
from printshop.models.product import CatalogProduct, ProductColor

__all__ = [
    "ORDER_STATUS_PENDING_REVIEW",
    "CatalogProduct",
    "EmailNotifications",
    "Order",
    "OrderCustomer",
    "OrderPricing",
    "OrderProduct",
    "OrderUpdate",
    "ProductColor",
    "StatusHistoryEntry",
    "StoredUpload",
]
