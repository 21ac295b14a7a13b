"""Order record type definitions for the orders snapshot."""

from typing import TypedDict

# Status assigned to every new order
ORDER_STATUS_PENDING_REVIEW = "pending_review"


class OrderProduct(TypedDict):
    """Product selection denormalized onto the order."""

    type: str
    name: str
    color: str
    color_name: str
    size: str
    price: int


class OrderCustomer(TypedDict):
    """Sanitized contact and delivery details."""

    full_name: str
    email: str
    phone: str
    city: str
    address: str
    notes: str


class StoredUpload(TypedDict):
    """Metadata about an uploaded file kept by the file store."""

    filename: str
    original_name: str
    size: int
    path: str
    mimetype: str
    uploaded_at: str


class OrderPricing(TypedDict):
    """Server-side pricing breakdown.

    total_price is always product_price + printing_cost + shipping_cost.
    """

    product_price: int
    printing_cost: int
    shipping_cost: int
    total_price: int


class StatusHistoryEntry(TypedDict):
    """Single entry of the append-only status audit trail."""

    status: str
    timestamp: str
    note: str


class EmailNotifications(TypedDict):
    """Outcome of the notification fan-out for an order."""

    admin_email_sent: bool
    customer_email_sent: bool
    email_sent_at: str


class _OrderOptional(TypedDict, total=False):
    mockup: StoredUpload
    email_notifications: EmailNotifications


class Order(_OrderOptional):
    """Order record as stored in memory and in the JSON snapshot.

    Timestamps are ISO 8601 strings so the record serializes as-is.
    """

    id: int
    order_number: str
    product: OrderProduct
    customer: OrderCustomer
    design: StoredUpload
    pricing: OrderPricing
    status: str
    status_history: list[StatusHistoryEntry]
    created_at: str
    updated_at: str


class OrderUpdate(TypedDict, total=False):
    """Fields that can be patched on an existing order."""

    status: str
    updated_at: str
    email_notifications: EmailNotifications
