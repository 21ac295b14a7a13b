"""Order Pydantic schemas for API request/response models."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys, populated from snake_case records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OrderProductSchema(CamelModel):
    """Product selection on an order."""

    type: str = Field(description="Catalog product type")
    name: str = Field(description="Product display name")
    color: str = Field(description="Color code")
    color_name: str = Field(description="Color display name")
    size: str = Field(description="Size, uppercase")
    price: int = Field(description="Catalog price")


class OrderCustomerSchema(CamelModel):
    """Customer contact and delivery details."""

    full_name: str
    email: str
    phone: str = Field(description="Phone normalized to +7XXXXXXXXXX")
    city: str
    address: str
    notes: str = ""


class StoredUploadSchema(CamelModel):
    """Metadata about an uploaded file."""

    filename: str = Field(description="Name the file is stored under")
    original_name: str = Field(description="Name the client uploaded")
    size: int = Field(description="Size in bytes")
    path: str = Field(description="Storage path")
    mimetype: str
    uploaded_at: datetime | None = None


class OrderPricingSchema(CamelModel):
    """Server-side pricing breakdown."""

    product_price: int
    printing_cost: int
    shipping_cost: int
    total_price: int


class StatusHistoryEntrySchema(CamelModel):
    """Single status audit entry."""

    status: str
    timestamp: datetime
    note: str


class EmailNotificationsSchema(CamelModel):
    """Outcome of the order email notifications."""

    admin_email_sent: bool
    customer_email_sent: bool
    email_sent_at: datetime


class OrderResponse(CamelModel):
    """Schema for full order API responses."""

    id: int = Field(description="Order id")
    order_number: str = Field(description="Human-facing order number")
    product: OrderProductSchema
    customer: OrderCustomerSchema
    design: StoredUploadSchema
    mockup: StoredUploadSchema | None = None
    pricing: OrderPricingSchema
    status: str = Field(description="Current order status")
    status_history: list[StatusHistoryEntrySchema] = Field(description="Status audit trail")
    email_notifications: EmailNotificationsSchema | None = None
    created_at: datetime
    updated_at: datetime


class OrderCreatedData(CamelModel):
    """Summary of a freshly created order."""

    order_id: int
    order_number: str
    total_price: int
    estimated_delivery: str = Field(description="Estimated delivery date, long Russian format")
    estimated_delivery_date: date
    status: str


class OrderCreatedResponse(BaseModel):
    """Schema for POST /api/orders responses."""

    success: bool = True
    message: str
    data: OrderCreatedData


class OrderStatusUpdate(BaseModel):
    """Schema for PATCH /api/orders/{order_id}/status requests."""

    status: str = Field(description="New status value")


class OrderStatusUpdateResponse(BaseModel):
    """Schema for status update responses."""

    success: bool = True
    message: str
