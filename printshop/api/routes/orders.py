"""Order intake API routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from printshop.api.deps import OrderServiceDep
from printshop.api.middleware.error_handler import (
    FileConstraintError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from printshop.schemas.order import (
    OrderCreatedData,
    OrderCreatedResponse,
    OrderResponse,
    OrderStatusUpdate,
    OrderStatusUpdateResponse,
)
from printshop.services.exceptions import (
    DesignFileError,
    OrderNotFoundError,
    OrderPersistenceError,
    OrderValidationError,
)
from printshop.services.order_validation import OrderSubmission, UploadedFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])

OptionalField = Annotated[str | None, Form()]


async def _read_upload(upload: UploadFile | None, max_size: int) -> UploadedFile | None:
    """Read a multipart file part into memory; empty parts count as absent.

    At most one byte past `max_size` is read, enough for validation to
    reject an oversize file without buffering all of it.
    """
    if upload is None or not upload.filename:
        return None
    content = await upload.read(max_size + 1)
    return UploadedFile(
        filename=upload.filename,
        content_type=upload.content_type or "",
        content=content,
    )


@router.post(
    "",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an order",
    responses={
        201: {"description": "Order created"},
        400: {"description": "Invalid field or design file"},
        500: {"description": "Order could not be saved"},
    },
)
async def create_order(
    service: OrderServiceDep,
    product_type: Annotated[str | None, Form(alias="productType")] = None,
    color: OptionalField = None,
    size: OptionalField = None,
    full_name: Annotated[str | None, Form(alias="fullName")] = None,
    email: OptionalField = None,
    phone: OptionalField = None,
    city: OptionalField = None,
    address: OptionalField = None,
    notes: OptionalField = None,
    design_file: Annotated[UploadFile | None, File(alias="designFile")] = None,
    mockup_image: Annotated[UploadFile | None, File(alias="mockupImage")] = None,
) -> OrderCreatedResponse:
    """Create an order from the customization form.

    This endpoint:
    1. Validates the form fields, stopping at the first invalid one
    2. Validates the design file (JPG, PNG, PDF or SVG, max 10 MB)
    3. Stores the files and records the order with server-side pricing
    4. Emails the shop operator and the customer

    Email failures never fail the request.
    """
    submission = OrderSubmission(
        product_type=product_type,
        color=color,
        size=size,
        full_name=full_name,
        email=email,
        phone=phone,
        city=city,
        address=address,
        notes=notes,
    )

    max_size = service.settings.max_design_file_size
    try:
        summary = await service.submit(
            submission,
            design_file=await _read_upload(design_file, max_size),
            mockup_image=await _read_upload(mockup_image, max_size),
        )

    except OrderValidationError as e:
        logger.warning("Order rejected, invalid %s: %s", e.field, e.message)
        raise ValidationError(field=e.field, reason=e.message) from e

    except DesignFileError as e:
        logger.warning("Order rejected, bad %s: %s", e.field, e.message)
        raise FileConstraintError(message=e.message, field=e.field) from e

    except OrderPersistenceError as e:
        logger.error("Order could not be saved: %s", e)
        raise PersistenceError() from e

    return OrderCreatedResponse(
        message="Заказ успешно создан",
        data=OrderCreatedData(
            order_id=summary.order_id,
            order_number=summary.order_number,
            total_price=summary.total_price,
            estimated_delivery=summary.estimated_delivery,
            estimated_delivery_date=summary.estimated_delivery_date,
            status=summary.status,
        ),
    )


@router.get(
    "",
    response_model=list[OrderResponse],
    summary="List orders",
    description="Returns every order in creation order.",
)
async def list_orders(service: OrderServiceDep) -> list[OrderResponse]:
    return [OrderResponse.model_validate(order) for order in service.list_orders()]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order by ID",
    responses={404: {"description": "Order not found"}},
)
async def get_order(order_id: int, service: OrderServiceDep) -> OrderResponse:
    """Get a single order by ID.

    Raises:
        NotFoundError: 404 if order not found.
    """
    try:
        order = service.get_order(order_id)
    except OrderNotFoundError as e:
        raise NotFoundError() from e

    return OrderResponse.model_validate(order)


@router.patch(
    "/{order_id}/status",
    response_model=OrderStatusUpdateResponse,
    summary="Update order status",
    responses={404: {"description": "Order not found"}},
)
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    service: OrderServiceDep,
) -> OrderStatusUpdateResponse:
    """Replace the status of an order.

    The status value is stored as sent; no history entry is appended.
    """
    try:
        await service.set_status(order_id, data.status)
    except OrderNotFoundError as e:
        raise NotFoundError() from e
    except OrderPersistenceError as e:
        raise PersistenceError() from e

    return OrderStatusUpdateResponse(message="Статус заказа обновлен")
