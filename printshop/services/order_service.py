"""Order intake business logic service."""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from printshop.core.config import Settings, get_settings
from printshop.models.order import (
    ORDER_STATUS_PENDING_REVIEW,
    EmailNotifications,
    Order,
    StoredUpload,
)
from printshop.services.catalog_service import (
    PRINTING_COST,
    SHIPPING_COST,
    calculate_total_price,
    catalog_price,
    color_name,
    product_name,
)
from printshop.services.delivery import estimate_delivery
from printshop.services.email_service import EmailService
from printshop.services.exceptions import OrderNotFoundError, OrderPersistenceError
from printshop.services.file_store import LocalFileStore
from printshop.services.order_repository import OrderRepository
from printshop.services.order_validation import (
    OrderSubmission,
    UploadedFile,
    format_phone_number,
    normalize_email,
    sanitize_input,
    validate_order_fields,
    validate_upload,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderSummary:
    """What the client learns about a freshly created order."""

    order_id: int
    order_number: str
    total_price: int
    estimated_delivery: str
    estimated_delivery_date: date
    status: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class OrderService:
    """Validates submissions, stores designs, records orders and notifies."""

    def __init__(
        self,
        repository: OrderRepository,
        file_store: LocalFileStore,
        email_service: EmailService,
        settings: Settings | None = None,
    ) -> None:
        """Initialize order service with its collaborators.

        Args:
            repository: Order persistence sink.
            file_store: Storage for uploaded files.
            email_service: Notifier for operator and customer emails.
            settings: Optional settings, defaults to the cached application settings.
        """
        self.repository = repository
        self.file_store = file_store
        self.email_service = email_service
        self.settings = settings or get_settings()

    async def submit(
        self,
        submission: OrderSubmission,
        design_file: UploadedFile | None,
        mockup_image: UploadedFile | None = None,
    ) -> OrderSummary:
        """Create an order from a form submission.

        Fields are validated first, then the uploads. Nothing is written
        until every check passed. Files stored before a later failure are
        deleted again.

        Args:
            submission: Raw order form fields.
            design_file: The customer's artwork.
            mockup_image: Optional preview rendered by the configurator.

        Returns:
            OrderSummary: Id, number, total, delivery estimate and status.

        Raises:
            OrderValidationError: If a form field is invalid.
            DesignFileError: If an upload is missing or violates constraints.
            OrderPersistenceError: If the order could not be saved.
        """
        validate_order_fields(submission)

        max_size = self.settings.max_design_file_size
        validate_upload(design_file, "designFile", max_size)
        if mockup_image is not None:
            validate_upload(mockup_image, "mockupImage", max_size)

        stored_paths: list[str] = []
        try:
            design = await self._store_upload(design_file, "design")
            stored_paths.append(design["path"])

            mockup = None
            if mockup_image is not None:
                mockup = await self._store_upload(mockup_image, "mockup")
                stored_paths.append(mockup["path"])

            order = self._build_order(submission, design, mockup)
            await self.repository.append(order)

        except Exception:
            self._discard_files(stored_paths)
            raise

        estimate = estimate_delivery(order["customer"]["city"])

        await self._notify(order, estimate.formatted)

        logger.info(
            "New order created: %s (id=%s, customer=%s, product=%s, total=%s)",
            order["order_number"],
            order["id"],
            order["customer"]["email"],
            order["product"]["name"],
            order["pricing"]["total_price"],
        )

        return OrderSummary(
            order_id=order["id"],
            order_number=order["order_number"],
            total_price=order["pricing"]["total_price"],
            estimated_delivery=estimate.formatted,
            estimated_delivery_date=estimate.delivery_date,
            status=order["status"],
        )

    async def _store_upload(self, upload: UploadedFile, prefix: str) -> StoredUpload:
        stored = await asyncio.to_thread(
            self.file_store.store, upload.content, upload.filename, prefix=prefix
        )
        return {
            "filename": stored.stored_name,
            "original_name": upload.filename,
            "size": upload.size,
            "path": stored.path,
            "mimetype": upload.content_type,
            "uploaded_at": _now(),
        }

    def _discard_files(self, paths: list[str]) -> None:
        for path in paths:
            self.file_store.delete(path)

    def _build_order(
        self,
        submission: OrderSubmission,
        design: StoredUpload,
        mockup: StoredUpload | None,
    ) -> Order:
        order_id = self.repository.next_id()
        product_type = submission.product_type
        created_at = _now()

        order: Order = {
            "id": order_id,
            "order_number": f"ORD-{int(time.time() * 1000)}-{order_id}",
            "product": {
                "type": product_type,
                "name": product_name(product_type),
                "color": submission.color,
                "color_name": color_name(submission.color),
                "size": submission.size.upper(),
                "price": catalog_price(product_type),
            },
            "customer": {
                "full_name": sanitize_input(submission.full_name),
                "email": normalize_email(submission.email),
                "phone": format_phone_number(submission.phone),
                "city": sanitize_input(submission.city),
                "address": sanitize_input(submission.address),
                "notes": sanitize_input(submission.notes),
            },
            "design": design,
            "pricing": {
                "product_price": catalog_price(product_type),
                "printing_cost": PRINTING_COST,
                "shipping_cost": SHIPPING_COST,
                "total_price": calculate_total_price(product_type),
            },
            "status": ORDER_STATUS_PENDING_REVIEW,
            "status_history": [
                {
                    "status": ORDER_STATUS_PENDING_REVIEW,
                    "timestamp": created_at,
                    "note": "Заказ создан и ожидает проверки",
                }
            ],
            "created_at": created_at,
            "updated_at": created_at,
        }
        if mockup is not None:
            order["mockup"] = mockup

        return order

    async def _notify(self, order: Order, estimated_delivery: str) -> EmailNotifications:
        """Send operator and customer emails concurrently.

        A failed send, or a notifier that raises, is recorded as not sent.
        Nothing here fails the order.
        """
        results = await asyncio.gather(
            self.email_service.send_admin_notification(order),
            self.email_service.send_customer_confirmation(order, estimated_delivery),
            return_exceptions=True,
        )
        admin_sent, customer_sent = (self._was_sent(result) for result in results)

        notifications: EmailNotifications = {
            "admin_email_sent": admin_sent,
            "customer_email_sent": customer_sent,
            "email_sent_at": _now(),
        }

        sent_count = int(admin_sent) + int(customer_sent)
        if sent_count == 0:
            logger.warning("No email notifications sent for order %s", order["order_number"])
        else:
            logger.info("Sent %d/2 email notifications for order %s", sent_count, order["order_number"])

        try:
            await self.repository.update(order["id"], {"email_notifications": notifications})
        except OrderPersistenceError as e:
            logger.error("Could not record email status for order %s: %s", order["order_number"], str(e))

        return notifications

    @staticmethod
    def _was_sent(result: Any) -> bool:
        if isinstance(result, BaseException):
            logger.error("Notifier raised: %s", str(result))
            return False
        return bool(result.get("success"))

    def get_order(self, order_id: int) -> Order:
        """Get an order by id.

        Raises:
            OrderNotFoundError: If no order has this id.
        """
        order = self.repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def list_orders(self) -> list[Order]:
        return self.repository.list()

    async def set_status(self, order_id: int, status: str) -> Order:
        """Replace an order's status.

        The value is stored as given and no history entry is added.

        Args:
            order_id: Id of the order.
            status: New status value.

        Returns:
            Order: The updated order.

        Raises:
            OrderNotFoundError: If no order has this id.
            OrderPersistenceError: If the change could not be saved.
        """
        order = await self.repository.update(order_id, {"status": status, "updated_at": _now()})
        if order is None:
            raise OrderNotFoundError(order_id)

        logger.info("Order %s status set to %s", order["order_number"], status)
        return order
