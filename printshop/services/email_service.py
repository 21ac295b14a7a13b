"""Email service using Resend for order notifications."""

import asyncio
import logging
from typing import Any

import resend

from printshop.core.config import Settings, get_settings
from printshop.models.order import Order, StoredUpload
from printshop.services.email_templates import render_admin_email, render_customer_email

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending order emails via Resend.

    Every send returns a result dict and never raises: delivery failures are
    advisory for the caller.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize email service with Resend API key.

        Args:
            settings: Optional settings, defaults to the cached application settings.
        """
        self.settings = settings or get_settings()
        resend.api_key = self.settings.resend_api_key
        self.from_email = self.settings.email_from_address

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html: str,
        attachments: list[dict[str, Any]] | None = None,
        reply_to: str | None = None,
    ) -> dict[str, Any]:
        """Send a single email.

        Args:
            to_email: Recipient email address.
            subject: Message subject.
            html: HTML body.
            attachments: Optional Resend attachments ({filename, content}).
            reply_to: Optional reply-to address.

        Returns:
            dict: {"success": True, "email_id": ...} or {"success": False, "error": ...}.
        """
        if not self.settings.is_email_configured:
            logger.warning("Email is not configured, skipping '%s' to %s", subject, to_email)
            return {"success": False, "skipped": True, "error": "Email is not configured"}

        params: dict[str, Any] = {
            "from": self.from_email,
            "to": [to_email],
            "subject": subject,
            "html": html,
        }
        if attachments:
            params["attachments"] = attachments
        if reply_to:
            params["reply_to"] = reply_to

        try:
            # The Resend SDK is blocking; run it off the event loop so sends overlap
            response = await asyncio.to_thread(resend.Emails.send, params)

            logger.info("Email '%s' sent to %s, id: %s", subject, to_email, response.get("id"))
            return {"success": True, "email_id": response.get("id")}

        except Exception as e:
            logger.error("Failed to send email '%s' to %s: %s", subject, to_email, str(e))
            return {"success": False, "error": str(e)}

    def _attachment(self, upload: StoredUpload) -> dict[str, Any] | None:
        try:
            with open(upload["path"], "rb") as f:
                content = f.read()
        except OSError as e:
            logger.warning("Cannot attach %s: %s", upload["path"], str(e))
            return None
        return {"filename": upload["original_name"], "content": list(content)}

    async def send_admin_notification(self, order: Order) -> dict[str, Any]:
        """Send the new order alert to the shop operator.

        The design file (and the mockup, if any) is attached when readable.

        Args:
            order: The created order.

        Returns:
            dict: Send result.
        """
        attachments = []
        for upload in (order["design"], order.get("mockup")):
            if upload is None:
                continue
            attachment = self._attachment(upload)
            if attachment:
                attachments.append(attachment)

        return await self.send_email(
            to_email=self.settings.admin_email,
            subject=f"Новый заказ {order['order_number']}",
            html=render_admin_email(order, self.settings.admin_panel_url),
            attachments=attachments,
        )

    async def send_customer_confirmation(self, order: Order, estimated_delivery: str) -> dict[str, Any]:
        """Send the order confirmation to the customer.

        Args:
            order: The created order.
            estimated_delivery: Formatted estimated delivery date.

        Returns:
            dict: Send result.
        """
        return await self.send_email(
            to_email=order["customer"]["email"],
            subject=f"Подтверждение заказа {order['order_number']}",
            html=render_customer_email(order, estimated_delivery, self.settings.support_email),
            reply_to=self.settings.support_email,
        )
