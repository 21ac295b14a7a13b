"""Unit tests for OrderService."""

import threading
from datetime import date, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from printshop.core.config import Settings
from printshop.services.delivery import format_long_date
from printshop.services.exceptions import (
    DesignFileError,
    OrderNotFoundError,
    OrderPersistenceError,
    OrderValidationError,
)
from printshop.services.file_store import LocalFileStore
from printshop.services.order_repository import OrderRepository
from printshop.services.order_service import OrderService
from printshop.services.order_validation import OrderSubmission, UploadedFile


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        upload_dir=str(tmp_path / "uploads"),
        orders_file=str(tmp_path / "orders.json"),
        resend_api_key="",
    )


@pytest.fixture
def upload_dir(settings: Settings) -> Path:
    return Path(settings.upload_dir)


@pytest.fixture
def mock_email_service() -> MagicMock:
    """Notifier whose sends succeed."""
    service = MagicMock()
    service.send_admin_notification = AsyncMock(return_value={"success": True, "email_id": "a"})
    service.send_customer_confirmation = AsyncMock(return_value={"success": True, "email_id": "c"})
    return service


@pytest.fixture
def order_service(settings: Settings, mock_email_service: MagicMock) -> OrderService:
    return OrderService(
        repository=OrderRepository(settings.orders_file, start_id=settings.order_id_start),
        file_store=LocalFileStore(settings.upload_dir),
        email_service=mock_email_service,
        settings=settings,
    )


@pytest.fixture
def submission() -> OrderSubmission:
    return OrderSubmission(
        product_type="tshirt",
        color="white",
        size="m",
        full_name="Иван Иванов",
        email="A@B.com",
        phone="8 (999) 123-45-67",
        city="Москва",
        address="ул. Ленина, 10",
    )


@pytest.fixture
def design() -> UploadedFile:
    return UploadedFile(filename="design.png", content_type="image/png", content=b"\x89PNG" + b"\x00" * 1024)


def stored_files(directory: Path) -> list[Path]:
    return sorted(directory.iterdir()) if directory.exists() else []


class TestSubmit:
    """Tests for submit method."""

    @pytest.mark.asyncio
    async def test_submit_creates_order(
        self, order_service: OrderService, submission: OrderSubmission, design: UploadedFile
    ) -> None:
        """Test that a valid submission is priced, normalized and stored."""
        summary = await order_service.submit(submission, design)

        assert summary.order_id == 1000
        assert summary.order_number.startswith("ORD-")
        assert summary.order_number.endswith("-1000")
        assert summary.total_price == 2099
        assert summary.status == "pending_review"
        assert summary.estimated_delivery_date == date.today() + timedelta(days=4)
        assert summary.estimated_delivery == format_long_date(summary.estimated_delivery_date)

        order = order_service.get_order(1000)
        assert order["product"] == {
            "type": "tshirt",
            "name": "Футболка",
            "color": "white",
            "color_name": "Белый",
            "size": "M",
            "price": 1299,
        }
        assert order["customer"]["email"] == "a@b.com"
        assert order["customer"]["phone"] == "+79991234567"
        assert order["pricing"] == {
            "product_price": 1299,
            "printing_cost": 500,
            "shipping_cost": 300,
            "total_price": 2099,
        }
        assert [entry["status"] for entry in order["status_history"]] == ["pending_review"]
        assert order["created_at"] == order["updated_at"]

    @pytest.mark.asyncio
    async def test_submit_stores_design_file(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
    ) -> None:
        await order_service.submit(submission, design)

        order = order_service.get_order(1000)
        assert Path(order["design"]["path"]).read_bytes() == design.content
        assert order["design"]["original_name"] == "design.png"
        assert order["design"]["size"] == design.size
        assert order["design"]["mimetype"] == "image/png"
        assert "mockup" not in order

    @pytest.mark.asyncio
    async def test_submit_with_mockup(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
    ) -> None:
        """Test that an optional mockup is stored alongside the design."""
        mockup = UploadedFile(filename="preview.jpg", content_type="image/jpeg", content=b"jpeg")

        await order_service.submit(submission, design, mockup)

        order = order_service.get_order(1000)
        assert order["mockup"]["filename"].startswith("mockup-")
        assert len(stored_files(upload_dir)) == 2

    @pytest.mark.asyncio
    async def test_ids_increase_per_order(
        self, order_service: OrderService, submission: OrderSubmission, design: UploadedFile
    ) -> None:
        first = await order_service.submit(submission, design)
        second = await order_service.submit(submission, design)

        assert (first.order_id, second.order_id) == (1000, 1001)
        assert first.order_number != second.order_number

    @pytest.mark.asyncio
    async def test_uploads_are_written_off_the_event_loop(
        self, order_service: OrderService, submission: OrderSubmission, design: UploadedFile
    ) -> None:
        """Test that storing the design does not block the event loop thread."""
        store_threads: list[int] = []
        real_store = order_service.file_store.store

        def record_thread(content: bytes, original_name: str, prefix: str = "design"):
            store_threads.append(threading.get_ident())
            return real_store(content, original_name, prefix=prefix)

        with patch.object(order_service.file_store, "store", side_effect=record_thread):
            await order_service.submit(submission, design)

        assert len(store_threads) == 1
        assert store_threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_invalid_field_stores_nothing(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that a validation failure leaves no order, file or email behind."""
        submission.product_type = "socks"

        with pytest.raises(OrderValidationError) as exc_info:
            await order_service.submit(submission, design)

        assert exc_info.value.field == "productType"
        assert order_service.list_orders() == []
        assert stored_files(upload_dir) == []
        mock_email_service.send_admin_notification.assert_not_called()

    @pytest.mark.asyncio
    async def test_oversize_design_stores_nothing(
        self, order_service: OrderService, submission: OrderSubmission, upload_dir: Path
    ) -> None:
        big = UploadedFile(filename="big.png", content_type="image/png", content=b"\x00" * (12 * 1024 * 1024))

        with pytest.raises(DesignFileError) as exc_info:
            await order_service.submit(submission, big)

        assert exc_info.value.oversize is True
        assert order_service.list_orders() == []
        assert stored_files(upload_dir) == []

    @pytest.mark.asyncio
    async def test_invalid_mockup_stores_nothing(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
    ) -> None:
        """Test that the mockup is checked before anything is written."""
        mockup = UploadedFile(filename="preview.gif", content_type="image/gif", content=b"gif")

        with pytest.raises(DesignFileError) as exc_info:
            await order_service.submit(submission, design, mockup)

        assert exc_info.value.field == "mockupImage"
        assert stored_files(upload_dir) == []

    @pytest.mark.asyncio
    async def test_persistence_failure_removes_stored_files(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that files are cleaned up when the order cannot be saved."""
        mockup = UploadedFile(filename="preview.png", content_type="image/png", content=b"png")

        with patch.object(order_service.repository, "_write_snapshot", side_effect=OSError("disk full")):
            with pytest.raises(OrderPersistenceError):
                await order_service.submit(submission, design, mockup)

        assert stored_files(upload_dir) == []
        assert order_service.list_orders() == []
        mock_email_service.send_customer_confirmation.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_removes_earlier_files(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        upload_dir: Path,
    ) -> None:
        """Test that a failed mockup write also removes the stored design."""
        mockup = UploadedFile(filename="preview.png", content_type="image/png", content=b"png")
        real_store = order_service.file_store.store

        def store_design_only(content: bytes, original_name: str, prefix: str = "design"):
            if prefix == "mockup":
                raise OSError("no space left")
            return real_store(content, original_name, prefix=prefix)

        with patch.object(order_service.file_store, "store", side_effect=store_design_only):
            with pytest.raises(OSError):
                await order_service.submit(submission, design, mockup)

        assert stored_files(upload_dir) == []
        assert order_service.list_orders() == []


class TestNotifications:
    """Tests for post-persist email fan-out."""

    @pytest.mark.asyncio
    async def test_both_emails_sent_and_recorded(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        mock_email_service: MagicMock,
    ) -> None:
        summary = await order_service.submit(submission, design)

        order = order_service.get_order(summary.order_id)
        mock_email_service.send_admin_notification.assert_awaited_once_with(order)
        mock_email_service.send_customer_confirmation.assert_awaited_once_with(
            order, summary.estimated_delivery
        )
        assert order["email_notifications"]["admin_email_sent"] is True
        assert order["email_notifications"]["customer_email_sent"] is True

    @pytest.mark.asyncio
    async def test_failed_send_does_not_fail_order(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        mock_email_service: MagicMock,
    ) -> None:
        """Test that a failed send is recorded and the order still succeeds."""
        mock_email_service.send_admin_notification.return_value = {"success": False, "error": "boom"}

        summary = await order_service.submit(submission, design)

        notifications = order_service.get_order(summary.order_id)["email_notifications"]
        assert notifications["admin_email_sent"] is False
        assert notifications["customer_email_sent"] is True

    @pytest.mark.asyncio
    async def test_raising_notifier_does_not_fail_order(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
        mock_email_service: MagicMock,
    ) -> None:
        mock_email_service.send_admin_notification.side_effect = RuntimeError("smtp down")
        mock_email_service.send_customer_confirmation.side_effect = RuntimeError("smtp down")

        summary = await order_service.submit(submission, design)

        notifications = order_service.get_order(summary.order_id)["email_notifications"]
        assert notifications["admin_email_sent"] is False
        assert notifications["customer_email_sent"] is False

    @pytest.mark.asyncio
    async def test_unrecorded_email_status_does_not_fail_order(
        self,
        order_service: OrderService,
        submission: OrderSubmission,
        design: UploadedFile,
    ) -> None:
        """Test that failing to persist the email status is only logged."""
        with patch.object(
            order_service.repository,
            "update",
            AsyncMock(side_effect=OrderPersistenceError("Failed to update order")),
        ):
            summary = await order_service.submit(submission, design)

        assert order_service.get_order(summary.order_id)["status"] == "pending_review"


class TestQueries:
    """Tests for get_order, list_orders and set_status."""

    def test_get_missing_order(self, order_service: OrderService) -> None:
        with pytest.raises(OrderNotFoundError):
            order_service.get_order(999)

    @pytest.mark.asyncio
    async def test_list_orders_in_creation_order(
        self, order_service: OrderService, submission: OrderSubmission, design: UploadedFile
    ) -> None:
        await order_service.submit(submission, design)
        await order_service.submit(submission, design)

        assert [order["id"] for order in order_service.list_orders()] == [1000, 1001]

    @pytest.mark.asyncio
    async def test_set_status(
        self, order_service: OrderService, submission: OrderSubmission, design: UploadedFile
    ) -> None:
        """Test that the status is replaced as given without a history entry."""
        await order_service.submit(submission, design)

        order = await order_service.set_status(1000, "in_production")

        assert order["status"] == "in_production"
        assert len(order["status_history"]) == 1
        assert order["updated_at"] >= order["created_at"]

    @pytest.mark.asyncio
    async def test_set_status_missing_order(self, order_service: OrderService) -> None:
        with pytest.raises(OrderNotFoundError):
            await order_service.set_status(999, "approved")
