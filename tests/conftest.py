"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Uploads are checked by declared type and extension, so a PNG header is enough
PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture
def test_settings(tmp_path: Path) -> Any:
    """Provide settings pointing all storage at a temporary directory.

    Returns:
        Settings: Isolated configuration for one test.
    """
    from printshop.core.config import Settings

    return Settings(
        app_env="test",
        upload_dir=str(tmp_path / "uploads" / "designs"),
        orders_file=str(tmp_path / "data" / "orders.json"),
        resend_api_key="",
    )


@pytest.fixture
def app(test_settings: Any) -> FastAPI:
    """Provide a fresh application with its own order store."""
    from printshop.main import create_app

    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        app: Fresh application fixture.

    Yields:
        TestClient: FastAPI test client with lifespan started.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes() -> bytes:
    """A 1 MB payload that looks like a PNG."""
    return PNG_HEADER + b"\x00" * (1024 * 1024 - len(PNG_HEADER))


@pytest.fixture
def order_form() -> dict[str, str]:
    """Valid order form fields."""
    return {
        "productType": "tshirt",
        "color": "white",
        "size": "m",
        "fullName": "Иван Иванов",
        "email": "a@b.com",
        "phone": "89991234567",
        "city": "Москва",
        "address": "ул. Ленина, 10",
    }
