"""Validation and normalization of order submissions."""

import re
from dataclasses import dataclass
from pathlib import PurePath

from printshop.services.catalog_service import is_known_color, is_known_product, is_known_size
from printshop.services.exceptions import DesignFileError, OrderValidationError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Country code 7 or trunk prefix 8, then digits and separators
PHONE_PATTERN = re.compile(r"^\+?[78][\d\-()]{10,}$", re.ASCII)
NON_DIGITS = re.compile(r"\D", re.ASCII)
MIN_PHONE_DIGITS = 10

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/pdf",
    "image/svg+xml",
}

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".pdf", ".svg"}

MISSING_FILE_MESSAGE = "Загрузите файл дизайна"

MIN_NAME_LENGTH = 2
MIN_CITY_LENGTH = 2
MIN_ADDRESS_LENGTH = 10


@dataclass
class OrderSubmission:
    """Raw order form fields as received from the client."""

    product_type: str | None = None
    color: str | None = None
    size: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    city: str | None = None
    address: str | None = None
    notes: str | None = None


@dataclass
class UploadedFile:
    """An uploaded file read into memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lower()


def _stripped_length(value: str | None) -> int:
    return len(value.strip()) if value else 0


def _is_valid_phone(phone: str | None) -> bool:
    """Check the phone shape, then that at least ten digits remain without separators."""
    if not phone or not PHONE_PATTERN.match(re.sub(r"\s", "", phone)):
        return False
    return len(NON_DIGITS.sub("", phone)) >= MIN_PHONE_DIGITS


def validate_order_fields(submission: OrderSubmission) -> None:
    """Validate order fields in a fixed order.

    The first failing field short-circuits the check.

    Args:
        submission: Raw form fields.

    Raises:
        OrderValidationError: With the offending field and reason.
    """
    if not is_known_product(submission.product_type):
        raise OrderValidationError("productType", "Некорректный тип товара")

    if not is_known_color(submission.color):
        raise OrderValidationError("color", "Некорректный цвет товара")

    if not is_known_size(submission.size):
        raise OrderValidationError("size", "Некорректный размер товара")

    if _stripped_length(submission.full_name) < MIN_NAME_LENGTH:
        raise OrderValidationError("fullName", "Имя должно содержать минимум 2 символа")

    if not submission.email or not EMAIL_PATTERN.match(submission.email):
        raise OrderValidationError("email", "Некорректный email адрес")

    if not _is_valid_phone(submission.phone):
        raise OrderValidationError("phone", "Некорректный номер телефона")

    if _stripped_length(submission.city) < MIN_CITY_LENGTH:
        raise OrderValidationError("city", "Название города должно содержать минимум 2 символа")

    if _stripped_length(submission.address) < MIN_ADDRESS_LENGTH:
        raise OrderValidationError("address", "Адрес должен содержать минимум 10 символов")


def validate_upload(file: UploadedFile | None, field: str, max_size: int) -> UploadedFile:
    """Validate an uploaded file.

    Checks run in order: presence, size, MIME type, extension. MIME type
    and extension must both pass.

    Args:
        file: The uploaded file, or None if the part was absent.
        field: Form field name reported on failure.
        max_size: Maximum allowed size in bytes.

    Returns:
        UploadedFile: The same file, for chaining.

    Raises:
        DesignFileError: If any check fails.
    """
    if file is None or not file.filename:
        raise DesignFileError(field, MISSING_FILE_MESSAGE)

    if file.size > max_size:
        raise DesignFileError(
            field,
            f"Размер файла не должен превышать {max_size // (1024 * 1024)} МБ",
            oversize=True,
        )

    if file.content_type not in ALLOWED_MIME_TYPES:
        raise DesignFileError(field, "Поддерживаемые форматы: JPG, PNG, PDF, SVG")

    if file.extension not in ALLOWED_EXTENSIONS:
        raise DesignFileError(field, "Недопустимое расширение файла")

    return file


def sanitize_input(value: str | None) -> str:
    """Trim a free-text value and strip angle brackets."""
    if not value:
        return ""
    return re.sub(r"[<>]", "", str(value).strip())


def normalize_email(email: str) -> str:
    return email.strip().lower()


def format_phone_number(phone: str | None) -> str:
    """Normalize a Russian phone number to +7XXXXXXXXXX.

    Numbers starting with 8 or 7, and bare ten-digit numbers, are
    rewritten. Anything else is returned unchanged.
    """
    if not phone:
        return ""

    digits = NON_DIGITS.sub("", phone)

    if digits.startswith("8"):
        return "+7" + digits[1:]
    if digits.startswith("7"):
        return "+" + digits
    if len(digits) == 10:
        return "+7" + digits

    return phone
