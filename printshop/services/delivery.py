"""Estimated delivery date calculation."""

from dataclasses import dataclass
from datetime import date, timedelta

# Courier lead time in days by destination city (lowercase)
DELIVERY_DAYS: dict[str, int] = {
    "москва": 1,
    "санкт-петербург": 2,
    "екатеринбург": 3,
    "новосибирск": 4,
    "казань": 3,
    "нижний новгород": 2,
    "челябинск": 3,
    "самара": 3,
    "омск": 4,
    "ростов-на-дону": 3,
    "уфа": 3,
    "красноярск": 5,
    "воронеж": 2,
    "пермь": 3,
    "волгоград": 3,
}

DEFAULT_DELIVERY_DAYS = 5
PRODUCTION_DAYS = 3

_WEEKDAYS = ("понедельник", "вторник", "среда", "четверг", "пятница", "суббота", "воскресенье")

# Genitive month names, as used in "23 октября"
_MONTHS = (
    "января",
    "февраля",
    "марта",
    "апреля",
    "мая",
    "июня",
    "июля",
    "августа",
    "сентября",
    "октября",
    "ноября",
    "декабря",
)


@dataclass(frozen=True)
class DeliveryEstimate:
    """Estimated delivery date for an order."""

    delivery_date: date
    days: int

    @property
    def formatted(self) -> str:
        return format_long_date(self.delivery_date)


def format_long_date(value: date) -> str:
    """Format a date the way the storefront shows it, e.g. "пятница, 23 октября 2026 г."."""
    return f"{_WEEKDAYS[value.weekday()]}, {value.day} {_MONTHS[value.month - 1]} {value.year} г."


def delivery_days_for_city(city: str) -> int:
    """Get courier lead time for a city; unknown cities get the default."""
    return DELIVERY_DAYS.get(city.strip().lower(), DEFAULT_DELIVERY_DAYS)


def estimate_delivery(city: str, today: date | None = None) -> DeliveryEstimate:
    """Estimate when an order shipped to a city arrives.

    Args:
        city: Destination city as entered by the customer.
        today: Reference date, defaults to the current local date.

    Returns:
        DeliveryEstimate: Lead time plus production buffer, and the date.
    """
    days = delivery_days_for_city(city) + PRODUCTION_DAYS
    start = today or date.today()
    return DeliveryEstimate(delivery_date=start + timedelta(days=days), days=days)
