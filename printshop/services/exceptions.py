"""Exceptions raised by the order intake services."""


class OrderServiceError(Exception):
    """Base exception for order service errors."""

    pass


class OrderValidationError(OrderServiceError):
    """A submitted field failed validation."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class DesignFileError(OrderServiceError):
    """An uploaded file is missing, too large or of a wrong type."""

    def __init__(self, field: str, message: str, oversize: bool = False) -> None:
        self.field = field
        self.message = message
        self.oversize = oversize
        super().__init__(f"{field}: {message}")


class OrderNotFoundError(OrderServiceError):
    """No order exists with the requested id."""

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class OrderPersistenceError(OrderServiceError):
    """Writing the orders snapshot failed."""

    pass
