"""FastAPI dependency injection functions."""

from typing import Annotated

from fastapi import Depends, Request

from printshop.services.order_service import OrderService


def get_order_service(request: Request) -> OrderService:
    """Get the order service built for this application at startup.

    Args:
        request: FastAPI request object.

    Returns:
        OrderService: The application's order service.
    """
    return request.app.state.order_service


# Type alias for cleaner dependency injection
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
