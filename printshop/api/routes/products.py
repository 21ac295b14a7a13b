"""Product catalog API routes."""

from fastapi import APIRouter

from printshop.api.middleware.error_handler import NotFoundError
from printshop.schemas.product import ProductResponse
from printshop.services.catalog_service import get_product, list_products

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List catalog products",
    description="Returns every product type with its price, colors and sizes.",
)
async def list_catalog_products() -> list[ProductResponse]:
    return [ProductResponse.model_validate(product) for product in list_products()]


@router.get(
    "/{product_type}",
    response_model=ProductResponse,
    summary="Get catalog product",
    responses={404: {"description": "Unknown product type"}},
)
async def get_catalog_product(product_type: str) -> ProductResponse:
    """Get a single product type.

    Raises:
        NotFoundError: 404 if the product type is not in the catalog.
    """
    product = get_product(product_type)
    if product is None:
        raise NotFoundError("Товар не найден")
    return ProductResponse.model_validate(product)
