"""Catalog Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field

from printshop.schemas.order import CamelModel


class ProductColorSchema(BaseModel):
    """A color offered for a product."""

    model_config = ConfigDict(from_attributes=True)

    code: str = Field(description="Color code used in order forms")
    name: str = Field(description="Color display name")
    hex: str = Field(description="Hex color for display")


class ProductResponse(CamelModel):
    """Schema for catalog product responses."""

    type: str = Field(description="Catalog product type")
    name: str = Field(description="Product display name")
    price: int = Field(description="Base price")
    customizable: bool
    colors: list[ProductColorSchema]
    sizes: list[str]
    printing_cost: int = Field(description="Design printing surcharge")
    shipping_cost: int = Field(description="Shipping surcharge")
