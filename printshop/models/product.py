"""Catalog entry type definitions."""

from typing import TypedDict


class ProductColor(TypedDict):
    """A garment color offered for every product."""

    code: str
    name: str
    hex: str


class CatalogProduct(TypedDict):
    """A product type the shop prints on."""

    type: str
    name: str
    price: int
    customizable: bool
