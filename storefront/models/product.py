"""Catalog models for the storefront"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .money import DecimalString


class CatalogModel(BaseModel):
    """Base for payloads served by the catalog API (camelCase keys)"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Category(CatalogModel):
    """Menu category"""
    id: str
    name: str
    slug: str
    icon: str = ""
    display_order: int = 0


class Product(CatalogModel):
    """Product in the catalog"""
    id: str
    name: str
    description: str = ""
    price: DecimalString = Field(ge=0)
    original_price: Optional[DecimalString] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool = True
    is_featured: bool = False
    is_promotion: bool = False


class Ingredient(CatalogModel):
    """Ingredient record copied onto a modification"""
    id: str
    name: str
    price: DecimalString = Field(default=Decimal("0"), ge=0)
    discount_price: Optional[DecimalString] = None
