"""Cart models for the storefront"""

import uuid
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from .money import Money
from .product import CatalogModel, Ingredient, Product


def generate_line_id() -> str:
    """Generate a unique cart line id"""
    return f"cart_{uuid.uuid4().hex}"


class ModificationType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    EXTRA = "extra"


class Modification(CatalogModel):
    """Ingredient adjustment applied to a cart line"""
    ingredient_id: str
    ingredient: Ingredient
    modification_type: ModificationType
    quantity: int = Field(default=1, gt=0)
    # Copied when the customer picks it, never re-fetched
    unit_price: Money = Field(ge=0)

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity


class CartLineItem(CatalogModel):
    """Line in the shopping cart"""
    id: str = Field(default_factory=generate_line_id)
    product: Product
    quantity: int = Field(default=1, ge=1)
    modifications: list[Modification] = Field(default_factory=list)
    custom_price: Money = Field(ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.custom_price * self.quantity


class StoredLineItem(CatalogModel):
    """
    Line as read back from the storage slot.

    Covers both the current shape and the older one that carried only
    product and quantity. normalize() turns either into a CartLineItem.
    """
    id: Optional[str] = None
    product: Product
    quantity: int = Field(ge=1)
    modifications: Optional[list[Modification]] = None
    custom_price: Optional[Money] = Field(default=None, ge=0)

    @property
    def is_legacy(self) -> bool:
        return not self.id

    def normalize(self) -> CartLineItem:
        if self.is_legacy:
            return CartLineItem(
                product=self.product,
                quantity=self.quantity,
                custom_price=self.product.price,
            )

        custom_price = self.custom_price
        if custom_price is None:
            custom_price = self.product.price

        return CartLineItem(
            id=self.id,
            product=self.product,
            quantity=self.quantity,
            modifications=self.modifications or [],
            custom_price=custom_price,
        )


class OrderItemPayload(CatalogModel):
    """Cart line as handed to the checkout collaborator"""
    product_id: str
    quantity: int
    unit_price: Money
    total_price: Money


class CartView(CatalogModel):
    """Cart state exposed to the UI"""
    items: list[CartLineItem]
    item_count: int
    subtotal: Money
    total: Money
    is_cart_open: bool


class UpdateQuantityRequest(CatalogModel):
    """Request to change a line's quantity (<= 0 removes the line)"""
    quantity: int


class UpdateModificationsRequest(CatalogModel):
    """Request to replace a line's modifications"""
    modifications: list[Modification] = []


class CartResponse(CatalogModel):
    """Cart API response"""
    cart: CartView
    message: Optional[str] = None
