# Storefront Models

from .money import Money, DecimalString, to_decimal
from .product import Category, Product, Ingredient
from .cart import (
    CartLineItem,
    CartResponse,
    CartView,
    Modification,
    ModificationType,
    OrderItemPayload,
    StoredLineItem,
    UpdateModificationsRequest,
    UpdateQuantityRequest,
    generate_line_id,
)

__all__ = [
    "Money",
    "DecimalString",
    "to_decimal",
    "Category",
    "Product",
    "Ingredient",
    "CartLineItem",
    "CartResponse",
    "CartView",
    "Modification",
    "ModificationType",
    "OrderItemPayload",
    "StoredLineItem",
    "UpdateModificationsRequest",
    "UpdateQuantityRequest",
    "generate_line_id",
]
