"""Line pricing for customized products"""

from decimal import Decimal
from typing import Iterable, Union

from ..models.cart import Modification, ModificationType
from ..models.money import ZERO, to_decimal

_ADDITIVE = (ModificationType.ADD, ModificationType.EXTRA)


def calculate_item_price(
    base_price: Union[str, Decimal],
    modifications: Iterable[Modification],
) -> Decimal:
    """
    Compute the per-unit price of a cart line.

    Added and extra ingredients raise the price by unit_price * quantity,
    removed ones lower it by the same amount. The result never goes below
    zero.
    """
    price = to_decimal(base_price)

    for mod in modifications:
        if mod.modification_type in _ADDITIVE:
            price += mod.amount
        elif mod.modification_type == ModificationType.REMOVE:
            price -= mod.amount

    return max(ZERO, price)


def is_ingredient_removed(modifications: Iterable[Modification], ingredient_id: str) -> bool:
    """Whether the ingredient has been taken off the line"""
    return any(
        mod.ingredient_id == ingredient_id
        and mod.modification_type == ModificationType.REMOVE
        for mod in modifications
    )


def extra_quantity(modifications: Iterable[Modification], ingredient_id: str) -> int:
    """Quantity of the ingredient added on top of the recipe, 0 if none"""
    for mod in modifications:
        if mod.ingredient_id == ingredient_id and mod.modification_type in _ADDITIVE:
            return mod.quantity
    return 0
