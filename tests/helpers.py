"""Shared test helpers"""
from typing import Optional

from storefront.models import Modification, ModificationType
from storefront.storage import MemoryStorage


class FakeCatalog:
    """Catalog stand-in returning fixed products or raising"""

    def __init__(self, products: Optional[list] = None, error: Optional[Exception] = None):
        self.products = products or []
        self.error = error
        self.calls = 0

    async def get_products(self) -> list:
        self.calls += 1
        if self.error:
            raise self.error
        return self.products


def make_modification(
    modification_type: str,
    unit_price: str,
    quantity: int = 1,
    ingredient_id: str = "ing-bacon",
    name: str = "Bacon",
) -> Modification:
    return Modification(
        ingredient_id=ingredient_id,
        ingredient={"id": ingredient_id, "name": name, "price": unit_price},
        modification_type=ModificationType(modification_type),
        quantity=quantity,
        unit_price=unit_price,
    )


class LockedStorage(MemoryStorage):
    """Memory storage whose slots cannot be removed"""

    def remove_item(self, key: str) -> None:
        raise PermissionError(f"cannot remove {key}")
