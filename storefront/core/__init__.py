# Core modules

from .config import settings, get_settings, Settings
from .pricing import calculate_item_price, is_ingredient_removed, extra_quantity
from .store import CartStore, serialize_items, deserialize_items

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "calculate_item_price",
    "is_ingredient_removed",
    "extra_quantity",
    "CartStore",
    "serialize_items",
    "deserialize_items",
]
