"""
Cart Store

Client-held shopping cart: line items with ingredient modifications,
persisted to a key-value slot after every change and reconciled once
against the live catalog after being restored.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Iterable, Optional, Protocol, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from ..exceptions import CartStateError, CatalogError
from ..models.cart import (
    CartLineItem,
    CartView,
    Modification,
    OrderItemPayload,
    StoredLineItem,
)
from ..models.money import ZERO
from ..models.product import Product
from ..storage import CartStorage
from .pricing import calculate_item_price

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "burger-house-cart"

_line_items = TypeAdapter(list[CartLineItem])
_stored_items = TypeAdapter(list[StoredLineItem])


class ProductCatalog(Protocol):
    """Anything that can list the current products (CatalogClient does)"""

    async def get_products(self) -> list[Product]:
        ...


def serialize_items(items: Iterable[CartLineItem]) -> str:
    """Encode cart lines as the JSON array kept in the storage slot"""
    return _line_items.dump_json(list(items), by_alias=True).decode("utf-8")


def deserialize_items(raw: Union[str, bytes]) -> list[CartLineItem]:
    """
    Decode the storage slot into normalized cart lines.

    Raises:
        CartStateError: the slot is not valid JSON or any entry fails
            validation. Partially valid data is never returned.
    """
    try:
        stored = _stored_items.validate_json(raw)
        return [entry.normalize() for entry in stored]
    except ValidationError as e:
        raise CartStateError(f"Unreadable cart state ({e.error_count()} errors)") from e


class CartStore:
    """
    Shopping cart state container.

    Mutations are synchronous and persist the full line list. Operations
    on an unknown line id do nothing. Reconciliation against the catalog
    runs once, in the background, and never blocks mutations.

    Usage:
        store = CartStore(MemoryStorage(), catalog=CatalogClient(url))
        store.start_reconciliation()
        line = store.add_to_cart(product)
        store.update_quantity(line.id, 2)
    """

    def __init__(
        self,
        storage: CartStorage,
        catalog: Optional[ProductCatalog] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        """
        Create the store and restore any persisted cart.

        Args:
            storage: Key-value slot the cart is written to
            catalog: Source of current products used by reconcile()
            storage_key: Slot key holding the cart
        """
        self._storage = storage
        self._catalog = catalog
        self._storage_key = storage_key
        self._items: list[CartLineItem] = []
        self._is_cart_open = False
        self._restored_ids: set[str] = set()
        self._reconciled = False
        self._reconcile_task: Optional[asyncio.Task] = None

        self._restore()

    # ==================== Derived state ====================

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self._items), ZERO)

    @property
    def total(self) -> Decimal:
        # Delivery fee and taxes are added at checkout
        return self.subtotal

    @property
    def is_cart_open(self) -> bool:
        return self._is_cart_open

    @property
    def reconciliation_task(self) -> Optional[asyncio.Task]:
        return self._reconcile_task

    def get_item(self, line_id: str) -> Optional[CartLineItem]:
        """Get a cart line by id"""
        return next((item for item in self._items if item.id == line_id), None)

    def snapshot(self) -> CartView:
        """Current cart state for the UI"""
        return CartView(
            items=list(self._items),
            item_count=self.item_count,
            subtotal=self.subtotal,
            total=self.total,
            is_cart_open=self._is_cart_open,
        )

    def to_order_items(self) -> list[OrderItemPayload]:
        """Cart lines in the shape the order endpoint expects"""
        return [
            OrderItemPayload(
                product_id=item.product.id,
                quantity=item.quantity,
                unit_price=item.custom_price,
                total_price=item.line_total,
            )
            for item in self._items
        ]

    # ==================== Mutations ====================

    def add_to_cart(self, product: Product) -> CartLineItem:
        """
        Add a new line for product.

        Every call creates a separate line, even for a product already in
        the cart.
        """
        item = CartLineItem(
            product=product.model_copy(deep=True),
            quantity=1,
            modifications=[],
            custom_price=product.price,
        )
        self._replace_items([*self._items, item])
        logger.debug(f"Added {product.id} to cart as {item.id}")
        return item

    def remove_from_cart(self, line_id: str) -> None:
        """Remove a cart line"""
        if self.get_item(line_id) is None:
            logger.debug(f"Remove ignored, no cart line {line_id}")
            return
        self._replace_items([item for item in self._items if item.id != line_id])

    def update_quantity(self, line_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line"""
        if quantity <= 0:
            self.remove_from_cart(line_id)
            return

        self._update_item(line_id, quantity=quantity)

    def update_item_modifications(
        self,
        line_id: str,
        modifications: Iterable[Union[Modification, dict[str, Any]]],
    ) -> None:
        """Replace a line's modifications and reprice it"""
        item = self.get_item(line_id)
        if item is None:
            logger.debug(f"Modification update ignored, no cart line {line_id}")
            return

        mods = [
            mod if isinstance(mod, Modification) else Modification.model_validate(mod)
            for mod in modifications
        ]
        self._update_item(
            line_id,
            modifications=mods,
            custom_price=calculate_item_price(item.product.price, mods),
        )

    def clear_cart(self) -> None:
        """Remove every line"""
        self._replace_items([])

    def toggle_cart_sidebar(self) -> None:
        """Show or hide the cart sidebar"""
        self._is_cart_open = not self._is_cart_open

    # ==================== Reconciliation ====================

    def start_reconciliation(self) -> asyncio.Task:
        """
        Schedule reconcile() on the running loop.

        Safe to call more than once; the same task is returned.
        """
        if self._reconcile_task is None:
            loop = asyncio.get_running_loop()
            self._reconcile_task = loop.create_task(self.reconcile(), name="cart-reconcile")
        return self._reconcile_task

    async def reconcile(self) -> None:
        """
        Check restored lines against the current catalog.

        Restored lines whose product is gone are dropped. If the catalog
        cannot be fetched every restored line is dropped and the slot is
        erased. Lines added since the cart was restored are kept either way.
        """
        if self._reconciled:
            return
        self._reconciled = True

        restored_ids, self._restored_ids = self._restored_ids, set()
        if not restored_ids:
            return
        if self._catalog is None:
            logger.debug("No catalog configured, skipping cart reconciliation")
            return

        try:
            products = await self._catalog.get_products()
        except (httpx.HTTPError, CatalogError) as e:
            logger.warning(
                f"Catalog unavailable, discarding {len(restored_ids)} restored cart lines: {e}"
            )
            remaining = [item for item in self._items if item.id not in restored_ids]
            self._items = remaining
            self._erase()
            if remaining:
                self._persist()
            return

        catalog_ids = {product.id for product in products}
        stale_ids = {
            item.id
            for item in self._items
            if item.id in restored_ids and item.product.id not in catalog_ids
        }
        if not stale_ids:
            logger.debug("Restored cart matches catalog")
            return

        logger.info(f"Dropping {len(stale_ids)} cart lines for products no longer in catalog")
        self._replace_items([item for item in self._items if item.id not in stale_ids])

    # ==================== Internals ====================

    def _restore(self) -> None:
        try:
            raw = self._storage.get_item(self._storage_key)
            if raw is None:
                return
            items = deserialize_items(raw)
        except (CartStateError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding persisted cart: {e}")
            self._erase()
            return

        self._items = items
        self._restored_ids = {item.id for item in items}
        logger.info(f"Restored {len(items)} cart lines")

    def _update_item(self, line_id: str, **changes: Any) -> None:
        if self.get_item(line_id) is None:
            logger.debug(f"Update ignored, no cart line {line_id}")
            return

        self._replace_items([
            item.model_copy(update=changes) if item.id == line_id else item
            for item in self._items
        ])

    def _replace_items(self, items: list[CartLineItem]) -> None:
        self._items = items
        self._persist()

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._storage_key, serialize_items(self._items))
        except OSError as e:
            logger.error(f"Failed to persist cart: {e}")

    def _erase(self) -> None:
        try:
            self._storage.remove_item(self._storage_key)
        except OSError as e:
            logger.error(f"Failed to erase persisted cart: {e}")
