"""Cart API routes for the storefront"""

from fastapi import APIRouter, Depends, Request

from ..core.store import CartStore
from ..models.cart import (
    CartResponse,
    OrderItemPayload,
    UpdateModificationsRequest,
    UpdateQuantityRequest,
)
from ..models.product import Product

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_cart_store(request: Request) -> CartStore:
    """Cart store created during application startup"""
    return request.app.state.cart_store


@router.get("", response_model=CartResponse)
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """Get the current cart"""
    return CartResponse(cart=store.snapshot())


@router.post("/items", response_model=CartResponse)
async def add_to_cart(
    product: Product,
    store: CartStore = Depends(get_cart_store),
):
    """Add a product as a new cart line"""
    store.add_to_cart(product)
    return CartResponse(cart=store.snapshot(), message=f"Added {product.name} to cart")


@router.put("/items/{line_id}", response_model=CartResponse)
async def update_quantity(
    line_id: str,
    request: UpdateQuantityRequest,
    store: CartStore = Depends(get_cart_store),
):
    """Update a line's quantity; zero or less removes it"""
    store.update_quantity(line_id, request.quantity)
    return CartResponse(cart=store.snapshot(), message="Cart updated")


@router.put("/items/{line_id}/modifications", response_model=CartResponse)
async def update_modifications(
    line_id: str,
    request: UpdateModificationsRequest,
    store: CartStore = Depends(get_cart_store),
):
    """Replace a line's ingredient modifications"""
    store.update_item_modifications(line_id, request.modifications)
    return CartResponse(cart=store.snapshot(), message="Cart updated")


@router.delete("/items/{line_id}", response_model=CartResponse)
async def remove_from_cart(
    line_id: str,
    store: CartStore = Depends(get_cart_store),
):
    """Remove a cart line"""
    store.remove_from_cart(line_id)
    return CartResponse(cart=store.snapshot(), message="Item removed")


@router.delete("", response_model=CartResponse)
async def clear_cart(store: CartStore = Depends(get_cart_store)):
    """Clear all lines from the cart"""
    store.clear_cart()
    return CartResponse(cart=store.snapshot(), message="Cart cleared")


@router.post("/sidebar/toggle", response_model=CartResponse)
async def toggle_sidebar(store: CartStore = Depends(get_cart_store)):
    """Show or hide the cart sidebar"""
    store.toggle_cart_sidebar()
    return CartResponse(cart=store.snapshot())


@router.get("/order-items", response_model=list[OrderItemPayload])
async def get_order_items(store: CartStore = Depends(get_cart_store)):
    """Cart lines formatted for order submission"""
    return store.to_order_items()
