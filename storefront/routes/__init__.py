# API Routes

from .cart import router as cart_router, get_cart_store

__all__ = ["cart_router", "get_cart_store"]
