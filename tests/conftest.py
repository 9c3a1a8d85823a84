"""Pytest configuration and fixtures"""
import pytest

from storefront.models import Product
from storefront.storage import MemoryStorage


@pytest.fixture
def sample_product_data():
    """Product as served by /api/products"""
    return {
        "id": "prod-xbacon",
        "name": "X-Bacon Deluxe",
        "description": "Hambúrguer 180g, bacon crocante, queijo cheddar, alface, tomate e molho especial",
        "price": "22.90",
        "originalPrice": None,
        "categoryId": "hamburgers",
        "imageUrl": "https://example.com/xbacon.jpg",
        "isAvailable": True,
        "isFeatured": True,
        "isPromotion": False,
        "createdAt": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_product(sample_product_data):
    """X-Bacon Deluxe at 22.90"""
    return Product.model_validate(sample_product_data)


@pytest.fixture
def other_product():
    """Classic Cheese at 15.90"""
    return Product(
        id="prod-classic",
        name="Classic Cheese",
        description="Hambúrguer 150g, queijo, alface, tomate, cebola e ketchup",
        price="15.90",
        original_price="18.90",
        category_id="hamburgers",
    )


@pytest.fixture
def storage():
    """Empty in-memory storage slot"""
    return MemoryStorage()
