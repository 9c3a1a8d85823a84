"""
Catalog API Client

HTTP client for the storefront's product and category endpoints.
Responses are validated into catalog models before they reach the cart.
"""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import CatalogPayloadError
from ..models.product import Category, Product

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogClient:
    """
    Client for the catalog REST endpoints.

    Usage:
        client = CatalogClient("http://localhost:5000")
        products = await client.get_products()
        await client.close()
    """

    def __init__(
        self,
        catalog_base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize catalog client.

        Args:
            catalog_base_url: Base URL of the storefront API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = catalog_base_url.rstrip("/")
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, str]] = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body"""
        url = f"{self.base_url}{path}"

        response = await self._http_client.request(
            method=method,
            url=url,
            params=params,
            headers={"Accept": "application/json"},
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        try:
            return response.json()
        except ValueError as e:
            raise CatalogPayloadError(f"{method} {path} returned invalid JSON") from e

    def _parse_list(self, model: type[ModelT], data: Any, path: str) -> list[ModelT]:
        try:
            return TypeAdapter(list[model]).validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {path}: {e.error_count()} errors")
            raise CatalogPayloadError(f"{path} returned an unexpected payload") from e

    # ==================== Product APIs ====================

    async def get_products(self, category: Optional[str] = None) -> list[Product]:
        """List products, optionally restricted to a category"""
        params = {"category": category} if category else None
        data = await self._request("GET", "/api/products", params=params)
        return self._parse_list(Product, data, "/api/products")

    async def get_featured_products(self) -> list[Product]:
        """List featured products"""
        data = await self._request("GET", "/api/products/featured")
        return self._parse_list(Product, data, "/api/products/featured")

    # ==================== Category APIs ====================

    async def get_categories(self) -> list[Category]:
        """List menu categories"""
        data = await self._request("GET", "/api/categories")
        return self._parse_list(Category, data, "/api/categories")
