# Services

from .catalog_client import CatalogClient

__all__ = ["CatalogClient"]
