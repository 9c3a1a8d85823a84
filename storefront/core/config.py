"""Storefront Cart Configuration"""

from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from ..storage import CartStorage, FileStorage, MemoryStorage


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Burger House Cart"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Catalog API
    catalog_base_url: str = "http://localhost:5000"
    catalog_timeout: float = 30.0

    # Cart persistence
    cart_storage_key: str = "burger-house-cart"
    cart_storage_dir: Optional[str] = None  # None keeps the cart in memory
    reconcile_on_startup: bool = True

    def build_storage(self) -> CartStorage:
        """Create the storage backend selected by cart_storage_dir"""
        if self.cart_storage_dir:
            return FileStorage(self.cart_storage_dir)
        return MemoryStorage()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
