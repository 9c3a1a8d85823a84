"""
Storefront Cart Application

Serves the restaurant storefront's shopping cart to the UI and keeps it
in step with the product catalog.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.store import CartStore
from .routes import cart_router
from .services.catalog_client import CatalogClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront cart starting up...")
    logger.info(f"Catalog URL: {settings.catalog_base_url}")

    catalog_client = CatalogClient(
        catalog_base_url=settings.catalog_base_url,
        timeout=settings.catalog_timeout,
    )
    store = CartStore(
        storage=settings.build_storage(),
        catalog=catalog_client,
        storage_key=settings.cart_storage_key,
    )
    app.state.cart_store = store

    if settings.reconcile_on_startup:
        store.start_reconciliation()

    yield

    logger.info("Storefront cart shutting down...")
    task = store.reconciliation_task
    if task and not task.done():
        task.cancel()
    await catalog_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Shopping cart for the restaurant storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cart_router)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "storefront-cart"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
