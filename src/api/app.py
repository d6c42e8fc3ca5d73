# src/api/app.py

"""FastAPI application factory for the jewelry catalog API."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from src.api.exception_handlers import setup_exception_handlers
from src.api.routes import router
from src.services.catalog_service import CatalogService
from src.services.gold_price_client import GoldPriceClient
from src.services.image_proxy import ImageProxy
from src.storage.catalog_loader import CatalogLoader
from src.storage.gold_price_cache import GoldPriceCache

logger = logging.getLogger("jewelry_catalog.api")

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Warm the gold price cache on startup."""
    service: CatalogService = app.state.catalog_service
    try:
        price = await asyncio.to_thread(service.price_cache.get_price)
        logger.info("Current gold price: $%.2f per gram", price)
    except Exception as exc:
        logger.warning("Could not fetch initial gold price: %s", exc)
    yield
    logger.info("Catalog API shutting down")


def create_app(
    catalog_service: CatalogService | None = None,
    image_proxy: ImageProxy | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Services default to the production wiring from ``Settings``;
    tests pass their own.
    """
    if catalog_service is None:
        catalog_service = CatalogService(
            loader=CatalogLoader(),
            price_cache=GoldPriceCache(
                GoldPriceClient().fetch_price_per_ounce
            ),
        )

    app = FastAPI(
        title="Jewelry Catalog API",
        description="Jewelry products priced from the live gold price.",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.catalog_service = catalog_service
    app.state.image_proxy = image_proxy or ImageProxy()

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        logger.debug("Request: %s %s", request.method, request.url.path)
        return await call_next(request)

    setup_exception_handlers(app)
    app.include_router(router)
    return app
