# src/api/routes.py

"""HTTP routes for the product catalog, gold price, health and image proxy."""

from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import StreamingResponse

from src.api.dependencies import CatalogDep, ImageProxyDep
from src.config.settings import Settings
from src.filters.query_params import parse_query_params
from src.services.enrichment import format_usd
from src.services.health_checker import liveness

router = APIRouter(prefix="/api")


@router.get("/products")
def list_products(request: Request, catalog: CatalogDep) -> dict[str, Any]:
    """All products with computed prices, filtered and sorted.

    Supported query parameters: ``minPrice``, ``maxPrice``,
    ``minPopularity``, ``maxPopularity``, ``sortBy`` (name, price,
    popularity) and ``sortOrder`` (asc, desc).
    """
    params = parse_query_params(request.query_params)
    gold_price, result = catalog.list_products(params)
    return {
        "success": True,
        "goldPrice": format_usd(gold_price),
        "totalProducts": len(result.items),
        "originalCount": result.original_count,
        "appliedFilters": result.applied_filters,
        "sorting": {
            "sortBy": result.sort_by,
            "sortOrder": result.sort_order,
        },
        "products": [p.to_dict() for p in result.items],
    }


@router.get("/products/filters")
def filter_options(catalog: CatalogDep) -> dict[str, Any]:
    """Price and popularity ranges plus the supported sort options."""
    gold_price, total, ranges = catalog.filter_options()
    return {
        "success": True,
        "goldPrice": format_usd(gold_price),
        "totalProducts": total,
        "priceRange": {
            "min": ranges.price_floor,
            "max": ranges.price_ceil,
            "current": {
                "min": format_usd(ranges.price_min),
                "max": format_usd(ranges.price_max),
            },
        },
        "popularityRange": {
            "min": ranges.popularity_min,
            "max": ranges.popularity_max,
            "scale": "0.0 to 1.0",
        },
        "availableFilters": {
            "price": {
                "type": "range",
                "min": ranges.price_floor,
                "max": ranges.price_ceil,
                "step": Settings.PRICE_FILTER_STEP,
                "description": "Filter products by price range",
            },
            "popularity": {
                "type": "range",
                "min": 0,
                "max": 1,
                "step": Settings.POPULARITY_FILTER_STEP,
                "description": "Filter products by popularity score (0-1)",
            },
        },
        "sorting": {
            "options": Settings.SORT_OPTIONS,
            "orders": Settings.SORT_ORDERS,
            "default": {
                "sortBy": Settings.DEFAULT_SORT_BY,
                "sortOrder": Settings.DEFAULT_SORT_ORDER,
            },
        },
    }


@router.get("/products/{index}")
def get_product(index: str, catalog: CatalogDep) -> dict[str, Any]:
    """A single product by its zero-based catalog position."""
    gold_price, product = catalog.get_product(index)
    return {
        "success": True,
        "goldPrice": format_usd(gold_price),
        "product": product.to_dict(),
    }


@router.get("/gold-price")
def gold_price(catalog: CatalogDep) -> dict[str, Any]:
    """The current gold price per gram and when it was fetched."""
    entry = catalog.gold_price()
    return {
        "success": True,
        "goldPrice": format_usd(entry.price),
        "currency": "USD",
        "unit": "per gram",
        "lastUpdated": int(entry.last_updated * 1000),
    }


@router.get("/health")
def health() -> dict[str, Any]:
    """Liveness probe."""
    return liveness()


@router.get("/image-proxy")
def image_proxy(
    proxy: ImageProxyDep,
    url: str | None = Query(default=None),
) -> StreamingResponse:
    """Stream an allowlisted CDN image through this origin."""
    image = proxy.fetch(url)
    return StreamingResponse(
        image.chunks,
        media_type=image.content_type,
        headers={
            "Cache-Control": f"public, max-age={Settings.IMAGE_CACHE_MAX_AGE}"
        },
    )
