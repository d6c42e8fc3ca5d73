# src/services/catalog_service.py

"""Orchestrates catalog loading, enrichment and querying per request."""

import logging
import re

from src.errors import NotFound
from src.models.product import EnrichedProduct
from src.models.query import FilterRanges, QueryParams, QueryResult
from src.services.enrichment import enrich, enrich_all
from src.services.query_pipeline import filter_ranges, run_query
from src.storage.catalog_loader import CatalogLoader
from src.storage.gold_price_cache import GoldPriceCache, PriceEntry

logger = logging.getLogger("jewelry_catalog.catalog")

# Plain ASCII decimal digits, no sign, underscores or non-Latin digits
_INDEX_RE = re.compile(r"[0-9]+")


class CatalogService:
    """Coordinates the catalog loader, the gold price cache and queries.

    Everything except the price cache is rebuilt on each call, so the
    service itself is safe to share across request threads.
    """

    def __init__(
        self,
        loader: CatalogLoader,
        price_cache: GoldPriceCache,
    ) -> None:
        self.loader = loader
        self.price_cache = price_cache

    def list_products(
        self, params: QueryParams
    ) -> tuple[float, QueryResult]:
        """Return the gold price and the filtered, sorted catalog."""
        products = self.loader.load()
        gold_price = self.price_cache.get_price()
        enriched = enrich_all(products, gold_price)
        return gold_price, run_query(enriched, params)

    def filter_options(self) -> tuple[float, int, FilterRanges]:
        """Return the gold price, catalog size and available filter ranges."""
        products = self.loader.load()
        gold_price = self.price_cache.get_price()
        enriched = enrich_all(products, gold_price)
        return gold_price, len(products), filter_ranges(enriched)

    def get_product(self, index: str | int) -> tuple[float, EnrichedProduct]:
        """Return the product at zero-based *index*.

        Raises ``NotFound`` for a non-integer or out-of-range index.
        """
        products = self.loader.load()
        if isinstance(index, int):
            position = index
        elif isinstance(index, str) and _INDEX_RE.fullmatch(index):
            position = int(index)
        else:
            raise NotFound(f"Invalid product index {index!r}")

        if position < 0 or position >= len(products):
            logger.info(
                "Product index %d requested, catalog has %d",
                position,
                len(products),
            )
            raise NotFound(
                f"Index {position} outside catalog of {len(products)}"
            )

        gold_price = self.price_cache.get_price()
        return gold_price, enrich(products[position], gold_price)

    def gold_price(self) -> PriceEntry:
        """Return the current gold price per gram with its fetch time."""
        return self.price_cache.get_entry()
