# src/filters/product_filter.py

"""Inclusive price and popularity bound filtering."""

import logging

from src.models.product import EnrichedProduct
from src.models.query import QueryParams

logger = logging.getLogger("jewelry_catalog.filters")


class ProductFilter:
    """Filter enriched products against optional inclusive bounds."""

    @staticmethod
    def matches(product: EnrichedProduct, params: QueryParams) -> bool:
        """Return True if *product* satisfies every supplied bound."""
        if params.min_price is not None and product.price < params.min_price:
            return False
        if params.max_price is not None and product.price > params.max_price:
            return False
        if (
            params.min_popularity is not None
            and product.popularity_score < params.min_popularity
        ):
            return False
        if (
            params.max_popularity is not None
            and product.popularity_score > params.max_popularity
        ):
            return False
        return True

    @staticmethod
    def filter_by_bounds(
        products: list[EnrichedProduct],
        params: QueryParams,
    ) -> tuple[list[EnrichedProduct], int]:
        """Keep products inside the supplied price/popularity bounds.

        Returns the kept products (in input order) and the count of
        excluded products. Unsupplied bounds impose no constraint.
        """
        if not params.supplied_bounds():
            return list(products), 0

        kept = [p for p in products if ProductFilter.matches(p, params)]
        excluded = len(products) - len(kept)

        if excluded:
            logger.debug(
                "Filtered out %d products outside %s",
                excluded,
                params.supplied_bounds(),
            )

        return kept, excluded
