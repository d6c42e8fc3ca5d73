# src/filters/product_sorter.py

"""Stable ordering of enriched products by name, price or popularity."""

import logging
from collections.abc import Callable
from typing import Any

from src.models.product import EnrichedProduct

logger = logging.getLogger("jewelry_catalog.filters")

SORT_KEYS: dict[str, Callable[[EnrichedProduct], Any]] = {
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price,
    "popularity": lambda p: p.popularity_score,
}


class ProductSorter:
    """Sort products on one of the :data:`SORT_KEYS`."""

    @staticmethod
    def sort(
        products: list[EnrichedProduct],
        sort_by: str,
        sort_order: str = "asc",
    ) -> list[EnrichedProduct]:
        """Return *products* ordered by *sort_by*.

        ``sorted`` is stable and ``reverse=True`` keeps equal keys in
        their input order, so ``desc`` flips the comparison rather than
        the final sequence. Any order other than ``desc`` is ascending.
        An unknown *sort_by* leaves the order untouched.
        """
        key = SORT_KEYS.get(sort_by)
        if key is None:
            logger.debug("Ignoring unknown sortBy '%s'", sort_by)
            return list(products)
        return sorted(products, key=key, reverse=sort_order == "desc")
