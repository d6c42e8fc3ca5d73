# src/services/query_pipeline.py

"""Filter-then-sort query over enriched products, plus range statistics."""

import logging
import math

from src.filters.product_filter import ProductFilter
from src.filters.product_sorter import ProductSorter
from src.models.product import EnrichedProduct
from src.models.query import FilterRanges, QueryParams, QueryResult

logger = logging.getLogger("jewelry_catalog.query")


def run_query(
    products: list[EnrichedProduct],
    params: QueryParams,
) -> QueryResult:
    """Apply *params* to *products* and describe what was applied.

    ``applied_filters`` is ``None`` when no bound was supplied, so
    callers can tell "no filtering requested" apart from an empty
    mapping.
    """
    original_count = len(products)
    kept, excluded = ProductFilter.filter_by_bounds(products, params)
    ordered = ProductSorter.sort(kept, params.sort_by, params.sort_order)

    applied = params.supplied_bounds()
    logger.debug(
        "Query kept %d/%d products (excluded=%d, sortBy=%s, sortOrder=%s)",
        len(ordered),
        original_count,
        excluded,
        params.sort_by,
        params.sort_order,
    )

    return QueryResult(
        items=ordered,
        original_count=original_count,
        applied_filters=applied or None,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
    )


def filter_ranges(products: list[EnrichedProduct]) -> FilterRanges:
    """Compute min/max price and popularity over the full catalog.

    Display bounds are the price range widened to whole dollars. An
    empty catalog reports every bound as 0.
    """
    if not products:
        return FilterRanges(
            price_min=0.0,
            price_max=0.0,
            price_floor=0,
            price_ceil=0,
            popularity_min=0.0,
            popularity_max=0.0,
        )

    prices = [p.price for p in products]
    scores = [p.popularity_score for p in products]
    price_min, price_max = min(prices), max(prices)
    return FilterRanges(
        price_min=price_min,
        price_max=price_max,
        price_floor=math.floor(price_min),
        price_ceil=math.ceil(price_max),
        popularity_min=min(scores),
        popularity_max=max(scores),
    )
