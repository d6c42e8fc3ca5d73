# src/models/query.py

"""Query parameter and result models for the catalog query pipeline."""

from dataclasses import dataclass, field

from src.models.product import EnrichedProduct


@dataclass(frozen=True)
class QueryParams:
    """Filter bounds and sort options for a catalog query.

    Bounds left as ``None`` impose no constraint.
    """

    min_price: float | None = None
    max_price: float | None = None
    min_popularity: float | None = None
    max_popularity: float | None = None
    sort_by: str = "name"
    sort_order: str = "asc"

    def supplied_bounds(self) -> dict[str, float]:
        """Return the supplied bounds keyed by their API names."""
        bounds = {
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "minPopularity": self.min_popularity,
            "maxPopularity": self.max_popularity,
        }
        return {k: v for k, v in bounds.items() if v is not None}


@dataclass
class QueryResult:
    """Filtered and sorted products plus descriptive metadata."""

    items: list[EnrichedProduct] = field(
        default_factory=lambda: list[EnrichedProduct]()
    )
    original_count: int = 0
    applied_filters: dict[str, float] | None = None
    sort_by: str = "name"
    sort_order: str = "asc"


@dataclass(frozen=True)
class FilterRanges:
    """Available filter bounds across the full enriched catalog."""

    price_min: float
    price_max: float
    price_floor: int
    price_ceil: int
    popularity_min: float
    popularity_max: float
