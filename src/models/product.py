# src/models/product.py

"""Product data models for inter-module data flow."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawProduct:
    """A catalog record as stored in the product source."""

    name: str
    images: dict[str, str]
    weight: float
    popularity_score: float
    # Unmodelled keys from the source record, passed through untouched
    extra: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any](), compare=False
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawProduct":
        """Build a RawProduct from a camelCase JSON record.

        Raises ``KeyError``/``TypeError``/``ValueError`` on a record
        missing required fields or carrying non-numeric values.
        """
        known = {"name", "images", "weight", "popularityScore"}
        return cls(
            name=str(data["name"]),
            images={
                str(color): str(url)
                for color, url in dict(data["images"]).items()
            },
            weight=float(data["weight"]),
            popularity_score=float(data["popularityScore"]),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class EnrichedProduct:
    """A product with its price and rating derived from the gold price."""

    name: str
    images: dict[str, str]
    weight: float
    popularity_score: float
    price: float
    price_formatted: str
    star_rating: float
    extra: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any](), compare=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the camelCase shape used in API responses."""
        return {
            **self.extra,
            "name": self.name,
            "images": dict(self.images),
            "weight": self.weight,
            "popularityScore": self.popularity_score,
            "price": self.price,
            "starRating": self.star_rating,
            "priceFormatted": self.price_formatted,
        }
