# src/filters/product_validator.py

"""Drop malformed catalog records before enrichment."""

import logging
import math

from src.models.product import RawProduct

logger = logging.getLogger("jewelry_catalog.filters")


class ProductValidator:
    """Validate raw products and drop those that break the data model."""

    @staticmethod
    def problem(product: RawProduct) -> str | None:
        """Return why *product* is invalid, or ``None`` if it is valid."""
        if not product.name.strip():
            return "empty name"
        if not product.images:
            return "no images"
        if not math.isfinite(product.weight) or product.weight <= 0:
            return f"non-positive weight {product.weight}"
        if not 0.0 <= product.popularity_score <= 1.0:
            return (
                f"popularity score {product.popularity_score} "
                "outside [0, 1]"
            )
        return None

    @staticmethod
    def validate(
        products: list[RawProduct],
    ) -> tuple[list[RawProduct], int]:
        """Drop products with empty names, no images, or out-of-range numbers.

        Returns the valid products and the count of dropped items.
        """
        valid: list[RawProduct] = []
        dropped = 0

        for product in products:
            reason = ProductValidator.problem(product)
            if reason is not None:
                logger.debug(
                    "Dropped product '%s': %s", product.name, reason
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid products",
                dropped,
            )

        return valid, dropped
