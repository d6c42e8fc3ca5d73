# src/storage/catalog_loader.py

"""Reads the static product catalog from its JSON file."""

import json
import logging
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.errors import CatalogUnreadable
from src.filters.product_validator import ProductValidator
from src.models.product import RawProduct

logger = logging.getLogger("jewelry_catalog.storage")


class CatalogLoader:
    """Loads raw product records from a JSON array on disk.

    Nothing is cached: every :meth:`load` re-reads the file, so edits
    to the catalog show up without a restart.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.PRODUCTS_PATH
        logger.debug("CatalogLoader initialised — path=%s", self.path)

    def load(self) -> list[RawProduct]:
        """Return the catalog in file order, or ``[]`` if it is unreadable."""
        try:
            records = self._read_records()
        except CatalogUnreadable as exc:
            logger.error("Error loading products: %s", exc, exc_info=True)
            return []

        products: list[RawProduct] = []
        for position, record in enumerate(records):
            try:
                products.append(RawProduct.from_dict(record))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(
                    "Skipping malformed product at position %d: %r",
                    position,
                    exc,
                )

        valid, _dropped = ProductValidator.validate(products)
        logger.debug("Loaded %d products from %s", len(valid), self.path)
        return valid

    def _read_records(self) -> list[dict[str, Any]]:
        """Read and parse the catalog file into a list of dicts."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data: Any = json.load(f)
        except (OSError, ValueError) as exc:
            raise CatalogUnreadable(
                f"Cannot read catalog {self.path}: {exc}"
            ) from exc

        if not isinstance(data, list):
            raise CatalogUnreadable(
                f"Catalog {self.path} is not a JSON array"
            )
        return [r for r in data if isinstance(r, dict)]
