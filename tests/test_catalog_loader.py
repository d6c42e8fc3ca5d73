# tests/test_catalog_loader.py

"""Tests for the JSON-backed catalog loader."""

import json
import tempfile
import unittest
from pathlib import Path
from typing import Any

from src.storage.catalog_loader import CatalogLoader


def _record(name: str, **overrides: Any) -> dict[str, Any]:
    """Build a valid camelCase catalog record."""
    record: dict[str, Any] = {
        "name": name,
        "popularityScore": 0.5,
        "weight": 2.0,
        "images": {"yellow": f"https://cdn.shopify.com/{name}.png"},
    }
    record.update(overrides)
    return record


class TestCatalogLoader(unittest.TestCase):
    """CatalogLoader.load behaviour."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.path = self.tmp_dir / "products.json"
        self.loader = CatalogLoader(self.path)

    def _write(self, data: Any) -> None:
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def test_loads_records_in_file_order(self) -> None:
        """Products come back in the order they are stored."""
        self._write([_record("B"), _record("A"), _record("C")])
        names = [p.name for p in self.loader.load()]
        self.assertEqual(names, ["B", "A", "C"])

    def test_missing_file_returns_empty(self) -> None:
        """An absent catalog is an empty catalog."""
        self.assertEqual(self.loader.load(), [])

    def test_invalid_json_returns_empty(self) -> None:
        """A corrupt file is logged and yields nothing."""
        self.path.write_text("[{not json", encoding="utf-8")
        with self.assertLogs("jewelry_catalog.storage", level="ERROR"):
            self.assertEqual(self.loader.load(), [])

    def test_non_array_returns_empty(self) -> None:
        """The catalog must be a JSON array."""
        self._write({"products": [_record("A")]})
        self.assertEqual(self.loader.load(), [])

    def test_rereads_on_every_call(self) -> None:
        """Edits to the file are visible without a restart."""
        self._write([_record("A")])
        self.assertEqual(len(self.loader.load()), 1)
        self._write([_record("A"), _record("B")])
        self.assertEqual(len(self.loader.load()), 2)

    def test_malformed_record_skipped(self) -> None:
        """A record missing fields does not sink the catalog."""
        self._write([_record("A"), {"name": "Broken"}, _record("C")])
        names = [p.name for p in self.loader.load()]
        self.assertEqual(names, ["A", "C"])

    def test_invalid_record_dropped(self) -> None:
        """Out-of-range values are removed by validation."""
        self._write(
            [_record("A"), _record("Heavy", weight=-1), _record("C")]
        )
        names = [p.name for p in self.loader.load()]
        self.assertEqual(names, ["A", "C"])

    def test_non_dict_entries_ignored(self) -> None:
        """Scalars inside the array are skipped."""
        self._write([_record("A"), 42, "ring"])
        self.assertEqual(len(self.loader.load()), 1)

    def test_default_path_from_settings(self) -> None:
        """Without a path the configured catalog is used."""
        from src.config.settings import Settings

        self.assertEqual(CatalogLoader().path, Settings.PRODUCTS_PATH)

    def test_bundled_catalog_loads(self) -> None:
        """The shipped data/products.json is a valid catalog."""
        from src.config.settings import Settings

        products = CatalogLoader(
            Settings.BASE_DIR / "data" / "products.json"
        ).load()
        self.assertGreater(len(products), 0)


if __name__ == "__main__":
    unittest.main()
