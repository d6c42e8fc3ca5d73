# tests/test_health_checker.py

"""Tests for the liveness payload and upstream health checker."""

import itertools
import unittest
from datetime import datetime
from unittest.mock import MagicMock, patch

from src.services.health_checker import (
    HealthChecker,
    HealthResult,
    default_upstreams,
    liveness,
    probe_upstream,
)

GET_PATH = "src.services.health_checker.curl_requests.get"


class TestLiveness(unittest.TestCase):
    """liveness() payload."""

    def test_payload_shape(self) -> None:
        """success, message and an ISO timestamp."""
        body = liveness()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Product Listing API is running")
        self.assertIsInstance(
            datetime.fromisoformat(body["timestamp"]), datetime
        )


class TestProbeUpstream(unittest.TestCase):
    """Tests for the per-upstream health probe function."""

    def _make_upstream(self) -> dict[str, str]:
        """Build a minimal upstream config dict."""
        return {"id": "gold_api", "url": "https://gold.test/price/XAU"}

    @patch(GET_PATH)
    def test_ok_status(self, mock_get: MagicMock) -> None:
        """A fast 200 response should return 'ok' status."""
        mock_get.return_value = MagicMock(status_code=200)
        result = probe_upstream(self._make_upstream())
        self.assertEqual(result.status, "ok")
        self.assertGreaterEqual(result.latency_ms, 0)

    @patch(GET_PATH)
    def test_client_error_is_reachable(self, mock_get: MagicMock) -> None:
        """A 403 from a CDN root still means the host is up."""
        mock_get.return_value = MagicMock(status_code=403)
        result = probe_upstream(self._make_upstream())
        self.assertEqual(result.status, "ok")
        self.assertIn("403", result.message)

    @patch(GET_PATH)
    def test_down_on_server_error(self, mock_get: MagicMock) -> None:
        """A 5xx response should return 'down' status."""
        mock_get.return_value = MagicMock(status_code=502)
        result = probe_upstream(self._make_upstream())
        self.assertEqual(result.status, "down")
        self.assertIn("502", result.message)

    @patch(GET_PATH)
    def test_down_on_exception(self, mock_get: MagicMock) -> None:
        """A network error should return 'down' status."""
        mock_get.side_effect = ConnectionError("Connection refused")
        result = probe_upstream(self._make_upstream())
        self.assertEqual(result.status, "down")
        self.assertIn("Connection refused", result.message)

    @patch("src.services.health_checker.time.monotonic")
    @patch(GET_PATH)
    def test_slow_status(
        self, mock_get: MagicMock, mock_monotonic: MagicMock
    ) -> None:
        """Latency above the threshold is 'slow'."""
        mock_get.return_value = MagicMock(status_code=200)
        mock_monotonic.side_effect = itertools.count(0.0, 6.0)
        result = probe_upstream(self._make_upstream())
        self.assertEqual(result.status, "slow")


class TestHealthChecker(unittest.IsolatedAsyncioTestCase):
    """Tests for the HealthChecker orchestrator."""

    def test_default_upstreams(self) -> None:
        """Gold API and image CDN are probed by default."""
        ids = [u["id"] for u in default_upstreams()]
        self.assertEqual(ids, ["gold_api", "image_cdn"])

    @patch("src.services.health_checker.probe_upstream")
    async def test_check_all_returns_all_upstreams(
        self, mock_probe: MagicMock,
    ) -> None:
        """check_all should return one result per upstream."""
        mock_probe.return_value = HealthResult(
            upstream_id="test",
            status="ok",
            latency_ms=100.0,
            message="",
        )

        checker = HealthChecker()
        results = await checker.check_all()

        self.assertEqual(len(results), len(checker.upstreams))


if __name__ == "__main__":
    unittest.main()
