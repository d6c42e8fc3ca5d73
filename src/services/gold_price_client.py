# src/services/gold_price_client.py

"""Client for the live gold spot price API."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.errors import UpstreamUnavailable

logger = logging.getLogger("jewelry_catalog.gold_api")


class GoldPriceClient:
    """Fetch the USD gold price per troy ounce.

    A single attempt is made per call; retries are the caller's
    decision. Every failure mode surfaces as ``UpstreamUnavailable``.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.url = url or Settings.GOLD_API_URL
        self.timeout = timeout or Settings.GOLD_FETCH_TIMEOUT

    def fetch_price_per_ounce(self) -> float:
        """GET the spot price and return it in USD per troy ounce."""
        try:
            resp = curl_requests.get(
                self.url,
                headers=Settings.DEFAULT_HEADERS,
                timeout=self.timeout,
                impersonate=Settings.IMPERSONATE_BROWSER,
            )
        except Exception as exc:
            raise UpstreamUnavailable(
                f"Gold API request failed: {exc}"
            ) from exc

        if not 200 <= resp.status_code < 300:
            raise UpstreamUnavailable(
                f"Gold API returned HTTP {resp.status_code}"
            )

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable(
                "Gold API returned a non-JSON body"
            ) from exc

        price = self._extract_price(payload)
        logger.info(
            "Gold API price $%.2f per ounce (updated %s)",
            price,
            payload.get("updatedAtReadable") or "recently",
        )
        return price

    @staticmethod
    def _extract_price(payload: Any) -> float:
        """Pull a positive numeric ``price`` out of the API payload."""
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(
                "Invalid response format from gold API"
            )
        raw = payload.get("price")
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise UpstreamUnavailable(
                "Invalid response format from gold API"
            )
        if raw <= 0:
            raise UpstreamUnavailable(
                f"Gold API returned non-positive price {raw}"
            )
        return float(raw)
