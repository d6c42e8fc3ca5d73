# src/services/health_checker.py

"""Liveness payload and upstream connectivity health checker."""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings

logger = logging.getLogger("jewelry_catalog.health")

_HEALTH_TIMEOUT = 10  # seconds per upstream


@dataclass
class HealthResult:
    """Result of a single upstream health check."""

    upstream_id: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def liveness() -> dict[str, Any]:
    """Body of the ``/api/health`` liveness probe."""
    return {
        "success": True,
        "message": "Product Listing API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def default_upstreams() -> list[dict[str, str]]:
    """The gold price API plus the first allowlisted image CDN host."""
    upstreams = [{"id": "gold_api", "url": Settings.GOLD_API_URL}]
    if Settings.IMAGE_PROXY_ALLOWED_HOSTS:
        host = Settings.IMAGE_PROXY_ALLOWED_HOSTS[0]
        upstreams.append({"id": "image_cdn", "url": f"https://{host}/"})
    return upstreams


def probe_upstream(upstream: dict[str, str]) -> HealthResult:
    """Probe a single upstream for connectivity."""
    upstream_id = upstream["id"]
    start = time.monotonic()
    try:
        resp = curl_requests.get(
            upstream["url"],
            headers=Settings.DEFAULT_HEADERS,
            timeout=_HEALTH_TIMEOUT,
            impersonate=Settings.IMPERSONATE_BROWSER,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        # A CDN root may legitimately 403/404; only 5xx means trouble
        if resp.status_code >= 500:
            return HealthResult(
                upstream_id=upstream_id,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > Settings.HEALTH_SLOW_THRESHOLD_MS:
            return HealthResult(
                upstream_id=upstream_id,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            upstream_id=upstream_id,
            status="ok",
            latency_ms=elapsed_ms,
            message=f"HTTP {resp.status_code}",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            upstream_id=upstream_id,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Runs concurrent health probes against all upstreams."""

    def __init__(
        self, upstreams: list[dict[str, str]] | None = None
    ) -> None:
        self.upstreams = (
            upstreams if upstreams is not None else default_upstreams()
        )

    async def check_all(self) -> list[HealthResult]:
        """Probe every upstream concurrently."""
        tasks = [
            asyncio.to_thread(probe_upstream, upstream)
            for upstream in self.upstreams
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.upstream_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
