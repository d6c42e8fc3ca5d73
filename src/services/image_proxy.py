# src/services/image_proxy.py

"""Allowlisted pass-through fetch of catalog images."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import urlparse

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.errors import InvalidProxyTarget, ProxyUpstreamFailure

logger = logging.getLogger("jewelry_catalog.image_proxy")

_CHUNK_SIZE = 64 * 1024


@dataclass
class ProxiedImage:
    """An upstream image response ready to be streamed to the client."""

    content_type: str
    chunks: Iterator[bytes]


class ImageProxy:
    """Streams images from the configured CDN hosts only."""

    def __init__(
        self,
        allowed_hosts: list[str] | None = None,
        timeout: int | None = None,
    ) -> None:
        self.allowed_hosts = frozenset(
            h.lower()
            for h in (
                allowed_hosts
                if allowed_hosts is not None
                else Settings.IMAGE_PROXY_ALLOWED_HOSTS
            )
        )
        self.timeout = timeout or Settings.IMAGE_FETCH_TIMEOUT

    def validate(self, url: str | None) -> str:
        """Return *url* if it is an http(s) URL on an allowed host."""
        if not url:
            raise InvalidProxyTarget(
                "Missing url parameter",
                public_message="URL parameter required",
            )
        try:
            parsed = urlparse(url)
            host = (parsed.hostname or "").lower()
        except ValueError as exc:
            logger.warning("Malformed image proxy target %s: %s", url, exc)
            raise InvalidProxyTarget(f"Malformed URL {url!r}") from exc
        if parsed.scheme not in ("http", "https") or host not in self.allowed_hosts:
            logger.warning("Rejected image proxy target %s", url)
            raise InvalidProxyTarget(f"Disallowed image host {host!r}")
        return url

    def fetch(self, url: str | None) -> ProxiedImage:
        """Open a streaming GET for an allowlisted image URL."""
        target = self.validate(url)
        try:
            resp = curl_requests.get(
                target,
                headers=Settings.DEFAULT_HEADERS,
                timeout=self.timeout,
                impersonate=Settings.IMPERSONATE_BROWSER,
                stream=True,
                allow_redirects=False,
            )
        except Exception as exc:
            logger.error("Image proxy error for %s: %s", target, exc)
            raise ProxyUpstreamFailure(str(exc)) from exc

        # Redirects are not followed, so a 3xx is a failure too
        if resp.status_code >= 300:
            resp.close()
            logger.error(
                "Image proxy error for %s: HTTP %d", target, resp.status_code
            )
            raise ProxyUpstreamFailure(f"Upstream HTTP {resp.status_code}")

        content_type = resp.headers.get("content-type") or "application/octet-stream"
        return ProxiedImage(
            content_type=content_type,
            chunks=self._iter_body(resp, target),
        )

    @staticmethod
    def _iter_body(
        resp: curl_requests.Response, target: str
    ) -> Iterator[bytes]:
        """Yield the upstream body unchanged, closing the response after."""
        try:
            yield from resp.iter_content(chunk_size=_CHUNK_SIZE)
        finally:
            resp.close()
            logger.debug("Finished streaming %s", target)
