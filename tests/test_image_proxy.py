# tests/test_image_proxy.py

"""Tests for the allowlisted image proxy."""

import unittest
from unittest.mock import MagicMock, patch

from src.errors import InvalidProxyTarget, ProxyUpstreamFailure
from src.services.image_proxy import ImageProxy

GET_PATH = "src.services.image_proxy.curl_requests.get"


def _response(
    status: int = 200,
    chunks: list[bytes] | None = None,
    content_type: str | None = "image/png",
) -> MagicMock:
    """Build a fake streaming curl_cffi response."""
    resp = MagicMock()
    resp.status_code = status
    resp.headers = {"content-type": content_type} if content_type else {}
    resp.iter_content.return_value = iter(chunks or [b"\x89PNG", b"data"])
    return resp


class TestValidate(unittest.TestCase):
    """ImageProxy.validate allowlist checks."""

    def setUp(self) -> None:
        self.proxy = ImageProxy(allowed_hosts=["cdn.shopify.com"])

    def test_allowed_host(self) -> None:
        """The CDN host passes."""
        url = "https://cdn.shopify.com/a.png"
        self.assertEqual(self.proxy.validate(url), url)

    def test_host_is_case_insensitive(self) -> None:
        """Hostnames compare case-insensitively."""
        self.proxy.validate("https://CDN.Shopify.com/a.png")

    def test_other_host_rejected(self) -> None:
        """evil.example.com is refused."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate("https://evil.example.com/x.png")

    def test_host_embedded_in_path_rejected(self) -> None:
        """A substring match is not enough."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate(
                "https://evil.example.com/cdn.shopify.com/x.png"
            )

    def test_lookalike_suffix_rejected(self) -> None:
        """cdn.shopify.com.evil.net is not the CDN."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate("https://cdn.shopify.com.evil.net/x.png")

    def test_userinfo_trick_rejected(self) -> None:
        """Credentials before the host do not fool the check."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate("https://cdn.shopify.com@evil.net/x.png")

    def test_malformed_url_rejected(self) -> None:
        """An unparseable host is a bad target, not a crash."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate("https://[cdn.shopify.com/x.png")

    def test_non_http_scheme_rejected(self) -> None:
        """Only http(s) is proxied."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.validate("file://cdn.shopify.com/etc/passwd")

    def test_missing_url(self) -> None:
        """No url parameter is its own message."""
        with self.assertRaises(InvalidProxyTarget) as ctx:
            self.proxy.validate(None)
        self.assertEqual(
            ctx.exception.public_message, "URL parameter required"
        )

    def test_default_allowlist_from_settings(self) -> None:
        """The configured CDN host is allowed by default."""
        ImageProxy().validate("https://cdn.shopify.com/a.png")


class TestFetch(unittest.TestCase):
    """ImageProxy.fetch streaming."""

    def setUp(self) -> None:
        self.proxy = ImageProxy(allowed_hosts=["cdn.shopify.com"], timeout=10)

    @patch(GET_PATH)
    def test_streams_bytes_unchanged(self, mock_get: MagicMock) -> None:
        """Chunks are passed through as-is."""
        resp = _response(chunks=[b"abc", b"def"])
        mock_get.return_value = resp

        image = self.proxy.fetch("https://cdn.shopify.com/a.png")

        self.assertEqual(image.content_type, "image/png")
        self.assertEqual(b"".join(image.chunks), b"abcdef")
        resp.close.assert_called_once()

    @patch(GET_PATH)
    def test_fetch_is_streaming_and_time_bounded(
        self, mock_get: MagicMock
    ) -> None:
        """The upstream request streams with a 10 s timeout."""
        mock_get.return_value = _response()
        self.proxy.fetch("https://cdn.shopify.com/a.png")
        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs["timeout"], 10)
        self.assertTrue(kwargs["stream"])

    @patch(GET_PATH)
    def test_missing_content_type_defaults(self, mock_get: MagicMock) -> None:
        """Without a content type the body is generic binary."""
        mock_get.return_value = _response(content_type=None)
        image = self.proxy.fetch("https://cdn.shopify.com/a.png")
        self.assertEqual(image.content_type, "application/octet-stream")

    @patch(GET_PATH)
    def test_disallowed_host_never_fetched(self, mock_get: MagicMock) -> None:
        """Validation happens before any network call."""
        with self.assertRaises(InvalidProxyTarget):
            self.proxy.fetch("https://evil.example.com/x.png")
        mock_get.assert_not_called()

    @patch(GET_PATH)
    def test_transport_error(self, mock_get: MagicMock) -> None:
        """Timeouts surface as ProxyUpstreamFailure."""
        mock_get.side_effect = TimeoutError("timed out")
        with self.assertRaises(ProxyUpstreamFailure):
            self.proxy.fetch("https://cdn.shopify.com/a.png")

    @patch(GET_PATH)
    def test_redirects_not_followed(self, mock_get: MagicMock) -> None:
        """A redirect off the CDN is refused rather than followed."""
        resp = _response(status=302)
        resp.headers = {"location": "http://169.254.169.254/latest"}
        mock_get.return_value = resp
        with self.assertRaises(ProxyUpstreamFailure):
            self.proxy.fetch("https://cdn.shopify.com/a.png")
        self.assertFalse(mock_get.call_args.kwargs["allow_redirects"])
        resp.close.assert_called_once()

    @patch(GET_PATH)
    def test_upstream_404(self, mock_get: MagicMock) -> None:
        """An HTTP error from the CDN is a proxy failure."""
        resp = _response(status=404)
        mock_get.return_value = resp
        with self.assertRaises(ProxyUpstreamFailure):
            self.proxy.fetch("https://cdn.shopify.com/missing.png")
        resp.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
