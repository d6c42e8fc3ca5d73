# src/errors.py

"""Exception taxonomy for the catalog API.

Errors that reach the HTTP layer carry the status code and the public
message used in the ``{"success": false, "error": ...}`` response body.
Detail passed to the constructor is for logs only.
"""


class CatalogError(Exception):
    """Base class for all catalog API errors."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(
        self, detail: str = "", public_message: str | None = None
    ) -> None:
        if public_message is not None:
            self.public_message = public_message
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class UpstreamUnavailable(CatalogError):
    """The gold price API could not be reached or returned garbage.

    Recovered by the price cache through the fallback price.
    """

    status_code = 503
    public_message = "Failed to fetch gold price"


class CatalogUnreadable(CatalogError):
    """The product source could not be read or parsed.

    Recovered by the loader, which serves an empty catalog.
    """

    public_message = "Failed to load products"


class NotFound(CatalogError):
    """Requested product index is outside the catalog."""

    status_code = 404
    public_message = "Product not found"


class InvalidProxyTarget(CatalogError):
    """Image proxy URL is missing or not on the allowlist."""

    status_code = 400
    public_message = "Only allowlisted image CDN URLs allowed"


class ProxyUpstreamFailure(CatalogError):
    """The image CDN fetch failed."""

    status_code = 500
    public_message = "Failed to fetch image"
