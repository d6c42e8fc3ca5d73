# src/config/settings.py

"""Central configuration for the jewelry catalog API."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the jewelry catalog API."""

    # --- Server ---
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # --- Gold price ---
    GOLD_API_URL: str = os.getenv(
        "GOLD_API_URL", "https://api.gold-api.com/price/XAU"
    )
    GOLD_PRICE_TTL: float = 6 * 60 * 60  # Seconds a fetched price stays valid
    GOLD_FETCH_TIMEOUT: int = 5         # Seconds before the price fetch times out
    TROY_OUNCE_GRAMS: float = 31.1035
    # Market estimate served when the gold API is unreachable ($3340/oz)
    FALLBACK_GOLD_PRICE_PER_GRAM: float = float(
        os.getenv("FALLBACK_GOLD_PRICE_PER_GRAM", "107.5")
    )

    # --- Image proxy ---
    IMAGE_PROXY_PATH: str = "/api/image-proxy"
    IMAGE_PROXY_ALLOWED_HOSTS: list[str] = [
        h.strip().lower()
        for h in os.getenv(
            "IMAGE_PROXY_ALLOWED_HOSTS", "cdn.shopify.com"
        ).split(",")
        if h.strip()
    ]
    IMAGE_FETCH_TIMEOUT: int = 10       # Seconds before an image fetch times out
    IMAGE_CACHE_MAX_AGE: int = 24 * 60 * 60

    # --- Health ---
    HEALTH_SLOW_THRESHOLD_MS: float = 5000.0

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json, image/avif, image/webp, */*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Querying ---
    DEFAULT_SORT_BY: str = "name"
    DEFAULT_SORT_ORDER: str = "asc"
    SORT_OPTIONS: list[dict[str, str]] = [
        {"value": "name", "label": "Name"},
        {"value": "price", "label": "Price"},
        {"value": "popularity", "label": "Popularity"},
    ]
    SORT_ORDERS: list[dict[str, str]] = [
        {"value": "asc", "label": "Ascending"},
        {"value": "desc", "label": "Descending"},
    ]
    PRICE_FILTER_STEP: int = 10
    POPULARITY_FILTER_STEP: float = 0.1

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    PRODUCTS_PATH: Path = Path(
        os.getenv("PRODUCTS_PATH", str(BASE_DIR / "data" / "products.json"))
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
