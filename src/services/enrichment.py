# src/services/enrichment.py

"""Derives price, formatted price and star rating for catalog products.

Price and rating are functions of the product record and the gold price
alone:

    price      = round2((popularity_score + 1) * weight * gold_per_gram)
    starRating = round1(popularity_score * 5)

Rounding is half-up on the exact binary value of the float, which is
what fixed-point formatting to 2 (or 1) decimals produces.
"""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

from src.config.settings import Settings
from src.models.product import EnrichedProduct, RawProduct

_CENTS = Decimal("0.01")
_TENTHS = Decimal("0.1")


def round_half_up(value: float, exponent: Decimal) -> Decimal:
    """Round *value* half-up to the precision of *exponent*."""
    return Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def format_usd(value: float) -> str:
    """Format a dollar amount with exactly two decimals, e.g. ``360.00``."""
    return f"{round_half_up(value, _CENTS):.2f}"


def calculate_price(
    popularity_score: float, weight: float, gold_price_per_gram: float
) -> Decimal:
    """Price = (popularity + 1) * weight * gold price, to the cent."""
    return round_half_up(
        (popularity_score + 1) * weight * gold_price_per_gram, _CENTS
    )


def popularity_to_stars(popularity_score: float) -> float:
    """Map a 0–1 popularity score onto a 0–5 star rating (one decimal)."""
    return float(round_half_up(popularity_score * 5, _TENTHS))


def proxy_image_url(url: str) -> str:
    """Rewrite an external image URL to go through the image proxy.

    Every reserved character is percent-encoded, so ``unquote`` of the
    ``url`` parameter returns the original string exactly.
    """
    return f"{Settings.IMAGE_PROXY_PATH}?url={quote(url, safe='')}"


def enrich(raw: RawProduct, gold_price_per_gram: float) -> EnrichedProduct:
    """Build the priced, rated, proxied view of *raw*."""
    price = calculate_price(
        raw.popularity_score, raw.weight, gold_price_per_gram
    )
    return EnrichedProduct(
        name=raw.name,
        images={
            color: proxy_image_url(url)
            for color, url in raw.images.items()
        },
        weight=raw.weight,
        popularity_score=raw.popularity_score,
        price=float(price),
        price_formatted=f"${price:.2f}",
        star_rating=popularity_to_stars(raw.popularity_score),
        extra=dict(raw.extra),
    )


def enrich_all(
    products: Iterable[RawProduct], gold_price_per_gram: float
) -> list[EnrichedProduct]:
    """Enrich every product against the same gold price, preserving order."""
    return [enrich(p, gold_price_per_gram) for p in products]
