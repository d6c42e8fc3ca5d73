# src/filters/query_params.py

"""Parse raw query-string values into :class:`QueryParams`.

Unrecognised input is a no-op, never an error:

* unknown query keys are ignored;
* an empty or non-numeric bound is treated as not supplied;
* an unknown or empty ``sortBy`` disables sorting (the value is still echoed
  back in the response metadata);
* any ``sortOrder`` other than ``desc`` sorts ascending.

Defaults apply only when a sort key is absent from the query string.
"""

import logging
import math
import re
from collections.abc import Mapping

from src.config.settings import Settings
from src.models.query import QueryParams

logger = logging.getLogger("jewelry_catalog.filters")

# Leading float literal, the way a lenient browser-side parser reads it
_LEADING_FLOAT_RE = re.compile(
    r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


def parse_bound(raw: str | None) -> float | None:
    """Parse one numeric bound, returning ``None`` if unusable.

    A trailing non-numeric suffix is tolerated (``"200usd"`` → 200.0).
    """
    if raw is None or raw == "":
        return None
    match = _LEADING_FLOAT_RE.match(raw)
    if match is None:
        logger.debug("Ignoring non-numeric bound %r", raw)
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value


def parse_query_params(query: Mapping[str, str]) -> QueryParams:
    """Build :class:`QueryParams` from the ``/api/products`` query string."""
    return QueryParams(
        min_price=parse_bound(query.get("minPrice")),
        max_price=parse_bound(query.get("maxPrice")),
        min_popularity=parse_bound(query.get("minPopularity")),
        max_popularity=parse_bound(query.get("maxPopularity")),
        sort_by=query.get("sortBy", Settings.DEFAULT_SORT_BY),
        sort_order=query.get("sortOrder", Settings.DEFAULT_SORT_ORDER),
    )
