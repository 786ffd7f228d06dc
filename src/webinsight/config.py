"""Runtime configuration.

All tuneable constants live here. Override via WEBINSIGHT_* environment variables.
"""

import os


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── Scan ───────────────────────────────────────────────────────────────────────
# Seconds to hold a finished scan before returning it, so progress output
# has something to show. Does not affect results.
SCAN_DELAY_SECONDS: float = float(os.getenv("WEBINSIGHT_SCAN_DELAY", 1.5))

# Attach the competitor analysis block to SEO results
INCLUDE_COMPETITORS: bool = _flag("WEBINSIGHT_INCLUDE_COMPETITORS", True)

# ── Logging ────────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("WEBINSIGHT_LOG_LEVEL", "WARNING").upper()

# ── Search API ─────────────────────────────────────────────────────────────────
SEARCH_API_URL: str = os.getenv(
    "WEBINSIGHT_SEARCH_API_URL", "https://www.googleapis.com/customsearch/v1"
)
SEARCH_TIMEOUT: float = float(os.getenv("WEBINSIGHT_SEARCH_TIMEOUT", 10.0))
SEARCH_RESULTS: int = int(os.getenv("WEBINSIGHT_SEARCH_RESULTS", 10))

# Score at or above which a category is shown as good, and at or above which
# it is shown as needing improvement rather than critical
SCORE_GOOD: int = 80
SCORE_FAIR: int = 60
