"""WebInsight - website audit scanner."""

__version__ = "0.1.0"

from .models import ScanResult, Scores, Status  # noqa: E402
from .scanner import Scanner, ScanError, perform_scan  # noqa: E402
from .urls import InvalidUrlError, normalize_url, validate_url  # noqa: E402

__all__ = [
    "__version__",
    "perform_scan",
    "Scanner",
    "ScanError",
    "ScanResult",
    "Scores",
    "Status",
    "InvalidUrlError",
    "normalize_url",
    "validate_url",
]
