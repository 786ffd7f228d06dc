"""URL validation and normalisation helpers."""

import re
from urllib.parse import urlparse


# Domain with a TLD, optional port and path
DOMAIN_PATTERN = re.compile(
    r"^[a-z0-9]+([\-.][a-z0-9]+)*\.[a-z]{2,}(:[0-9]{1,5})?(/.*)?$",
    re.IGNORECASE,
)

SITE_SUFFIXES = re.compile(r"\.(com|org|net|io)$")


class InvalidUrlError(ValueError):
    """Raised when a URL cannot be scanned."""


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme and drop a trailing slash."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    if url.endswith("/"):
        url = url[:-1]
    return url


def validate_url(url: str) -> bool:
    """Check that a URL is an http(s) URL with a real-looking hostname."""
    if not url or not url.strip():
        return False

    try:
        parsed = urlparse(url)
        # Accessing .port raises ValueError for out-of-range ports
        parsed.port
    except ValueError:
        return False

    if parsed.scheme not in ("http", "https"):
        return False
    if not parsed.hostname:
        return False

    return bool(DOMAIN_PATTERN.match(parsed.netloc))


def require_url(raw: str) -> str:
    """Normalize `raw` and raise InvalidUrlError if the result is not scannable."""
    url = normalize_url(raw)
    if not validate_url(url):
        raise InvalidUrlError(f"Not a valid website URL: {raw!r}")
    return url


def hostname(url: str) -> str:
    """Lower-cased hostname of a URL."""
    return (urlparse(url).hostname or "").lower()


def site_name(url: str) -> str:
    """Display name derived from the hostname, e.g. ``Example`` for example.com."""
    domain = hostname(url).replace("www.", "", 1)
    domain = SITE_SUFFIXES.sub("", domain)
    return domain[:1].upper() + domain[1:]
