"""Hostname heuristics that nudge generated results up or down.

This is not a reputation signal. A hostname containing one of the keywords
for a category simply draws from that category's better ranges.
"""

from dataclasses import dataclass

from .models import Category
from .urls import hostname


BRAND_KEYWORDS = ("google", "facebook")

CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.SECURITY: BRAND_KEYWORDS,
    Category.SEO: BRAND_KEYWORDS,
    Category.PERFORMANCE: BRAND_KEYWORDS + ("amazon",),
    Category.ACCESSIBILITY: ("gov", "edu", "org"),
}


@dataclass(frozen=True)
class SiteProfile:
    """Per-category bias signals for one URL."""
    security: bool
    seo: bool
    performance: bool
    accessibility: bool

    def bias_for(self, category: Category) -> bool:
        return getattr(self, category.value)


def has_favorable_bias(url: str, category: Category) -> bool:
    """Whether the hostname of `url` matches any keyword for `category`."""
    host = hostname(url)
    return any(keyword in host for keyword in CATEGORY_KEYWORDS[category])


def classify(url: str) -> SiteProfile:
    """Compute the bias signal for every category."""
    return SiteProfile(**{
        category.value: has_favorable_bias(url, category)
        for category in Category
    })
