"""Per-category result generators."""

from .security import generate_security
from .seo import generate_seo
from .performance import generate_performance
from .accessibility import generate_accessibility

__all__ = [
    "generate_security",
    "generate_seo",
    "generate_performance",
    "generate_accessibility",
]
