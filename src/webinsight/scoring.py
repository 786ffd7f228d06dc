"""Category and overall scores computed from generated scan data."""

import math

from .models import AccessibilityData, PerformanceData, Scores, SecurityData, SeoData, Status


# Points deducted when an important header is not implemented
HEADER_WEIGHTS = {
    "Strict-Transport-Security": 15,
    "Content-Security-Policy": 15,
    "X-Content-Type-Options": 5,
    "X-Frame-Options": 10,
    "Referrer-Policy": 5,
    "Permissions-Policy": 5,
}

NO_HTTPS_PENALTY = 30

# (base, per occurrence)
XSS_PENALTY = (10, 5)
SQL_INJECTION_PENALTY = (15, 7)
OUTDATED_LIBRARY_PENALTY = 5

DIRECTORY_LISTING_PENALTY = 8
ADMIN_PANEL_PENALTY = 12
SERVER_INFO_PENALTY = 5

# Full points per metric; warning earns 2/3 and danger 1/3
PERFORMANCE_WEIGHTS = {
    "load_time": 30,
    "first_contentful_paint": 25,
    "largest_contentful_paint": 25,
    "cumulative_layout_shift": 20,
}

STATUS_FRACTION = {
    Status.GOOD: 1.0,
    Status.WARNING: 2 / 3,
    Status.DANGER: 1 / 3,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up."""
    return math.floor(value + 0.5)


def clamp(score: float) -> int:
    return max(0, min(100, round_half_up(score)))


def score_security(data: SecurityData) -> int:
    """Deduction-based security score."""
    score = 100

    implemented = {h.name for h in data.headers.all if h.implemented}
    for header, weight in HEADER_WEIGHTS.items():
        if header not in implemented:
            score -= weight

    if not data.is_https:
        score -= NO_HTTPS_PENALTY

    vulns = data.vulnerabilities
    if vulns.xss.found:
        base, each = XSS_PENALTY
        score -= base + vulns.xss.count * each
    if vulns.sql_injection.found:
        base, each = SQL_INJECTION_PENALTY
        score -= base + vulns.sql_injection.count * each

    score -= len(vulns.outdated_libraries) * OUTDATED_LIBRARY_PENALTY

    misconfig = vulns.misconfigurations
    if misconfig.directory_listing:
        score -= DIRECTORY_LISTING_PENALTY
    if misconfig.admin_panel_exposed:
        score -= ADMIN_PANEL_PENALTY
    if misconfig.server_info_leakage:
        score -= SERVER_INFO_PENALTY

    return clamp(score)


def score_seo(data: SeoData) -> int:
    """Deduction-based SEO score."""
    score = 100

    title = data.meta_title.value
    if not title:
        score -= 20
    elif len(title) < 10:
        score -= 15
    elif len(title) > 70:
        score -= 10

    description = data.meta_description.value
    if not description:
        score -= 15
    elif len(description) < 50:
        score -= 10
    elif len(description) > 160:
        score -= 8

    h1_count = len(data.headings.h1)
    if h1_count == 0:
        score -= 15
    elif h1_count > 1:
        score -= 8

    if data.images.total > 0:
        alt_ratio = data.images.with_alt / data.images.total
        if alt_ratio < 1:
            score -= round_half_up((1 - alt_ratio) * 15)

    if not data.canonical.value:
        score -= 5
    if not data.viewport.value:
        score -= 10

    if len(data.keyword_density) < 3:
        score -= 5
    if data.text_to_html_ratio < 10:
        score -= 8

    return clamp(score)


def score_performance_metrics(statuses: dict[str, Status]) -> int:
    """Weighted sum over the status of each scored metric."""
    total = sum(
        weight * STATUS_FRACTION[statuses[name]]
        for name, weight in PERFORMANCE_WEIGHTS.items()
    )
    return clamp(total)


def score_performance(data: PerformanceData) -> int:
    return score_performance_metrics({
        name: getattr(data, name).status for name in PERFORMANCE_WEIGHTS
    })


def score_accessibility(data: AccessibilityData) -> int:
    return data.score


def overall_score(security: int, seo: int, performance: int, accessibility: int) -> int:
    """Equal-weighted mean of the category scores."""
    return clamp(0.25 * security + 0.25 * seo + 0.25 * performance + 0.25 * accessibility)


def compute_scores(
    security: SecurityData,
    seo: SeoData,
    performance: PerformanceData,
    accessibility: AccessibilityData,
) -> Scores:
    """Score every category and combine them."""
    category_scores = {
        "security": score_security(security),
        "seo": score_seo(seo),
        "performance": score_performance(performance),
        "accessibility": score_accessibility(accessibility),
    }
    return Scores(overall=overall_score(**category_scores), **category_scores)
