"""Generate performance metrics for a URL."""

import random

from ..models import (
    Diagnostic,
    Opportunity,
    PerformanceData,
    PerformanceMetric,
    ResourceCounts,
    ResourceSizes,
    Status,
)
from ..scoring import score_performance_metrics


# attribute, display name, unit, good below, warning below, description
METRIC_RULES = {
    "load_time": (
        "Load Time", "s", 2.5, 4.0,
        "Total time to fully load and render the page",
    ),
    "first_contentful_paint": (
        "First Contentful Paint", "s", 2.0, 4.0,
        "Time when the first text or image is painted",
    ),
    "largest_contentful_paint": (
        "Largest Contentful Paint", "s", 2.5, 4.0,
        "Time when the largest text or image is painted",
    ),
    "cumulative_layout_shift": (
        "Cumulative Layout Shift", "", 0.1, 0.25,
        "Measures visual stability as page elements move around during loading",
    ),
    "total_blocking_time": (
        "Total Blocking Time", "ms", 200, 600,
        "Sum of all time periods when the main thread was blocked",
    ),
    "speed_index": (
        "Speed Index", "s", 3.4, 5.8,
        "How quickly the contents of a page are visibly populated",
    ),
}

# (fast range, slow range) per metric
METRIC_RANGES = {
    "load_time": ((1.2, 2.5), (2.5, 5.5)),
    "first_contentful_paint": ((0.8, 1.5), (1.5, 3.0)),
    "largest_contentful_paint": ((1.5, 2.5), (2.5, 4.5)),
    "cumulative_layout_shift": ((0.01, 0.05), (0.05, 0.25)),
    "total_blocking_time": ((50, 150), (150, 600)),
    "speed_index": ((1.5, 3.0), (3.0, 7.0)),
}

# (fast count range, slow count range, bytes-per-resource range)
RESOURCE_RANGES = {
    "js": ((15, 25), (5, 15), (50_000, 200_000)),
    "css": ((3, 8), (2, 5), (10_000, 50_000)),
    "images": ((20, 40), (5, 20), (20_000, 100_000)),
    "fonts": ((1, 4), (1, 4), (20_000, 80_000)),
    "other": ((2, 10), (2, 10), (5_000, 20_000)),
}

IMAGE_BYTES_TRIGGER = 500_000
JS_BYTES_TRIGGER = 1_000_000
CSS_BYTES_TRIGGER = 100_000
CLS_TRIGGER = 0.1
TBT_TRIGGER = 300

MB = 1024 * 1024


def rating(status: Status) -> str:
    return {
        Status.GOOD: "Good",
        Status.WARNING: "Needs Improvement",
        Status.DANGER: "Poor",
    }[status]


def draw_metrics(bias: bool, rng: random.Random) -> dict[str, float]:
    values = {}
    for name, (fast, slow) in METRIC_RANGES.items():
        low, high = fast if bias else slow
        values[name] = round(rng.uniform(low, high), 2)
    # Blocking time is reported in whole milliseconds
    values["total_blocking_time"] = round(values["total_blocking_time"])
    return values


def build_metric(name: str, value: float) -> PerformanceMetric:
    label, unit, good, warning, description = METRIC_RULES[name]
    return PerformanceMetric(
        name=label,
        value=value,
        unit=unit,
        status=Status.from_value(value, good, warning),
        description=description,
    )


def draw_resources(bias: bool, rng: random.Random) -> tuple[ResourceCounts, ResourceSizes]:
    """Draw per-type counts and bytes; totals are sums computed by the models."""
    counts = {}
    sizes = {}
    for kind, (fast, slow, per_item) in RESOURCE_RANGES.items():
        low, high = fast if bias else slow
        counts[kind] = rng.randint(low, high)
        sizes[kind] = counts[kind] * rng.randint(*per_item)

    return (
        ResourceCounts(**counts),
        ResourceSizes(
            js_bytes=sizes["js"],
            css_bytes=sizes["css"],
            image_bytes=sizes["images"],
            font_bytes=sizes["fonts"],
            other_bytes=sizes["other"],
        ),
    )


def find_opportunities(
    bias: bool,
    metrics: dict[str, float],
    sizes: ResourceSizes,
) -> list[Opportunity]:
    """Advisories whose trigger threshold was crossed by the drawn values."""
    opportunities = []

    if sizes.image_bytes > IMAGE_BYTES_TRIGGER:
        opportunities.append(Opportunity(
            name="Properly size images",
            description="Serve images that are appropriately-sized to save cellular data and improve load time.",
            potential_savings=f"{round(sizes.image_bytes * 0.6 / 1024)}KB",
        ))

    if sizes.js_bytes > JS_BYTES_TRIGGER:
        opportunities.append(Opportunity(
            name="Reduce JavaScript execution time",
            description="Consider reducing the time spent parsing, compiling, and executing JS.",
            potential_savings=f"{round(metrics['total_blocking_time'] * 0.7)}ms",
        ))

    if sizes.css_bytes > CSS_BYTES_TRIGGER:
        opportunities.append(Opportunity(
            name="Eliminate render-blocking resources",
            description=(
                "Resources are blocking the first paint of your page. Consider delivering "
                "critical JS/CSS inline and deferring all non-critical JS/styles."
            ),
            potential_savings=f"{round(metrics['first_contentful_paint'] * 0.4 * 1000)}ms",
        ))

    if not bias:
        opportunities.append(Opportunity(
            name="Serve images in next-gen formats",
            description=(
                "Image formats like WebP and AVIF often provide better compression than PNG "
                "or JPEG, which means faster downloads and less data consumption."
            ),
            potential_savings=f"{round(sizes.image_bytes * 0.4 / 1024)}KB",
        ))

    if metrics["cumulative_layout_shift"] > CLS_TRIGGER:
        opportunities.append(Opportunity(
            name="Avoid large layout shifts",
            description="Minimize layout shifts to improve user experience and visual stability.",
            potential_savings=f"CLS reduced by {metrics['cumulative_layout_shift'] * 0.7:.2f}",
        ))

    if metrics["total_blocking_time"] > TBT_TRIGGER:
        opportunities.append(Opportunity(
            name="Minimize main-thread work",
            description=(
                "Consider reducing the time spent parsing, compiling and executing JS. "
                "You may find delivering smaller JS payloads helps with this."
            ),
            potential_savings=f"{round(metrics['total_blocking_time'] * 0.5)}ms",
        ))

    return opportunities


def build_diagnostics(
    fcp_metric: PerformanceMetric,
    counts: ResourceCounts,
    sizes: ResourceSizes,
) -> list[Diagnostic]:
    fcp, fcp_status = fcp_metric.value, fcp_metric.status

    # First meaningful paint is estimated from FCP with its own, looser thresholds
    fmp_status = Status.from_value(fcp, 2.5, 4.5)

    total_mb = sizes.total_bytes / MB
    size_status = Status.from_value(total_mb, 2, 5)
    size_verdict = "be reasonable" if size_status == Status.GOOD else "slow down page loads"

    request_status = Status.from_value(counts.total, 50, 80)
    request_verdict = {
        Status.GOOD: "Good",
        Status.WARNING: "Consider reducing",
        Status.DANGER: "Too many requests",
    }[request_status]

    return [
        Diagnostic("First Contentful Paint", fcp_status, f"{fcp}s - {rating(fcp_status)}"),
        Diagnostic("First Meaningful Paint", fmp_status, f"{fcp * 1.2:.1f}s - {rating(fmp_status)}"),
        Diagnostic("Resources Size", size_status, f"Total size of {total_mb:.1f}MB may {size_verdict}"),
        Diagnostic("Resource Requests", request_status, f"{counts.total} requests - {request_verdict}"),
    ]


def generate_performance(url: str, bias: bool, rng: random.Random) -> PerformanceData:
    """Synthesize performance metrics for `url`.

    Args:
        url: Normalized URL being scanned
        bias: Draw from the faster ranges
        rng: Random source owned by this call

    Returns:
        PerformanceData with statuses, opportunities and diagnostics derived
        from one set of drawn values
    """
    values = draw_metrics(bias, rng)
    metrics = {name: build_metric(name, value) for name, value in values.items()}
    counts, sizes = draw_resources(bias, rng)

    score = score_performance_metrics({name: m.status for name, m in metrics.items()})
    if score >= 80:
        status, message = Status.GOOD, "Good performance metrics"
    elif score >= 60:
        status, message = Status.WARNING, "Performance needs improvement"
    else:
        status, message = Status.DANGER, "Poor performance"

    return PerformanceData(
        status=status,
        message=message,
        resource_counts=counts,
        resource_sizes=sizes,
        opportunities_for_improvement=find_opportunities(bias, values, sizes),
        diagnostics=build_diagnostics(metrics["first_contentful_paint"], counts, sizes),
        **metrics,
    )
