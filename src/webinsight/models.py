"""Data models for website scan results."""

import re
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class Status(Enum):
    """Health indicator attached to a metric."""
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"

    @classmethod
    def from_value(cls, value: float, good: float, warning: float) -> "Status":
        """Status for a lower-is-better value: below `good` is good, below `warning` is a warning."""
        if value < good:
            return cls.GOOD
        if value < warning:
            return cls.WARNING
        return cls.DANGER

    @classmethod
    def from_score(cls, score: float, good: float, warning: float) -> "Status":
        """Status for a higher-is-better score."""
        if score >= good:
            return cls.GOOD
        if score >= warning:
            return cls.WARNING
        return cls.DANGER


class Category(Enum):
    """The four analysis domains."""
    SECURITY = "security"
    SEO = "seo"
    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"


def _camel(name: str) -> str:
    return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), name)


def _serialize(value: Any) -> Any:
    if is_dataclass(value):
        return {
            _camel(f.name): _serialize(getattr(value, f.name))
            for f in fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


class Serializable:
    """Mixin giving dataclasses a camelCase JSON-ready dict."""

    def to_dict(self) -> dict[str, Any]:
        return _serialize(self)


@dataclass
class StatusMessage(Serializable):
    """A status plus a human-readable message."""
    status: Status
    message: str


@dataclass
class UrlCheck(Serializable):
    """Result of the reachability check run before a scan."""
    success: bool
    status: int
    url: str


# ── Security ───────────────────────────────────────────────────────────────────

@dataclass
class TlsProtocol(Serializable):
    name: str
    enabled: bool
    secure: bool
    recommendation: str


@dataclass
class SslCertificate(Serializable):
    """Certificate summary shown in the SSL panel."""
    status: Status
    message: str
    common_name: str
    issuer: str
    valid_from: datetime
    valid_until: datetime
    days_remaining: int
    key_strength: str
    signature_algorithm: str
    protocols: list[TlsProtocol] = field(default_factory=list)


@dataclass
class SecurityHeader(Serializable):
    name: str
    implemented: bool
    value: str
    severity: str  # high, medium or low
    description: str
    recommended_value: str


@dataclass
class SecurityHeaders(Serializable):
    status: Status
    message: str
    all: list[SecurityHeader] = field(default_factory=list)


@dataclass
class MissingHeader(Serializable):
    """Advisory entry for a header that is not implemented."""
    name: str
    severity: str
    description: str
    recommended_value: str


@dataclass
class OutdatedLibrary(Serializable):
    name: str
    version: str
    latest_version: str
    severity: str
    description: str


@dataclass
class VulnerabilityExample(Serializable):
    location: str
    severity: str
    details: str
    type: Optional[str] = None


@dataclass
class VulnerabilityFinding(Serializable):
    """An injection class finding; `count` is zero whenever `found` is false."""
    found: bool
    count: int
    examples: list[VulnerabilityExample] = field(default_factory=list)


@dataclass
class OpenPort(Serializable):
    port: int
    service: str
    secure: bool


@dataclass
class Misconfigurations(Serializable):
    directory_listing: bool
    admin_panel_exposed: bool
    server_info_leakage: bool


@dataclass
class Vulnerabilities(Serializable):
    outdated_libraries: list[OutdatedLibrary]
    xss: VulnerabilityFinding
    sql_injection: VulnerabilityFinding
    open_ports: list[OpenPort]
    misconfigurations: Misconfigurations


@dataclass
class SecurityData(Serializable):
    """Security category payload."""
    is_https: bool
    posture: int  # drawn score the header thresholds are applied to
    ssl: SslCertificate
    headers: SecurityHeaders
    content_security: StatusMessage
    https_redirect: StatusMessage
    missing_headers: list[MissingHeader]
    vulnerabilities: Vulnerabilities


# ── SEO ────────────────────────────────────────────────────────────────────────

@dataclass
class SeoMetaTag(Serializable):
    value: str
    status: Status
    message: str
    suggestion: Optional[str] = None


@dataclass
class SeoHeadings(Serializable):
    status: Status
    message: str
    h1: list[str] = field(default_factory=list)
    h2: list[str] = field(default_factory=list)
    h3: list[str] = field(default_factory=list)


class AnalysisType(Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class HeadingAnalysisItem(Serializable):
    type: AnalysisType
    message: str


@dataclass
class SeoImages(Serializable):
    status: Status
    message: str
    total: int
    with_alt: int
    without_alt: int


@dataclass
class ImageWithoutAlt(Serializable):
    src: str
    suggested_alt: str
    dimensions: Optional[str] = None


@dataclass
class SearchResult(Serializable):
    """One row of a search engine results page."""
    position: int
    url: str
    title: str
    description: str
    is_sponsored: bool = False


@dataclass
class KeyFactor(Serializable):
    factor: str
    description: str
    importance: str
    your_status: Status
    competitor_status: Status
    improvement: str


@dataclass
class ContentGap(Serializable):
    missing_keywords: list[str]
    missing_topics: list[str]
    recommendations: list[str]


@dataclass
class LoadSpeedComparison(Serializable):
    yours: str
    competitor: str
    difference: str


@dataclass
class MobileComparison(Serializable):
    yours: Status
    competitor: Status


@dataclass
class BacklinkComparison(Serializable):
    yours: int
    competitor: int
    quality_assessment: str


@dataclass
class TechnicalComparison(Serializable):
    load_speed: LoadSpeedComparison
    mobile_optimization: MobileComparison
    backlinks: BacklinkComparison


@dataclass
class CompetitorAnalysis(Serializable):
    keyword: str
    search_results: list[SearchResult]
    key_factors: list[KeyFactor]
    content_gap: ContentGap
    technical_comparison: TechnicalComparison

    def position_of(self, url: str) -> Optional[int]:
        """Rank of `url` in the results, if listed."""
        for result in self.search_results:
            if result.url == url:
                return result.position
        return None


@dataclass
class SeoData(Serializable):
    """SEO category payload."""
    meta_title: SeoMetaTag
    meta_description: SeoMetaTag
    headings: SeoHeadings
    headings_analysis: list[HeadingAnalysisItem]
    images: SeoImages
    canonical: SeoMetaTag
    viewport: SeoMetaTag
    images_without_alt: list[ImageWithoutAlt]
    image_optimization_tips: list[str]
    keyword_density: dict[str, float]
    text_to_html_ratio: int
    competitor_analysis: Optional[CompetitorAnalysis] = None


# ── Performance ────────────────────────────────────────────────────────────────

@dataclass
class PerformanceMetric(Serializable):
    name: str
    value: float
    unit: str
    status: Status
    description: str


@dataclass
class ResourceCounts(Serializable):
    """Request counts by resource type; `total` is always the sum of the parts."""
    js: int
    css: int
    images: int
    fonts: int
    other: int
    total: int = field(init=False)

    def __post_init__(self):
        self.total = self.js + self.css + self.images + self.fonts + self.other


@dataclass
class ResourceSizes(Serializable):
    """Transfer sizes in bytes; `total_bytes` is always the sum of the parts."""
    js_bytes: int
    css_bytes: int
    image_bytes: int
    font_bytes: int
    other_bytes: int
    total_bytes: int = field(init=False)

    def __post_init__(self):
        self.total_bytes = (
            self.js_bytes + self.css_bytes + self.image_bytes
            + self.font_bytes + self.other_bytes
        )


@dataclass
class Opportunity(Serializable):
    name: str
    description: str
    potential_savings: str


@dataclass
class Diagnostic(Serializable):
    name: str
    status: Status
    message: str


@dataclass
class PerformanceData(Serializable):
    """Performance category payload."""
    status: Status
    message: str
    load_time: PerformanceMetric
    first_contentful_paint: PerformanceMetric
    largest_contentful_paint: PerformanceMetric
    cumulative_layout_shift: PerformanceMetric
    total_blocking_time: PerformanceMetric
    speed_index: PerformanceMetric
    resource_counts: ResourceCounts
    resource_sizes: ResourceSizes
    opportunities_for_improvement: list[Opportunity] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def metrics(self) -> list[PerformanceMetric]:
        return [
            self.load_time,
            self.first_contentful_paint,
            self.largest_contentful_paint,
            self.cumulative_layout_shift,
            self.total_blocking_time,
            self.speed_index,
        ]


# ── Accessibility ──────────────────────────────────────────────────────────────

@dataclass
class AccessibilityIssue(Serializable):
    code: str
    impact: str  # critical, serious, moderate or minor
    message: str
    context: str
    selector: str
    recommendation: str


@dataclass
class AccessibilityCategory(Serializable):
    """Score bucket for one WCAG principle."""
    name: str
    score: int
    passed_tests: int
    total_tests: int
    status: Status


@dataclass
class BestPractice(Serializable):
    name: str
    description: str
    status: str  # passed, warning or failed


@dataclass
class AccessibilityData(Serializable):
    """Accessibility category payload."""
    status: Status
    message: str
    score: int
    passed_tests: int
    total_tests: int
    critical: list[AccessibilityIssue] = field(default_factory=list)
    serious: list[AccessibilityIssue] = field(default_factory=list)
    moderate: list[AccessibilityIssue] = field(default_factory=list)
    minor: list[AccessibilityIssue] = field(default_factory=list)
    categories: list[AccessibilityCategory] = field(default_factory=list)
    best_practices: list[BestPractice] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return len(self.critical) + len(self.serious) + len(self.moderate) + len(self.minor)


# ── Scan result ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Scores(Serializable):
    """Category scores plus their equal-weighted overall score, all 0-100."""
    overall: int
    security: int
    seo: int
    performance: int
    accessibility: int


@dataclass(frozen=True)
class ScanResult(Serializable):
    """Complete output of one scan.

    Only the top level is frozen. The category payloads are plain dataclasses
    holding lists; treat them as read-only and derive changed copies with
    `dataclasses.replace`.
    """
    url: str
    scan_date: datetime
    scores: Scores
    security: SecurityData
    seo: SeoData
    performance: PerformanceData
    accessibility: AccessibilityData
