"""Generate a standalone HTML report from a scan result."""

import re
from datetime import datetime, timezone
from html import escape
from typing import Optional

from . import config as cfg
from .models import AnalysisType, ScanResult, Status
from .urls import hostname


STATUS_COLORS = {
    Status.GOOD: "#4CAF50",
    Status.WARNING: "#FFC107",
    Status.DANGER: "#F44336",
}

# Circumference of the score ring (r=54)
RING_LENGTH = 339.3

STYLE = """\
    :root {
      --primary: #2196F3;
      --secondary: #4CAF50;
      --warning: #FFC107;
      --danger: #F44336;
    }
    body { font-family: 'Roboto', sans-serif; background-color: #F5F5F5; color: #333333; margin: 0; line-height: 1.6; }
    .container { max-width: 1200px; margin: 0 auto; padding: 20px; }
    header { background-color: white; box-shadow: 0 2px 8px rgba(0,0,0,0.1); padding: 1rem; margin-bottom: 2rem; }
    .header-content { display: flex; align-items: center; max-width: 1200px; margin: 0 auto; }
    .header-logo { color: var(--primary); font-size: 1.5rem; font-weight: bold; margin-right: 1rem; }
    h1, h2, h3, h4, h5 { margin-top: 0; }
    .card { background: white; border-radius: 0.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.12); margin-bottom: 1.5rem; overflow: hidden; }
    .card-header { padding: 1rem; border-bottom: 1px solid #eee; display: flex; justify-content: space-between; align-items: center; }
    .card-body { padding: 1rem; }
    .scores-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr)); gap: 1rem; }
    .score-card { background: white; border-radius: 0.5rem; padding: 1rem; text-align: center; }
    .score-circle { position: relative; width: 120px; height: 120px; margin: 0 auto; }
    .score-circle svg { transform: rotate(-90deg); }
    .score-circle-text { position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%); font-size: 1.5rem; font-weight: bold; }
    .status-badge { padding: 0.25rem 0.5rem; border-radius: 999px; font-size: 0.75rem; font-weight: 500; }
    .status-good { background-color: rgba(76, 175, 80, 0.1); color: var(--secondary); }
    .status-warning { background-color: rgba(255, 193, 7, 0.1); color: var(--warning); }
    .status-danger { background-color: rgba(244, 67, 54, 0.1); color: var(--danger); }
    .overview-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr)); gap: 1rem; margin-bottom: 1.5rem; }
    .overview-item { border: 1px solid #eee; border-radius: 0.5rem; padding: 1rem; background: white; }
    .overview-item h4 { margin: 0 0 0.5rem 0; font-size: 0.875rem; color: #666; }
    .status-indicator { display: inline-block; width: 0.75rem; height: 0.75rem; border-radius: 50%; margin-right: 0.5rem; }
    .code-block { font-family: 'Source Code Pro', monospace; background-color: #f5f5f5; padding: 0.5rem; border-radius: 0.25rem; font-size: 0.85rem; overflow-x: auto; }
    .tag { padding: 0.25rem 0.5rem; background: #f5f5f5; border-radius: 0.25rem; font-size: 0.85rem; margin-right: 0.5rem; }
    table { width: 100%; border-collapse: collapse; margin: 1rem 0; }
    th, td { padding: 0.75rem; text-align: left; border-bottom: 1px solid #eee; }
    th { font-weight: 500; background-color: #f9f9f9; }
    .section { margin-bottom: 2rem; }
    footer { text-align: center; margin-top: 3rem; padding: 1rem; color: #666; font-size: 0.875rem; }
    @media print {
      body { background: white; }
      .card { box-shadow: none; border: 1px solid #eee; }
    }"""


def format_date(value: datetime) -> str:
    """Human-readable timestamp, e.g. 'March 5, 2025 at 02:30 PM UTC'."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return f"{value:%B} {value.day}, {value:%Y} at {value:%I:%M %p} {value.tzname()}"


def report_filename(url: str, when: Optional[datetime] = None) -> str:
    """Default file name, e.g. WebInsight-Scan-example.com-2025-03-05.html."""
    when = when or datetime.now(timezone.utc)
    site = re.sub(r"^https?://(www\.)?", "", url).replace("/", "-")
    return f"WebInsight-Scan-{site}-{when:%Y-%m-%d}.html"


def score_color(score: int) -> str:
    if score >= cfg.SCORE_GOOD:
        return STATUS_COLORS[Status.GOOD]
    if score >= cfg.SCORE_FAIR:
        return STATUS_COLORS[Status.WARNING]
    return STATUS_COLORS[Status.DANGER]


def score_label(score: int) -> tuple[str, str]:
    """Badge class and label for a score."""
    if score >= cfg.SCORE_GOOD:
        return "status-good", "Good"
    if score >= cfg.SCORE_FAIR:
        return "status-warning", "Needs Improvement"
    return "status-danger", "Critical"


def indicator(status: Status) -> str:
    return f'<span class="status-indicator" style="background-color:{STATUS_COLORS[status]}"></span>'


def badge(status: Status, text: str) -> str:
    return f'<span class="status-badge status-{status.value}">{escape(text)}</span>'


def overview_item(title: str, status: Status, message: str) -> str:
    return (
        f'<div class="overview-item"><h4>{escape(title)}</h4>'
        f"<div>{indicator(status)}<span>{escape(message)}</span></div></div>"
    )


def card(title: str, body: list[str], header_extra: str = "") -> list[str]:
    return [
        '<div class="card">',
        f'<div class="card-header"><h3 style="margin:0">{escape(title)}</h3>{header_extra}</div>',
        '<div class="card-body">',
        *body,
        "</div>",
        "</div>",
    ]


def table(headers: list[str], rows: list[list[str]]) -> list[str]:
    """HTML table; cells are inserted as given and must already be escaped."""
    lines = ["<table>", "<thead><tr>"]
    lines.extend(f"<th>{escape(h)}</th>" for h in headers)
    lines.append("</tr></thead>")
    lines.append("<tbody>")
    for row in rows:
        lines.append("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>")
    lines.append("</tbody>")
    lines.append("</table>")
    return lines


# ── Sections ───────────────────────────────────────────────────────────────────

def _score_card(title: str, score: int) -> str:
    offset = (100 - score) / 100 * RING_LENGTH
    css, label = score_label(score)
    return (
        f'<div class="score-card"><h3>{escape(title)}</h3>'
        '<div class="score-circle">'
        '<svg width="120" height="120" viewBox="0 0 120 120">'
        '<circle cx="60" cy="60" r="54" fill="none" stroke="#e6e6e6" stroke-width="12" />'
        f'<circle cx="60" cy="60" r="54" fill="none" stroke="{score_color(score)}" stroke-width="12" '
        f'stroke-dasharray="{RING_LENGTH}" stroke-dashoffset="{offset:.1f}" />'
        "</svg>"
        f'<div class="score-circle-text"><span>{score}</span>'
        '<span style="font-size:0.875rem;color:#666">/100</span></div>'
        "</div>"
        f'<div><span class="status-badge {css}">{label}</span></div>'
        "</div>"
    )


def _summary_section(result: ScanResult) -> list[str]:
    scores = result.scores
    return [
        '<div class="card">',
        '<div class="card-header"><div>',
        f'<h2 style="margin:0">Analysis Results for {escape(result.url)}</h2>',
        f'<p style="margin:0;color:#666">Scan completed on {format_date(result.scan_date)}</p>',
        "</div></div>",
        '<div class="card-body" style="background-color:#f9f9f9">',
        '<div class="scores-grid">',
        _score_card("Overall Score", scores.overall),
        _score_card("SEO Health", scores.seo),
        _score_card("Security Rating", scores.security),
        _score_card("Performance", scores.performance),
        _score_card("Accessibility", scores.accessibility),
        "</div>",
        "</div>",
        "</div>",
    ]


def _competitor_section(result: ScanResult) -> list[str]:
    analysis = result.seo.competitor_analysis
    if analysis is None:
        return []

    position = analysis.position_of(result.url)
    position_badge = (
        f'<span class="status-badge status-warning">Your Position: '
        f'#{position if position is not None else "Not found"}</span>'
    )

    ranking_rows = []
    for row in analysis.search_results:
        if row.is_sponsored:
            continue
        if row.url == result.url:
            label = '<span class="status-badge" style="color:var(--primary)">Your Site</span>'
        elif row.position <= 3:
            label = '<span class="status-badge status-good">Top Result</span>'
        else:
            label = '<span class="status-badge" style="color:#666">Competitor</span>'
        ranking_rows.append([
            f"<strong>#{row.position}</strong>",
            escape(hostname(row.url)),
            escape(row.title),
            label,
        ])

    factor_rows = [
        [
            f"<strong>{escape(f.factor)}</strong><br>"
            f'<span style="font-size:0.85rem;color:#666">{escape(f.description)}</span>',
            escape(f.importance),
            indicator(f.your_status),
            indicator(f.competitor_status),
            escape(f.improvement),
        ]
        for f in analysis.key_factors
    ]

    gap = analysis.content_gap
    tech = analysis.technical_comparison
    body = [
        f"<h4>Search Results for &quot;{escape(analysis.keyword)}&quot;</h4>",
        *table(["Position", "Website", "Title", "Status"], ranking_rows),
        '<h4 style="margin-top:2rem">Key Ranking Factors</h4>',
        *table(["Factor", "Importance", "Your Status", "Top Sites", "Improvement"], factor_rows),
        "<h4>Content Gap Analysis</h4>",
        "<h5>Missing Keywords</h5>",
        "<div>" + "".join(f'<span class="tag">{escape(k)}</span>' for k in gap.missing_keywords) + "</div>",
        "<h5>Missing Topics</h5>",
        "<div>" + "".join(f'<span class="tag">{escape(t)}</span>' for t in gap.missing_topics) + "</div>",
        "<h4>Technical Comparison</h4>",
        *table(["Metric", "Your Site", "Top Site", "Difference"], [
            [
                "<strong>Load Speed</strong>",
                escape(tech.load_speed.yours),
                escape(tech.load_speed.competitor),
                escape(tech.load_speed.difference),
            ],
            [
                "<strong>Mobile Optimization</strong>",
                indicator(tech.mobile_optimization.yours),
                indicator(tech.mobile_optimization.competitor),
                "",
            ],
            [
                "<strong>Backlinks</strong>",
                str(tech.backlinks.yours),
                str(tech.backlinks.competitor),
                escape(tech.backlinks.quality_assessment),
            ],
        ]),
        "<h4>Recommendations</h4>",
        "<ul>",
        *(f"<li>{escape(r)}</li>" for r in gap.recommendations),
        "</ul>",
    ]
    return card("Search Rankings Comparison", body, position_badge)


def _seo_section(result: ScanResult) -> list[str]:
    seo = result.seo
    lines = [
        '<div class="section">',
        "<h2>SEO Analysis</h2>",
        '<div class="overview-grid">',
        overview_item("Meta Title", seo.meta_title.status, seo.meta_title.message),
        overview_item("Meta Description", seo.meta_description.status, seo.meta_description.message),
        overview_item("Headings", seo.headings.status, seo.headings.message),
        overview_item("Images", seo.images.status, seo.images.message),
        "</div>",
    ]
    lines.extend(_competitor_section(result))

    # Meta tags
    meta_body = []
    for title, tag, recommended, empty in (
        ("Title Tag", seo.meta_title, "50-60", "No title tag found"),
        ("Meta Description", seo.meta_description, "120-158", "No meta description found"),
        ("Canonical URL", seo.canonical, None, "No canonical URL found"),
        ("Viewport Meta Tag", seo.viewport, None, "No viewport meta tag found"),
    ):
        meta_body.append(f"<h4>{title}</h4>")
        meta_body.append(f'<div class="code-block">{escape(tag.value or empty)}</div>')
        if recommended:
            detail = f"Length: {len(tag.value)} characters (Recommended: {recommended})"
        else:
            detail = tag.message
        meta_body.append(f"<div>{indicator(tag.status)}<span>{escape(detail)}</span></div>")
        if tag.suggestion:
            meta_body.append(f'<div style="font-weight:500">Suggestion: {escape(tag.suggestion)}</div>')
    lines.extend(card("Meta Tags Analysis", meta_body))

    # Headings
    heading_body = ["<h4>Heading Hierarchy</h4>", '<ul style="list-style:none;padding:0">']
    for level, values in (("H1", seo.headings.h1), ("H2", seo.headings.h2), ("H3", seo.headings.h3)):
        if values:
            heading_body.append(
                f'<li><span style="color:var(--primary)">{level}:</span> '
                f"{escape(', '.join(values))}</li>"
            )
    heading_body.append("</ul>")
    heading_body.append("<h4>Analysis</h4>")
    heading_body.append('<ul style="list-style:none;padding:0">')
    for item in seo.headings_analysis:
        icon = "✓" if item.type == AnalysisType.SUCCESS else "⚠"
        heading_body.append(
            f'<li class="analysis-{item.type.value}"><span>{icon}</span> {escape(item.message)}</li>'
        )
    heading_body.append("</ul>")
    lines.extend(card(
        "Heading Structure", heading_body, badge(seo.headings.status, seo.headings.message)
    ))

    # Images
    missing = len(seo.images_without_alt)
    if missing:
        image_badge = badge(Status.DANGER, f"{missing} {'Issue' if missing == 1 else 'Issues'}")
        image_body = [
            "<h4>Images Without Alt Text</h4>",
            *table(["File", "Dimensions", "Suggested Alt Text"], [
                [
                    f'<span class="code-block">{escape(img.src.rsplit("/", 1)[-1])}</span>',
                    escape(img.dimensions or "Unknown"),
                    escape(img.suggested_alt),
                ]
                for img in seo.images_without_alt
            ]),
        ]
    else:
        image_badge = badge(Status.GOOD, "No Issues")
        image_body = []
    image_body.append("<h4>Image Optimization Tips</h4>")
    image_body.append("<ul>")
    image_body.extend(f"<li>{escape(tip)}</li>" for tip in seo.image_optimization_tips)
    image_body.append("</ul>")
    lines.extend(card("Image Optimization", image_body, image_badge))

    lines.append("</div>")
    return lines


def _security_section(result: ScanResult) -> list[str]:
    security = result.security
    ssl = security.ssl
    lines = [
        '<div class="section">',
        "<h2>Security Assessment</h2>",
        '<div class="overview-grid">',
        overview_item("SSL Certificate", ssl.status, ssl.message),
        overview_item("HTTP Headers", security.headers.status, security.headers.message),
        overview_item("Content Security", security.content_security.status, security.content_security.message),
        overview_item("HTTPS Redirect", security.https_redirect.status, security.https_redirect.message),
        "</div>",
    ]

    ssl_label = {Status.GOOD: "Valid", Status.WARNING: "Warning", Status.DANGER: "Invalid"}[ssl.status]
    details = [
        ("Common Name", ssl.common_name),
        ("Issuer", ssl.issuer),
        ("Valid From", format_date(ssl.valid_from)),
        ("Valid Until", f"{format_date(ssl.valid_until)} ({ssl.days_remaining} days remaining)"),
        ("Key Strength", ssl.key_strength),
        ("Signature Algorithm", ssl.signature_algorithm),
    ]
    protocol_rows = []
    for protocol in ssl.protocols:
        if protocol.enabled and not protocol.secure:
            state = Status.DANGER
        else:
            state = Status.GOOD
        protocol_rows.append([
            escape(protocol.name),
            f"{indicator(state)}<span>{'Enabled' if protocol.enabled else 'Disabled'}</span>",
            escape(protocol.recommendation),
        ])
    lines.extend(card("SSL Certificate", [
        "<h4>Certificate Details</h4>",
        *table(["Field", "Value"], [[escape(k), escape(v)] for k, v in details]),
        "<h4>SSL/TLS Configuration</h4>",
        *table(["Protocol", "Status", "Recommendation"], protocol_rows),
    ], badge(ssl.status, ssl_label)))

    missing = security.missing_headers
    if missing:
        header_badge = badge(
            Status.WARNING, f"{len(missing)} Missing {'Header' if len(missing) == 1 else 'Headers'}"
        )
    else:
        header_badge = badge(Status.GOOD, "All Security Headers Present")

    header_rows = []
    for header in security.headers.all:
        if header.implemented:
            state, label, value = Status.GOOD, "Implemented", escape(header.value)
        else:
            state = Status.DANGER if header.severity == "high" else Status.WARNING
            label, value = "Missing", '<span style="color:#666;font-style:italic">Not implemented</span>'
        header_rows.append([escape(header.name), f"{indicator(state)}<span>{label}</span>", value])

    header_body = [
        "<p>HTTP response headers can help enhance the security of your web application.</p>",
        *table(["Header", "Status", "Value"], header_rows),
    ]
    if missing:
        header_body.append("<h4>Recommended Implementations</h4>")
        for header in missing:
            color = "var(--danger)" if header.severity == "high" else "var(--warning)"
            header_body.extend([
                f'<h5 style="color:{color}">{escape(header.name)}</h5>',
                f'<p style="color:#666">{escape(header.description)}</p>',
                f'<div class="code-block">{escape(header.recommended_value)}</div>',
            ])
    lines.extend(card("Security Headers", header_body, header_badge))

    lines.append("</div>")
    return lines


def _performance_section(result: ScanResult) -> list[str]:
    perf = result.performance
    lines = [
        '<div class="section">',
        "<h2>Performance</h2>",
        '<div class="overview-grid">',
        *(overview_item(m.name, m.status, f"{m.value}{m.unit}") for m in perf.metrics),
        "</div>",
    ]

    counts = perf.resource_counts
    sizes = perf.resource_sizes
    resource_rows = [
        [name, str(count), f"{size / 1024:.0f} KB"]
        for name, count, size in (
            ("JavaScript", counts.js, sizes.js_bytes),
            ("CSS", counts.css, sizes.css_bytes),
            ("Images", counts.images, sizes.image_bytes),
            ("Fonts", counts.fonts, sizes.font_bytes),
            ("Other", counts.other, sizes.other_bytes),
            ("Total", counts.total, sizes.total_bytes),
        )
    ]
    body = [f"<p>{escape(perf.message)}</p>", *table(["Type", "Requests", "Size"], resource_rows)]

    if perf.opportunities_for_improvement:
        body.append("<h4>Opportunities</h4>")
        body.extend(table(["Opportunity", "Description", "Potential Savings"], [
            [f"<strong>{escape(o.name)}</strong>", escape(o.description), escape(o.potential_savings)]
            for o in perf.opportunities_for_improvement
        ]))

    body.append("<h4>Diagnostics</h4>")
    body.extend(table(["Diagnostic", "Status", "Details"], [
        [escape(d.name), indicator(d.status), escape(d.message)]
        for d in perf.diagnostics
    ]))
    lines.extend(card("Resources", body, badge(perf.status, perf.message)))

    lines.append("</div>")
    return lines


def _accessibility_section(result: ScanResult) -> list[str]:
    a11y = result.accessibility
    lines = [
        '<div class="section">',
        "<h2>Accessibility</h2>",
        '<div class="overview-grid">',
        *(
            overview_item(c.name, c.status, f"{c.passed_tests}/{c.total_tests} tests passed")
            for c in a11y.categories
        ),
        "</div>",
    ]

    issue_rows = []
    for issue in a11y.critical + a11y.serious + a11y.moderate + a11y.minor:
        issue_rows.append([
            escape(issue.impact),
            f"<strong>{escape(issue.message)}</strong>"
            f'<div class="code-block">{escape(issue.context)}</div>',
            escape(issue.recommendation),
        ])

    body = [f"<p>{a11y.passed_tests} of {a11y.total_tests} tests passed.</p>"]
    if issue_rows:
        body.extend(table(["Impact", "Issue", "Recommendation"], issue_rows))
    body.append("<h4>Best Practices</h4>")
    body.extend(table(["Practice", "Description", "Status"], [
        [escape(p.name), escape(p.description), escape(p.status)]
        for p in a11y.best_practices
    ]))
    lines.extend(card(
        f"Issues ({a11y.issue_count})", body, badge(a11y.status, a11y.message)
    ))

    lines.append("</div>")
    return lines


def generate_html_report(result: ScanResult, generated_at: Optional[datetime] = None) -> str:
    """Render a self-contained HTML report for a scan.

    The output depends only on `result`, except for the generation
    timestamp in the footer.
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>WebInsight Scan Report for {escape(result.url)}</title>",
        "<style>",
        STYLE,
        "</style>",
        "</head>",
        "<body>",
        "<header>",
        '<div class="header-content">',
        '<div class="header-logo">WebInsight Scanner</div>',
        "<h1>Website Analysis Report</h1>",
        "</div>",
        "</header>",
        '<div class="container">',
    ]
    lines.extend(_summary_section(result))
    lines.extend(_seo_section(result))
    lines.extend(_security_section(result))
    lines.extend(_performance_section(result))
    lines.extend(_accessibility_section(result))
    lines.extend([
        "<footer>",
        f"<p>Report generated by WebInsight Scanner on {format_date(generated_at)}</p>",
        f"<p>© {generated_at.year} WebInsight Scanner. All rights reserved.</p>",
        "</footer>",
        "</div>",
        "</body>",
        "</html>",
        "",
    ])
    return "\n".join(lines)
