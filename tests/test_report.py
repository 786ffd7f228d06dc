"""Tests for the HTML report."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup

from webinsight.models import SeoMetaTag, Status
from webinsight.report import format_date, generate_html_report, report_filename


GENERATED_AT = datetime(2025, 3, 6, 9, 5, tzinfo=timezone.utc)


@pytest.fixture
def result(scan):
    return scan("https://example.com", 11)


def body_without_footer(html):
    soup = BeautifulSoup(html, "lxml")
    soup.find("footer").decompose()
    return str(soup)


class TestFormatting:

    def test_format_date(self):
        assert format_date(datetime(2025, 3, 5, 14, 30, tzinfo=timezone.utc)) == "March 5, 2025 at 02:30 PM UTC"

    def test_naive_dates_are_utc(self):
        assert format_date(datetime(2025, 12, 25, 0, 0)).endswith("12:00 AM UTC")

    def test_report_filename(self):
        name = report_filename("https://www.example.com", datetime(2025, 3, 5))
        assert name == "WebInsight-Scan-example.com-2025-03-05.html"

    def test_report_filename_with_path(self):
        name = report_filename("http://example.com/blog", datetime(2025, 3, 5))
        assert name == "WebInsight-Scan-example.com-blog-2025-03-05.html"


class TestGenerateHtmlReport:

    def test_structure(self, result):
        soup = BeautifulSoup(generate_html_report(result, GENERATED_AT), "lxml")

        assert soup.title.string == "WebInsight Scan Report for https://example.com"
        sections = [h2.get_text() for h2 in soup.find_all("h2")]
        assert "SEO Analysis" in sections
        assert "Security Assessment" in sections
        assert "Performance" in sections
        assert "Accessibility" in sections

    def test_scores_shown(self, result):
        soup = BeautifulSoup(generate_html_report(result, GENERATED_AT), "lxml")
        shown = [
            int(card.find(class_="score-circle-text").span.get_text())
            for card in soup.find_all(class_="score-card")
        ]
        s = result.scores
        assert shown == [s.overall, s.seo, s.security, s.performance, s.accessibility]

    def test_every_header_listed(self, result):
        html = generate_html_report(result, GENERATED_AT)
        for header in result.security.headers.all:
            assert header.name in html

    def test_footer_has_generation_time(self, result):
        soup = BeautifulSoup(generate_html_report(result, GENERATED_AT), "lxml")
        footer = soup.find("footer").get_text()
        assert format_date(GENERATED_AT) in footer
        assert "2025" in footer

    def test_idempotent(self, result):
        assert generate_html_report(result, GENERATED_AT) == generate_html_report(result, GENERATED_AT)

    def test_only_footer_depends_on_time(self, result):
        later = datetime(2026, 1, 1, tzinfo=timezone.utc)
        first = generate_html_report(result, GENERATED_AT)
        second = generate_html_report(result, later)
        assert first != second
        assert body_without_footer(first) == body_without_footer(second)

    def test_competitor_section_optional(self, scan):
        with_competitors = generate_html_report(scan("https://example.com", 1), GENERATED_AT)
        without = generate_html_report(
            scan("https://example.com", 1, include_competitors=False), GENERATED_AT
        )
        assert "Search Rankings Comparison" in with_competitors
        assert "Your Position: #12" in with_competitors
        assert "Search Rankings Comparison" not in without

    def test_sponsored_results_hidden(self, result):
        html = generate_html_report(result, GENERATED_AT)
        assert "sponsored-site.com" not in html

    def test_values_are_escaped(self, result):
        title = SeoMetaTag("<script>alert(1)</script>", Status.WARNING, "Title length issue")
        tampered = replace(result, seo=replace(result.seo, meta_title=title))
        html = generate_html_report(tampered, GENERATED_AT)

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_http_site_shows_invalid_certificate(self, scan):
        html = generate_html_report(scan("http://example.com", 1), GENERATED_AT)
        soup = BeautifulSoup(html, "lxml")
        badges = [b.get_text() for b in soup.find_all(class_="status-danger")]
        assert "Invalid" in badges
