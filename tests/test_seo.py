"""Tests for the SEO generator."""

import random

import pytest

from webinsight.generators.seo import (
    analyze_headings,
    assess_canonical,
    assess_description,
    assess_title,
    assess_viewport,
    generate_seo,
    summarize_headings,
    summarize_images,
)
from webinsight.models import AnalysisType, Status


SINGLE_H1 = "Page has exactly one H1 heading as recommended."


class TestMetaTags:

    def test_missing_title(self):
        tag = assess_title("")
        assert tag.status == Status.DANGER
        assert tag.suggestion

    @pytest.mark.parametrize("title, status, suggestion", [
        ("Home", Status.WARNING, "Title is too short"),
        ("a" * 10, Status.WARNING, "Title is too short"),
        ("a" * 11, Status.GOOD, None),
        ("a" * 69, Status.GOOD, None),
        ("a" * 70, Status.WARNING, "Title is too long"),
    ])
    def test_title_length(self, title, status, suggestion):
        tag = assess_title(title)
        assert tag.status == status
        assert tag.suggestion == suggestion
        assert tag.value == title

    @pytest.mark.parametrize("length, status", [
        (0, Status.DANGER),
        (20, Status.WARNING),
        (50, Status.WARNING),
        (51, Status.GOOD),
        (159, Status.GOOD),
        (160, Status.WARNING),
    ])
    def test_description_length(self, length, status):
        assert assess_description("a" * length).status == status

    def test_canonical_and_viewport(self):
        assert assess_canonical("https://example.com").status == Status.GOOD
        assert assess_canonical("").status == Status.WARNING
        assert assess_viewport("width=device-width").status == Status.GOOD
        assert assess_viewport("").status == Status.WARNING


class TestHeadings:

    def test_no_headings(self):
        analysis = analyze_headings([], [], [])
        assert [a.type for a in analysis] == [AnalysisType.ERROR, AnalysisType.WARNING]

    def test_single_good_h1(self):
        analysis = analyze_headings(["Welcome to the Example Company"], ["About"], [])
        assert analysis[0].type == AnalysisType.SUCCESS
        assert analysis[0].message == SINGLE_H1
        assert all(a.type == AnalysisType.SUCCESS for a in analysis)

    def test_short_h1(self):
        analysis = analyze_headings(["Home"], ["About"], [])
        assert analysis[1].type == AnalysisType.WARNING
        assert "too short" in analysis[1].message

    def test_multiple_h1(self):
        analysis = analyze_headings(["One heading here", "Another heading"], ["About"], [])
        assert analysis[0].type == AnalysisType.WARNING
        assert analysis[0].message.startswith("2 H1 headings found")

    def test_h3_without_h2_breaks_hierarchy(self):
        analysis = analyze_headings(["Welcome to the Example Company"], [], ["Support"])
        assert analysis[-1].type == AnalysisType.WARNING
        assert "hierarchy" in analysis[-1].message

    def test_summary(self):
        assert summarize_headings(["A"], [], []).status == Status.GOOD
        assert summarize_headings([], [], []).message == "Missing H1 heading"
        assert summarize_headings(["A", "B"], [], []).message == "Multiple H1 headings found"


class TestImages:

    def test_all_with_alt(self):
        images = summarize_images(10, 10)
        assert images.status == Status.GOOD
        assert images.without_alt == 0

    def test_some_missing(self):
        images = summarize_images(10, 7)
        assert images.status == Status.WARNING
        assert images.without_alt == 3
        assert images.message == "3 images missing alt text"


class TestGenerateSeo:

    @pytest.mark.parametrize("seed", range(40))
    def test_single_h1_iff_success(self, seed):
        data = generate_seo("https://example.com", False, random.Random(seed))
        first = data.headings_analysis[0]
        if len(data.headings.h1) == 1:
            assert first.type == AnalysisType.SUCCESS
            assert first.message == SINGLE_H1
        else:
            assert first.type != AnalysisType.SUCCESS

    @pytest.mark.parametrize("seed", range(40))
    def test_images_without_alt_count(self, seed):
        data = generate_seo("https://example.com", seed % 2 == 0, random.Random(seed))
        assert data.images.without_alt == data.images.total - data.images.with_alt
        assert len(data.images_without_alt) == data.images.without_alt
        for image in data.images_without_alt:
            assert image.src.startswith("https://example.com/images/")
            assert image.suggested_alt

    @pytest.mark.parametrize("seed", range(20))
    def test_biased_site_is_well_formed(self, seed):
        data = generate_seo("https://www.google.com", True, random.Random(seed))
        assert data.meta_title.status == Status.GOOD
        assert data.meta_description.status == Status.GOOD
        assert len(data.headings.h1) == 1
        assert len(data.keyword_density) >= 3

    @pytest.mark.parametrize("seed", range(20))
    def test_title_status_matches_value(self, seed):
        data = generate_seo("https://example.com", False, random.Random(seed))
        assert data.meta_title == assess_title(data.meta_title.value)
        assert data.meta_description == assess_description(data.meta_description.value)


class TestCompetitorAnalysis:

    def test_biased_position(self):
        data = generate_seo("https://www.google.com", True, random.Random(1))
        assert data.competitor_analysis.position_of("https://www.google.com") == 4

    def test_unbiased_position(self):
        data = generate_seo("https://example.com", False, random.Random(1))
        assert data.competitor_analysis.position_of("https://example.com") == 12

    def test_results_sorted_with_one_sponsored(self):
        analysis = generate_seo("https://example.com", False, random.Random(2)).competitor_analysis
        positions = [r.position for r in analysis.search_results]
        assert positions == sorted(positions)
        assert sum(r.is_sponsored for r in analysis.search_results) == 1

    def test_keyword(self):
        music = generate_seo("https://music.example.com", False, random.Random(3))
        plain = generate_seo("https://example.com", False, random.Random(3))
        assert music.competitor_analysis.keyword == "music app"
        assert plain.competitor_analysis.keyword == "website scanner"

    @pytest.mark.parametrize("seed", range(10))
    def test_mobile_status_follows_viewport(self, seed):
        data = generate_seo("https://example.com", False, random.Random(seed))
        mobile = data.competitor_analysis.technical_comparison.mobile_optimization.yours
        assert mobile == (Status.GOOD if data.viewport.value else Status.DANGER)

    def test_can_be_disabled(self):
        data = generate_seo("https://example.com", False, random.Random(1), include_competitors=False)
        assert data.competitor_analysis is None
