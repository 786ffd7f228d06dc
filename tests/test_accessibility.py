"""Tests for the accessibility generator."""

import random
from math import floor

import pytest

from webinsight.generators.accessibility import (
    CATEGORY_TESTS,
    build_best_practices,
    generate_accessibility,
    issue_count_range,
)
from webinsight.models import Status


class TestIssueCounts:

    def test_no_critical_issues_above_90(self):
        assert issue_count_range("critical", 91) == (0, 0)
        assert issue_count_range("critical", 97) == (0, 0)

    @pytest.mark.parametrize("impact", ["critical", "serious", "moderate", "minor"])
    def test_never_grows_with_score(self, impact):
        bounds = [issue_count_range(impact, score) for score in range(50, 101)]
        for lower, higher in zip(bounds, bounds[1:]):
            assert higher[1] <= lower[1]


class TestGenerateAccessibility:

    @pytest.mark.parametrize("seed", range(40))
    def test_invariants(self, seed):
        data = generate_accessibility("https://example.com", seed % 2 == 0, random.Random(seed))

        assert 0 <= data.passed_tests <= data.total_tests
        assert 80 <= data.total_tests <= 100
        assert data.passed_tests == floor(data.total_tests * data.score / 100)
        if data.score > 90:
            assert data.critical == []

        assert data.status == Status.from_score(data.score, 90, 70)

    @pytest.mark.parametrize("seed", range(20))
    def test_issues_unique_per_tier(self, seed):
        data = generate_accessibility("https://example.com", False, random.Random(seed))
        for tier, issues in (
            ("critical", data.critical),
            ("serious", data.serious),
            ("moderate", data.moderate),
            ("minor", data.minor),
        ):
            codes = [i.code for i in issues]
            assert len(codes) == len(set(codes))
            assert all(i.impact == tier for i in issues)

    @pytest.mark.parametrize("seed", range(20))
    def test_score_ranges(self, seed):
        biased = generate_accessibility("https://www.usa.gov", True, random.Random(seed))
        plain = generate_accessibility("https://example.com", False, random.Random(seed))
        assert 85 <= biased.score <= 97
        assert 55 <= plain.score <= 85

    @pytest.mark.parametrize("seed", range(10))
    def test_categories(self, seed):
        data = generate_accessibility("https://example.com", False, random.Random(seed))
        assert [(c.name, c.total_tests) for c in data.categories] == CATEGORY_TESTS
        for category in data.categories:
            assert 0 <= category.passed_tests <= category.total_tests
            assert abs(category.score - data.score) <= 5
            assert category.status == Status.from_score(category.score, 81, 61)

    def test_issue_count(self):
        data = generate_accessibility("https://example.com", False, random.Random(5))
        assert data.issue_count == (
            len(data.critical) + len(data.serious) + len(data.moderate) + len(data.minor)
        )


class TestBestPractices:

    def test_high_score_passes(self):
        statuses = {p.name: p.status for p in build_best_practices(90)}
        assert set(statuses.values()) == {"passed"}

    def test_low_score_fails_error_identification(self):
        statuses = {p.name: p.status for p in build_best_practices(60)}
        assert statuses["Error Identification"] == "failed"
        assert statuses["Focus Order"] == "warning"
