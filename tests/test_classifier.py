"""Tests for the hostname bias classifier."""

import pytest

from webinsight.classifier import SiteProfile, classify, has_favorable_bias
from webinsight.models import Category


class TestClassify:

    def test_plain_site_has_no_bias(self):
        assert classify("https://example.com") == SiteProfile(False, False, False, False)

    def test_brand_site(self):
        profile = classify("https://www.google.com")
        assert profile.security
        assert profile.seo
        assert profile.performance
        assert not profile.accessibility

    def test_amazon_only_affects_performance(self):
        assert classify("https://www.amazon.com") == SiteProfile(
            security=False, seo=False, performance=True, accessibility=False
        )

    @pytest.mark.parametrize("url", [
        "https://www.usa.gov",
        "https://www.mit.edu",
        "https://wikipedia.org",
    ])
    def test_institutional_sites(self, url):
        profile = classify(url)
        assert profile.accessibility
        assert not profile.security

    def test_keyword_sets_are_independent(self):
        profile = classify("https://facebook.org")
        assert profile == SiteProfile(True, True, True, True)

    def test_bias_for(self):
        profile = classify("https://www.usa.gov")
        assert profile.bias_for(Category.ACCESSIBILITY) is True
        assert profile.bias_for(Category.SEO) is False


class TestHasFavorableBias:

    def test_case_insensitive(self):
        assert has_favorable_bias("https://WWW.GOOGLE.COM", Category.SEO)

    def test_only_hostname_is_matched(self):
        assert not has_favorable_bias("https://example.com/google", Category.SEO)
        assert not has_favorable_bias("https://example.com/?q=facebook", Category.SECURITY)

    def test_substring_match(self):
        assert has_favorable_bias("https://notgoogle.net", Category.PERFORMANCE)
