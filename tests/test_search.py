"""Tests for the search results client."""

import httpx
import pytest

from webinsight.search import SearchError, get_search_results, is_configured, parse_items


ITEMS = [
    {
        "link": "https://www.topcompetitor.com",
        "title": "Industry Leading Solution",
        "snippet": "The most comprehensive solution.",
        "pagemap": {"metatags": [{"og:type": "website"}]},
    },
    {
        "link": "https://ads.example.com",
        "title": "Limited Time Offer",
        "snippet": "Sign up now.",
        "pagemap": {"metatags": [{"og:type": "paid_listing"}]},
    },
    {
        "link": "https://example.com",
        "title": "Example",
        "snippet": "",
    },
]


def client_returning(status_code=200, payload=None, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload if payload is not None else {})

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestParseItems:

    def test_positions_and_sponsorship(self):
        results = parse_items(ITEMS)
        assert [r.position for r in results] == [1, 2, 3]
        assert [r.is_sponsored for r in results] == [False, True, False]
        assert results[0].url == "https://www.topcompetitor.com"
        assert results[0].description == "The most comprehensive solution."


class TestGetSearchResults:

    def test_request_parameters(self):
        seen = []
        client = client_returning(payload={"items": ITEMS}, seen=seen)
        results = get_search_results("website scanner", api_key="k", engine_id="cx", client=client)

        assert len(results) == 3
        params = seen[0].url.params
        assert params["q"] == "website scanner"
        assert params["key"] == "k"
        assert params["cx"] == "cx"
        assert params["num"] == "10"
        assert params["gl"] == "us"
        assert params["safe"] == "active"

    def test_no_items(self):
        client = client_returning(payload={"searchInformation": {"totalResults": "0"}})
        assert get_search_results("nothing", api_key="k", engine_id="cx", client=client) == []

    def test_http_error(self):
        client = client_returning(status_code=403, payload={"error": {"code": 403}})
        with pytest.raises(SearchError, match="HTTP 403"):
            get_search_results("website scanner", api_key="k", engine_id="cx", client=client)

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(SearchError, match="Request failed"):
            get_search_results("website scanner", api_key="k", engine_id="cx", client=client)

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("SEARCH_ENGINE_ID", raising=False)
        with pytest.raises(SearchError, match="not configured"):
            get_search_results("website scanner")

    def test_credentials_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
        monkeypatch.setenv("SEARCH_ENGINE_ID", "env-cx")
        seen = []
        get_search_results("q", client=client_returning(payload={"items": []}, seen=seen))
        assert seen[0].url.params["key"] == "env-key"


class TestIsConfigured:

    def test_configured(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        monkeypatch.setenv("SEARCH_ENGINE_ID", "cx")
        assert is_configured()

    def test_not_configured(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        monkeypatch.delenv("SEARCH_ENGINE_ID", raising=False)
        assert not is_configured()
