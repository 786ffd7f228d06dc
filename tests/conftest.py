"""Shared fixtures for webinsight tests."""

import asyncio
from datetime import datetime, timezone

import pytest

from webinsight.scanner import perform_scan


SCAN_TIME = datetime(2025, 3, 5, 14, 30, tzinfo=timezone.utc)

SAMPLE_URLS = [
    "https://example.com",
    "http://example.com",
    "https://www.google.com",
    "https://shop.amazon.com",
    "https://www.usa.gov",
    "http://music.example.org",
]


def run_scan(url, seed, **kwargs):
    kwargs.setdefault("delay", 0)
    kwargs.setdefault("now", SCAN_TIME)
    return asyncio.run(perform_scan(url, seed=seed, **kwargs))


@pytest.fixture
def scan():
    """Synchronous scan helper with no delay and a fixed timestamp."""
    return run_scan


@pytest.fixture(scope="session")
def sample_results():
    """Seeded scans across biased and unbiased, HTTP and HTTPS URLs."""
    return [run_scan(url, seed) for url in SAMPLE_URLS for seed in range(8)]
