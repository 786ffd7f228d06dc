"""Main scanner that runs all category generators and assembles the result."""

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Callable, Optional

from . import config as cfg
from .classifier import classify
from .generators import (
    generate_accessibility,
    generate_performance,
    generate_security,
    generate_seo,
)
from .models import Category, ScanResult, UrlCheck
from .scoring import compute_scores


logger = logging.getLogger(__name__)

# Called with (stage, detail) as a scan moves through its stages
ProgressCallback = Callable[[str, Optional[str]], None]


class ScanError(RuntimeError):
    """Raised when a scan cannot be completed."""


def _no_progress(stage: str, detail: Optional[str] = None) -> None:
    pass


def check_url(url: str) -> UrlCheck:
    """Reachability check run before scanning. Always succeeds."""
    return UrlCheck(success=True, status=200, url=url)


async def perform_scan(
    url: str,
    *,
    seed: Optional[int] = None,
    delay: Optional[float] = None,
    include_competitors: Optional[bool] = None,
    progress_callback: Optional[ProgressCallback] = None,
    now: Optional[datetime] = None,
) -> ScanResult:
    """Run a complete scan of a URL.

    Args:
        url: Normalized, scheme-qualified URL
        seed: Seed for the scan's random source; the same seed gives the same findings
        delay: Seconds to wait before returning (default: config.SCAN_DELAY_SECONDS)
        include_competitors: Attach competitor analysis (default: config.INCLUDE_COMPETITORS)
        progress_callback: Optional callable(stage, detail)
        now: Scan timestamp (default: current UTC time)

    Returns:
        ScanResult with all four categories and their scores

    Raises:
        ScanError: If the URL fails the reachability check
    """
    delay = cfg.SCAN_DELAY_SECONDS if delay is None else delay
    if include_competitors is None:
        include_competitors = cfg.INCLUDE_COMPETITORS
    report = progress_callback or _no_progress

    report("checking", url)
    check = check_url(url)
    if not check.success:
        logger.error("URL check failed for %s with status %d", url, check.status)
        raise ScanError(f"URL is not accessible: {check.status}")

    profile = classify(url)
    logger.debug("Bias profile for %s: %s", url, profile)

    # One child seed per category, so the generators share no random state
    rng = random.Random(seed)
    seeds = {category: rng.getrandbits(64) for category in Category}
    scan_date = now or datetime.now(timezone.utc)

    report("analyzing", "security, seo, performance, accessibility")
    security, seo, performance, accessibility = await asyncio.gather(
        asyncio.to_thread(
            generate_security, url, profile.security,
            random.Random(seeds[Category.SECURITY]), scan_date,
        ),
        asyncio.to_thread(
            generate_seo, url, profile.seo,
            random.Random(seeds[Category.SEO]), include_competitors,
        ),
        asyncio.to_thread(
            generate_performance, url, profile.performance,
            random.Random(seeds[Category.PERFORMANCE]),
        ),
        asyncio.to_thread(
            generate_accessibility, url, profile.accessibility,
            random.Random(seeds[Category.ACCESSIBILITY]),
        ),
    )

    report("scoring", None)
    scores = compute_scores(security, seo, performance, accessibility)
    logger.info(
        "Scanned %s: overall=%d security=%d seo=%d performance=%d accessibility=%d",
        url, scores.overall, scores.security, scores.seo,
        scores.performance, scores.accessibility,
    )

    if delay > 0:
        await asyncio.sleep(delay)

    result = ScanResult(
        url=url,
        scan_date=scan_date,
        scores=scores,
        security=security,
        seo=seo,
        performance=performance,
        accessibility=accessibility,
    )
    report("complete", f"Overall score {scores.overall}/100")
    return result


class Scanner:
    """Runs one scan at a time; starting a new scan abandons the previous one."""

    def __init__(
        self,
        *,
        delay: Optional[float] = None,
        include_competitors: Optional[bool] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.delay = delay
        self.include_competitors = include_competitors
        self.progress_callback = progress_callback
        self.result: Optional[ScanResult] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, url: str, seed: Optional[int] = None) -> asyncio.Task:
        """Start scanning `url` in the background, cancelling any scan in flight."""
        self.cancel()
        self.result = None
        self._task = asyncio.create_task(perform_scan(
            url,
            seed=seed,
            delay=self.delay,
            include_competitors=self.include_competitors,
            progress_callback=self.progress_callback,
        ))
        return self._task

    def cancel(self) -> None:
        """Abandon the scan in flight, if any."""
        if self.is_running:
            logger.info("Abandoning scan in flight")
            self._task.cancel()

    async def scan(self, url: str, seed: Optional[int] = None) -> Optional[ScanResult]:
        """Scan `url` and wait for it.

        Returns None if the scan was abandoned before it finished.
        """
        task = self.start(url, seed=seed)
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            logger.info("Scan of %s was superseded", url)
            return None

        result = task.result()
        if task is self._task:
            self.result = result
        return result
