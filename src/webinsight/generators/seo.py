"""Generate SEO findings for a URL."""

import random

from ..models import (
    AnalysisType,
    BacklinkComparison,
    CompetitorAnalysis,
    ContentGap,
    HeadingAnalysisItem,
    ImageWithoutAlt,
    KeyFactor,
    LoadSpeedComparison,
    MobileComparison,
    SearchResult,
    SeoData,
    SeoHeadings,
    SeoImages,
    SeoMetaTag,
    Status,
    TechnicalComparison,
)
from ..urls import hostname, site_name


TITLE_RANGE = (10, 70)
DESCRIPTION_RANGE = (50, 160)
H1_RANGE = (20, 70)

VIEWPORT = "width=device-width, initial-scale=1.0"

H2_POOL = ["Our Services", "About Us", "Client Testimonials", "Latest News", "Contact Us"]
H3_POOL = ["Web Development", "Digital Marketing", "SEO", "Hosting", "Support"]

# file name, dimensions
IMAGE_POOL = [
    ("hero-banner.jpg", "1200x600"),
    ("service-1.png", "400x300"),
    ("service-2.png", "400x300"),
    ("logo-footer.png", "150x50"),
    ("team-photo.jpg", "800x533"),
    ("testimonial-avatar.png", None),
]

KEYWORD_POOL = ["service", "professional", "solutions", "quality", "expert", "support"]

IMAGE_TIPS = [
    "Use descriptive file names for images",
    "Compress images to reduce file size",
    "Use responsive image attributes (srcset, sizes)",
    "Consider using WebP or AVIF formats for better compression",
]

COMPETITOR_RESULTS = [
    SearchResult(
        position=1,
        url="https://www.topcompetitor.com",
        title="Industry Leading Solution | Professional Services",
        description="The most comprehensive solution for your needs with advanced features and excellent customer support.",
    ),
    SearchResult(
        position=2,
        url="https://www.competitor2.com",
        title="Award-Winning Services | Expert Solutions",
        description="Trusted by thousands of clients worldwide. Get started today and see the difference.",
    ),
    SearchResult(
        position=3,
        url="https://www.sponsored-site.com",
        title="Premium Solutions | Limited Time Offer",
        description="Special promotional rates for new customers. Sign up now and save 50%.",
        is_sponsored=True,
    ),
]

MISSING_KEYWORDS = ["professional", "expert", "advanced", "comprehensive", "solution"]
MISSING_TOPICS = ["Case Studies", "Success Stories", "Industry Insights", "Expert Guides"]
CONTENT_RECOMMENDATIONS = [
    "Add detailed case studies showcasing successful client outcomes",
    "Create expert guides addressing common industry challenges",
    "Develop a resources section with downloadable tools and templates",
    "Include customer testimonials and reviews prominently on the site",
]

COMPETITOR_LOAD_SPEED = 1.9
COMPETITOR_BACKLINKS = 870


# ── Meta tags ──────────────────────────────────────────────────────────────────

def draw_title(name: str, bias: bool, rng: random.Random) -> str:
    good = [
        f"{name} | Home Page",
        f"{name} - Official Website",
        f"{name} | Professional Services and Digital Solutions",
    ]
    if bias or rng.random() < 0.6:
        return rng.choice(good)
    return rng.choice([
        "Home",
        f"{name} | Web Development, Digital Marketing, SEO Optimization, Hosting and Consulting Services",
        "",
    ])


def draw_description(domain: str, name: str, bias: bool, rng: random.Random) -> str:
    good = [
        f"{domain} offers a wide range of services including web development, digital marketing, and SEO optimization.",
        f"Discover what {name} can do for you: expert consulting, reliable support and solutions built around your goals.",
    ]
    if bias or rng.random() < 0.6:
        return rng.choice(good)
    return rng.choice([
        f"Welcome to {name}.",
        f"{domain} offers a wide range of services including web development, digital marketing, and SEO "
        f"optimization. Visit our website to learn more about our solutions, pricing, case studies and team.",
        "",
    ])


def assess_title(title: str) -> SeoMetaTag:
    low, high = TITLE_RANGE
    if not title:
        return SeoMetaTag(title, Status.DANGER, "Missing title tag",
                          "Add a descriptive <title> of 50-60 characters")
    if low < len(title) < high:
        return SeoMetaTag(title, Status.GOOD, "Good title length")
    suggestion = "Title is too short" if len(title) <= low else "Title is too long"
    return SeoMetaTag(title, Status.WARNING, "Title length issue", suggestion)


def assess_description(description: str) -> SeoMetaTag:
    low, high = DESCRIPTION_RANGE
    if not description:
        return SeoMetaTag(description, Status.DANGER, "Missing meta description",
                          "Add a 120-158 character summary of the page")
    if low < len(description) < high:
        return SeoMetaTag(description, Status.GOOD, "Good description length")
    suggestion = "Description is too short" if len(description) <= low else "Description is too long"
    return SeoMetaTag(description, Status.WARNING, "Description length issue", suggestion)


def assess_canonical(value: str) -> SeoMetaTag:
    if value:
        return SeoMetaTag(value, Status.GOOD, "Canonical URL specified")
    return SeoMetaTag("", Status.WARNING, "No canonical URL found",
                      "Add <link rel=\"canonical\"> pointing at the preferred URL")


def assess_viewport(value: str) -> SeoMetaTag:
    if value:
        return SeoMetaTag(value, Status.GOOD, "Viewport meta tag specified")
    return SeoMetaTag("", Status.WARNING, "No viewport meta tag found",
                      f"Add <meta name=\"viewport\" content=\"{VIEWPORT}\">")


# ── Headings ───────────────────────────────────────────────────────────────────

def draw_headings(name: str, bias: bool, rng: random.Random) -> tuple[list[str], list[str], list[str]]:
    h1_pool = [
        f"{name} - Professional Services",
        f"Welcome to {name}",
        "Home",
        f"{name}: Web Development, Digital Marketing and SEO for Growing Businesses",
    ]
    h1_count = 1 if bias else rng.choices([0, 1, 2], weights=[15, 65, 20])[0]
    h1 = rng.sample(h1_pool[:2] if bias else h1_pool, h1_count)
    h2 = rng.sample(H2_POOL, rng.randint(2, 4) if bias else rng.randint(0, 4))
    h3 = rng.sample(H3_POOL, rng.randint(0, 4))
    return h1, h2, h3


def summarize_headings(h1: list[str], h2: list[str], h3: list[str]) -> SeoHeadings:
    if len(h1) == 1:
        return SeoHeadings(Status.GOOD, "Proper heading structure", h1, h2, h3)
    if not h1:
        return SeoHeadings(Status.WARNING, "Missing H1 heading", h1, h2, h3)
    return SeoHeadings(Status.WARNING, "Multiple H1 headings found", h1, h2, h3)


def analyze_headings(h1: list[str], h2: list[str], h3: list[str]) -> list[HeadingAnalysisItem]:
    """Ordered advisory messages about the heading hierarchy."""
    analysis = []

    if not h1:
        analysis.append(HeadingAnalysisItem(
            AnalysisType.ERROR,
            "No H1 heading found. Each page should have exactly one H1 heading.",
        ))
    elif len(h1) > 1:
        analysis.append(HeadingAnalysisItem(
            AnalysisType.WARNING,
            f"{len(h1)} H1 headings found. Consider using only one H1 per page.",
        ))
    else:
        analysis.append(HeadingAnalysisItem(
            AnalysisType.SUCCESS,
            "Page has exactly one H1 heading as recommended.",
        ))

    if h1:
        low, high = H1_RANGE
        length = len(h1[0])
        if length < low or length > high:
            problem = "too short" if length < low else "too long"
            analysis.append(HeadingAnalysisItem(
                AnalysisType.WARNING,
                f"H1 is {problem} ({length} characters). Aim for {low}-{high} characters.",
            ))
        else:
            analysis.append(HeadingAnalysisItem(
                AnalysisType.SUCCESS,
                f"H1 length is good ({low}-{high} characters).",
            ))

    if not h2:
        analysis.append(HeadingAnalysisItem(
            AnalysisType.WARNING,
            "No H2 headings found. Consider adding H2 headings to structure your content.",
        ))
    else:
        plural = "" if len(h2) == 1 else "s"
        analysis.append(HeadingAnalysisItem(
            AnalysisType.SUCCESS,
            f"{len(h2)} H2 heading{plural} found, which helps structure content.",
        ))

    if h3 and not h2:
        analysis.append(HeadingAnalysisItem(
            AnalysisType.WARNING,
            "H3 headings found but no H2 headings. This breaks proper heading hierarchy.",
        ))

    return analysis


# ── Images ─────────────────────────────────────────────────────────────────────

def build_images_without_alt(url: str, count: int, rng: random.Random) -> list[ImageWithoutAlt]:
    domain = hostname(url)
    picked = rng.sample(IMAGE_POOL, min(count, len(IMAGE_POOL)))
    picked += [(f"gallery-{i}.jpg", None) for i in range(1, count - len(picked) + 1)]

    images = []
    for filename, dimensions in picked:
        if dimensions:
            suggested = f"Image of {domain} with dimensions {dimensions}"
        else:
            suggested = f"Image from {domain}"
        images.append(ImageWithoutAlt(
            src=f"{url}/images/{filename}",
            suggested_alt=suggested,
            dimensions=dimensions,
        ))
    return images


def summarize_images(total: int, with_alt: int) -> SeoImages:
    without = total - with_alt
    if without == 0:
        return SeoImages(Status.GOOD, "All images have alt text", total, with_alt, without)
    plural = "" if without == 1 else "s"
    return SeoImages(Status.WARNING, f"{without} image{plural} missing alt text",
                     total, with_alt, without)


# ── Competitor analysis ────────────────────────────────────────────────────────

def build_competitor_analysis(
    url: str,
    bias: bool,
    rng: random.Random,
    title: SeoMetaTag,
    description: SeoMetaTag,
    viewport: SeoMetaTag,
    keyword_density: dict[str, float],
    text_to_html_ratio: int,
) -> CompetitorAnalysis:
    """Fabricated ranking comparison whose statuses follow the drawn SEO facts."""
    domain = hostname(url)
    name = site_name(url)

    load_speed = round(rng.uniform(1.2, 1.9) if bias else rng.uniform(2.5, 4.5), 1)
    backlinks = rng.randint(400, 1200) if bias else rng.randint(50, 149)

    own_result = SearchResult(
        position=4 if bias else 12,
        url=url,
        title=title.value or f"{name} | Home Page",
        description=description.value or f"{domain} offers a wide range of services.",
    )
    search_results = [
        SearchResult(r.position, r.url, r.title, r.description, r.is_sponsored)
        for r in COMPETITOR_RESULTS
    ]
    search_results.append(own_result)
    search_results.sort(key=lambda r: r.position)

    if text_to_html_ratio >= 25:
        content_status = Status.GOOD
    elif text_to_html_ratio >= 10:
        content_status = Status.WARNING
    else:
        content_status = Status.DANGER

    backlink_status = Status.from_score(backlinks, 500, 150)
    speed_status = Status.from_value(load_speed, 2.5, 4.0)
    mobile_status = Status.GOOD if viewport.value else Status.DANGER
    keyword_status = (
        Status.GOOD
        if len(keyword_density) >= 3 and title.status == Status.GOOD
        else Status.WARNING
    )

    key_factors = [
        KeyFactor(
            factor="Content Quality",
            description="Top competitors have more comprehensive and in-depth content that addresses user intent.",
            importance="high",
            your_status=content_status,
            competitor_status=Status.GOOD,
            improvement="Create more comprehensive content with expert insights and detailed explanations.",
        ),
        KeyFactor(
            factor="Backlink Profile",
            description="Leading sites have more high-quality backlinks from authoritative domains.",
            importance="high",
            your_status=backlink_status,
            competitor_status=Status.GOOD,
            improvement="Build relationships with industry publications and earn quality backlinks.",
        ),
        KeyFactor(
            factor="Page Speed",
            description="Load time compared with the top ranking pages for this keyword.",
            importance="medium",
            your_status=speed_status,
            competitor_status=Status.GOOD,
            improvement="Optimize images, reduce JavaScript, and implement browser caching.",
        ),
        KeyFactor(
            factor="Mobile Optimization",
            description="Mobile experience compared with top competitors.",
            importance="medium",
            your_status=mobile_status,
            competitor_status=Status.GOOD,
            improvement="Ensure touch elements are properly sized and spaced for mobile users.",
        ),
        KeyFactor(
            factor="Keyword Optimization",
            description="Top pages use keywords more strategically in titles, headings, and content.",
            importance="medium",
            your_status=keyword_status,
            competitor_status=Status.GOOD,
            improvement="Improve keyword placement in title tags, H1s, and early in your content.",
        ),
    ]

    difference = round(load_speed - COMPETITOR_LOAD_SPEED, 1)
    if difference > 0:
        difference_text = f"{difference:.1f}s slower"
    elif difference < 0:
        difference_text = f"{-difference:.1f}s faster"
    else:
        difference_text = "Same speed"

    if backlinks < COMPETITOR_BACKLINKS:
        quality = "Your backlinks are primarily from lower authority domains"
    else:
        quality = "Your backlink profile is comparable to top competitors"

    return CompetitorAnalysis(
        keyword="music app" if "music" in domain else "website scanner",
        search_results=search_results,
        key_factors=key_factors,
        content_gap=ContentGap(
            missing_keywords=list(MISSING_KEYWORDS),
            missing_topics=list(MISSING_TOPICS),
            recommendations=list(CONTENT_RECOMMENDATIONS),
        ),
        technical_comparison=TechnicalComparison(
            load_speed=LoadSpeedComparison(
                yours=f"{load_speed:.1f}s",
                competitor=f"{COMPETITOR_LOAD_SPEED:.1f}s",
                difference=difference_text,
            ),
            mobile_optimization=MobileComparison(yours=mobile_status, competitor=Status.GOOD),
            backlinks=BacklinkComparison(
                yours=backlinks,
                competitor=COMPETITOR_BACKLINKS,
                quality_assessment=quality,
            ),
        ),
    )


def generate_seo(
    url: str,
    bias: bool,
    rng: random.Random,
    include_competitors: bool = True,
) -> SeoData:
    """Synthesize SEO findings for `url`.

    Titles, headings and images are drawn first; every status, message and
    advisory entry is then derived from those drawn values.
    """
    domain = hostname(url)
    name = site_name(url)

    title = assess_title(draw_title(name, bias, rng))
    description = assess_description(draw_description(domain, name, bias, rng))

    h1, h2, h3 = draw_headings(name, bias, rng)

    total_images = rng.randint(8, 30) if bias else rng.randint(5, 20)
    with_alt = rng.randint(total_images - 1, total_images) if bias else rng.randint(total_images // 2, total_images)

    canonical = assess_canonical(url if rng.random() < (0.95 if bias else 0.75) else "")
    viewport = assess_viewport(VIEWPORT if bias or rng.random() < 0.85 else "")

    keywords = rng.sample(KEYWORD_POOL, rng.randint(3, 5) if bias else rng.randint(1, 5))
    keyword_density = {k: round(rng.uniform(1.0, 5.0), 1) for k in keywords}
    text_to_html_ratio = rng.randint(15, 45) if bias else rng.randint(5, 45)

    competitor_analysis = None
    if include_competitors:
        competitor_analysis = build_competitor_analysis(
            url, bias, rng, title, description, viewport, keyword_density, text_to_html_ratio
        )

    return SeoData(
        meta_title=title,
        meta_description=description,
        headings=summarize_headings(h1, h2, h3),
        headings_analysis=analyze_headings(h1, h2, h3),
        images=summarize_images(total_images, with_alt),
        canonical=canonical,
        viewport=viewport,
        images_without_alt=build_images_without_alt(url, total_images - with_alt, rng),
        image_optimization_tips=list(IMAGE_TIPS),
        keyword_density=keyword_density,
        text_to_html_ratio=text_to_html_ratio,
        competitor_analysis=competitor_analysis,
    )
