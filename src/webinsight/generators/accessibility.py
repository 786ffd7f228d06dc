"""Generate accessibility findings for a URL."""

import random
from math import floor

from ..models import (
    AccessibilityCategory,
    AccessibilityData,
    AccessibilityIssue,
    BestPractice,
    Status,
)


# code, message, context, selector, recommendation
ISSUE_POOLS: dict[str, list[tuple[str, str, str, str, str]]] = {
    "critical": [
        (
            "keyboard-trap",
            "Keyboard trap found in custom widget",
            '<div id="custom-widget" class="interactive-element">Interactive Element</div>',
            "#custom-widget",
            "Ensure users can navigate away from all focusable elements using keyboard only",
        ),
        (
            "missing-alt-text",
            "Critical information conveyed by image with no alternative text",
            '<img src="/images/emergency-exit.png">',
            'img[src="/images/emergency-exit.png"]',
            "Add descriptive alt text to all informational images, especially those containing critical information",
        ),
        (
            "color-contrast-critical",
            "Text has extremely poor contrast against background",
            '<div style="background-color: #e4e4e4;"><span style="color: #fafafa;">Very light text</span></div>',
            "div > span",
            "Ensure text has a contrast ratio of at least 4.5:1 for normal text and 3:1 for large text",
        ),
    ],
    "serious": [
        (
            "form-label-missing",
            "Form input has no associated label",
            '<input type="text" name="username" placeholder="Username">',
            'input[name="username"]',
            "Add explicit labels for all form controls using <label> elements with for attributes",
        ),
        (
            "aria-hidden-focus",
            'Focusable element contained in element with aria-hidden="true"',
            '<div aria-hidden="true"><button>Click me</button></div>',
            'div[aria-hidden="true"] > button',
            "Remove focusable elements from within aria-hidden containers",
        ),
        (
            "heading-order",
            "Heading levels should only increase by one",
            "<h2>Section Title</h2><h4>Subsection</h4>",
            "h4",
            "Maintain proper heading hierarchy by using h1-h6 in sequential order",
        ),
        (
            "color-contrast",
            "Insufficient contrast between text and background",
            '<div style="background-color: #f1f1f1;"><span style="color: #a3a3a3;">Low contrast text</span></div>',
            "div > span",
            "Increase contrast to meet WCAG AA standards (4.5:1 for normal text)",
        ),
    ],
    "moderate": [
        (
            "link-name",
            "Link has no discernible text",
            '<a href="/page"><img src="icon.png"></a>',
            'a[href="/page"]',
            "Ensure all links have descriptive text content or aria-label attributes",
        ),
        (
            "html-lang-missing",
            "HTML element does not have a lang attribute",
            "<html>",
            "html",
            'Add a lang attribute to the HTML element (e.g., lang="en")',
        ),
        (
            "duplicate-id",
            "Document contains multiple elements with the same id attribute",
            '<div id="nav-menu">...</div> ... <div id="nav-menu">...</div>',
            '[id="nav-menu"]',
            "Ensure all id attributes are unique within the document",
        ),
        (
            "autocomplete-valid",
            "Form field has invalid autocomplete attribute",
            '<input type="text" autocomplete="invalid-value">',
            'input[autocomplete="invalid-value"]',
            "Use valid values for the autocomplete attribute following the HTML specification",
        ),
    ],
    "minor": [
        (
            "link-in-text-block",
            "Links in blocks of text should be clearly distinguishable",
            '<p>Read more about our <a href="/services">services</a> here.</p>',
            "p > a",
            "Ensure links are distinguished from surrounding text by more than just color",
        ),
        (
            "meta-viewport",
            "Meta viewport does not allow user scaling",
            '<meta name="viewport" content="width=device-width, initial-scale=1.0, maximum-scale=1.0, user-scalable=no">',
            'meta[name="viewport"]',
            "Allow users to scale content by removing user-scalable=no and fixed maximum-scale values",
        ),
        (
            "region",
            "Some content is not contained within landmark regions",
            "<div>Content outside landmark</div>",
            "body > div",
            "Ensure all content is contained within appropriate landmark regions (header, nav, main, etc.)",
        ),
        (
            "target-size",
            "Interactive elements should be large enough to touch",
            '<button style="width: 24px; height: 24px;">+</button>',
            "button",
            "Ensure interactive elements have touch targets of at least 44x44 pixels",
        ),
    ],
}

# WCAG principle and its number of tests
CATEGORY_TESTS = [
    ("Perceivable", 25),
    ("Operable", 22),
    ("Understandable", 18),
    ("Robust", 12),
]


def issue_count_range(impact: str, score: int) -> tuple[int, int]:
    """Bounds on how many issues of a tier to report; never grows with the score."""
    if impact == "critical":
        if score > 90:
            return 0, 0
        return (0, 1) if score > 80 else (1, 2)
    if impact == "serious":
        if score > 85:
            return 0, 1
        return (1, 2) if score > 75 else (2, 4)
    if impact == "moderate":
        if score > 80:
            return 1, 2
        return (2, 3) if score > 70 else (3, 4)
    # minor
    if score > 85:
        return 1, 2
    return (2, 3) if score > 75 else (3, 4)


def draw_issues(impact: str, score: int, rng: random.Random) -> list[AccessibilityIssue]:
    """Draw distinct issues of one impact tier."""
    low, high = issue_count_range(impact, score)
    pool = ISSUE_POOLS[impact]
    count = min(rng.randint(low, high), len(pool))
    return [
        AccessibilityIssue(
            code=code,
            impact=impact,
            message=message,
            context=context,
            selector=selector,
            recommendation=recommendation,
        )
        for code, message, context, selector, recommendation in rng.sample(pool, count)
    ]


def build_categories(score: int, rng: random.Random) -> list[AccessibilityCategory]:
    categories = []
    for name, total in CATEGORY_TESTS:
        category_score = max(0, min(100, score + rng.randint(-5, 4)))
        categories.append(AccessibilityCategory(
            name=name,
            score=category_score,
            passed_tests=floor(total * category_score / 100),
            total_tests=total,
            status=Status.from_score(category_score, 81, 61),
        ))
    return categories


def build_best_practices(score: int) -> list[BestPractice]:
    if score > 80:
        error_status = "passed"
    elif score >= 65:
        error_status = "warning"
    else:
        error_status = "failed"

    return [
        BestPractice("Language of Page", "Specify the language of the page", "passed"),
        BestPractice(
            "Focus Order",
            "Focusable components receive focus in an order that preserves meaning",
            "passed" if score > 85 else "warning",
        ),
        BestPractice(
            "Consistent Navigation",
            "Navigation patterns are consistent across the site",
            "passed",
        ),
        BestPractice(
            "Error Identification",
            "Form errors are clearly identified and described to users",
            error_status,
        ),
    ]


def generate_accessibility(url: str, bias: bool, rng: random.Random) -> AccessibilityData:
    """Synthesize accessibility findings for `url`.

    The overall score is drawn first; test counts, issue lists, WCAG
    categories and best practices all follow from it.
    """
    score = rng.randint(85, 97) if bias else rng.randint(55, 85)
    total_tests = rng.randint(80, 100)
    passed_tests = floor(total_tests * score / 100)

    status = Status.from_score(score, 90, 70)
    message = {
        Status.GOOD: "Good accessibility practices",
        Status.WARNING: "Some accessibility issues found",
        Status.DANGER: "Significant accessibility concerns",
    }[status]

    return AccessibilityData(
        status=status,
        message=message,
        score=score,
        passed_tests=passed_tests,
        total_tests=total_tests,
        critical=draw_issues("critical", score, rng),
        serious=draw_issues("serious", score, rng),
        moderate=draw_issues("moderate", score, rng),
        minor=draw_issues("minor", score, rng),
        categories=build_categories(score, rng),
        best_practices=build_best_practices(score),
    )
