"""Generate security findings for a URL."""

import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models import (
    Misconfigurations,
    MissingHeader,
    OpenPort,
    OutdatedLibrary,
    SecurityData,
    SecurityHeader,
    SecurityHeaders,
    SslCertificate,
    Status,
    StatusMessage,
    TlsProtocol,
    Vulnerabilities,
    VulnerabilityExample,
    VulnerabilityFinding,
)
from ..urls import hostname


# name, posture threshold, severity, description, value when implemented
HEADER_RULES = [
    (
        "Strict-Transport-Security", 80, "high",
        "HSTS helps protect your website against protocol downgrade attacks and cookie hijacking.",
        "max-age=31536000; includeSubDomains",
    ),
    (
        "X-Content-Type-Options", 70, "medium",
        "Prevents browsers from MIME-sniffing a response from the declared content-type.",
        "nosniff",
    ),
    (
        "X-Frame-Options", 75, "high",
        "Protects your visitors against clickjacking attacks.",
        "SAMEORIGIN",
    ),
    (
        "Content-Security-Policy", 85, "high",
        "CSP helps prevent XSS attacks by specifying which dynamic resources are allowed to load.",
        "default-src 'self'; script-src 'self' https://trusted-cdn.com;",
    ),
    (
        "Referrer-Policy", 75, "medium",
        "Controls how much referrer information should be included with requests.",
        "strict-origin-when-cross-origin",
    ),
    (
        "Permissions-Policy", 90, "medium",
        "Provides a mechanism to allow or deny the use of browser features in its own frame or in iframes.",
        "camera=(), microphone=(), geolocation=()",
    ),
    (
        "Cross-Origin-Resource-Policy", 88, "medium",
        "Prevents other websites from embedding your resources.",
        "same-origin",
    ),
]

# HSTS is ignored by browsers on plain HTTP responses
HTTPS_ONLY_HEADERS = {"Strict-Transport-Security"}

TLS13_THRESHOLD = 85

LIBRARY_POOL = [
    OutdatedLibrary("jQuery", "1.11.3", "3.7.1", "high",
                    "Using an outdated version of jQuery with known vulnerabilities"),
    OutdatedLibrary("Bootstrap", "3.3.7", "5.3.3", "medium",
                    "Bootstrap 3 is end-of-life and has known XSS issues in tooltips"),
    OutdatedLibrary("Lodash", "4.17.4", "4.17.21", "high",
                    "Vulnerable to prototype pollution"),
    OutdatedLibrary("Moment.js", "2.18.1", "2.30.1", "low",
                    "Regular expression denial of service in date parsing"),
]

XSS_EXAMPLE = VulnerabilityExample(
    location="/search?q=",
    type="Reflective XSS",
    severity="high",
    details="User input is reflected without proper sanitization",
)

SQL_INJECTION_EXAMPLE = VulnerabilityExample(
    location="/products?id=",
    severity="critical",
    details="Database query is vulnerable to SQL injection",
)

EXTRA_PORTS = [
    OpenPort(21, "FTP", False),
    OpenPort(22, "SSH", True),
    OpenPort(3306, "MySQL", False),
    OpenPort(8080, "HTTP-Alt", False),
]

ISSUER = "Let's Encrypt Authority X3"
KEY_STRENGTH = "RSA 2048-bit"
SIGNATURE_ALGORITHM = "SHA-256 with RSA"
CERT_LIFETIME_DAYS = 397


def draw_posture(bias: bool, rng: random.Random) -> int:
    """Draw the score the header thresholds are applied to."""
    return rng.randint(85, 99) if bias else rng.randint(65, 89)


def build_headers(posture: int, is_https: bool) -> list[SecurityHeader]:
    """Header table for a posture score; the only source of implemented flags."""
    headers = []
    for name, threshold, severity, description, recommended in HEADER_RULES:
        implemented = posture > threshold
        if name in HTTPS_ONLY_HEADERS and not is_https:
            implemented = False
        headers.append(SecurityHeader(
            name=name,
            implemented=implemented,
            value=recommended if implemented else "",
            severity=severity,
            description=description,
            recommended_value=recommended,
        ))
    return headers


def missing_headers(headers: list[SecurityHeader]) -> list[MissingHeader]:
    """Advisory entries for every header in `headers` that is not implemented."""
    return [
        MissingHeader(
            name=h.name,
            severity=h.severity,
            description=h.description,
            recommended_value=h.recommended_value,
        )
        for h in headers
        if not h.implemented
    ]


def summarize_headers(headers: list[SecurityHeader]) -> SecurityHeaders:
    missing = [h for h in headers if not h.implemented]
    if not missing:
        return SecurityHeaders(Status.GOOD, "All security headers implemented", headers)

    noun = "header" if len(missing) == 1 else "headers"
    if any(h.severity == "high" for h in missing):
        return SecurityHeaders(
            Status.DANGER,
            f"Missing {len(missing)} security {noun}, including critical ones",
            headers,
        )
    return SecurityHeaders(Status.WARNING, f"Missing {len(missing)} security {noun}", headers)


def build_protocols(is_https: bool, posture: int) -> list[TlsProtocol]:
    return [
        TlsProtocol("TLSv1.0", False, False, "Should be disabled for security"),
        TlsProtocol("TLSv1.1", is_https, False, "Should be disabled for security"),
        TlsProtocol("TLSv1.2", is_https, True, "Recommended secure protocol"),
        TlsProtocol("TLSv1.3", is_https and posture > TLS13_THRESHOLD, True,
                    "Best available secure protocol"),
    ]


def build_certificate(
    url: str,
    is_https: bool,
    posture: int,
    days_remaining: int,
    now: datetime,
) -> SslCertificate:
    """Certificate panel; status follows days remaining, or danger without HTTPS."""
    protocols = build_protocols(is_https, posture)

    if not is_https:
        return SslCertificate(
            status=Status.DANGER,
            message="No HTTPS detected",
            common_name="None",
            issuer="None",
            valid_from=now,
            valid_until=now,
            days_remaining=0,
            key_strength="None",
            signature_algorithm="None",
            protocols=protocols,
        )

    if days_remaining < 30:
        status, message = Status.DANGER, f"Certificate expires in {days_remaining} days"
    elif days_remaining < 90:
        status, message = Status.WARNING, f"Certificate expires in {days_remaining} days"
    else:
        status, message = Status.GOOD, "Valid SSL certificate"

    valid_until = now + timedelta(days=days_remaining)
    return SslCertificate(
        status=status,
        message=message,
        common_name=hostname(url),
        issuer=ISSUER,
        valid_from=valid_until - timedelta(days=CERT_LIFETIME_DAYS),
        valid_until=valid_until,
        days_remaining=days_remaining,
        key_strength=KEY_STRENGTH,
        signature_algorithm=SIGNATURE_ALGORITHM,
        protocols=protocols,
    )


def draw_finding(
    rng: random.Random,
    probability: float,
    max_count: int,
    example: VulnerabilityExample,
) -> VulnerabilityFinding:
    if rng.random() >= probability:
        return VulnerabilityFinding(found=False, count=0)
    return VulnerabilityFinding(
        found=True,
        count=rng.randint(1, max_count),
        examples=[replace(example)],
    )


def draw_vulnerabilities(is_https: bool, bias: bool, rng: random.Random) -> Vulnerabilities:
    """Draw injection findings, outdated libraries, open ports and misconfigurations."""
    # Biased sites draw each problem at roughly a third of the usual rate
    scale = 0.35 if bias else 1.0

    xss = draw_finding(rng, 0.3 * scale, 3, XSS_EXAMPLE)
    sql_injection = draw_finding(rng, 0.2 * scale, 2, SQL_INJECTION_EXAMPLE)

    library_count = rng.randint(0, 1 if bias else 2)
    libraries = [replace(lib) for lib in rng.sample(LIBRARY_POOL, library_count)]

    ports = [OpenPort(80, "HTTP", False)]
    if is_https:
        ports.append(OpenPort(443, "HTTPS", True))
    extra = rng.sample(EXTRA_PORTS, rng.randint(0, 1 if bias else 3))
    ports.extend(replace(port) for port in extra)

    misconfigurations = Misconfigurations(
        directory_listing=rng.random() < 0.3 * scale,
        admin_panel_exposed=rng.random() < 0.2 * scale,
        server_info_leakage=rng.random() < 0.5 * scale,
    )

    return Vulnerabilities(
        outdated_libraries=libraries,
        xss=xss,
        sql_injection=sql_injection,
        open_ports=ports,
        misconfigurations=misconfigurations,
    )


def generate_security(
    url: str,
    bias: bool,
    rng: random.Random,
    now: Optional[datetime] = None,
) -> SecurityData:
    """Synthesize security findings for `url`.

    Args:
        url: Normalized URL being scanned
        bias: Draw from the better ranges
        rng: Random source owned by this call
        now: Reference time for certificate dates (default: current UTC time)

    Returns:
        SecurityData whose statuses and advisory lists agree with the drawn values
    """
    now = now or datetime.now(timezone.utc)
    is_https = url.lower().startswith("https://")
    posture = draw_posture(bias, rng)
    days_remaining = rng.randint(60, 365) if bias else rng.randint(10, 365)

    headers = build_headers(posture, is_https)
    csp = next(h for h in headers if h.name == "Content-Security-Policy")

    return SecurityData(
        is_https=is_https,
        posture=posture,
        ssl=build_certificate(url, is_https, posture, days_remaining, now),
        headers=summarize_headers(headers),
        content_security=StatusMessage(
            Status.GOOD, "Content Security Policy implemented"
        ) if csp.implemented else StatusMessage(
            Status.WARNING, "No Content Security Policy found"
        ),
        https_redirect=StatusMessage(
            Status.GOOD, "Site properly redirects to HTTPS"
        ) if is_https else StatusMessage(
            Status.DANGER, "Site does not redirect to HTTPS"
        ),
        missing_headers=missing_headers(headers),
        vulnerabilities=draw_vulnerabilities(is_https, bias, rng),
    )
