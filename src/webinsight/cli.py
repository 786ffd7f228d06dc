"""CLI interface for webinsight."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from . import __version__
from . import config as cfg
from .models import ScanResult, Status
from .report import generate_html_report, report_filename
from .scanner import ScanError, perform_scan
from .search import SearchError, get_search_results
from .urls import InvalidUrlError, require_url


console = Console()

STAGE_LABELS = {
    "checking": "Checking URL",
    "analyzing": "Analyzing SEO, security, performance and accessibility",
    "scoring": "Scoring",
    "complete": "Done",
}


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def status_style(status: Status) -> str:
    """Get Rich style for a status."""
    return {
        Status.GOOD: "green",
        Status.WARNING: "yellow",
        Status.DANGER: "red",
    }.get(status, "white")


def status_icon(status: Status) -> str:
    return {
        Status.GOOD: "✓",
        Status.WARNING: "⚠",
        Status.DANGER: "✗",
    }.get(status, "•")


def score_color(score: int) -> str:
    """Get color for a score value."""
    if score >= cfg.SCORE_GOOD:
        return "green"
    elif score >= cfg.SCORE_FAIR:
        return "yellow"
    elif score >= 40:
        return "orange1"
    else:
        return "red"


def print_score_bar(score: int, width: int = 20) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    empty = width - filled
    color = score_color(score)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * empty, style="dim")
    bar.append(f" {score}/100", style=f"bold {color}")
    return bar


def collect_findings(result: ScanResult) -> list[tuple[str, Status, str, Optional[str]]]:
    """Flatten a result into (category, status, message, fix hint) rows."""
    findings = []
    security = result.security
    seo = result.seo

    findings.append(("Security", security.ssl.status, security.ssl.message, None))
    findings.append(("Security", security.https_redirect.status, security.https_redirect.message,
                     None if security.is_https else "Serve the site over HTTPS and redirect HTTP requests"))
    findings.append(("Security", security.content_security.status, security.content_security.message, None))
    for header in security.missing_headers:
        status = Status.DANGER if header.severity == "high" else Status.WARNING
        findings.append(("Security", status, f"Missing {header.name}",
                         f"{header.name}: {header.recommended_value}"))

    vulns = security.vulnerabilities
    if vulns.xss.found:
        findings.append(("Security", Status.DANGER,
                         f"{vulns.xss.count} cross-site scripting issue(s)",
                         "Escape user input before reflecting it"))
    if vulns.sql_injection.found:
        findings.append(("Security", Status.DANGER,
                         f"{vulns.sql_injection.count} SQL injection issue(s)",
                         "Use parameterized queries"))
    for lib in vulns.outdated_libraries:
        findings.append(("Security", Status.WARNING, f"Outdated {lib.name} {lib.version}",
                         f"Upgrade to {lib.latest_version}"))

    for tag in (seo.meta_title, seo.meta_description, seo.canonical, seo.viewport):
        findings.append(("SEO", tag.status, tag.message, tag.suggestion))
    findings.append(("SEO", seo.headings.status, seo.headings.message, None))
    findings.append(("SEO", seo.images.status, seo.images.message, None))

    for metric in result.performance.metrics:
        findings.append(("Performance", metric.status,
                         f"{metric.name}: {metric.value}{metric.unit}", None))

    a11y = result.accessibility
    for impact, issues in (("critical", a11y.critical), ("serious", a11y.serious)):
        status = Status.DANGER if impact == "critical" else Status.WARNING
        for issue in issues:
            findings.append(("Accessibility", status, issue.message, issue.recommendation))

    return findings


def print_result(result: ScanResult, verbose: bool = False) -> None:
    """Print scan result to console."""
    scores = result.scores

    # Header
    console.print()
    console.print(Panel(
        f"[bold]{result.url}[/bold]\n"
        f"[dim]Scanned {result.scan_date:%Y-%m-%d %H:%M} UTC[/dim]",
        title="🔍 WebInsight Scan",
        border_style="blue"
    ))

    # Overall score
    console.print()
    console.print("  Overall Score: ", end="")
    console.print(print_score_bar(scores.overall, width=25))
    console.print()

    findings = collect_findings(result)

    # Category table
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Score")
    table.add_column("Status")

    for name, score in (
        ("Security", scores.security),
        ("SEO", scores.seo),
        ("Performance", scores.performance),
        ("Accessibility", scores.accessibility),
    ):
        status_parts = []

        errors = sum(1 for f in findings if f[0] == name and f[1] == Status.DANGER)
        warnings = sum(1 for f in findings if f[0] == name and f[1] == Status.WARNING)

        if errors > 0:
            status_parts.append(f"[red]{errors} error{'s' if errors > 1 else ''}[/red]")
        if warnings > 0:
            status_parts.append(f"[yellow]{warnings} warning{'s' if warnings > 1 else ''}[/yellow]")
        if not errors and not warnings:
            status_parts.append("[green]OK[/green]")

        table.add_row(name, print_score_bar(score, width=15), ", ".join(status_parts))

    console.print(table)

    if not verbose:
        findings = [f for f in findings if f[1] != Status.GOOD]

    if findings:
        console.print("\n[bold]All Findings:[/bold]\n" if verbose else "\n[bold]Issues Found:[/bold]\n")
        for category, status, message, fix_hint in findings:
            style = status_style(status)
            console.print(f"  [{style}]{status_icon(status)}[/] [dim]{category}[/dim] {message}")
            if fix_hint:
                console.print(f"    [cyan]→ {fix_hint}[/cyan]")

    # Quick wins
    opportunities = result.performance.opportunities_for_improvement
    if opportunities:
        console.print("\n[bold]🎯 Top Quick Wins:[/bold]\n")
        for i, opportunity in enumerate(opportunities[:3], 1):
            console.print(f"  {i}. [bold]{opportunity.name}[/bold] [dim]({opportunity.potential_savings})[/dim]")
            console.print(f"     [cyan]{opportunity.description}[/cyan]")
            console.print()

    # Footer
    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]webinsight v{__version__}[/dim]")
    console.print()


def run_scan(
    url: str,
    seed: Optional[int],
    delay: Optional[float],
    include_competitors: Optional[bool] = None,
    quiet: bool = False,
) -> ScanResult:
    """Validate `url` and scan it, showing progress unless `quiet`."""
    url = require_url(url)

    if quiet:
        return asyncio.run(perform_scan(
            url, seed=seed, delay=delay, include_competitors=include_competitors,
        ))

    with console.status(f"[bold blue]Scanning {url}...[/bold blue]") as status:
        def progress(stage: str, detail: Optional[str] = None) -> None:
            status.update(f"[bold blue]{STAGE_LABELS.get(stage, stage)}...[/bold blue]")

        return asyncio.run(perform_scan(
            url,
            seed=seed,
            delay=delay,
            include_competitors=include_competitors,
            progress_callback=progress,
        ))


def fail(message: str) -> NoReturn:
    console.print(f"\n[red]Error:[/red] {message}")
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--log-level", default=cfg.LOG_LEVEL, show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
              help="Logging level")
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx, log_level: str):
    """WebInsight - SEO, security, performance and accessibility scanner.

    \b
    Quick start:
        webinsight scan example.com
        webinsight report example.com

    \b
    Commands:
        scan    Scan a website and print the results
        report  Scan a website and save an HTML report
        serp    Look up live search results for a query
    """
    setup_logging(log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("url")
@click.option("-v", "--verbose", is_flag=True, help="Show all findings, not just issues")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--seed", type=int, default=None, help="Seed for reproducible results")
@click.option("--delay", type=float, default=None,
              help=f"Seconds to wait before showing results (default: {cfg.SCAN_DELAY_SECONDS})")
@click.option("--competitors/--no-competitors", default=cfg.INCLUDE_COMPETITORS, show_default=True,
              help="Include competitor analysis")
@click.option("--report", "report_path", type=click.Path(dir_okay=False),
              help="Also save an HTML report to this file")
def scan(url: str, verbose: bool, json_output: bool, seed: Optional[int], delay: Optional[float],
         competitors: bool, report_path: Optional[str]):
    """Scan a website.

    \b
    Examples:
        webinsight scan example.com
        webinsight scan example.com --verbose
        webinsight scan example.com --json --seed 42
    """
    try:
        result = run_scan(url, seed, delay, competitors, quiet=json_output)
    except (InvalidUrlError, ScanError) as e:
        fail(str(e))

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result, verbose=verbose)

    if report_path:
        Path(report_path).write_text(generate_html_report(result), encoding="utf-8")
        if not json_output:
            console.print(f"[green]✓[/green] Report saved to [cyan]{report_path}[/cyan]\n")


@cli.command()
@click.argument("url")
@click.option("-o", "--output", type=click.Path(), help="Output file or directory (default: current dir)")
@click.option("--seed", type=int, default=None, help="Seed for reproducible results")
@click.option("--delay", type=float, default=None, help="Seconds to wait before saving")
def report(url: str, output: Optional[str], seed: Optional[int], delay: Optional[float]):
    """Scan a website and save an HTML report.

    \b
    Examples:
        webinsight report example.com
        webinsight report example.com -o ./reports
        webinsight report example.com -o example.html
    """
    try:
        result = run_scan(url, seed, delay)
    except (InvalidUrlError, ScanError) as e:
        fail(str(e))

    path = Path(output) if output else Path.cwd()
    if path.is_dir() or (output and output.endswith(("/", "\\"))):
        path.mkdir(parents=True, exist_ok=True)
        path = path / report_filename(result.url, result.scan_date)
    else:
        path.parent.mkdir(parents=True, exist_ok=True)

    path.write_text(generate_html_report(result), encoding="utf-8")

    console.print()
    console.print(Panel(
        f"[bold]{result.url}[/bold]\n"
        f"Overall score: [{score_color(result.scores.overall)}]{result.scores.overall}/100[/]",
        title="📄 WebInsight Report",
        border_style="green"
    ))
    console.print(f"\n[green]✓[/green] Generated [cyan]{path.name}[/cyan]")
    console.print(f"\n[bold]Saved to:[/bold] {path.absolute()}\n")


@cli.command()
@click.argument("query")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def serp(query: str, json_output: bool):
    """Look up live search results (needs GOOGLE_API_KEY and SEARCH_ENGINE_ID).

    \b
    Examples:
        webinsight serp "website scanner"
    """
    try:
        results = get_search_results(query)
    except SearchError as e:
        fail(str(e))

    if json_output:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("URL")

    for r in results:
        title = f"{r.title} [yellow](sponsored)[/yellow]" if r.is_sponsored else r.title
        table.add_row(str(r.position), title, r.url)

    console.print(table)


# Convenience: allow `webinsight URL` as shortcut for `webinsight scan URL`
def main():
    """Entry point that handles both `webinsight URL` and `webinsight scan URL`."""
    args = sys.argv[1:]

    # If first arg looks like a URL (not a command), insert 'scan'
    if args and not args[0].startswith('-') and args[0] not in cli.commands:
        # Check if it looks like a URL/domain
        if '.' in args[0]:
            sys.argv.insert(1, 'scan')

    cli()


if __name__ == "__main__":
    main()
