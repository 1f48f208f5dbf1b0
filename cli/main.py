"""Hugo Link Checker CLI entry-point.

Usage:
    hugo-link-checker --help
    python cli/main.py --root path/to/site --check-external

The process exit code is the number of broken links (capped at 255), so the
command can gate a CI job directly.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkcheck.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import List, Optional

import typer

from linkcheck import __version__
from linkcheck.checker import LinkChecker, count_broken, load_ignore_patterns
from linkcheck.config import CheckOptions, settings
from linkcheck.errors import IgnoreFileError
from linkcheck.log import configure_logging
from linkcheck.report import ReportFormat, write_report
from linkcheck.scanner import enumerate_pages

MAX_EXIT_CODE = 255

app = typer.Typer(
    name="hugo-link-checker",
    help="Check internal and external links of a Hugo site.",
    add_completion=False,
)


def _exit_code(broken: int) -> int:
    return min(broken, MAX_EXIT_CODE)


@app.command()
def check(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files or directories to scan (default: --root)."
    ),
    root: str = typer.Option(".", "--root", help="Site root used to resolve internal links."),
    fmt: str = typer.Option("text", "--format", help="Report format: text | json | html."),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Write the report to this file instead of stdout."
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Skip the report; only set the exit code."
    ),
    check_images: bool = typer.Option(
        False, "--check-images", help="Also check image links (img src, markdown images)."
    ),
    check_external: bool = typer.Option(
        False, "--check-external", help="Probe external links over the network."
    ),
    check_public: bool = typer.Option(
        False, "--check-public", help="Resolve internal links against the built public/ tree."
    ),
    base_url: str = typer.Option(
        "", "--base-url", help="Check internal links online under this URL (e.g. https://example.com)."
    ),
    ignore_file: Optional[Path] = typer.Option(
        None, "--ignore-file", help="Ignore-pattern file (one regex per line)."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Show every candidate path tried for broken internal links."
    ),
    version: bool = typer.Option(False, "--version", help="Print version and exit."),
) -> None:
    """Scan pages, validate their links and report the broken ones."""
    if version:
        typer.echo(f"hugo-link-checker {__version__}")
        raise typer.Exit(0)

    configure_logging(verbose=verbose)

    try:
        report_format = ReportFormat(fmt)
    except ValueError:
        typer.echo(f"Invalid format: {fmt}. Valid formats: text, json, html", err=True)
        raise typer.Exit(1)

    try:
        pages = enumerate_pages(paths or [root])
    except OSError as exc:
        typer.echo(f"Error scanning files: {exc}", err=True)
        raise typer.Exit(1)

    try:
        patterns = load_ignore_patterns(ignore_file or settings.ignore_file)
    except IgnoreFileError as exc:
        typer.echo(f"Error loading ignore patterns: {exc}", err=True)
        raise typer.Exit(1)

    options = CheckOptions(
        site_root=root,
        check_external=check_external,
        check_built_output=check_public,
        base_url=base_url,
        verbose=verbose,
        check_images=check_images,
    )
    checker = LinkChecker(options)
    for exc in checker.parse_pages(pages):
        typer.echo(f"Error parsing links from {exc.path}: {exc}", err=True)

    checker.check(pages, patterns)
    broken = count_broken(pages)

    if not no_report:
        try:
            text = write_report(pages, report_format, output)
        except OSError as exc:
            typer.echo(f"Error generating report: {exc}", err=True)
            raise typer.Exit(1)
        if output is None:
            typer.echo(text, nl=False)

    raise typer.Exit(_exit_code(broken))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
