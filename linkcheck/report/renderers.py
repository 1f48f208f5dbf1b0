"""Text, JSON and HTML renderings of a checked page set."""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from linkcheck.checker.aggregate import ReportSummary, is_broken, summarize
from linkcheck.scanner.models import Link, Page

REPORT_TITLE = "Hugo Link Checker Report"


class ReportFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HTML = "html"


def _status_text(link: Link) -> str:
    if link.error_message:
        return f"BROKEN ({link.error_message})"
    return "BROKEN"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def _summary_lines(summary: ReportSummary, indent: str = "  ") -> List[str]:
    return [
        f"{indent}Files scanned: {summary.total_files}",
        f"{indent}Total links: {summary.total_links}",
        f"{indent}Unique links: {summary.unique_links}",
        f"{indent}Broken links: {summary.broken_links}",
        f"{indent}Internal links: {summary.internal_links}",
        f"{indent}External links: {summary.external_links}",
        f"{indent}Ignored links: {summary.ignored_links}",
    ]


def render_text(pages: Sequence[Page], generated_at: datetime, **policy: Any) -> str:
    """Summary followed by the broken links of each page (pages with none are omitted)."""
    summary = summarize(pages, **policy)
    lines = [
        REPORT_TITLE,
        "=" * len(REPORT_TITLE),
        f"Generated: {generated_at.isoformat()}",
        "",
        "Summary:",
        *_summary_lines(summary),
        "",
    ]
    for page in pages:
        broken = [link for link in page.links if is_broken(link, **policy)]
        if not broken:
            continue
        lines.append(f"File: {page.path}")
        lines.append(f"  Canonical: {page.canonical_path}")
        lines.append(f"  Links (broken/total): {len(broken)}/{len(page.links)}")
        for link in broken:
            lines.append(f"    {link.url} [{link.kind.value}] - {_status_text(link)}")
        lines.append("")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def unique_links(pages: Sequence[Page]) -> List[Dict[str, Any]]:
    """One entry per distinct URL, listing every page it appears in."""
    by_url: Dict[str, Dict[str, Any]] = {}
    for page in pages:
        for link in page.links:
            entry = by_url.get(link.url)
            if entry is not None:
                entry["found_in_files"].append(page.path)
                continue
            entry = {
                "url": link.url,
                "type": link.kind.value,
                "status_code": link.status_code,
                "last_checked": _iso(link.last_checked),
                "ignored": link.ignored,
                "found_in_files": [page.path],
            }
            if link.error_message:
                entry["error_message"] = link.error_message
            by_url[link.url] = entry
    return list(by_url.values())


def render_json(pages: Sequence[Page], generated_at: datetime, **policy: Any) -> str:
    report = {
        "generated_at": generated_at.isoformat(),
        "summary": summarize(pages, **policy).to_dict(),
        "links": unique_links(pages),
    }
    return json.dumps(report, indent=2) + "\n"


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

_HTML_STYLE = """\
    body { font-family: Arial, sans-serif; margin: 20px; }
    .summary { background: #f5f5f5; padding: 15px; border-radius: 5px; margin-bottom: 20px; }
    .file { margin-bottom: 20px; border: 1px solid #ddd; padding: 15px; border-radius: 5px; }
    .file h3 { margin-top: 0; color: #333; }
    .link { margin: 5px 0; padding: 5px; }
    .link.broken { background: #ffe6e6; color: #d00; }
    .link.ok { background: #e6ffe6; color: #060; }
    .link.ignored { background: #f0f0f0; color: #666; }
    .internal { font-style: italic; }
    .external { font-weight: bold; }"""


def _html_link(link: Link, **policy: Any) -> str:
    if is_broken(link, **policy):
        state, label = "broken", _status_text(link)
    elif link.ignored:
        state, label = "ignored", "IGNORED"
    else:
        state, label = "ok", "OK"
    kind = link.kind.value
    return (
        f'    <div class="link {state} {kind}">'
        f"{html.escape(link.url)} [{kind}] - {html.escape(label)}</div>"
    )


def render_html(pages: Sequence[Page], generated_at: datetime, **policy: Any) -> str:
    summary = summarize(pages, **policy)
    esc = html.escape
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        f"  <title>{REPORT_TITLE}</title>",
        "  <style>",
        _HTML_STYLE,
        "  </style>",
        "</head>",
        "<body>",
        f"  <h1>{REPORT_TITLE}</h1>",
        f"  <p>Generated: {generated_at.isoformat()}</p>",
        '  <div class="summary">',
        "    <h2>Summary</h2>",
        "    <ul>",
        *(f"      <li>{esc(item.strip())}</li>" for item in _summary_lines(summary)),
        "    </ul>",
        "  </div>",
    ]
    for page in pages:
        lines.append('  <div class="file">')
        lines.append(f"    <h3>{esc(page.path)}</h3>")
        lines.append(f"    <p><strong>Canonical:</strong> {esc(page.canonical_path)}</p>")
        lines.append(f"    <p><strong>Links found:</strong> {len(page.links)}</p>")
        lines.extend(_html_link(link, **policy) for link in page.links)
        lines.append("  </div>")
    lines.extend(["</body>", "</html>"])
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

_RENDERERS = {
    ReportFormat.TEXT: render_text,
    ReportFormat.JSON: render_json,
    ReportFormat.HTML: render_html,
}


def render_report(
    pages: Sequence[Page],
    fmt: ReportFormat | str = ReportFormat.TEXT,
    *,
    generated_at: Optional[datetime] = None,
    count_mail_failures: Optional[bool] = None,
) -> str:
    """Render *pages* in *fmt*.

    Raises:
        ValueError: If *fmt* is not a known format.
    """
    renderer = _RENDERERS[ReportFormat(fmt)]
    generated_at = generated_at or datetime.now(timezone.utc)
    return renderer(pages, generated_at, count_mail_failures=count_mail_failures)


def write_report(
    pages: Sequence[Page],
    fmt: ReportFormat | str,
    output: Optional[Path] = None,
    **kwargs: Any,
) -> str:
    """Render *pages* and write the result to *output* when given."""
    text = render_report(pages, fmt, **kwargs)
    if output is not None:
        Path(output).write_text(text, encoding="utf-8")
    return text
