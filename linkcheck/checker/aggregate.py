"""Broken-link accounting.

:func:`is_broken` is the only definition of a broken link.  The reports and
the process exit code are both derived from it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from linkcheck.checker.external import is_mailto
from linkcheck.config import settings
from linkcheck.scanner.models import Link, Page


def _mail_policy(count_mail_failures: Optional[bool]) -> bool:
    return settings.count_mail_failures if count_mail_failures is None else count_mail_failures


def is_broken(link: Link, *, count_mail_failures: Optional[bool] = None) -> bool:
    """A link is broken when it is not ignored and either carries an HTTP
    error status or failed without one (status ``0`` plus an error message).

    ``(0, "")`` means "not evaluated" and is never broken.  Failed
    ``mailto:`` links only count when *count_mail_failures* is on (defaults
    to ``settings.count_mail_failures``).
    """
    if link.ignored:
        return False
    if link.status_code >= 400:
        return True
    if link.status_code == 0 and link.error_message:
        if is_mailto(link.url) and not _mail_policy(count_mail_failures):
            return False
        return True
    return False


def count_broken(pages: Iterable[Page], *, count_mail_failures: Optional[bool] = None) -> int:
    return sum(
        1
        for page in pages
        for link in page.links
        if is_broken(link, count_mail_failures=count_mail_failures)
    )


@dataclass
class ReportSummary:
    total_files: int = 0
    total_links: int = 0
    unique_links: int = 0
    broken_links: int = 0
    internal_links: int = 0
    external_links: int = 0
    ignored_links: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(pages: Iterable[Page], *, count_mail_failures: Optional[bool] = None) -> ReportSummary:
    pages = list(pages)
    summary = ReportSummary(total_files=len(pages))
    unique: set[str] = set()
    for page in pages:
        summary.total_links += len(page.links)
        for link in page.links:
            unique.add(link.url)
            if link.is_external:
                summary.external_links += 1
            else:
                summary.internal_links += 1
            if link.ignored:
                summary.ignored_links += 1
            if is_broken(link, count_mail_failures=count_mail_failures):
                summary.broken_links += 1
    summary.unique_links = len(unique)
    return summary
