"""Link extraction: turns page text into an ordered list of unique :class:`Link`.

Extraction is pattern based and line oriented.  Each line is matched on its
own, so link shapes that span lines are not recognised.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from linkcheck.errors import PageReadError
from linkcheck.scanner.classifier import classify
from linkcheck.scanner.models import Link, Page


# ---------------------------------------------------------------------------
# Patterns (order matters: it fixes the position of a link on a line)
# ---------------------------------------------------------------------------

_LINK_PATTERNS = [
    # [text](url): Markdown inline link or image
    re.compile(r"\[([^\]]*)\]\(([^)]+)\)"),
    # <https://example.com>: Markdown autolink
    re.compile(r"<([A-Za-z][A-Za-z0-9+.\-]*://[^>]+)>"),
    # Markdown reference definition, "[ref]: url"
    re.compile(r"^\s*\[([^\]]+)\]:\s*(.+)$"),
    # <a href="url">
    re.compile(r"""<a\s+[^>]*href\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE),
    # <link href="url">
    re.compile(r"""<link\s+[^>]*href\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE),
]

_IMAGE_PATTERNS = [
    # ![alt](src)
    re.compile(r"!\[([^\]]*)\]\(([^)]+)\)"),
    # <img src="url">
    re.compile(r"""<img\s+[^>]*src\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE),
]


def _clean_url(raw: str) -> str:
    """Trim *raw* and drop an inline title (``url "title"``)."""
    url = raw.strip()
    for stop in (" ", '"'):
        idx = url.find(stop)
        if idx != -1:
            url = url[:idx]
    return url.strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class LinkExtractor:
    """Incremental extractor; feed it lines and read :attr:`links`."""

    def __init__(self, check_images: bool = False, links: List[Link] | None = None) -> None:
        self._patterns = list(_LINK_PATTERNS)
        if check_images:
            self._patterns.extend(_IMAGE_PATTERNS)
        self.links: List[Link] = links if links is not None else []
        self._seen: set[str] = {link.url for link in self.links}

    def feed(self, line: str) -> None:
        """Extract every link on *line* and append the ones not seen yet."""
        line = line.rstrip("\r\n")
        for pattern in self._patterns:
            for match in pattern.finditer(line):
                # The URL is always the last capture group.
                url = _clean_url(match.group(match.re.groups))
                if not url or url == "#":
                    continue
                if url in self._seen:
                    continue
                self._seen.add(url)
                self.links.append(Link(url=url, kind=classify(url)))

    def feed_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.feed(line)


def extract_links(text: str, check_images: bool = False) -> List[Link]:
    """Return the unique links in *text*, in first-seen order."""
    extractor = LinkExtractor(check_images=check_images)
    extractor.feed_lines(text.splitlines())
    return extractor.links


def parse_page(page: Page, check_images: bool = False) -> Page:
    """Read *page* from disk and populate ``page.links``.

    Links are appended as the file is read, so whatever was extracted before
    a read failure stays on the page.

    Raises:
        PageReadError: If the file cannot be opened or read.
    """
    extractor = LinkExtractor(check_images=check_images, links=page.links)
    try:
        with open(page.path, encoding="utf-8", errors="replace") as handle:
            for line in handle:
                extractor.feed(line)
    except OSError as exc:
        raise PageReadError(page.path, exc.strerror or str(exc)) from exc
    return page
