"""Scanner package: page enumeration, link extraction and classification."""

from linkcheck.scanner.classifier import classify
from linkcheck.scanner.extractor import LinkExtractor, extract_links, parse_page
from linkcheck.scanner.files import enumerate_pages
from linkcheck.scanner.models import Link, LinkKind, LinkOutcome, Page

__all__ = [
    "classify",
    "extract_links",
    "parse_page",
    "enumerate_pages",
    "LinkExtractor",
    "Link",
    "LinkKind",
    "LinkOutcome",
    "Page",
]
