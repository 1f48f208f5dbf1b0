"""Checker package: ignore filter, internal resolution, external probes."""

from linkcheck.checker.aggregate import ReportSummary, count_broken, is_broken, summarize
from linkcheck.checker.candidates import candidate_paths, strip_fragment_and_query
from linkcheck.checker.external import ExternalValidator, MailDomainChecker
from linkcheck.checker.ignore import apply_ignores, load_ignore_patterns
from linkcheck.checker.resolver import LocalPathProbe, Resolution, resolve_internal
from linkcheck.checker.runner import LinkChecker, check_links

__all__ = [
    "apply_ignores",
    "candidate_paths",
    "check_links",
    "count_broken",
    "is_broken",
    "load_ignore_patterns",
    "resolve_internal",
    "strip_fragment_and_query",
    "summarize",
    "ExternalValidator",
    "LinkChecker",
    "LocalPathProbe",
    "MailDomainChecker",
    "ReportSummary",
    "Resolution",
]
