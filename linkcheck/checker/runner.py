"""Run orchestration: validates every link of a page set.

Network probes (external links, and internal links when a base URL is set)
run on a bounded ``ThreadPoolExecutor`` while local filesystem resolution
proceeds on the calling thread.  Every link is validated by exactly one task;
outcomes are merged back by ``(page index, link index)`` so report order
follows extraction order, never completion order.
"""

from __future__ import annotations

import re
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from linkcheck.checker.aggregate import count_broken
from linkcheck.checker.candidates import strip_fragment_and_query
from linkcheck.checker.external import ExternalValidator
from linkcheck.checker.ignore import apply_ignores
from linkcheck.checker.resolver import PathProbe, resolve_internal
from linkcheck.config import CheckOptions, DisabledExternalPolicy, settings
from linkcheck.errors import PageReadError
from linkcheck.log import get_logger
from linkcheck.scanner.extractor import parse_page
from linkcheck.scanner.models import Link, LinkOutcome, Page

logger = get_logger(__name__)

EXTERNAL_DISABLED_MESSAGE = "External link checking disabled"

_Key = Tuple[int, int]


def has_template_syntax(url: str) -> bool:
    """``True`` for unexpanded template expressions such as ``{{ .Site.BaseURL }}``."""
    return "{{" in url or "}}" in url


def join_base_url(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def disabled_outcome(policy: DisabledExternalPolicy) -> LinkOutcome:
    if policy is DisabledExternalPolicy.OK:
        return LinkOutcome.ok()
    if policy is DisabledExternalPolicy.ERROR:
        return LinkOutcome.failed(EXTERNAL_DISABLED_MESSAGE)
    return LinkOutcome(status_code=0)


class LinkChecker:
    """Validates the links of a set of pages in place.

    *probe* and *validator* replace the filesystem and the network; when no
    validator is given one is created (and closed) per :meth:`check` call.
    """

    def __init__(
        self,
        options: CheckOptions,
        *,
        probe: Optional[PathProbe] = None,
        validator: Optional[ExternalValidator] = None,
        max_workers: Optional[int] = None,
        external_disabled: Optional[DisabledExternalPolicy] = None,
    ) -> None:
        self.options = options
        self._probe = probe
        self._validator = validator
        self._max_workers = max(1, max_workers or settings.max_workers)
        self._external_disabled = external_disabled or settings.external_disabled

    def parse_pages(self, pages: Sequence[Page]) -> List[PageReadError]:
        """Extract the links of every page.

        Unreadable pages keep whatever was read before the failure; their
        errors are returned so the caller decides how to report them.
        """
        errors: List[PageReadError] = []
        for page in pages:
            try:
                parse_page(page, check_images=self.options.check_images)
            except PageReadError as exc:
                logger.debug("Skipping rest of %s: %s", page.path, exc)
                errors.append(exc)
        return errors

    # ------------------------------------------------------------------
    # Per-link decisions
    # ------------------------------------------------------------------

    def _immediate_outcome(self, link: Link) -> Optional[LinkOutcome]:
        """Outcome for links that need neither the filesystem nor the network."""
        if link.ignored or has_template_syntax(link.url):
            return LinkOutcome.ok()
        if link.is_external and not self.options.check_external:
            return disabled_outcome(self._external_disabled)
        if not link.is_external and not strip_fragment_and_query(link.url):
            return LinkOutcome.ok()
        return None

    def _resolve_local(self, link: Link) -> LinkOutcome:
        resolution = resolve_internal(
            link.url,
            self.options.site_root,
            built_output=self.options.check_built_output,
            verbose=self.options.verbose,
            probe=self._probe,
        )
        if not resolution.found:
            logger.debug("Broken internal link %s: %s", link.url, resolution.checked or "no match")
        return resolution.to_outcome()

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def check(self, pages: Sequence[Page], patterns: Sequence[re.Pattern] = ()) -> None:
        """Apply *patterns*, then validate every link of *pages*."""
        remote: List[Tuple[_Key, str, bool]] = []
        local: List[_Key] = []

        for pi, page in enumerate(pages):
            for li, link in enumerate(page.links):
                apply_ignores(link, patterns)
                outcome = self._immediate_outcome(link)
                if outcome is not None:
                    page.merge(li, outcome)
                elif link.is_external:
                    remote.append(((pi, li), link.url, True))
                elif self.options.base_url:
                    target = join_base_url(
                        self.options.base_url, strip_fragment_and_query(link.url)
                    )
                    remote.append(((pi, li), target, False))
                else:
                    local.append((pi, li))

        logger.info(
            "Checking %d local and %d remote link(s) in %d page(s)",
            len(local),
            len(remote),
            len(pages),
        )

        if not remote:
            self._check_local(pages, local)
            return

        validator = self._validator or ExternalValidator()
        try:
            results = self._run_remote(validator, pages, local, remote)
        finally:
            if self._validator is None:
                validator.close()

        for (pi, li) in sorted(results):
            pages[pi].merge(li, results[(pi, li)])

    def _check_local(self, pages: Sequence[Page], keys: List[_Key]) -> None:
        for pi, li in keys:
            pages[pi].merge(li, self._resolve_local(pages[pi].links[li]))

    def _run_remote(
        self,
        validator: ExternalValidator,
        pages: Sequence[Page],
        local: List[_Key],
        remote: List[Tuple[_Key, str, bool]],
    ) -> Dict[_Key, LinkOutcome]:
        results: Dict[_Key, LinkOutcome] = {}
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(remote)),
            thread_name_prefix="linkcheck",
        ) as pool:
            futures: Dict[Future, Tuple[_Key, str]] = {}
            for key, url, external in remote:
                fn: Callable[[str], LinkOutcome] = (
                    validator.validate if external else validator.probe_http
                )
                futures[pool.submit(fn, url)] = (key, url)

            # Filesystem work proceeds while the probes are in flight.
            self._check_local(pages, local)

            for future in as_completed(futures):
                key, url = futures[future]
                try:
                    results[key] = future.result()
                except Exception as exc:  # noqa: BLE001
                    logger.warning("Probe for %s failed unexpectedly: %s", url, exc)
                    results[key] = LinkOutcome.failed(str(exc) or exc.__class__.__name__)
        return results


def check_links(
    pages: Sequence[Page],
    options: CheckOptions,
    patterns: Sequence[re.Pattern] = (),
    **kwargs,
) -> int:
    """Validate *pages* in place and return the number of broken links."""
    LinkChecker(options, **kwargs).check(pages, patterns)
    return count_broken(pages)
