"""External link validation: HTTP status probes and mail-domain lookups.

Nothing in here raises for a bad link.  Every terminal condition (refused
connection, timeout, malformed ``mailto:``, unknown domain) is returned as a
:class:`LinkOutcome` so that one dead host never stops the batch.
"""

from __future__ import annotations

from typing import Callable, Optional
from urllib.parse import urlsplit

import dns.exception
import dns.resolver
import httpx

from linkcheck.config import settings
from linkcheck.log import get_logger
from linkcheck.scanner.models import LinkOutcome

logger = get_logger(__name__)

DomainLookup = Callable[[str, float], bool]


def _describe(exc: Exception) -> str:
    """Human-readable text for *exc*, falling back to its class name."""
    text = str(exc).strip()
    return text or exc.__class__.__name__


# ---------------------------------------------------------------------------
# Mail domains
# ---------------------------------------------------------------------------

def lookup_mx(domain: str, timeout: float) -> bool:
    """``True`` if *domain* publishes at least one MX record."""
    try:
        answers = dns.resolver.resolve(domain, "MX", lifetime=timeout)
    except (dns.exception.DNSException, UnicodeError) as exc:
        logger.debug("MX lookup failed for %s: %s", domain, _describe(exc))
        return False
    return len(answers) > 0


def lookup_host(domain: str, timeout: float) -> bool:
    """``True`` if *domain* has an A or AAAA record."""
    for rdtype in ("A", "AAAA"):
        try:
            answers = dns.resolver.resolve(domain, rdtype, lifetime=timeout)
        except (dns.exception.DNSException, UnicodeError) as exc:
            logger.debug("%s lookup failed for %s: %s", rdtype, domain, _describe(exc))
            continue
        if len(answers) > 0:
            return True
    return False


class MailDomainChecker:
    """Validates ``mailto:`` links by checking the address's domain.

    The MX lookup runs first; a domain without MX records still passes when
    it resolves as a host.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        mx_lookup: DomainLookup = lookup_mx,
        host_lookup: DomainLookup = lookup_host,
    ) -> None:
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._mx_lookup = mx_lookup
        self._host_lookup = host_lookup

    def check(self, url: str) -> LinkOutcome:
        try:
            address = urlsplit(url).path.strip()
        except ValueError as exc:
            return LinkOutcome.failed(f"Invalid mailto URL: {_describe(exc)}")

        if not address:
            return LinkOutcome.failed("Empty email address")
        if "@" not in address:
            return LinkOutcome.failed(f"Invalid email address: {address}")
        domain = address.rsplit("@", 1)[1].strip()
        if not domain:
            return LinkOutcome.failed(f"Invalid email address: {address}")

        if self._mx_lookup(domain, self.timeout):
            return LinkOutcome.ok()
        if self._host_lookup(domain, self.timeout):
            return LinkOutcome.ok()
        return LinkOutcome.failed(f"Domain not found: {domain}")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def is_mailto(url: str) -> bool:
    return url[:7].lower() == "mailto:"


class ExternalValidator:
    """Probes external links over one shared ``httpx.Client``.

    Use as a context manager so the connection pool is closed::

        with ExternalValidator() as validator:
            outcome = validator.validate("https://gohugo.io/")
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        mail_checker: Optional[MailDomainChecker] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._client = client or httpx.Client(
            headers={"User-Agent": user_agent or settings.user_agent},
            timeout=self.timeout,
            follow_redirects=True,
        )
        self._mail = mail_checker or MailDomainChecker(timeout=self.timeout)

    def __enter__(self) -> "ExternalValidator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def validate(self, url: str) -> LinkOutcome:
        """Validate *url*: a mail-domain check for ``mailto:``, an HTTP probe otherwise."""
        if is_mailto(url):
            return self._mail.check(url)
        return self.probe_http(url)

    def _get_status(self, url: str) -> int:
        # Stream so the body of a GET fallback is never downloaded.
        with self._client.stream("GET", url) as response:
            return response.status_code

    def probe_http(self, url: str) -> LinkOutcome:
        """HEAD *url*, retrying once with GET if the transport fails.

        Any HTTP response is accepted as the outcome; ``"HTTP <code>"`` is
        attached for codes ``>= 400``.
        """
        try:
            try:
                status = self._client.head(url).status_code
            except httpx.TransportError as exc:
                logger.debug("HEAD %s failed (%s); retrying with GET", url, _describe(exc))
                status = self._get_status(url)
        # Hosts that fail IDNA encoding raise UnicodeError from URL parsing.
        except (httpx.InvalidURL, UnicodeError) as exc:
            return LinkOutcome.failed(f"Invalid URL: {_describe(exc)}")
        except httpx.HTTPError as exc:
            return LinkOutcome.failed(_describe(exc))

        if status >= 400:
            return LinkOutcome(status_code=status, error_message=f"HTTP {status}")
        return LinkOutcome(status_code=status)
