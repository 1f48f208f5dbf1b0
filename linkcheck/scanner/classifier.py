"""Internal/external classification of raw link URLs."""

from __future__ import annotations

from urllib.parse import urlsplit

from linkcheck.scanner.models import LinkKind


def classify(url: str) -> LinkKind:
    """Return :attr:`LinkKind.EXTERNAL` when *url* carries a scheme or host.

    ``mailto:`` has no host but does have a scheme, so it is external.
    Anything that cannot be parsed is treated as a local path.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return LinkKind.INTERNAL

    if parts.scheme or parts.netloc:
        return LinkKind.EXTERNAL
    return LinkKind.INTERNAL
