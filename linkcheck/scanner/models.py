"""Data models for scanned pages and the links found in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


class LinkKind(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass(frozen=True)
class LinkOutcome:
    """The result of validating one link.

    ``status_code`` is ``0`` when no HTTP status was obtained, an HTTP status
    otherwise; ``200`` also stands for "valid" on filesystem and mail checks.
    """

    status_code: int
    error_message: str = ""
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls) -> "LinkOutcome":
        return cls(status_code=200)

    @classmethod
    def failed(cls, message: str) -> "LinkOutcome":
        return cls(status_code=0, error_message=message)


@dataclass
class Link:
    """A single reference discovered in a page."""

    url: str
    kind: LinkKind
    ignored: bool = False
    status_code: int = 0
    error_message: str = ""
    last_checked: Optional[datetime] = None

    @property
    def is_external(self) -> bool:
        return self.kind is LinkKind.EXTERNAL

    def record(self, outcome: LinkOutcome) -> None:
        """Store *outcome*; status, error and timestamp always change together."""
        self.status_code = outcome.status_code
        self.error_message = outcome.error_message
        self.last_checked = outcome.checked_at


@dataclass
class Page:
    """One scanned document and its links, in first-seen order."""

    path: str
    canonical_path: str = ""
    links: List[Link] = field(default_factory=list)

    def merge(self, index: int, outcome: LinkOutcome) -> None:
        """Record *outcome* on the link at position *index*."""
        self.links[index].record(outcome)
