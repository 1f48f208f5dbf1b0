"""Input errors raised by the link checker.

Per-link problems (a missing file, an unreachable host) are never raised;
they are recorded on the link itself.  Only failures to read the inputs
surface as exceptions.
"""

from __future__ import annotations


class PageReadError(OSError):
    """A page could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to read {path}: {reason}")
        self.path = path


class IgnoreFileError(OSError):
    """The ignore-pattern file exists but could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to read ignore file {path}: {reason}")
        self.path = path
