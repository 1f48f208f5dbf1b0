"""Internal link resolution against the site's directory layout.

Filesystem access goes through a :class:`PathProbe` so resolution can be
exercised against an in-memory tree.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from linkcheck.checker.candidates import (
    candidate_paths,
    is_source_document,
    strip_fragment_and_query,
)
from linkcheck.scanner.models import LinkOutcome

FILE_NOT_FOUND = "File not found"


class PathProbe(Protocol):
    def is_file(self, path: str) -> bool:
        ...

    def list_dir(self, path: str) -> List[str]:
        ...


class LocalPathProbe:
    """:class:`PathProbe` backed by the real filesystem."""

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def list_dir(self, path: str) -> List[str]:
        try:
            return sorted(os.listdir(path))
        except OSError:
            return []


@dataclass
class Resolution:
    found: bool
    checked: Tuple[str, ...] = field(default_factory=tuple)
    resolved_path: Optional[str] = None

    def to_outcome(self) -> LinkOutcome:
        if self.found:
            return LinkOutcome.ok()
        if self.checked:
            return LinkOutcome(
                status_code=404,
                error_message=f"{FILE_NOT_FOUND} (checked: {', '.join(self.checked)})",
            )
        return LinkOutcome(status_code=404, error_message=FILE_NOT_FOUND)


def find_case_insensitive(path: str, probe: PathProbe) -> Optional[str]:
    """Return the file in *path*'s directory whose name equals *path*'s name
    ignoring case, or ``None``."""
    parent, name = os.path.split(path)
    wanted = name.lower()
    for entry in probe.list_dir(parent or "."):
        if entry.lower() == wanted:
            candidate = os.path.join(parent, entry)
            if probe.is_file(candidate):
                return candidate
    return None


def resolve_internal(
    link_path: str,
    site_root: str,
    *,
    built_output: bool = False,
    verbose: bool = False,
    probe: Optional[PathProbe] = None,
) -> Resolution:
    """Decide whether the internal link *link_path* points at an existing file.

    Fragment and query are stripped first; a link that is nothing but a
    fragment is always found.  Candidates from :func:`candidate_paths` are
    tried in order, each one exactly and then, for source documents, by a
    case-insensitive directory lookup.  With *verbose* the returned
    :class:`Resolution` lists every path tested.
    """
    path = strip_fragment_and_query(link_path)
    if not path:
        return Resolution(found=True)

    probe = probe or LocalPathProbe()
    checked: List[str] = []

    for candidate in candidate_paths(path, site_root, built_output=built_output):
        checked.append(candidate)
        if probe.is_file(candidate):
            return Resolution(True, tuple(checked) if verbose else (), candidate)
        if is_source_document(candidate):
            match = find_case_insensitive(candidate, probe)
            if match is not None:
                checked.append(match)
                return Resolution(True, tuple(checked) if verbose else (), match)

    return Resolution(False, tuple(checked) if verbose else ())
