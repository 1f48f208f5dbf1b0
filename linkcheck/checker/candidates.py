"""Candidate file locations for internal links.

Everything here is pure: paths are computed from the link and the site root
only, never by looking at the filesystem.
"""

from __future__ import annotations

import os
import posixpath
from typing import List

CONTENT_DIR = "content"
STATIC_DIR = "static"
PUBLIC_DIR = "public"

SOURCE_EXTENSIONS = frozenset({".md", ".markdown", ".html", ".htm"})


def strip_fragment_and_query(url: str) -> str:
    """Return *url* up to the first ``#`` or ``?``."""
    for stop in ("#", "?"):
        idx = url.find(stop)
        if idx != -1:
            url = url[:idx]
    return url


def site_roots(site_root: str) -> List[str]:
    """Return *site_root* and, when it lies inside a ``content`` tree, the
    directory that contains ``content``."""
    roots = [site_root]
    parts = os.path.normpath(os.path.abspath(site_root)).split(os.sep)
    if CONTENT_DIR in parts:
        idx = len(parts) - 1 - parts[::-1].index(CONTENT_DIR)
        ancestor = os.sep.join(parts[:idx]) or os.sep
        roots.append(ancestor)
    return roots


def needs_index(link_path: str) -> bool:
    """``True`` for section URLs (``/posts/``) and clean URLs (``/about``)."""
    if link_path.endswith("/"):
        return True
    return posixpath.splitext(posixpath.basename(link_path))[1] == ""


def is_source_document(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SOURCE_EXTENSIONS


def _source_candidates(root: str, rel: str, base: str, index: bool) -> List[str]:
    paths = [
        os.path.join(root, rel),
        os.path.join(root, STATIC_DIR, rel),
        os.path.join(root, CONTENT_DIR, rel),
    ]
    if index:
        # Under content/ first, then directly under the root in case the
        # root already points inside content/.
        for prefix in (os.path.join(root, CONTENT_DIR), root):
            if base:
                paths.append(os.path.join(prefix, base + ".md"))
            paths.append(os.path.join(prefix, base, "index.md"))
            paths.append(os.path.join(prefix, base, "_index.md"))
    return paths


def _built_candidates(root: str, rel: str, base: str, index: bool) -> List[str]:
    public = os.path.join(root, PUBLIC_DIR)
    paths = [os.path.join(public, rel)]
    if index:
        paths.append(os.path.join(public, base, "index.html"))
        if base:
            paths.append(os.path.join(public, base + ".html"))
    return paths


def candidate_paths(link_path: str, site_root: str, built_output: bool = False) -> List[str]:
    """Return the ordered, deduplicated file locations that satisfy *link_path*.

    *link_path* must already be stripped of its fragment and query.  The
    order is deterministic and is surfaced verbatim in diagnostics.
    """
    rel = link_path.lstrip("/")
    base = rel.rstrip("/")
    index = needs_index(link_path)
    build = _built_candidates if built_output else _source_candidates

    seen: set[str] = set()
    ordered: List[str] = []
    for root in site_roots(site_root):
        for path in build(root, rel, base, index):
            path = os.path.normpath(path)
            if path not in seen:
                seen.add(path)
                ordered.append(path)
    return ordered
