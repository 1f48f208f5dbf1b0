"""Enumeration of the pages to scan."""

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Sequence

from linkcheck.scanner.models import Page

DEFAULT_EXTENSIONS = (".md", ".html", ".htm")


def _normalise_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    return tuple(
        (ext if ext.startswith(".") else f".{ext}").lower() for ext in extensions
    )


def _raise(exc: OSError) -> None:
    raise exc


def _iter_files(root: str) -> Iterable[str]:
    if os.path.isfile(root):
        yield root
        return
    if not os.path.exists(root):
        raise FileNotFoundError(f"No such file or directory: {root!r}")
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            yield os.path.join(dirpath, name)


def enumerate_pages(
    paths: Sequence[str] | str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> List[Page]:
    """Return one :class:`Page` per unique file under *paths*.

    Files are matched on extension (case-insensitively); dot-files are
    skipped.  Files reached twice (e.g. through a symlink) are kept once,
    under the first path that reached them.  The result is sorted by
    canonical path.

    Raises:
        FileNotFoundError: If one of *paths* does not exist.
    """
    if isinstance(paths, str):
        paths = [paths]
    wanted = _normalise_extensions(extensions)

    pages: Dict[str, Page] = {}
    for root in paths:
        for path in _iter_files(root):
            name = os.path.basename(path)
            if name.startswith("."):
                continue
            if not name.lower().endswith(wanted):
                continue
            canonical = os.path.normpath(os.path.realpath(path))
            if canonical in pages:
                continue
            pages[canonical] = Page(path=path, canonical_path=canonical)

    return [pages[key] for key in sorted(pages)]
