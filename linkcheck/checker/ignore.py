"""Ignore patterns: loading the pattern file and marking matching links."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence

from linkcheck.errors import IgnoreFileError
from linkcheck.log import get_logger
from linkcheck.scanner.models import Link

logger = get_logger(__name__)


def parse_ignore_patterns(lines: Sequence[str], source: str = "<patterns>") -> List[re.Pattern]:
    """Compile one regular expression per line.

    Blank lines and ``#`` comments are skipped; invalid expressions are
    logged and skipped so the remaining patterns still apply.
    """
    patterns: List[re.Pattern] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            patterns.append(re.compile(line))
        except re.error as exc:
            logger.warning("Invalid regex pattern %r (%s:%d): %s", line, source, lineno, exc)
    return patterns


def load_ignore_patterns(path: str | Path) -> List[re.Pattern]:
    """Load the ignore file at *path*; a missing file means no patterns.

    Raises:
        IgnoreFileError: If the file exists but cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as exc:
        raise IgnoreFileError(str(path), str(exc)) from exc
    return parse_ignore_patterns(text.splitlines(), source=str(path))


def apply_ignores(link: Link, patterns: Sequence[re.Pattern]) -> bool:
    """Mark *link* ignored if any pattern matches part of its URL.

    Returns ``True`` when a pattern matched.  An already-ignored link stays
    ignored.
    """
    for pattern in patterns:
        if pattern.search(link.url):
            link.ignored = True
            logger.debug("Ignoring link %s (matched pattern %s)", link.url, pattern.pattern)
            return True
    return False
