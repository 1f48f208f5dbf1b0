"""Centralised settings for the link checker.

Process-wide defaults are resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the working
directory (loaded automatically when this module is imported).

Per-run switches that the CLI collects from flags live in
:class:`CheckOptions`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from linkcheck import __version__

# Load .env from the directory the checker is run from (usually the site root)
load_dotenv(Path.cwd() / ".env", override=False)

DEFAULT_IGNORE_FILE = ".hugo-link-checker-ignore"


class DisabledExternalPolicy(str, Enum):
    """Outcome recorded for external links when external checking is off."""

    SKIP = "skip"    # status 0, no error: not evaluated, not broken
    ERROR = "error"  # status 0, "External link checking disabled": broken
    OK = "ok"        # status 200: assumed valid


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Network probes
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LINKCHECK_REQUEST_TIMEOUT", "10.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "LINKCHECK_USER_AGENT", f"hugo-link-checker/{__version__}"
        )
    )
    max_workers: int = field(
        default_factory=lambda: int(os.environ.get("LINKCHECK_MAX_WORKERS", "8"))
    )

    # ------------------------------------------------------------------
    # Ignore patterns
    # ------------------------------------------------------------------
    ignore_file: Path = field(
        default_factory=lambda: Path(
            os.environ.get("LINKCHECK_IGNORE_FILE", DEFAULT_IGNORE_FILE)
        )
    )

    # ------------------------------------------------------------------
    # Result policies
    # ------------------------------------------------------------------
    external_disabled: DisabledExternalPolicy = field(
        default_factory=lambda: DisabledExternalPolicy(
            os.environ.get("LINKCHECK_EXTERNAL_DISABLED", "skip").strip().lower()
        )
    )
    count_mail_failures: bool = field(
        default_factory=lambda: _env_bool("LINKCHECK_COUNT_MAIL_FAILURES", True)
    )


@dataclass
class CheckOptions:
    """Switches for a single checking run."""

    site_root: str = "."
    check_external: bool = False
    check_built_output: bool = False
    base_url: str = ""
    verbose: bool = False
    check_images: bool = False


# Module-level singleton; import this everywhere:
#   from linkcheck.config import settings
settings = Settings()
