"""Tests for internal link resolution.

Candidate generation is pure and is tested on plain strings.  Resolution is
tested twice: against an in-memory ``PathProbe`` (deterministic, including
case-insensitive matching on any host filesystem) and against a real Hugo
layout under ``tmp_path``.
"""

from __future__ import annotations

import os
from typing import Iterable, List

import pytest

from linkcheck.checker.candidates import (
    candidate_paths,
    needs_index,
    site_roots,
    strip_fragment_and_query,
)
from linkcheck.checker.resolver import FILE_NOT_FOUND, LocalPathProbe, resolve_internal


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class FakeProbe:
    """In-memory file tree: a set of absolute file paths."""

    def __init__(self, files: Iterable[str]) -> None:
        self.files = {os.path.normpath(f) for f in files}
        self.calls: List[str] = []

    def is_file(self, path: str) -> bool:
        self.calls.append(path)
        return path in self.files

    def list_dir(self, path: str) -> List[str]:
        return sorted(
            os.path.basename(f) for f in self.files if os.path.dirname(f) == path
        )


def _touch(root, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

class TestStripFragmentAndQuery:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("/about/?param=value", "/about/"),
            ("/about/#team", "/about/"),
            ("/a#b?c", "/a"),
            ("/a?b#c", "/a"),
            ("#fragment", ""),
            ("?q=1", ""),
            ("/plain.md", "/plain.md"),
        ],
    )
    def test_strips(self, url: str, expected: str) -> None:
        assert strip_fragment_and_query(url) == expected


class TestNeedsIndex:
    def test_trailing_slash(self) -> None:
        assert needs_index("/posts/")

    def test_extensionless(self) -> None:
        assert needs_index("/about")

    def test_file_with_extension(self) -> None:
        assert not needs_index("/images/logo.png")

    def test_dot_in_directory_only(self) -> None:
        assert needs_index("/v1.2/changelog")


class TestSiteRoots:
    def test_plain_root(self) -> None:
        assert site_roots("/site") == ["/site"]

    def test_root_inside_content_adds_site_dir(self) -> None:
        assert site_roots("/site/content/posts") == ["/site/content/posts", "/site"]


# ---------------------------------------------------------------------------
# candidate_paths
# ---------------------------------------------------------------------------

class TestCandidatePaths:
    def test_section_url_in_source_mode(self) -> None:
        assert candidate_paths("/about/", "/site") == [
            "/site/about",
            "/site/static/about",
            "/site/content/about",
            "/site/content/about.md",
            "/site/content/about/index.md",
            "/site/content/about/_index.md",
            "/site/about.md",
            "/site/about/index.md",
            "/site/about/_index.md",
        ]

    def test_file_with_extension_skips_index_forms(self) -> None:
        assert candidate_paths("/image.png", "/site") == [
            "/site/image.png",
            "/site/static/image.png",
            "/site/content/image.png",
        ]

    def test_relative_link_is_taken_relative_to_root(self) -> None:
        assert candidate_paths("docs/guide.md", "/site")[0] == "/site/docs/guide.md"

    def test_site_home(self) -> None:
        assert candidate_paths("/", "/site") == [
            "/site",
            "/site/static",
            "/site/content",
            "/site/content/index.md",
            "/site/content/_index.md",
            "/site/index.md",
            "/site/_index.md",
        ]

    def test_built_output_mode(self) -> None:
        assert candidate_paths("/posts/", "/site", built_output=True) == [
            "/site/public/posts",
            "/site/public/posts/index.html",
            "/site/public/posts.html",
        ]

    def test_built_output_file(self) -> None:
        assert candidate_paths("/css/main.css", "/site", built_output=True) == [
            "/site/public/css/main.css",
        ]

    def test_nested_content_root_adds_second_root(self) -> None:
        paths = candidate_paths("/about/", "/site/content/posts")
        assert "/site/content/posts/about.md" in paths
        assert "/site/content/about.md" in paths
        assert paths.index("/site/content/posts/about.md") < paths.index("/site/content/about.md")

    def test_candidates_are_unique(self) -> None:
        # The second root makes root/content/... and root/... collide.
        paths = candidate_paths("/about/", "/site/content")
        assert len(paths) == len(set(paths))
        assert paths.count("/site/content/about.md") == 1


# ---------------------------------------------------------------------------
# resolve_internal: in-memory tree
# ---------------------------------------------------------------------------

class TestResolveInternalFake:
    def test_pure_fragment_is_found_without_probing(self) -> None:
        probe = FakeProbe([])
        assert resolve_internal("#top", "/site", probe=probe).found
        assert probe.calls == []

    def test_stops_at_first_hit(self) -> None:
        probe = FakeProbe(["/site/content/about.md", "/site/about.md"])
        result = resolve_internal("/about/", "/site", probe=probe, verbose=True)
        assert result.found
        assert result.resolved_path == "/site/content/about.md"
        assert result.checked[-1] == "/site/content/about.md"
        assert "/site/about.md" not in probe.calls

    def test_case_insensitive_fallback(self) -> None:
        probe = FakeProbe(["/site/content/About.md"])
        result = resolve_internal("about.md", "/site", probe=probe, verbose=True)
        assert result.found
        assert result.resolved_path == "/site/content/About.md"
        assert result.checked[-2:] == ("/site/content/about.md", "/site/content/About.md")

    def test_case_insensitive_applies_to_index_candidates(self) -> None:
        probe = FakeProbe(["/site/content/posts/_INDEX.md"])
        assert resolve_internal("/posts/", "/site", probe=probe).found

    def test_no_case_insensitive_match_for_assets(self) -> None:
        probe = FakeProbe(["/site/static/Logo.PNG"])
        assert not resolve_internal("/logo.png", "/site", probe=probe).found

    def test_not_found_verbose_lists_every_candidate(self) -> None:
        probe = FakeProbe([])
        result = resolve_internal("/missing/", "/site", probe=probe, verbose=True)
        assert not result.found
        assert list(result.checked) == candidate_paths("/missing/", "/site")
        outcome = result.to_outcome()
        assert outcome.status_code == 404
        assert outcome.error_message.startswith(f"{FILE_NOT_FOUND} (checked: ")
        assert "/site/content/missing/_index.md" in outcome.error_message

    def test_not_found_quiet_has_generic_message(self) -> None:
        result = resolve_internal("/missing/", "/site", probe=FakeProbe([]))
        assert result.checked == ()
        assert result.to_outcome().error_message == FILE_NOT_FOUND

    def test_found_outcome(self) -> None:
        probe = FakeProbe(["/site/static/image.png"])
        outcome = resolve_internal("/image.png", "/site", probe=probe).to_outcome()
        assert (outcome.status_code, outcome.error_message) == (200, "")

    def test_built_output_ignores_source_tree(self) -> None:
        probe = FakeProbe(["/site/content/about.md"])
        assert not resolve_internal("/about/", "/site", built_output=True, probe=probe).found
        probe = FakeProbe(["/site/public/about/index.html"])
        assert resolve_internal("/about/", "/site", built_output=True, probe=probe).found


# ---------------------------------------------------------------------------
# resolve_internal: real Hugo layout
# ---------------------------------------------------------------------------

@pytest.fixture
def hugo_site(tmp_path):
    _touch(
        tmp_path,
        "content/about.md",
        "content/posts/index.md",
        "content/posts/_index.md",
        "content/guides/Setup.md",
        "static/image.png",
        "static/images/logo.png",
        "public/about/index.html",
    )
    return tmp_path


class TestResolveInternalLocal:
    @pytest.mark.parametrize(
        "link, found",
        [
            ("/about/", True),
            ("/posts/", True),
            ("/image.png", True),
            ("images/logo.png", True),
            ("about", True),
            ("posts", True),
            ("/nonexistent/", False),
            ("#fragment", True),
            ("/about/?param=value", True),
        ],
    )
    def test_hugo_conventions(self, hugo_site, link: str, found: bool) -> None:
        assert resolve_internal(link, str(hugo_site)).found is found

    def test_missing_section_is_404(self, hugo_site) -> None:
        outcome = resolve_internal("/missing/", str(hugo_site)).to_outcome()
        assert outcome.status_code == 404

    def test_case_mismatch_resolves(self, hugo_site) -> None:
        result = resolve_internal("/guides/setup.md", str(hugo_site))
        assert result.found

    def test_directories_do_not_count_as_files(self, hugo_site) -> None:
        (hugo_site / "content" / "empty").mkdir()
        assert not resolve_internal("/empty/", str(hugo_site)).found

    def test_root_inside_content(self, hugo_site) -> None:
        assert resolve_internal("/about/", str(hugo_site / "content" / "posts")).found

    def test_public_tree(self, hugo_site) -> None:
        assert resolve_internal("/about/", str(hugo_site), built_output=True).found
        assert not resolve_internal("/posts/", str(hugo_site), built_output=True).found


class TestLocalPathProbe:
    def test_list_dir_of_missing_directory_is_empty(self, tmp_path) -> None:
        assert LocalPathProbe().list_dir(str(tmp_path / "nope")) == []
