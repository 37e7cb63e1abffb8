"""Tests for prowl.pages.paths — the flat/directory output path strategy."""

from __future__ import annotations

import pytest

from prowl._errors import PathError
from prowl.pages.paths import (
    check_logical_path,
    normalize_request_path,
    to_artifact_path,
    to_canonical_url,
)


class TestToArtifactPath:
    @pytest.mark.parametrize(
        ("logical", "expected"),
        [
            ("about.html", "about.html"),
            ("blog/a.html", "blog/a.html"),
            ("index.html", "index.html"),
            ("blog/index.html", "blog/index.html"),
        ],
    )
    def test_flat(self, logical: str, expected: str) -> None:
        assert to_artifact_path(logical, "flat") == expected

    @pytest.mark.parametrize(
        ("logical", "expected"),
        [
            ("about.html", "about/index.html"),
            ("blog/a.html", "blog/a/index.html"),
            ("index.html", "index.html"),
            ("blog/index.html", "blog/index.html"),
        ],
    )
    def test_directory(self, logical: str, expected: str) -> None:
        assert to_artifact_path(logical, "directory") == expected

    @pytest.mark.parametrize("mode", ["flat", "directory"])
    @pytest.mark.parametrize("root", ["", "/"])
    def test_root(self, root: str, mode: str) -> None:
        assert to_artifact_path(root, mode) == "index.html"  # type: ignore[arg-type]

    def test_missing_extension_gets_html(self) -> None:
        assert to_artifact_path("about", "flat") == "about.html"
        assert to_artifact_path("about", "directory") == "about/index.html"

    def test_trailing_slash_means_index(self) -> None:
        assert to_artifact_path("blog/", "flat") == "blog/index.html"

    def test_leading_slash_stripped(self) -> None:
        assert to_artifact_path("/about.html", "flat") == "about.html"

    def test_non_html_untouched(self) -> None:
        assert to_artifact_path("feed.xml", "directory") == "feed.xml"

    @pytest.mark.parametrize("logical", ["about.html", "blog/a.html", "index.html", "x/index.html"])
    def test_directory_idempotent(self, logical: str) -> None:
        once = to_artifact_path(logical, "directory")
        assert to_artifact_path(once, "directory") == once

    @pytest.mark.parametrize("logical", ["../x.html", "blog/../../x.html", "a/..", "..\\x.html"])
    def test_parent_segments_rejected(self, logical: str) -> None:
        with pytest.raises(PathError, match="escapes the output directory"):
            to_artifact_path(logical, "flat")


class TestCheckLogicalPath:
    @pytest.mark.parametrize("logical", ["blog/a.html", "a..b.html", "./about.html", ""])
    def test_accepted(self, logical: str) -> None:
        assert check_logical_path(logical) == logical

    def test_rejected(self) -> None:
        with pytest.raises(PathError):
            check_logical_path("blog/../../escaped.html")


class TestToCanonicalUrl:
    def test_flat_strips_extension(self) -> None:
        assert to_canonical_url("about.html", "flat") == "/about"
        assert to_canonical_url("blog/a.html", "flat") == "/blog/a"

    def test_flat_index_is_directory_url(self) -> None:
        assert to_canonical_url("blog/index.html", "flat") == "/blog"

    def test_directory_trailing_slash(self) -> None:
        assert to_canonical_url("about/index.html", "directory") == "/about/"
        assert to_canonical_url("blog/a/index.html", "directory") == "/blog/a/"

    @pytest.mark.parametrize("mode", ["flat", "directory"])
    @pytest.mark.parametrize("physical", ["", "/", "index.html"])
    def test_root_is_slash(self, physical: str, mode: str) -> None:
        assert to_canonical_url(physical, mode) == "/"  # type: ignore[arg-type]

    def test_non_html_keeps_name(self) -> None:
        assert to_canonical_url("feed.xml", "flat") == "/feed.xml"

    @pytest.mark.parametrize("logical", ["about.html", "blog/a.html", "docs/intro.html"])
    def test_flat_round_trip(self, logical: str) -> None:
        url = to_canonical_url(to_artifact_path(logical, "flat"), "flat")
        assert url == "/" + logical.removesuffix(".html")


class TestNormalizeRequestPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [("", "/"), ("/", "/"), ("/about/", "/about"), ("about", "/about"), ("/a/b//", "/a/b")],
    )
    def test_normalize(self, path: str, expected: str) -> None:
        assert normalize_request_path(path) == expected
