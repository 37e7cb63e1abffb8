"""Tests for prowl.pages.matcher — dev-server request resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import blog_hooks, post_route, write
from prowl.config import ProwlConfig
from prowl.pages.matcher import PASS, RequestMatcher, is_passthrough
from prowl.site import Site, load_site


@pytest.fixture
def matcher(site: Site) -> RequestMatcher:
    return site.matcher()


class TestPassthrough:
    @pytest.mark.parametrize(
        "path",
        ["/style.css", "/img/logo.svg", "/blog/a.json", "/__prowl/events", "/@vite/client",
         "/node_modules/x", "/assets/main", "/src/main"],
    )
    def test_passthrough(self, path: str, matcher: RequestMatcher) -> None:
        assert is_passthrough(path)
        assert matcher.match(path) is PASS

    @pytest.mark.parametrize("path", ["/", "/about", "/blog/a", "/blog/"])
    def test_pages_not_passthrough(self, path: str) -> None:
        assert not is_passthrough(path)


class TestDynamic:
    def test_dynamic_match(self, matcher: RequestMatcher) -> None:
        match = matcher.match("/blog/42")
        assert match.kind == "dynamic"
        assert match.template is not None
        assert match.template.id == "post"
        assert match.params == {"id": "42", "slug": "42"}
        assert match.status == 200

    def test_trailing_slash(self, matcher: RequestMatcher) -> None:
        assert matcher.match("/blog/42/").params["slug"] == "42"

    def test_dynamic_wins_over_static(self, tmp_project: Path, config: ProwlConfig) -> None:
        write(tmp_project / "src" / "pages" / "blog" / "42.html", "static 42")
        site = load_site(config, hooks=blog_hooks(), dynamic_routes=(post_route(),))
        match = site.matcher().match("/blog/42")
        assert match.kind == "dynamic"
        assert match.template is not None
        assert match.template.id == "post"

    def test_query_merged_capture_wins(self, matcher: RequestMatcher) -> None:
        match = matcher.match("/blog/a", {"x": "1", "slug": "zzz"})
        assert match.params == {"x": "1", "id": "a", "slug": "a"}

    def test_missing_template_falls_through(self, config: ProwlConfig) -> None:
        site = load_site(config, hooks=blog_hooks(), dynamic_routes=(post_route(template="gone"),))
        match = site.matcher().match("/blog/a")
        assert match.kind == "not_found"

    def test_first_pattern_wins(self, tmp_project: Path, config: ProwlConfig) -> None:
        write(tmp_project / "src" / "pages" / "article.html", "article")
        routes = (
            post_route(),
            post_route(template="article", get_path=lambda item: f"blog/{item['slug']}.html"),
        )
        site = load_site(config, hooks=blog_hooks(), dynamic_routes=routes)
        match = site.matcher().match("/blog/a")
        assert match.template is not None
        assert match.template.id == "post"


class TestStatic:
    @pytest.mark.parametrize(
        ("path", "template_id"),
        [("/", "index"), ("/about", "about"), ("/about/", "about"),
         ("/blog", "blog/index"), ("/blog/", "blog/index")],
    )
    def test_static_lookup(self, path: str, template_id: str, matcher: RequestMatcher) -> None:
        match = matcher.match(path)
        assert match.kind == "static"
        assert match.template is not None
        assert match.template.id == template_id
        assert match.status == 200

    def test_query_params_passed(self, matcher: RequestMatcher) -> None:
        assert matcher.match("/about", {"tab": "team"}).params == {"tab": "team"}

    def test_claimed_template_not_served(self, matcher: RequestMatcher) -> None:
        match = matcher.match("/post")
        assert match.kind == "not_found"
        assert match.status == 404


class TestNotFound:
    def test_not_found_template(self, matcher: RequestMatcher) -> None:
        match = matcher.match("/nope")
        assert match.kind == "not_found"
        assert match.template is not None
        assert match.template.id == "404"
        assert match.status == 404
        assert match.params == {}

    def test_fallback_without_template(self, tmp_project: Path) -> None:
        site = load_site(ProwlConfig(root=tmp_project, not_found_template="missing"))
        match = site.matcher().match("/nope")
        assert match.kind == "fallback"
        assert match.template is None
        assert match.status == 404

    def test_empty_catalog(self, tmp_path: Path) -> None:
        site = load_site(ProwlConfig(root=tmp_path))
        assert site.matcher().match("/").kind == "fallback"

    def test_matcher_without_patterns(self, site: Site) -> None:
        matcher = RequestMatcher(site.catalog)
        assert matcher.match("/post").kind == "static"
        assert matcher.match("/blog/a").kind == "not_found"
