"""Tests for prowl.banner — startup banner and build summary output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from conftest import blog_hooks, post_route
from prowl.banner import format_banner, format_summary, print_banner
from prowl.config import ProwlConfig
from prowl.export.static import Artifact, Diagnostic, GenerationResult
from prowl.site import Site, load_site


def _result(**overrides: object) -> GenerationResult:
    fields: dict[str, object] = {
        "artifacts": (Artifact("index.html", "/", "", "static", "index"),),
        "assets": (),
        "diagnostics": (),
        "duration_ms": 12.3,
        "output_dir": Path("/tmp/site/dist"),
    }
    fields.update(overrides)
    return GenerationResult(**fields)  # type: ignore[arg-type]


class TestFormatBanner:
    """Tests for the startup banner."""

    def test_dev_mode_banner(self, site: Site) -> None:
        output = format_banner(site, "dev", load_ms=42.5)
        assert "prowl" in output
        assert "5 templates loaded" in output
        assert "42ms" in output
        assert "live reload" in output
        assert "http://127.0.0.1:3000" in output
        assert "Watching for changes" in output

    def test_build_mode_banner(self, site: Site) -> None:
        output = format_banner(site, "build", load_ms=100.0)
        assert "100ms" in output
        assert f"output: {site.config.output_path}" in output
        assert "Watching" not in output

    def test_dynamic_routes_and_hooks_shown(self, site: Site) -> None:
        output = format_banner(site, "dev")
        assert "1 dynamic route (1 matchable)" in output
        assert "2 hooks" in output

    def test_unmatchable_route_counted(self, config: ProwlConfig) -> None:
        route = post_route(get_path=lambda item: "feed.html")
        site = load_site(config, hooks=blog_hooks(), dynamic_routes=(route,))
        assert "(0 matchable)" in format_banner(site, "dev")

    def test_custom_host_port(self, tmp_project: Path) -> None:
        site = load_site(ProwlConfig(root=tmp_project, host="0.0.0.0", port=8080))
        assert "http://0.0.0.0:8080" in format_banner(site, "dev")

    def test_print_banner_writes_stderr(self, site: Site) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_banner(site, "dev")
        assert "templates loaded" in buf.getvalue()


class TestFormatSummary:
    def test_single_page_singular(self) -> None:
        output = format_summary(_result())
        assert "Generated 1 page" in output
        assert "Generated 1 pages" not in output
        assert "Done in 12ms" in output
        assert "Output: /tmp/site/dist" in output

    def test_assets_listed(self) -> None:
        output = format_summary(_result(assets=("robots.txt", "img/logo.svg")))
        assert "Copied 2 assets" in output

    def test_no_assets_line_when_empty(self) -> None:
        assert "Copied" not in format_summary(_result())

    def test_warnings_listed(self) -> None:
        diagnostics = (
            Diagnostic("missing_data_source", "posts", "No hook named 'posts'"),
            Diagnostic("item_failed", "post", "boom"),
        )
        output = format_summary(_result(diagnostics=diagnostics))
        assert "2 warnings" in output
        assert "missing_data_source" in output
        assert "item_failed" in output
