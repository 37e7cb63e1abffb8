"""Tests for prowl.render — context construction, Kida rendering, minification."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write
from prowl._errors import RenderError
from prowl.pages.catalog import TemplateRef, discover_templates
from prowl.render.assets import AssetBundle
from prowl.render.renderer import KidaRenderer, build_context

BUNDLE = AssetBundle(main="assets/main.js", css=("assets/main.css",))


class TestBuildContext:
    def test_engine_keys(self) -> None:
        ctx = build_context({}, current_url="/about", is_dev=False, assets=BUNDLE)
        assert ctx["current_url"] == "/about"
        assert ctx["current_path"] == "/about"
        assert ctx["is_dev"] is False
        assert ctx["assets"] is BUNDLE
        assert ctx["site"] == {}
        assert callable(ctx["render_assets"])

    def test_hook_data_included(self) -> None:
        ctx = build_context({"posts": [1, 2]}, current_url="/", is_dev=False, assets=BUNDLE)
        assert ctx["posts"] == [1, 2]

    def test_engine_keys_win_over_hook_data(self) -> None:
        data = {"current_url": "/spoofed", "is_dev": True, "site": "x"}
        ctx = build_context(data, current_url="/real", is_dev=False, assets=BUNDLE)
        assert ctx["current_url"] == "/real"
        assert ctx["is_dev"] is False
        assert ctx["site"] == {}

    def test_metadata_exposed_as_site(self) -> None:
        ctx = build_context(
            {}, current_url="/", is_dev=False, assets=BUNDLE, metadata={"title": "Prowl"},
        )
        assert ctx["site"] == {"title": "Prowl"}

    def test_render_assets_in_build(self) -> None:
        ctx = build_context(
            {}, current_url="/", is_dev=False, assets=BUNDLE, dev_entry="/src/main.ts",
        )
        html = str(ctx["render_assets"]())
        assert "/assets/main.js" in html
        assert "/assets/main.css" in html
        assert "/src/main.ts" not in html

    def test_render_assets_in_dev_adds_entry(self) -> None:
        ctx = build_context(
            {}, current_url="/", is_dev=True, assets=AssetBundle(), dev_entry="/src/main.ts",
        )
        assert str(ctx["render_assets"]()) == '<script type="module" src="/src/main.ts"></script>'

    def test_render_assets_empty(self) -> None:
        ctx = build_context({}, current_url="/", is_dev=True, assets=AssetBundle())
        assert str(ctx["render_assets"]()) == ""


class TestKidaRenderer:
    @pytest.fixture
    def source(self, tmp_path: Path) -> Path:
        src = tmp_path / "src"
        write(src / "pages" / "about.html", "<p>{{ current_url }} {{ title }}</p>")
        write(src / "pages" / "escaped.html", "{{ body }}")
        return src

    @pytest.mark.asyncio
    async def test_renders_context(self, source: Path) -> None:
        ref = discover_templates(source / "pages", source_dir=source)["about"]
        html = await KidaRenderer(source).render(ref, {"current_url": "/about", "title": "Hi"})
        assert html == "<p>/about Hi</p>"

    @pytest.mark.asyncio
    async def test_autoescapes(self, source: Path) -> None:
        ref = discover_templates(source / "pages", source_dir=source)["escaped"]
        html = await KidaRenderer(source).render(ref, {"body": "<b>"})
        assert "<b>" not in html
        assert "&lt;b&gt;" in html

    @pytest.mark.asyncio
    async def test_missing_template_raises_render_error(self, source: Path) -> None:
        ref = TemplateRef(id="nope", name="pages/nope.html", path=source / "pages" / "nope.html")
        with pytest.raises(RenderError, match="nope"):
            await KidaRenderer(source).render(ref, {})


class TestMakeMinifier:
    def test_minifies_html(self) -> None:
        pytest.importorskip("minify_html")
        from prowl.render.minify import make_minifier

        minify = make_minifier()
        out = minify("<html>\n  <body>\n    <p>hi</p>\n  </body>\n</html>\n")
        assert "hi" in out
        assert len(out) < 40
