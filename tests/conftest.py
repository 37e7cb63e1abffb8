"""Shared test fixtures for prowl."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from prowl._errors import RenderError
from prowl.config import ProwlConfig
from prowl.hooks.registry import Hook, define_hook
from prowl.pages.catalog import TemplateRef
from prowl.routes.dynamic import DynamicRoute
from prowl.site import Site, load_site

POSTS = [
    {"slug": "a", "title": "Alpha"},
    {"slug": "b", "title": "Beta"},
]


class RecordingRenderer:
    """Renderer double: records every call and returns a tiny HTML page.

    The body is ``<template id>|<current_url>`` plus the repr of the
    ``post`` context key when present, so tests can assert on what each
    page received without a template engine.
    """

    def __init__(self, fail: Callable[[TemplateRef, Mapping[str, Any]], bool] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._fail = fail

    async def render(self, template: TemplateRef, context: Mapping[str, Any]) -> str:
        self.calls.append((template.id, dict(context)))
        if self._fail is not None and self._fail(template, context):
            msg = f"boom in {template.id}"
            raise RenderError(msg)
        body = f"{template.id}|{context['current_url']}"
        if "post" in context:
            body += f"|{context['post']!r}"
        return f"<html><body>{body}</body></html>"

    def rendered_ids(self) -> list[str]:
        return [template_id for template_id, _ in self.calls]


def post_route(**overrides: Any) -> DynamicRoute:
    """The blog route used throughout the tests."""
    fields: dict[str, Any] = {
        "template": "post",
        "data_source": "posts",
        "get_params": lambda item: {"slug": item["slug"]},
        "get_path": lambda item: f"blog/{item['slug']}.html",
    }
    fields.update(overrides)
    return DynamicRoute(**fields)


def blog_hooks(posts: list[dict[str, Any]] | None = None) -> tuple[Hook, ...]:
    """``posts`` returns the collection, ``post`` looks one up by slug."""
    items = POSTS if posts is None else posts

    async def get_posts(params: dict[str, Any]) -> list[dict[str, Any]]:
        return list(items)

    def get_post(params: dict[str, Any]) -> dict[str, Any] | None:
        return next((p for p in items if p["slug"] == params.get("slug")), None)

    return (define_hook("posts", get_posts), define_hook("post", get_post))


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project for testing.

    Layout::

        src/pages/index.html   about.html   post.html   404.html
        src/pages/blog/index.html
        src/pages/_partial.html            (skipped: partial)
        src/layouts/base.html
        public/robots.txt

    """
    pages = tmp_path / "src" / "pages"
    for name in ("index", "about", "post", "404", "blog/index"):
        write(pages / f"{name}.html", f"<html><body>{name}</body></html>\n")
    write(pages / "_partial.html", "<p>partial</p>\n")
    write(tmp_path / "src" / "layouts" / "base.html", "<html>{% block body %}{% end %}</html>\n")
    write(tmp_path / "public" / "robots.txt", "User-agent: *\n")
    return tmp_path


@pytest.fixture
def config(tmp_project: Path) -> ProwlConfig:
    return ProwlConfig(root=tmp_project)


@pytest.fixture
def site(config: ProwlConfig) -> Site:
    """Blog site: the ``post`` route over two posts, plus both hooks."""
    return load_site(config, hooks=blog_hooks(), dynamic_routes=(post_route(),))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()
