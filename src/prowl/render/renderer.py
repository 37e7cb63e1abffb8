"""Renderer boundary — context construction and template rendering.

Prowl prepares the inputs of a render (which template, which context) and
hands them to a :class:`Renderer`.  Template evaluation itself belongs to
the renderer; the default one is backed by Kida.

Every render receives a context built by :func:`build_context`: the
resolved hook data, plus engine keys that always win over hook data:

    current_url     canonical URL of the page being rendered
    current_path    same as ``current_url``
    is_dev          True under the dev server
    assets          the :class:`AssetBundle`
    render_assets   callable returning the script/stylesheet tags
    site            site metadata from configuration
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from kida import Environment, FileSystemLoader
from kida.template import Markup

from prowl._errors import RenderError

if TYPE_CHECKING:
    from pathlib import Path

    from prowl.pages.catalog import TemplateRef
    from prowl.render.assets import AssetBundle


class Renderer(Protocol):
    """Anything that turns a template and a context into a content string."""

    async def render(self, template: TemplateRef, context: Mapping[str, Any]) -> str: ...


class KidaRenderer:
    """Renders templates through a Kida environment rooted at *source_dir*.

    Template names are resolved relative to *source_dir*, so pages can
    extend layouts and include partials stored beside the pages directory
    (``{% extends "layouts/base.html" %}``).

    Kida rendering is synchronous; it runs in a worker thread so concurrent
    page jobs do not block the event loop.

    Args:
        source_dir: Loader root.
        auto_reload: Recompile templates whose source changed (dev mode).

    """

    def __init__(self, source_dir: Path, *, auto_reload: bool = False) -> None:
        self._env = Environment(
            loader=FileSystemLoader([str(source_dir)]),
            autoescape=True,
            auto_reload=auto_reload,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    @property
    def env(self) -> Environment:
        """The underlying Kida environment."""
        return self._env

    async def render(self, template: TemplateRef, context: Mapping[str, Any]) -> str:
        """Render *template* with *context*.

        Raises:
            RenderError: If the template cannot be loaded or rendered.

        """
        try:
            compiled = self._env.get_template(template.name)
            return await asyncio.to_thread(compiled.render, **context)
        except Exception as exc:
            msg = f"Failed to render template {template.name!r}: {exc}"
            raise RenderError(msg) from exc


def build_context(
    data: Mapping[str, Any],
    *,
    current_url: str,
    is_dev: bool,
    assets: AssetBundle,
    metadata: Mapping[str, Any] | None = None,
    dev_entry: str = "",
) -> dict[str, Any]:
    """Merge hook *data* with the engine-supplied keys."""

    def render_assets() -> Markup:
        parts: list[str] = []
        if is_dev and dev_entry:
            parts.append(f'<script type="module" src="{dev_entry}"></script>')
        bundle_tags = assets.tags()
        if bundle_tags:
            parts.append(bundle_tags)
        return Markup("\n".join(parts))

    return {
        **data,
        "current_url": current_url,
        "current_path": current_url,
        "is_dev": is_dev,
        "assets": assets,
        "render_assets": render_assets,
        "site": dict(metadata or {}),
    }
