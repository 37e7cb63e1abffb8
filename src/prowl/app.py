"""Prowl entry points — static generation and the dev server.

Both modes load one :class:`~prowl.site.Site` snapshot from the same
configuration, so the pages a build writes and the pages the dev server
renders come from the same templates, hooks and routes.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from prowl.config_loader import load_config
from prowl.site import load_site

if TYPE_CHECKING:
    from prowl.export.static import GenerationResult
    from prowl.hooks.registry import Hook
    from prowl.render.renderer import Renderer
    from prowl.routes.dynamic import DynamicRoute
    from prowl.site import Site

logger = logging.getLogger("prowl.server")


def build(
    root: str | Path = ".",
    *,
    hooks: Iterable[Hook] = (),
    dynamic_routes: Iterable[DynamicRoute] = (),
    renderer: Renderer | None = None,
    **kwargs: object,
) -> GenerationResult:
    """Generate the site as static files.

    Renders every static page and every dynamic route item, copies the
    static directory, and prints a summary.  Missing templates or data
    sources and failing dynamic items are reported as warnings; an exception
    from a data source or a static page fails the build.

    Args:
        root: Path to the project root.
        hooks: Hooks added after those discovered in ``hooks_dir``.
        dynamic_routes: Routes added after those in ``routes_file``.
        renderer: Renderer to use instead of the Kida renderer.
        **kwargs: Override ProwlConfig fields.

    Returns:
        The result of the generation pass.

    """
    from prowl.banner import print_banner, print_summary
    from prowl.export.static import SiteGenerator
    from prowl.render.renderer import KidaRenderer

    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()

    site = load_site(config, hooks=tuple(hooks), dynamic_routes=tuple(dynamic_routes))
    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(site, "build", load_ms=load_ms)

    generator = SiteGenerator(site, renderer or KidaRenderer(config.source_path))
    result = asyncio.run(generator.generate())

    print_summary(result)
    return result


def dev(
    root: str | Path = ".",
    *,
    hooks: Iterable[Hook] = (),
    dynamic_routes: Iterable[DynamicRoute] = (),
    **kwargs: object,
) -> None:
    """Start the development server.

    Pages are rendered per request.  A file watcher reloads templates,
    hooks, routes and configuration, and connected browsers refresh.

    Args:
        root: Path to the project root.
        hooks: Hooks added after those discovered in ``hooks_dir``.
        dynamic_routes: Routes added after those in ``routes_file``.
        **kwargs: Override ProwlConfig fields.

    """
    from chirp.server.dev import run_dev_server

    from prowl.banner import print_banner
    from prowl.observability import EventLog
    from prowl.render.renderer import KidaRenderer
    from prowl.server.dev import create_dev_app
    from prowl.server.pages import PageServer

    extra_hooks = tuple(hooks)
    extra_routes = tuple(dynamic_routes)

    config = load_config(Path(root), **kwargs)
    t0 = time.perf_counter()

    site = load_site(config, hooks=extra_hooks, dynamic_routes=extra_routes)
    load_ms = (time.perf_counter() - t0) * 1000

    def reload_site() -> Site:
        fresh = load_config(config.root, **kwargs)
        return load_site(fresh, hooks=extra_hooks, dynamic_routes=extra_routes)

    renderer = KidaRenderer(config.source_path, auto_reload=True)
    event_log = EventLog()
    server = PageServer(site, renderer, event_log=event_log)
    app = create_dev_app(server, reload_site=reload_site)

    print_banner(site, "dev", load_ms=load_ms)

    # Single worker, no process reload: the watcher swaps snapshots in-process.
    try:
        run_dev_server(app, config.host, config.port, reload=False)
    finally:
        by_status = event_log.stats()["requests_by_status"]
        logger.info("Served %d requests %s", sum(by_status.values()), by_status)
