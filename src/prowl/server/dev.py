"""Dev server — serves pages on demand from the current site snapshot.

Middleware order (outermost first):

    reload script injection -> page resolution -> public files -> /src files

Page resolution answers every non-asset GET with a rendered page, the
not-found page or a fallback.  Asset-like paths fall through to the static
file middleware and finally to chirp's router, which only knows the
live-reload SSE endpoint.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from prowl._errors import ProwlError
from prowl.server.reload import (
    SSE_ENDPOINT,
    ReloadBroadcaster,
    ReloadConnection,
    reload_middleware,
)
from prowl.server.watcher import SiteWatcher

if TYPE_CHECKING:
    from chirp import App
    from chirp.http.request import Request
    from chirp.middleware.protocol import AnyResponse, Next

    from prowl.server.pages import PageServer
    from prowl.server.watcher import ChangeEvent
    from prowl.site import Site

logger = logging.getLogger("prowl.server")


def create_dev_app(
    server: PageServer,
    *,
    broadcaster: ReloadBroadcaster | None = None,
    reload_site: Callable[[], Site] | None = None,
    watch: bool = True,
) -> App:
    """Create the chirp App for the dev server.

    Args:
        server: Page server holding the current site snapshot.
        broadcaster: Live-reload broadcaster; created when omitted.
        reload_site: Builds a fresh snapshot after a file change.  Without
            it, changes only trigger a browser reload.
        watch: Start a file watcher on app startup.

    """
    from chirp import App, AppConfig
    from chirp.middleware import StaticFiles

    config = server.site.config
    broadcaster = broadcaster or ReloadBroadcaster()

    app = App(config=AppConfig(
        template_dir=config.source_path,
        host=config.host,
        port=config.port,
        safe_target=False,
        sse_lifecycle=False,
    ))

    app.add_middleware(reload_middleware)
    app.add_middleware(_page_middleware(server))
    if config.static_path.is_dir():
        app.add_middleware(StaticFiles(
            directory=config.static_path, prefix="/", cache_control="no-cache",
        ))
    if config.source_path.is_dir():
        app.add_middleware(StaticFiles(
            directory=config.source_path, prefix="/src", cache_control="no-cache",
        ))

    _register_sse_endpoint(app, broadcaster)

    if watch:
        _start_watcher(app, server, broadcaster, reload_site)

    return app


def _page_middleware(server: PageServer) -> Callable[..., Any]:
    async def page_middleware(request: Request, next: Next) -> AnyResponse:
        if request.method not in ("GET", "HEAD"):
            return await next(request)
        response = await server.handle(request.path, request.query)
        if response is None:
            return await next(request)
        return response

    return page_middleware


def _register_sse_endpoint(app: App, broadcaster: ReloadBroadcaster) -> None:
    """Register the ``/__prowl/events`` live-reload endpoint."""
    from chirp import EventStream

    async def reload_events(request: Request) -> Any:
        conn = ReloadConnection(
            client_id=str(uuid.uuid4()),
            path=request.query.get("page", "/") or "/",
        )
        broadcaster.subscribe(conn)

        async def generate():  # type: ignore[return]
            try:
                async for event in broadcaster.client_generator(conn):
                    yield event
            finally:
                broadcaster.unsubscribe(conn)

        return EventStream(generate())

    app.route(SSE_ENDPOINT, name="prowl:events", referenced=True)(reload_events)


async def apply_change(
    event: ChangeEvent,
    server: PageServer,
    broadcaster: ReloadBroadcaster,
    reload_site: Callable[[], Site] | None,
) -> bool:
    """React to one file change; return True if browsers were told to reload.

    A change that needs a new snapshot rebuilds it and swaps it in.  If the
    rebuild fails the current snapshot stays in place and no reload is sent.

    """
    logger.info("%s %s (%s)", event.kind.capitalize(), event.path.name, event.category)

    if event.reloads_site and reload_site is not None:
        try:
            site = await asyncio.to_thread(reload_site)
        except ProwlError as exc:
            logger.error("Reload failed, keeping previous site: %s", exc)
            return False
        server.swap(site)

    count = broadcaster.push_reload(event.path.name)
    logger.debug("Reload pushed to %d client(s)", count)
    return True


def _start_watcher(
    app: App,
    server: PageServer,
    broadcaster: ReloadBroadcaster,
    reload_site: Callable[[], Site] | None,
) -> SiteWatcher:
    """Run a SiteWatcher for the lifetime of *app*.

    Flow:
        on_startup  -> a task iterating watcher.changes()
        file change -> apply_change()
        on_shutdown -> stop the watcher and cancel the task

    """
    watcher = SiteWatcher(server.site.config)
    _task: asyncio.Task[None] | None = None

    @app.on_startup
    async def _start_event_consumer() -> None:
        nonlocal _task

        async def _consume_events() -> None:
            async for event in watcher.changes():
                await apply_change(event, server, broadcaster, reload_site)

        _task = asyncio.create_task(_consume_events())

    @app.on_shutdown
    async def _stop_event_consumer() -> None:
        watcher.stop()
        if _task is not None and not _task.done():
            _task.cancel()

    return watcher
