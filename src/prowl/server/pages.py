"""Page server — renders the page a dev-server request resolves to.

Turns a :class:`~prowl.pages.matcher.Match` into an HTML response.  Every
outcome is a response: unknown paths get the not-found page or a plain
fallback, and a failing hook or template gets a 500 page.  No exception
reaches the client.
"""

from __future__ import annotations

import html
import logging
import time
from typing import TYPE_CHECKING

from chirp import Response

from prowl.observability.events import RequestResolved, now_ns
from prowl.render.assets import explicit_bundle
from prowl.render.minify import make_minifier
from prowl.render.renderer import build_context

if TYPE_CHECKING:
    from collections.abc import Mapping

    from prowl.observability.log import EventLog
    from prowl.pages.matcher import Match
    from prowl.render.minify import Minifier
    from prowl.render.renderer import Renderer
    from prowl.site import Site

logger = logging.getLogger("prowl.server")

_FALLBACK_HTML = """\
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>404 Not Found</title></head>
<body>
<h1>404 Not Found</h1>
<p>No page matches <code>{path}</code>.</p>
</body>
</html>
"""

_ERROR_HTML = """\
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>500 Render Error</title></head>
<body>
<h1>500 Render Error</h1>
<p>Rendering <code>{template}</code> for <code>{path}</code> failed:</p>
<pre>{error}</pre>
</body>
</html>
"""


class PageServer:
    """Resolves and renders dev-server requests against a site snapshot.

    The snapshot can be replaced with :meth:`swap` while the server runs;
    each request reads the snapshot current at its start.

    Args:
        site: Initial site snapshot.
        renderer: Renders templates to strings.
        minifier: Post-processor for page content.  When omitted, one is
            created from the configuration if ``minify`` is enabled.
        event_log: Receives a RequestResolved event per handled request.

    """

    def __init__(
        self,
        site: Site,
        renderer: Renderer,
        *,
        minifier: Minifier | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        if minifier is None and site.config.minify:
            minifier = make_minifier(site.config.minify_options)
        self._minifier = minifier
        self._renderer = renderer
        self._event_log = event_log
        self._site = site
        self._matcher = site.matcher()

    @property
    def site(self) -> Site:
        return self._site

    def swap(self, site: Site) -> None:
        """Serve subsequent requests from *site*."""
        matcher = site.matcher()
        self._site, self._matcher = site, matcher

    def match(self, path: str, query: Mapping[str, str] | None = None) -> Match:
        """Resolve *path* without rendering."""
        return self._matcher.match(path, query)

    async def handle(self, path: str, query: Mapping[str, str] | None = None) -> Response | None:
        """Render the response for *path*.

        Returns:
            The HTML response, or None when the path is an asset or tool
            request the dev server should pass on.

        """
        t0 = time.perf_counter()
        site = self._site
        match = self._matcher.match(path, query)

        if match.kind == "pass":
            return None

        if match.template is None:
            response = Response(
                body=_FALLBACK_HTML.format(path=html.escape(path)),
                status=match.status,
            )
        else:
            response = await self._render(site, match, path)

        logger.debug("%s -> %s (%d)", path, match.kind, response.status)
        if self._event_log is not None:
            self._event_log.append(RequestResolved(
                path=path,
                kind=match.kind,
                template=match.template.id if match.template else None,
                status=response.status,
                duration_ms=(time.perf_counter() - t0) * 1000,
                timestamp_ns=now_ns(),
            ))
        return response

    async def _render(self, site: Site, match: Match, path: str) -> Response:
        assert match.template is not None
        template = match.template
        try:
            data = await site.hooks.context_for(template.id, match.params)
            context = build_context(
                data,
                current_url=path,
                is_dev=True,
                assets=explicit_bundle(site.config),
                metadata=site.config.metadata,
                dev_entry=site.config.dev_entry,
            )
            content = await self._renderer.render(template, context)
            if self._minifier is not None:
                content = self._minifier(content)
        except Exception as exc:
            logger.exception("Failed to render %r for %s", template.id, path)
            return Response(
                body=_ERROR_HTML.format(
                    template=html.escape(template.id),
                    path=html.escape(path),
                    error=html.escape(str(exc)),
                ),
                status=500,
            )
        return Response(body=content, status=match.status)
