"""Live reload — tells connected browsers to reload after a rebuild.

Browsers connect to the ``/__prowl/events`` SSE endpoint through a small
script the dev server injects into every HTML page.  After the watcher
swaps in a new site snapshot, :meth:`ReloadBroadcaster.push_reload` sends
one ``prowl:reload`` event to every connection.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from chirp.http.request import Request
    from chirp.http.response import Response, SSEResponse, StreamingResponse
    from chirp.middleware.protocol import Next

    type AnyResponse = Response | StreamingResponse | SSEResponse

logger = logging.getLogger("prowl.server")

SSE_ENDPOINT = "/__prowl/events"
RELOAD_EVENT = "prowl:reload"


@dataclass(frozen=True, slots=True)
class ReloadConnection:
    """A connected browser.

    Attributes:
        client_id: Unique identifier for this connection.
        path: The page the browser is viewing.
        queue: Holds at most one pending reload for this client.

    """

    client_id: str
    path: str
    queue: asyncio.Queue[Any] = field(
        default_factory=lambda: asyncio.Queue(maxsize=1), compare=False, hash=False,
    )


class ReloadBroadcaster:
    """Tracks SSE connections and pushes reload events to them.

    Thread-safe: the connection set is protected by a lock.

    """

    def __init__(self) -> None:
        self._connections: set[ReloadConnection] = set()
        self._lock = threading.Lock()

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def subscribe(self, conn: ReloadConnection) -> None:
        with self._lock:
            self._connections.add(conn)

    def unsubscribe(self, conn: ReloadConnection) -> None:
        with self._lock:
            self._connections.discard(conn)

    def push_reload(self, reason: str = "") -> int:
        """Queue a reload event for every connection.

        A client that has not yet read its previous reload is skipped; the
        pending event already makes it reload.

        Returns:
            Number of clients given a new event.

        """
        from chirp import SSEEvent

        with self._lock:
            connections = tuple(self._connections)

        event = SSEEvent(data=reason or "reload", event=RELOAD_EVENT)
        count = 0
        for conn in connections:
            try:
                conn.queue.put_nowait(event)
                count += 1
            except asyncio.QueueFull:
                logger.debug("Reload already pending for %s", conn.client_id)
        return count

    async def client_generator(self, conn: ReloadConnection) -> AsyncIterator[Any]:
        """Yield events from *conn*'s queue until the client goes away."""
        try:
            while True:
                yield await conn.queue.get()
        except (asyncio.CancelledError, GeneratorExit):
            return


# Injected before </body> of every HTML page in dev mode.
RELOAD_SCRIPT = """\
<script data-prowl-reload>
(function() {
  var src = new EventSource('%s?page=' + encodeURIComponent(location.pathname));
  src.addEventListener('%s', function() { location.reload(); });
})();
</script>
""" % (SSE_ENDPOINT, RELOAD_EVENT)


async def reload_middleware(request: Request, next: Next) -> AnyResponse:
    """Chirp middleware that injects the reload script into HTML responses.

    Only modifies responses with a ``text/html`` content type.  The script
    goes just before ``</body>``, else before ``</html>``, else at the end.

    """
    response = await next(request)

    if not hasattr(response, "body") or not hasattr(response, "content_type"):
        return response
    if "text/html" not in response.content_type:
        return response

    body = response.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")

    if "data-prowl-reload" in body:
        return response

    if "</body>" in body:
        body = body.replace("</body>", RELOAD_SCRIPT + "</body>", 1)
    elif "</html>" in body:
        body = body.replace("</html>", RELOAD_SCRIPT + "</html>", 1)
    else:
        body += RELOAD_SCRIPT

    return replace(response, body=body)
