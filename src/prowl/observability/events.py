"""Generation and request events.

All events are frozen dataclasses with a monotonic nanosecond timestamp,
safe to share across threads.  The generator records one event per page
rendered or skipped; the dev server records one per resolved request.
"""

import time
from dataclasses import dataclass
from typing import Literal


def now_ns() -> int:
    """Monotonic nanosecond timestamp."""
    return time.monotonic_ns()


@dataclass(frozen=True, slots=True)
class PageRendered:
    """A page was rendered and emitted.

    Attributes:
        template: Template id.
        path: Physical artifact path relative to the output directory.
        source: ``"static"``, ``"dynamic"`` or ``"not_found"``.
        size_bytes: Size of the emitted content.
        duration_ms: Time spent resolving data, rendering and writing.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    template: str
    path: str
    source: Literal["static", "dynamic", "not_found"]
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PageSkipped:
    """A route or page was skipped during generation.

    Attributes:
        kind: Why it was skipped (see :class:`prowl.export.static.Diagnostic`).
        subject: Template id, data source, or output path concerned.
        message: Human-readable explanation.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: str
    subject: str
    message: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RequestResolved:
    """The dev server resolved a request path.

    Attributes:
        path: Request path.
        kind: ``"dynamic"``, ``"static"``, ``"not_found"`` or ``"fallback"``.
        template: Template id rendered, or None for the plain fallback.
        status: HTTP status returned.
        duration_ms: Time spent resolving and rendering.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: str
    template: str | None
    status: int
    duration_ms: float
    timestamp_ns: int


type ProwlEvent = PageRendered | PageSkipped | RequestResolved
