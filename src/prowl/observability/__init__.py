"""Observability — structured events for generation passes and dev requests.

Quick Start:
    >>> from prowl.observability import EventLog
    >>> log = EventLog()
    >>> # SiteGenerator(site, renderer, event_log=log).generate()
    >>> # log.query(event_type=PageSkipped)

"""

from prowl.observability.events import (
    PageRendered,
    PageSkipped,
    ProwlEvent,
    RequestResolved,
    now_ns,
)
from prowl.observability.log import EventLog

__all__ = [
    "EventLog",
    "PageRendered",
    "PageSkipped",
    "ProwlEvent",
    "RequestResolved",
    "now_ns",
]
