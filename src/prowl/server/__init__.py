"""Dev server — on-demand page rendering with live reload."""

from prowl.server.dev import apply_change, create_dev_app
from prowl.server.pages import PageServer
from prowl.server.reload import ReloadBroadcaster, reload_middleware
from prowl.server.watcher import ChangeEvent, SiteWatcher, categorize_change, collect_changes

__all__ = [
    "ChangeEvent",
    "PageServer",
    "ReloadBroadcaster",
    "SiteWatcher",
    "apply_change",
    "categorize_change",
    "collect_changes",
    "create_dev_app",
    "reload_middleware",
]
