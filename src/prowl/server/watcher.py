"""Project watcher — turns filesystem changes into site reloads.

``watchfiles.awatch`` runs inside the dev server's event loop.  Its filter
drops everything :func:`categorize_change` does not recognize, so editor
swap files, build output and caches never wake the loop.

Categories decide what a change costs:

    template, hook, route, config, manifest   rebuild the site snapshot
    asset                                     browser reload only
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change, DefaultFilter, awatch

from prowl.config_loader import CONFIG_FILENAMES

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable

    from prowl.config import ProwlConfig

type ChangeCategory = Literal["template", "hook", "route", "config", "manifest", "asset"]
type ChangeKind = Literal["created", "modified", "deleted"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """One categorized file change.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: What kind of project file changed.

    """

    path: Path
    kind: ChangeKind
    category: ChangeCategory

    @property
    def reloads_site(self) -> bool:
        """True if the site snapshot must be rebuilt for this change."""
        return self.category != "asset"


_KINDS: dict[Change, ChangeKind] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, config: ProwlConfig) -> ChangeCategory | None:
    """Classify *path* by where it lives in the project; None if irrelevant."""
    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    if not rel.parts or "__pycache__" in rel.parts:
        return None

    if len(rel.parts) == 1 and rel.name in CONFIG_FILENAMES:
        return "config"
    if path == config.routes_path:
        return "route"
    if path.is_relative_to(config.hooks_path):
        return "hook" if path.suffix == ".py" else None
    if path.is_relative_to(config.pages_path) or path.is_relative_to(config.source_path):
        return "template"
    if config.manifest_path is not None and path == config.manifest_path:
        return "manifest"
    if path.is_relative_to(config.static_path):
        return "asset"

    return None


def collect_changes(
    raw_changes: Iterable[tuple[Change, str]],
    config: ProwlConfig,
) -> list[ChangeEvent]:
    """Categorize one watchfiles batch, sorted by path.

    A path reported more than once in a batch (save-as-rename, for
    instance) yields a single event carrying its last reported kind.
    """
    latest: dict[Path, ChangeKind] = {}
    for change, path_str in raw_changes:
        latest[Path(path_str)] = _KINDS.get(change, "modified")

    events = []
    for path in sorted(latest):
        category = categorize_change(path, config)
        if category is not None:
            events.append(ChangeEvent(path=path, kind=latest[path], category=category))
    return events


class _ProjectFilter(DefaultFilter):
    """watchfiles' default ignores plus the project categories."""

    def __init__(self, config: ProwlConfig) -> None:
        super().__init__()
        self._config = config

    def __call__(self, change: Change, path: str) -> bool:
        if not super().__call__(change, path):
            return False
        return categorize_change(Path(path), self._config) is not None


class SiteWatcher:
    """Async stream of :class:`ChangeEvent` for one project.

    Iterate :meth:`changes` from a task on the dev server's loop; call
    :meth:`stop` to end the iteration.

    Args:
        config: Project whose root is watched.
        debounce_ms: Quiet period that groups rapid writes into one batch.

    """

    def __init__(self, config: ProwlConfig, *, debounce_ms: int = 300) -> None:
        self._config = config
        self._debounce_ms = debounce_ms
        self._stop_event: asyncio.Event | None = None

    @property
    def is_running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Yield categorized changes until :meth:`stop` is called."""
        self._stop_event = asyncio.Event()
        async for raw_changes in awatch(
            self._config.root,
            watch_filter=_ProjectFilter(self._config),
            stop_event=self._stop_event,
            debounce=self._debounce_ms,
            step=100,
        ):
            for event in collect_changes(raw_changes, self._config):
                yield event
