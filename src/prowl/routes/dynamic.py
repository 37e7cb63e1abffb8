"""Dynamic routes — one template, many pages, driven by a data collection.

A :class:`DynamicRoute` names a template, the hook supplying the full
collection, and two pure functions of one collection item::

    DynamicRoute(
        template="post",
        data_source="posts",
        get_params=lambda post: {"slug": post["slug"]},
        get_path=lambda post: f"blog/{post['slug']}.html",
    )

Build mode expands the route into :class:`PageJob` objects.  Dev mode
matches request paths against a :class:`RoutePattern` derived from the
same ``get_path`` function, so both modes agree on which URL maps to which
template.

Pattern derivation probes ``get_path`` with a synthetic item and assumes the
variable part is the final path segment.  Paths with variable segments
elsewhere (``{year}/{slug}``) are rejected with a :class:`RouteError`
rather than matched incorrectly; those routes still build, they just have
no dev-mode pattern.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prowl._errors import DataSourceError, RouteError

if TYPE_CHECKING:
    from prowl._types import ParamsFunc, PathFunc

logger = logging.getLogger("prowl.routes")

# Sentinel substituted for every field the probe item is asked for.
PROBE_TOKEN = "__prowl_param__"

# Keys a matched segment is bound to in dev mode.
CAPTURE_KEYS: tuple[str, ...] = ("id", "slug")


@dataclass(frozen=True, slots=True)
class DynamicRoute:
    """Declarative mapping from a data collection to many pages.

    Attributes:
        template: Template id rendered for every item.
        data_source: Hook name returning the full collection.
        get_params: Item -> parameter bag passed to the template's own hook.
        get_path: Item -> logical output path (``blog/a.html``).

    """

    template: str
    data_source: str
    get_params: ParamsFunc
    get_path: PathFunc


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled dev-mode matcher for one dynamic route.

    Attributes:
        regex: Anchored pattern with a single capture group.
        template: Template id the route renders.
        base_path: Literal prefix left of the variable segment (``blog``).

    """

    regex: re.Pattern[str]
    template: str
    base_path: str

    def match(self, path: str) -> str | None:
        """Return the captured segment if *path* matches, else None."""
        m = self.regex.match(path)
        if m is None:
            return None
        return m.group(1)


@dataclass(frozen=True, slots=True)
class PageJob:
    """One concrete page produced by expanding a route over one item."""

    template: str
    params: Mapping[str, Any]
    logical_path: str


@dataclass(frozen=True, slots=True)
class ItemFailure:
    """A collection item that could not be expanded."""

    route: DynamicRoute
    item: Any
    error: Exception


class _ProbeItem(dict):
    """Stand-in data item answering every lookup with :data:`PROBE_TOKEN`.

    Supports ``item["slug"]``, ``item.get("slug")`` and ``item.slug`` so path
    functions written against dicts or objects both work.
    """

    def __missing__(self, key: object) -> str:
        return PROBE_TOKEN

    def get(self, key: object, default: object = None) -> str:  # type: ignore[override]
        return PROBE_TOKEN

    def __getattr__(self, name: str) -> str:
        if name.startswith("__"):
            raise AttributeError(name)
        return PROBE_TOKEN


# ---------------------------------------------------------------------------
# Route pattern derivation
# ---------------------------------------------------------------------------


def derive_pattern(route: DynamicRoute, *, ext: str = ".html") -> RoutePattern:
    """Derive a dev-mode URL pattern by probing ``route.get_path``.

    Steps:
        1. Call ``get_path`` with a probe item whose fields are all
           :data:`PROBE_TOKEN`.
        2. Strip the output extension and a trailing ``/index``.
        3. Everything left of the last ``/`` is the literal base path; the
           last segment must carry the token.
        4. Compile ``^/<base>/<segment>/?$`` with the token replaced by one
           non-slash capture group.

    Raises:
        RouteError: If ``get_path`` raises on the probe, returns a non-string,
            produces a path without a variable part, or places the variable
            part outside the final segment.

    """
    try:
        probed = route.get_path(_ProbeItem())
    except Exception as exc:
        msg = f"Route {route.template!r}: path function failed on probe input: {exc}"
        raise RouteError(msg) from exc

    if not isinstance(probed, str):
        msg = (
            f"Route {route.template!r}: path function must return a str, "
            f"got {type(probed).__name__}"
        )
        raise RouteError(msg)

    stem = probed.strip("/")
    if ext and stem.endswith(ext):
        stem = stem[: -len(ext)]
    if stem.endswith("/index"):
        stem = stem[: -len("/index")]

    base_path, _, segment = stem.rpartition("/")

    if PROBE_TOKEN not in segment:
        msg = f"Route {route.template!r}: path {probed!r} has no variable final segment"
        raise RouteError(msg)
    if PROBE_TOKEN in base_path:
        msg = (
            f"Route {route.template!r}: path {probed!r} has a variable segment "
            f"before the last one; only a single trailing segment is supported"
        )
        raise RouteError(msg)
    if segment.count(PROBE_TOKEN) > 1:
        msg = f"Route {route.template!r}: final segment of {probed!r} holds more than one variable"
        raise RouteError(msg)
    if not base_path:
        msg = (
            f"Route {route.template!r}: path {probed!r} has no literal base path; "
            f"a root-level pattern would shadow every static page"
        )
        raise RouteError(msg)

    before, _, after = segment.partition(PROBE_TOKEN)
    regex = re.compile(
        "^/" + re.escape(base_path) + "/"
        + re.escape(before) + "([^/]+?)" + re.escape(after)
        + "/?$"
    )
    return RoutePattern(regex=regex, template=route.template, base_path=base_path)


def build_patterns(
    routes: Iterable[DynamicRoute],
    *,
    ext: str = ".html",
) -> tuple[tuple[RoutePattern, ...], tuple[RouteError, ...]]:
    """Derive patterns for every route, in registration order.

    A route whose pattern cannot be derived is logged and left out; it does
    not stop the remaining routes.

    Returns:
        The derived patterns and the errors of the routes that were skipped.

    """
    patterns: list[RoutePattern] = []
    failures: list[RouteError] = []
    for route in routes:
        try:
            patterns.append(derive_pattern(route, ext=ext))
        except RouteError as exc:
            logger.warning("No dev-mode pattern for %r: %s", route.template, exc)
            failures.append(exc)
    return tuple(patterns), tuple(failures)


# ---------------------------------------------------------------------------
# Page expansion
# ---------------------------------------------------------------------------


def coerce_items(route: DynamicRoute, data: Any) -> list[Any]:
    """Return the collection a data source produced as a list.

    Accepts a list/tuple directly, or a mapping holding one under the
    route's ``data_source`` name (hooks that return ``{"posts": [...]}``).

    Raises:
        DataSourceError: If no list can be found.

    """
    if isinstance(data, (list, tuple)):
        return list(data)
    if isinstance(data, Mapping):
        nested = data.get(route.data_source)
        if isinstance(nested, (list, tuple)):
            return list(nested)
    msg = (
        f"Data source {route.data_source!r} for template {route.template!r} "
        f"did not return a list (got {type(data).__name__})"
    )
    raise DataSourceError(msg)


def expand_pages(
    route: DynamicRoute,
    items: Iterable[Any],
    *,
    on_error: Callable[[ItemFailure], None] | None = None,
) -> list[PageJob]:
    """Expand *route* over *items* into page jobs.

    For each item: ``params = get_params(item)``, ``path = get_path(item)``.
    An item whose functions raise, or whose path climbs out of the
    output directory, is reported through *on_error* and
    skipped; the remaining items are still expanded.

    """
    from prowl.pages.paths import check_logical_path

    jobs: list[PageJob] = []
    for item in items:
        try:
            params = route.get_params(item)
            logical_path = route.get_path(item)
            if not isinstance(logical_path, str):
                msg = f"path function returned {type(logical_path).__name__}, expected str"
                raise TypeError(msg)
            check_logical_path(logical_path)
        except Exception as exc:
            failure = ItemFailure(route=route, item=item, error=exc)
            if on_error is None:
                logger.warning(
                    "Skipping item %r of %r: %s", item, route.data_source, exc,
                )
            else:
                on_error(failure)
            continue
        jobs.append(PageJob(
            template=route.template,
            params=dict(params or {}),
            logical_path=logical_path,
        ))
    return jobs


def claimed_templates(routes: Iterable[DynamicRoute]) -> frozenset[str]:
    """Template ids rendered only through expansion, never standalone."""
    return frozenset(route.template for route in routes)
