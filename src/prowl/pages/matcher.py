"""Request matcher — inbound dev-server path to template and params.

Resolution order per request:

    1. Asset-like paths (a file extension) and tool namespaces pass through.
    2. Dynamic route patterns, in registration order.  First match wins.
    3. Static template lookup: ``/`` -> ``index``, ``/about`` -> ``about``,
       then ``about/index``.  Templates claimed by a dynamic route are never
       served directly.
    4. The not-found template (404), else a plain fallback (404).

Dynamic patterns are always tried before static lookup, so ``/blog/42``
resolves to the dynamic route even when ``blog.html`` exists.

The matcher holds only immutable state built once per site snapshot and is
safe to share across concurrent requests.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from prowl.pages.paths import normalize_request_path
from prowl.routes.dynamic import CAPTURE_KEYS

if TYPE_CHECKING:
    from prowl.pages.catalog import TemplateCatalog, TemplateRef
    from prowl.routes.dynamic import RoutePattern

type MatchKind = Literal["dynamic", "static", "not_found", "fallback", "pass"]

# Bundler and dev-server namespaces that never map to a page.
PASSTHROUGH_PREFIXES: tuple[str, ...] = (
    "/__prowl/",
    "/@vite/",
    "/@id/",
    "/node_modules/",
    "/assets/",
    "/src/",
)

_ASSET_RE = re.compile(r"\.[A-Za-z0-9]+$")


@dataclass(frozen=True, slots=True)
class Match:
    """Outcome of matching one request path.

    Attributes:
        kind: Which resolution step produced the match.
        template: Template to render, or None for ``fallback`` and ``pass``.
        params: Parameter bag for the template's own hook.
        status: HTTP status the response should carry.

    """

    kind: MatchKind
    template: TemplateRef | None = None
    params: Mapping[str, Any] = field(default_factory=dict)
    status: int = 200


PASS = Match(kind="pass", status=0)


def is_passthrough(path: str) -> bool:
    """True if *path* is an asset request or targets a tool namespace."""
    if path.startswith(PASSTHROUGH_PREFIXES):
        return True
    last = path.rsplit("/", maxsplit=1)[-1]
    return bool(_ASSET_RE.search(last))


class RequestMatcher:
    """Resolves request paths against one site snapshot.

    Args:
        catalog: Discovered page templates.
        patterns: Dev-mode route patterns in registration order.
        claimed: Template ids rendered only through dynamic routes.
        not_found_template: Template id used for unknown paths.

    """

    __slots__ = ("_catalog", "_claimed", "_not_found", "_patterns")

    def __init__(
        self,
        catalog: TemplateCatalog,
        patterns: tuple[RoutePattern, ...] = (),
        claimed: frozenset[str] = frozenset(),
        not_found_template: str = "404",
    ) -> None:
        self._catalog = catalog
        self._patterns = patterns
        self._claimed = claimed
        self._not_found = not_found_template

    def match(self, path: str, query: Mapping[str, str] | None = None) -> Match:
        """Resolve *path* (without query string) to a :class:`Match`.

        *query* is merged into the params of dynamic and static matches;
        for dynamic matches the captured segment, bound to ``id`` and
        ``slug``, wins over same-named query keys.

        """
        if is_passthrough(path):
            return PASS

        query_params = dict(query or {})

        for pattern in self._patterns:
            captured = pattern.match(path)
            if captured is None:
                continue
            template = self._catalog.get(pattern.template)
            if template is None:
                continue
            params = {**query_params, **dict.fromkeys(CAPTURE_KEYS, captured)}
            return Match(kind="dynamic", template=template, params=params)

        template = self._lookup_static(path)
        if template is not None:
            return Match(kind="static", template=template, params=query_params)

        not_found = self._catalog.get(self._not_found)
        if not_found is not None:
            return Match(kind="not_found", template=not_found, status=404)
        return Match(kind="fallback", status=404)

    def _lookup_static(self, path: str) -> TemplateRef | None:
        normalized = normalize_request_path(path)
        stem = "index" if normalized == "/" else normalized.lstrip("/")

        for candidate in (stem, f"{stem}/index"):
            template = self._catalog.get(candidate)
            if template is None:
                continue
            if candidate in self._claimed:
                return None
            return template
        return None
