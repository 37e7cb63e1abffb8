"""Site snapshot — everything one generation pass or server generation reads.

A :class:`Site` is built once by :func:`load_site` and never mutated.  The
generator and the request matcher both read from the same snapshot, so the
two modes cannot disagree about templates, hooks or routes.  The dev server
swaps in a freshly loaded snapshot when files change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prowl.hooks.loader import discover_hooks
from prowl.hooks.registry import HookRegistry
from prowl.pages.catalog import TemplateCatalog, discover_templates
from prowl.pages.matcher import RequestMatcher
from prowl.render.assets import AssetBundle, load_asset_bundle
from prowl.routes.dynamic import build_patterns, claimed_templates
from prowl.routes.loader import load_dynamic_routes

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prowl.config import ProwlConfig
    from prowl.hooks.registry import Hook
    from prowl.routes.dynamic import DynamicRoute, RoutePattern

logger = logging.getLogger("prowl.config")


@dataclass(frozen=True, slots=True)
class Site:
    """Immutable view of a project at one point in time.

    Attributes:
        config: Project configuration.
        catalog: Discovered page templates.
        hooks: Data hook registry.
        routes: Dynamic routes in registration order.
        patterns: Dev-mode patterns of the routes that have one.
        claimed: Template ids rendered only through dynamic routes.
        assets: Asset bundle linked by ``render_assets()``.

    """

    config: ProwlConfig
    catalog: TemplateCatalog
    hooks: HookRegistry
    routes: tuple[DynamicRoute, ...]
    patterns: tuple[RoutePattern, ...]
    claimed: frozenset[str]
    assets: AssetBundle

    def matcher(self) -> RequestMatcher:
        """Request matcher over this snapshot."""
        return RequestMatcher(
            self.catalog,
            self.patterns,
            self.claimed,
            not_found_template=self.config.not_found_template,
        )


def load_site(
    config: ProwlConfig,
    *,
    hooks: Iterable[Hook] = (),
    dynamic_routes: Iterable[DynamicRoute] = (),
) -> Site:
    """Discover templates, hooks and routes for *config*.

    Hooks and routes passed in are appended after the ones discovered from
    ``hooks_dir`` and ``routes_file``.

    Raises:
        ConfigError: If a hook or route module is invalid, or two hooks
            share a name.

    """
    catalog = discover_templates(
        config.pages_path,
        ext=config.template_ext,
        source_dir=config.source_path,
    )
    registry = HookRegistry.from_hooks(
        (*discover_hooks(config.hooks_path), *hooks),
    )
    routes = (*load_dynamic_routes(config.routes_path), *dynamic_routes)
    patterns, _failures = build_patterns(routes)

    logger.debug(
        "Loaded site: %d templates, %d hooks, %d routes (%d with dev patterns)",
        len(catalog), len(registry), len(routes), len(patterns),
    )

    return Site(
        config=config,
        catalog=catalog,
        hooks=registry,
        routes=routes,
        patterns=patterns,
        claimed=claimed_templates(routes),
        assets=load_asset_bundle(config),
    )
