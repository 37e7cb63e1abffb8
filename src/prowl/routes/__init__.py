"""Dynamic routes — pattern derivation, page expansion, and loading.

Public API::

    from prowl.routes import DynamicRoute, build_patterns, expand_pages

    patterns, _failures = build_patterns(routes)
    jobs = expand_pages(route, items)
"""

from prowl.routes.dynamic import (
    CAPTURE_KEYS,
    DynamicRoute,
    ItemFailure,
    PageJob,
    RoutePattern,
    build_patterns,
    claimed_templates,
    coerce_items,
    derive_pattern,
    expand_pages,
)
from prowl.routes.loader import load_dynamic_routes

__all__ = [
    "CAPTURE_KEYS",
    "DynamicRoute",
    "ItemFailure",
    "PageJob",
    "RoutePattern",
    "build_patterns",
    "claimed_templates",
    "coerce_items",
    "derive_pattern",
    "expand_pages",
    "load_dynamic_routes",
]
