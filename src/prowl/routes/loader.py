"""Route loader — import dynamic route declarations from ``routes.py``.

The module declares its routes in a module-level list::

    from prowl import DynamicRoute

    dynamic_routes = [
        DynamicRoute(
            template="post",
            data_source="posts",
            get_params=lambda post: {"id": post["id"]},
            get_path=lambda post: f"blog/{post['id']}.html",
        ),
    ]
"""

from pathlib import Path

from prowl._errors import ConfigError
from prowl._modules import load_module
from prowl.routes.dynamic import DynamicRoute


def load_dynamic_routes(routes_file: Path) -> tuple[DynamicRoute, ...]:
    """Load the ``dynamic_routes`` list from *routes_file*.

    Returns an empty tuple when the file does not exist or declares no routes.

    Raises:
        ConfigError: If the module fails to import or ``dynamic_routes``
            holds something other than DynamicRoute objects.

    """
    if not routes_file.is_file():
        return ()

    module = load_module(routes_file, "prowl_routes")
    declared = getattr(module, "dynamic_routes", None)
    if declared is None:
        return ()

    if not isinstance(declared, (list, tuple)):
        msg = (
            f"Route module {routes_file}: 'dynamic_routes' must be a list, "
            f"got {type(declared).__name__}"
        )
        raise ConfigError(msg)

    for route in declared:
        _validate_route(route, routes_file)

    return tuple(declared)


def _validate_route(route: object, source: Path) -> None:
    """Validate the shape of one declared route.

    Raises:
        ConfigError: If *route* is not a DynamicRoute or its functions are
            not callable.

    """
    if not isinstance(route, DynamicRoute):
        msg = (
            f"Route module {source}: expected DynamicRoute objects, "
            f"got {type(route).__name__}"
        )
        raise ConfigError(msg)
    for attr in ("get_params", "get_path"):
        if not callable(getattr(route, attr)):
            msg = f"Route {route.template!r} in {source}: {attr} must be callable"
            raise ConfigError(msg)
    if not route.template or not route.data_source:
        msg = f"Route in {source}: template and data_source must be non-empty"
        raise ConfigError(msg)
