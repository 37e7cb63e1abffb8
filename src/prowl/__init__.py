"""Prowl — template-driven static page generation with a live dev server.

Pages are templates.  Data comes from named hooks.  Dynamic routes turn a
data collection into many pages that share one template.  The same site
snapshot drives both the static build and the dev server.

Quick start::

    import prowl

    prowl.build("my-site/")             # Static generation into dist/
    prowl.dev("my-site/")               # On-demand rendering + live reload

Declaring data and routes::

    from prowl import DynamicRoute, define_hook

    posts = define_hook("posts", fetch_posts)
    post = define_hook("post", lambda params: fetch_post(params["slug"]))

    dynamic_routes = [
        DynamicRoute(
            template="post",
            data_source="posts",
            get_params=lambda item: {"slug": item["slug"]},
            get_path=lambda item: f"blog/{item['slug']}.html",
        ),
    ]

Built on:

    chirp       Web framework     (dev server)
    kida        Template engine   (renders HTML)
    watchfiles  File watching     (live reload)
"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "DynamicRoute",
    "Hook",
    "ProwlConfig",
    "__version__",
    "build",
    "define_hook",
    "dev",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import prowl`` fast while providing a clean top-level API.
    """
    if name == "ProwlConfig":
        from prowl.config import ProwlConfig

        return ProwlConfig

    if name == "DynamicRoute":
        from prowl.routes.dynamic import DynamicRoute

        return DynamicRoute

    if name in ("Hook", "define_hook"):
        from prowl.hooks import registry

        return getattr(registry, name)

    if name == "build":
        from prowl.app import build

        return build

    if name == "dev":
        from prowl.app import dev

        return dev

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
