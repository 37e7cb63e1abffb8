"""Data hooks — named async data providers for page templates.

Public API::

    from prowl.hooks import HookRegistry, define_hook, discover_hooks

    registry = HookRegistry.from_hooks(discover_hooks(Path("my-site/hooks")))
    posts = await registry.resolve("posts", {})
"""

from prowl.hooks.loader import discover_hooks
from prowl.hooks.registry import Hook, HookRegistry, define_hook

__all__ = [
    "Hook",
    "HookRegistry",
    "define_hook",
    "discover_hooks",
]
