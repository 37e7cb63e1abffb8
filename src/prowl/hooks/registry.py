"""Data hooks — named providers of template context data.

A hook binds three things in one place: the page (template id) it serves,
the handler that produces the data, and the context variable the data is
injected under::

    posts = define_hook("posts", fetch_posts)              # {{ posts }}
    blog = define_hook("blog", fetch_posts, key="posts")   # blog.html sees {{ posts }}

The registry is a pure dispatch table.  It never caches and never inspects
the data; handlers own their side effects (network calls, file reads).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from prowl._errors import ConfigError

if TYPE_CHECKING:
    from prowl._types import HookHandler, Params

logger = logging.getLogger("prowl.hooks")


@dataclass(frozen=True, slots=True)
class Hook:
    """A named data provider.

    Attributes:
        name: Registry key.  Also the template id whose pages receive this
            hook's data, and the data source name dynamic routes refer to.
        handler: ``(params) -> data``, sync or async.
        key: Context variable the data is injected under (defaults to *name*).

    """

    name: str
    handler: HookHandler
    key: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Hook name must be a non-empty string"
            raise ConfigError(msg)
        if not callable(self.handler):
            msg = f"Hook {self.name!r}: handler must be callable"
            raise ConfigError(msg)
        if not self.key:
            object.__setattr__(self, "key", self.name)

    async def __call__(self, params: Params | None = None) -> Any:
        """Invoke the handler with *params*, awaiting the result if needed."""
        from prowl._invoke import invoke

        return await invoke(self.handler, dict(params or {}))


def define_hook(name: str, handler: HookHandler, *, key: str | None = None) -> Hook:
    """Create a :class:`Hook` binding *name* to *handler*.

    Template ids are paths relative to the pages directory without the
    extension, so the hook for ``pages/blog/index.html`` is named
    ``"blog/index"``; a hook named ``"index"`` feeds only the root page.
    Pass *key* to expose the data under a plain variable name::

        define_hook("blog/index", list_posts, key="posts")

    Args:
        name: Page/template id and registry key.
        handler: Callable receiving the parameter bag.
        key: Context variable name; defaults to *name*.

    """
    return Hook(name=name, handler=handler, key=key or name)


@dataclass(frozen=True, slots=True)
class HookRegistry(Mapping[str, Hook]):
    """Immutable name -> Hook mapping.

    Built once per generation pass or server start.  Lookups are exact:
    there is no wildcard or prefix matching.

    """

    _hooks: dict[str, Hook] = field(default_factory=dict)

    @classmethod
    def from_hooks(cls, hooks: Iterable[Hook]) -> HookRegistry:
        """Build a registry, rejecting duplicate names.

        Raises:
            ConfigError: If two hooks share a name.

        """
        table: dict[str, Hook] = {}
        for hook in hooks:
            if hook.name in table:
                msg = f"Duplicate hook name {hook.name!r}"
                raise ConfigError(msg)
            table[hook.name] = hook
        return cls(table)

    def __getitem__(self, name: str) -> Hook:
        return self._hooks[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    async def resolve(self, name: str, params: Params | None = None) -> Any:
        """Invoke the hook registered under *name* and return its data unchanged.

        Returns None when no hook is registered: a page without data is a
        supported case, not an error.  Exceptions raised by the handler
        propagate to the caller.

        """
        hook = self._hooks.get(name)
        if hook is None:
            return None
        return await hook(params)

    async def context_for(self, template_id: str, params: Params | None = None) -> dict[str, Any]:
        """Resolve the page-level context for *template_id*.

        Returns ``{hook.key: data}`` for the hook named exactly like the
        template, or an empty dict.

        """
        hook = self._hooks.get(template_id)
        if hook is None:
            return {}
        logger.debug("Resolving hook %r for %r with %r", hook.name, template_id, params)
        return {hook.key: await hook(params)}
