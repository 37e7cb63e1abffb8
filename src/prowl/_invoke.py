"""Invoke helper — call sync or async user callables uniformly.

Hooks and renderers may be ``def`` or ``async def``.  Any code that calls
one must handle both cases; the check lives here and nowhere else.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
