"""Shared type definitions for prowl."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal

# Mode of operation
type ProwlMode = Literal["dev", "build"]

# Output path strategy: ``page.html`` vs ``page/index.html``
type OutputMode = Literal["flat", "directory"]

# Parameter bag handed to hooks
type Params = Mapping[str, Any]

# Data provider handler: sync or async, params optional
type HookHandler = Callable[..., Any | Awaitable[Any]]

# Route callables, treated as pure functions of one data item
type ParamsFunc = Callable[[Any], Mapping[str, Any]]
type PathFunc = Callable[[Any], str]
