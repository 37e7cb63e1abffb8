"""HTML minification — optional post-processing of rendered pages.

Minification changes the bytes of an artifact, never the set of artifacts.
Requires the ``minify-html`` package (``pip install prowl[minify]``).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from prowl._errors import ConfigError

type Minifier = Callable[[str], str]

DEFAULT_MINIFY_OPTIONS: dict[str, Any] = {
    "minify_css": True,
    "minify_js": True,
    "keep_comments": True,
}


def make_minifier(options: Mapping[str, Any] | None = None) -> Minifier:
    """Return a ``str -> str`` minifier with *options* merged over the defaults.

    Raises:
        ConfigError: If ``minify-html`` is not installed.

    """
    try:
        import minify_html
    except ImportError as exc:
        msg = (
            "minify=True requires the minify-html package. "
            "Install with: pip install prowl[minify]"
        )
        raise ConfigError(msg) from exc

    merged = {**DEFAULT_MINIFY_OPTIONS, **(options or {})}

    def minify(html: str) -> str:
        return minify_html.minify(html, **merged)

    return minify
