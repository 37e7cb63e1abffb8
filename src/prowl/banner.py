"""Startup banner and build summary — mode-aware status output.

Color is used only when stderr is a terminal and neither ``NO_COLOR``
(https://no-color.org) nor ``TERM=dumb`` is set.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prowl._types import ProwlMode
    from prowl.export.static import GenerationResult
    from prowl.site import Site

_COLOR = (
    not os.environ.get("NO_COLOR")
    and os.environ.get("TERM") != "dumb"
    and getattr(sys.stderr, "isatty", lambda: False)()
)

# SGR parameters
_SGR = {"bold": "1", "dim": "2", "green": "32", "yellow": "33", "cyan": "36"}
_BADGE_COLORS = {"dev": "green", "build": "yellow"}


def _paint(text: str, *styles: str) -> str:
    if not _COLOR or not styles:
        return text
    codes = ";".join(_SGR[style] for style in styles)
    return f"\033[{codes}m{text}\033[0m"


def _link(url: str) -> str:
    """OSC 8 hyperlink around *url*; plain text without color."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_paint(url, 'bold', 'cyan')}\033]8;;\033\\"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _tree(items: list[str]) -> list[str]:
    """Prefix *items* with box-drawing branches, the last one closed."""
    return [
        f"  {_paint('└─' if i == len(items) - 1 else '├─', 'dim')} {item}"
        for i, item in enumerate(items)
    ]


def format_banner(site: Site, mode: ProwlMode, *, load_ms: float = 0.0) -> str:
    """Return the startup banner for *site* in *mode* (``"dev"`` / ``"build"``)."""
    from prowl import __version__

    config = site.config
    badge = _paint(f"[{mode}]", _BADGE_COLORS.get(mode, "dim"))
    loaded = f"{_plural(len(site.catalog), 'template')} loaded"
    if load_ms > 0:
        loaded += " " + _paint(f"in {load_ms:.0f}ms", "dim")

    items = [loaded]
    if site.routes:
        items.append(
            f"{_plural(len(site.routes), 'dynamic route')} ({len(site.patterns)} matchable)"
        )
    if site.hooks:
        items.append(_plural(len(site.hooks), "hook"))
    items.append(f"pages: {_paint(str(config.pages_path), 'dim')}")
    items.append(f"output mode: {config.output_mode}")
    if mode == "build":
        items.append(f"output: {_paint(str(config.output_path), 'dim')}")
    else:
        items.append(f"{_paint('live reload', 'green')} on {_paint('/__prowl/events', 'dim')}")

    lines = [
        "",
        f"  {_paint('prowl', 'bold')} {_paint(f'v{__version__}', 'dim')}  {badge}",
        "  " + _paint("─" * 43, "dim"),
        *_tree(items),
    ]
    if mode != "build":
        lines += [
            "",
            f"  {_link(f'http://{config.host}:{config.port}')}",
            "",
            "  " + _paint("Watching for changes...", "dim"),
        ]
    lines.append("")
    return "\n".join(lines)


def print_banner(site: Site, mode: ProwlMode, *, load_ms: float = 0.0) -> None:
    """Print the startup banner to stderr."""
    print(format_banner(site, mode, load_ms=load_ms), file=sys.stderr)


def format_summary(result: GenerationResult) -> str:
    """Return the completion summary of a generation pass."""
    lines = [
        "",
        "─" * 41,
        f"  Generated {_plural(result.total_pages, 'page')}",
    ]
    if result.total_assets > 0:
        lines.append(f"  Copied {_plural(result.total_assets, 'asset')}")
    if result.diagnostics:
        lines.append(f"  {_paint('!', 'yellow')} {_plural(len(result.diagnostics), 'warning')}")
        lines.extend(
            f"    {_paint(d.kind, 'dim')} {d.subject}" for d in result.diagnostics
        )
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")
    return "\n".join(lines)


def print_summary(result: GenerationResult) -> None:
    """Print the generation summary to stderr."""
    print(format_summary(result), file=sys.stderr)
