"""Asset bundle — the scripts and stylesheets pages link to.

The bundle is produced by an external build step.  Prowl only reads it,
either from explicit configuration or from a manifest file in one of two
shapes::

    {"main": "assets/main-3f2a.js", "css": ["assets/main-91bc.css"]}

    {"index.html": {"file": "assets/main-3f2a.js", "css": ["assets/main-91bc.css"]}}

The second shape is a bundler manifest keyed by entry; the ``index.html``
entry wins, otherwise the first entry whose file is a script.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prowl._errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from prowl.config import ProwlConfig

logger = logging.getLogger("prowl.render")

_SCRIPT_SUFFIXES = (".js", ".mjs", ".ts")


@dataclass(frozen=True, slots=True)
class AssetBundle:
    """Entry script and stylesheets, as paths relative to the site root."""

    main: str = ""
    css: tuple[str, ...] = ()

    def tags(self) -> str:
        """Render ``<script>`` / ``<link>`` tags for the bundle."""
        lines: list[str] = []
        if self.main:
            lines.append(f'<script type="module" src="{_href(self.main)}"></script>')
        lines.extend(f'<link rel="stylesheet" href="{_href(href)}">' for href in self.css)
        return "\n".join(lines)


def _href(path: str) -> str:
    """Root-relative href for a bundle path."""
    if path.startswith(("/", "http://", "https://")):
        return path
    return "/" + path


def explicit_bundle(config: ProwlConfig) -> AssetBundle:
    """The bundle named by ``assets_main`` / ``assets_css``, ignoring any manifest.

    This is all the dev server links; manifests describe production builds.
    """
    return AssetBundle(main=config.assets_main, css=tuple(config.assets_css))


def load_asset_bundle(config: ProwlConfig) -> AssetBundle:
    """Resolve the asset bundle for *config*.

    Explicit ``assets_main`` / ``assets_css`` win.  Otherwise the manifest is
    read when configured; a configured manifest that does not exist yet
    (before the first bundler run) yields an empty bundle and a warning.

    Raises:
        ConfigError: If the manifest exists but cannot be parsed.

    """
    if config.assets_main or config.assets_css:
        return explicit_bundle(config)

    manifest_path = config.manifest_path
    if manifest_path is None:
        return AssetBundle()
    if not manifest_path.is_file():
        logger.warning("Asset manifest %s not found; pages will not link JS/CSS", manifest_path)
        return AssetBundle()
    return read_manifest(manifest_path)


def read_manifest(path: Path) -> AssetBundle:
    """Parse a manifest file into an AssetBundle.

    Raises:
        ConfigError: If the file is not valid JSON or not a JSON object.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Failed to read asset manifest {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Asset manifest {path} must be a JSON object"
        raise ConfigError(msg)
    return bundle_from_manifest(data)


def bundle_from_manifest(data: dict[str, Any]) -> AssetBundle:
    """Build an AssetBundle from either manifest shape."""
    if "main" in data or "css" in data:
        return AssetBundle(
            main=str(data.get("main") or ""),
            css=tuple(str(c) for c in data.get("css") or ()),
        )

    entry = data.get("index.html")
    if not isinstance(entry, dict) or not entry.get("file"):
        entry = next(
            (
                value
                for value in data.values()
                if isinstance(value, dict)
                and str(value.get("file", "")).endswith(_SCRIPT_SUFFIXES)
            ),
            None,
        )
    if entry is None:
        return AssetBundle()
    return AssetBundle(
        main=str(entry.get("file") or ""),
        css=tuple(str(c) for c in entry.get("css") or ()),
    )
