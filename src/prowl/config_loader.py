"""Load ProwlConfig from prowl.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from prowl._errors import ConfigError
from prowl.config import ProwlConfig

logger = logging.getLogger("prowl.config")

# Looked up in this order; the first one found wins.
CONFIG_FILENAMES: tuple[str, ...] = ("prowl.yaml", "prowl.yml", "prowl.toml")

# Keys accepted from a config file; everything else is ignored.
_FILE_KEYS = frozenset({
    "source_dir", "pages_dir", "hooks_dir", "routes_file", "static_dir",
    "output", "template_ext", "output_mode", "not_found_template",
    "minify", "minify_options", "concurrency", "host", "port",
    "metadata", "assets_main", "assets_css", "manifest", "dev_entry",
})


def load_config(root: Path, **overrides: object) -> ProwlConfig:
    """Load ProwlConfig from root, optionally merging prowl.yaml.

    Looks for prowl.yaml, prowl.yml, or prowl.toml in root. If found, loads
    and merges with overrides. Overrides whose value is None are dropped so
    CLI flags left unset do not mask file values.

    Raises:
        ConfigError: If the config file cannot be parsed, or a value is invalid.

    """
    file_config = _read_prowl_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "assets_css" in merged and not isinstance(merged["assets_css"], tuple):
        merged["assets_css"] = tuple(merged["assets_css"])  # type: ignore[arg-type]
    try:
        return ProwlConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid configuration for {root}: {exc}"
        raise ConfigError(msg) from exc


def _read_prowl_config(root: Path) -> dict[str, object]:
    """Read prowl config from yaml/toml if present. Returns empty dict otherwise."""
    for name in CONFIG_FILENAMES[:2]:
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / CONFIG_FILENAMES[2]
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_prowl_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_prowl_section(data)


def _flatten_prowl_section(data: dict[str, object]) -> dict[str, object]:
    """Extract prowl.* keys into top-level config, dropping unknown keys."""
    raw: dict[str, object] = {k: v for k, v in data.items() if k != "prowl"}
    section = data.get("prowl")
    if isinstance(section, dict):
        raw.update(section)

    result: dict[str, object] = {}
    for k, v in raw.items():
        if k in _FILE_KEYS:
            result[k] = v
        else:
            logger.debug("Ignoring unknown config key %r", k)
    return result
