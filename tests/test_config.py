"""Tests for prowl.config."""

from pathlib import Path

import pytest

from prowl._errors import ConfigError
from prowl.config import ProwlConfig


class TestProwlConfig:
    """ProwlConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = ProwlConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.source_dir == "src"
        assert config.pages_dir == "src/pages"
        assert config.hooks_dir == "hooks"
        assert config.routes_file == "routes.py"
        assert config.static_dir == "public"
        assert config.output_mode == "flat"
        assert config.not_found_template == "404"
        assert config.minify is False
        assert config.concurrency == 8
        assert config.dev_entry == ""

    def test_frozen(self) -> None:
        config = ProwlConfig()
        with pytest.raises(AttributeError):
            config.port = 8000  # type: ignore[misc]

    def test_paths_resolve_from_root(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path)
        assert config.source_path == tmp_path / "src"
        assert config.pages_path == tmp_path / "src" / "pages"
        assert config.hooks_path == tmp_path / "hooks"
        assert config.routes_path == tmp_path / "routes.py"
        assert config.static_path == tmp_path / "public"
        assert config.output_path == tmp_path / "dist"

    def test_relative_root_is_resolved(self) -> None:
        config = ProwlConfig(root=Path("."))
        assert config.root.is_absolute()

    def test_absolute_output_preserved(self, tmp_path: Path) -> None:
        output = tmp_path / "elsewhere"
        config = ProwlConfig(root=tmp_path / "site", output=output)
        assert config.output_path == output

    def test_manifest_path_unset(self, tmp_path: Path) -> None:
        assert ProwlConfig(root=tmp_path).manifest_path is None

    def test_manifest_path_set(self, tmp_path: Path) -> None:
        config = ProwlConfig(root=tmp_path, manifest="dist/manifest.json")
        assert config.manifest_path == tmp_path / "dist" / "manifest.json"

    def test_directory_mode_accepted(self) -> None:
        assert ProwlConfig(output_mode="directory").output_mode == "directory"

    def test_invalid_output_mode(self) -> None:
        with pytest.raises(ConfigError, match="output_mode"):
            ProwlConfig(output_mode="pretty")

    def test_non_positive_concurrency(self) -> None:
        with pytest.raises(ConfigError, match="concurrency"):
            ProwlConfig(concurrency=0)

    def test_template_ext_normalized(self) -> None:
        assert ProwlConfig(template_ext="kida").template_ext == ".kida"

    def test_assets_css_coerced_to_tuple(self) -> None:
        config = ProwlConfig(assets_css=["a.css", "b.css"])  # type: ignore[arg-type]
        assert config.assets_css == ("a.css", "b.css")
