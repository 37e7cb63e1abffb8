"""Prowl configuration.

ProwlConfig is the central configuration object, frozen after creation.
Every operation receives it explicitly; there is no ambient "current root".
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from prowl._errors import ConfigError

_OUTPUT_MODES = frozenset({"flat", "directory"})


@dataclass(frozen=True, slots=True)
class ProwlConfig:
    """Configuration for a Prowl project.

    Attributes:
        root: Path to the project root. Always resolved to an absolute path
              on construction.
        source_dir: Template loader root; layouts and partials live here.
        pages_dir: Directory scanned recursively for page templates.
        hooks_dir: Directory of Python modules exporting data hooks.
        routes_file: Python module exporting ``dynamic_routes``.
        static_dir: Directory copied verbatim into the build output.
        output: Output directory for static generation.
        template_ext: Extension of page templates.
        output_mode: ``"flat"`` (``about.html``) or ``"directory"``
            (``about/index.html``).
        not_found_template: Template id rendered for unknown paths.
        minify: Minify every generated artifact.
        minify_options: Options merged over the default minifier options.
        concurrency: Maximum number of page jobs rendered at once.
        host: Bind address for the dev server.
        port: Bind port for the dev server.
        metadata: Site metadata, exposed to templates as ``site``.
        assets_main: Bundle entry script (overrides the manifest).
        assets_css: Bundle stylesheets (overrides the manifest).
        manifest: Asset manifest JSON, relative to ``root``.
        dev_entry: Module script injected by ``render_assets()`` in dev mode.

    """

    root: Path = field(default_factory=Path.cwd)
    source_dir: str = "src"
    pages_dir: str = "src/pages"
    hooks_dir: str = "hooks"
    routes_file: str = "routes.py"
    static_dir: str = "public"
    output: Path = field(default_factory=lambda: Path("dist"))
    template_ext: str = ".html"
    output_mode: str = "flat"
    not_found_template: str = "404"
    minify: bool = False
    minify_options: dict[str, Any] = field(default_factory=dict)
    concurrency: int = 8
    host: str = "127.0.0.1"
    port: int = 3000
    metadata: dict[str, Any] = field(default_factory=dict)
    assets_main: str = ""
    assets_css: tuple[str, ...] = ()
    manifest: str = ""
    dev_entry: str = ""

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if self.output_mode not in _OUTPUT_MODES:
            msg = (
                f"output_mode must be one of {sorted(_OUTPUT_MODES)}, "
                f"got {self.output_mode!r}"
            )
            raise ConfigError(msg)
        if self.concurrency < 1:
            msg = f"concurrency must be at least 1, got {self.concurrency}"
            raise ConfigError(msg)
        if not self.template_ext.startswith("."):
            object.__setattr__(self, "template_ext", "." + self.template_ext)
        if not isinstance(self.assets_css, tuple):
            object.__setattr__(self, "assets_css", tuple(self.assets_css))

    @property
    def source_path(self) -> Path:
        """Absolute path to the template loader root."""
        return self.root / self.source_dir

    @property
    def pages_path(self) -> Path:
        """Absolute path to the pages directory."""
        return self.root / self.pages_dir

    @property
    def hooks_path(self) -> Path:
        """Absolute path to the hooks directory."""
        return self.root / self.hooks_dir

    @property
    def routes_path(self) -> Path:
        """Absolute path to the dynamic routes module."""
        return self.root / self.routes_file

    @property
    def static_path(self) -> Path:
        """Absolute path to the static assets directory."""
        return self.root / self.static_dir

    @property
    def manifest_path(self) -> Path | None:
        """Absolute path to the asset manifest, or None when not configured."""
        if not self.manifest:
            return None
        return self.root / self.manifest

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output
