"""Static generation — render every page of a site to files.

One pass over a :class:`~prowl.site.Site` snapshot, in two phases:

    1. Static phase: every discovered template not claimed by a dynamic
       route, with data from the hook named like the template.
    2. Dynamic phase: every dynamic route, expanded over the collection its
       data source returns, each page with data from the template's own
       hook called with that page's params.

A template id takes part in at most one phase, so no page is emitted twice
and a detail template is never rendered without an item.

Data conditions (missing template, missing data source, a data source that
is not a list, a single failing dynamic item) are logged, recorded as
:class:`Diagnostic` entries and skipped.  Anything else, including an
exception from a data source or from a static page, propagates and aborts
the pass.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from prowl._errors import DataSourceError, ExportError
from prowl.observability.events import PageRendered, PageSkipped, now_ns
from prowl.pages.paths import check_logical_path, to_artifact_path, to_canonical_url
from prowl.render.minify import make_minifier
from prowl.render.renderer import build_context
from prowl.routes.dynamic import ItemFailure, PageJob, coerce_items, expand_pages

if TYPE_CHECKING:
    from collections.abc import Mapping

    from prowl.observability.log import EventLog
    from prowl.pages.catalog import TemplateRef
    from prowl.render.minify import Minifier
    from prowl.render.renderer import Renderer
    from prowl.routes.dynamic import DynamicRoute
    from prowl.site import Site

logger = logging.getLogger("prowl.export")

type ArtifactSource = Literal["static", "dynamic", "not_found"]
type DiagnosticKind = Literal[
    "missing_template",
    "missing_data_source",
    "bad_data_source",
    "item_failed",
    "render_failed",
    "collision",
]

NOT_FOUND_ARTIFACT = "404.html"


@dataclass(frozen=True, slots=True)
class Artifact:
    """One generated file.

    Attributes:
        physical_path: Path relative to the output directory (POSIX).
        url: Canonical URL the file is served under.
        content: Rendered (and possibly minified) content.
        source: Which phase produced it.
        template: Template id it was rendered from.

    """

    physical_path: str
    url: str
    content: str
    source: ArtifactSource
    template: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal problem recorded during a pass."""

    kind: DiagnosticKind
    subject: str
    message: str


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Aggregate result of one generation pass.

    Attributes:
        artifacts: Emitted pages, static phase first, then dynamic routes in
            registration order.
        assets: Static files copied, relative to the output directory.
        diagnostics: Everything that was skipped, and why.
        duration_ms: Wall-clock time of the pass.
        output_dir: Absolute output directory.

    """

    artifacts: tuple[Artifact, ...]
    assets: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    duration_ms: float
    output_dir: Path

    @property
    def total_pages(self) -> int:
        return len(self.artifacts)

    @property
    def total_assets(self) -> int:
        return len(self.assets)

    @property
    def paths(self) -> tuple[str, ...]:
        """Physical paths of all emitted pages, in emission order."""
        return tuple(artifact.physical_path for artifact in self.artifacts)


class ArtifactWriter:
    """Persists artifacts and refuses a second artifact for the same path.

    Args:
        output_dir: Directory files are written under, or None to keep
            artifacts in memory only.

    """

    __slots__ = ("_emitted", "_output_dir")

    def __init__(self, output_dir: Path | None) -> None:
        self._output_dir = output_dir
        self._emitted: set[str] = set()

    @property
    def emitted(self) -> frozenset[str]:
        return frozenset(self._emitted)

    def emit(self, artifact: Artifact) -> bool:
        """Write *artifact*; return False if its path was already emitted.

        Raises:
            PathError: If the path climbs out of the output directory.
            ExportError: If the file cannot be written.

        """
        check_logical_path(artifact.physical_path)
        if artifact.physical_path in self._emitted:
            return False
        self._emitted.add(artifact.physical_path)
        if self._output_dir is not None:
            _write_file(self._output_dir / artifact.physical_path, artifact.content)
        return True


class _Progress:
    """Thread-safe processed/total counter."""

    __slots__ = ("_done", "_lock", "total")

    def __init__(self, total: int) -> None:
        self.total = total
        self._done = 0
        self._lock = threading.Lock()

    def advance(self) -> int:
        with self._lock:
            self._done += 1
            return self._done


class SiteGenerator:
    """Runs generation passes for one site snapshot.

    Args:
        site: Snapshot to generate.
        renderer: Renders templates to strings.
        minifier: Post-processor for page content.  When omitted, one is
            created from the configuration if ``minify`` is enabled.
        event_log: Receives PageRendered/PageSkipped events.
        write: Write files to the output directory.  With False, artifacts
            are only returned.

    """

    def __init__(
        self,
        site: Site,
        renderer: Renderer,
        *,
        minifier: Minifier | None = None,
        event_log: EventLog | None = None,
        write: bool = True,
    ) -> None:
        self._site = site
        self._config = site.config
        self._renderer = renderer
        if minifier is None and self._config.minify:
            minifier = make_minifier(self._config.minify_options)
        self._minifier = minifier
        self._event_log = event_log
        self._write = write
        self._diagnostics: list[Diagnostic] = []
        self._semaphore: asyncio.Semaphore | None = None

    async def generate(self) -> GenerationResult:
        """Run one full pass and return its result.

        Pipeline order:
            1. Clean the output directory
            2. Static phase
            3. Dynamic phase
            4. Copy static assets

        Raises:
            ExportError: If the output directory is unsafe to clean or a
                file cannot be written.
            Exception: Whatever a data source or a static page raised.

        """
        from prowl.export.assets import copy_static

        start = time.perf_counter()
        output_dir = self._config.output_path
        self._diagnostics = []
        self._semaphore = asyncio.Semaphore(self._config.concurrency)

        if self._write:
            self._clean_output(output_dir)
        writer = ArtifactWriter(output_dir if self._write else None)

        artifacts: list[Artifact] = []
        for artifact in await self._static_phase():
            self._emit(writer, artifact, artifacts)

        for route in self._site.routes:
            for artifact in await self._dynamic_route(route):
                self._emit(writer, artifact, artifacts)

        assets: tuple[str, ...] = ()
        if self._write:
            assets = copy_static(self._config.static_path, output_dir, skip=writer.emitted)

        elapsed = (time.perf_counter() - start) * 1000
        return GenerationResult(
            artifacts=tuple(artifacts),
            assets=assets,
            diagnostics=tuple(self._diagnostics),
            duration_ms=elapsed,
            output_dir=output_dir,
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    async def _static_phase(self) -> list[Artifact]:
        """Render every unclaimed template once."""
        mode = self._config.output_mode
        not_found = self._config.not_found_template
        jobs: list[tuple[TemplateRef, PageJob, ArtifactSource]] = []

        for template_id, ref in self._site.catalog.items():
            if template_id in self._site.claimed:
                logger.debug("Skipping %r in static phase: rendered by a dynamic route", template_id)
                continue
            if template_id == not_found:
                job = PageJob(template=template_id, params={}, logical_path=NOT_FOUND_ARTIFACT)
                jobs.append((ref, job, "not_found"))
                continue
            job = PageJob(template=template_id, params={}, logical_path=f"{template_id}.html")
            jobs.append((ref, job, "static"))

        progress = _Progress(len(jobs))
        results = await asyncio.gather(*(
            self._render_job(
                ref,
                job,
                source,
                progress,
                physical=NOT_FOUND_ARTIFACT if source == "not_found"
                else to_artifact_path(job.logical_path, mode),
            )
            for ref, job, source in jobs
        ))
        return [artifact for artifact in results if artifact is not None]

    async def _dynamic_route(self, route: DynamicRoute) -> list[Artifact]:
        """Expand and render one dynamic route."""
        ref = self._site.catalog.get(route.template)
        if ref is None:
            self._skip(
                "missing_template", route.template,
                f"Template {route.template!r} for data source {route.data_source!r} not found",
            )
            return []

        if route.data_source not in self._site.hooks:
            self._skip(
                "missing_data_source", route.data_source,
                f"No hook named {route.data_source!r} for template {route.template!r}",
            )
            return []

        data = await self._site.hooks.resolve(route.data_source, {})

        try:
            items = coerce_items(route, data)
        except DataSourceError as exc:
            self._skip("bad_data_source", route.data_source, str(exc))
            return []

        def on_error(failure: ItemFailure) -> None:
            self._skip(
                "item_failed", route.template,
                f"Item {failure.item!r} of {route.data_source!r}: {failure.error}",
            )

        jobs = expand_pages(route, items, on_error=on_error)
        mode = self._config.output_mode
        progress = _Progress(len(jobs))

        results = await asyncio.gather(*(
            self._render_job(
                ref, job, "dynamic", progress,
                physical=to_artifact_path(job.logical_path, mode),
            )
            for job in jobs
        ))
        rendered = [artifact for artifact in results if artifact is not None]
        logger.info(
            "Generated %d/%d pages for %r from %r",
            len(rendered), len(items), route.template, route.data_source,
        )
        return rendered

    # ------------------------------------------------------------------
    # Per-page work
    # ------------------------------------------------------------------

    async def _render_job(
        self,
        ref: TemplateRef,
        job: PageJob,
        source: ArtifactSource,
        progress: _Progress,
        *,
        physical: str,
    ) -> Artifact | None:
        """Resolve data for and render one page.

        A dynamic page that fails is skipped and yields None; a static or
        not-found page that fails raises.

        """
        assert self._semaphore is not None
        async with self._semaphore:
            t0 = time.perf_counter()
            url = to_canonical_url(physical, self._config.output_mode)
            try:
                data = await self._site.hooks.context_for(job.template, job.params)
                content = await self._renderer.render(ref, self._context(data, url))
            except Exception as exc:
                if source != "dynamic":
                    raise
                logger.warning(
                    "Skipping %s (template=%r, params=%r): %s",
                    physical, job.template, dict(job.params), exc,
                )
                self._skip("render_failed", physical, str(exc), log=False)
                return None
            finally:
                done = progress.advance()
                logger.debug("[%d/%d] %s", done, progress.total, physical)

            if self._minifier is not None:
                content = self._minifier(content)

            if self._event_log is not None:
                self._event_log.append(PageRendered(
                    template=job.template,
                    path=physical,
                    source=source,
                    size_bytes=len(content.encode("utf-8")),
                    duration_ms=(time.perf_counter() - t0) * 1000,
                    timestamp_ns=now_ns(),
                ))

            return Artifact(
                physical_path=physical,
                url=url,
                content=content,
                source=source,
                template=job.template,
            )

    def _context(self, data: Mapping[str, Any], url: str) -> dict[str, Any]:
        return build_context(
            data,
            current_url=url,
            is_dev=False,
            assets=self._site.assets,
            metadata=self._config.metadata,
            dev_entry=self._config.dev_entry,
        )

    def _emit(self, writer: ArtifactWriter, artifact: Artifact, out: list[Artifact]) -> None:
        if writer.emit(artifact):
            out.append(artifact)
            return
        self._skip(
            "collision", artifact.physical_path,
            f"{artifact.physical_path} already emitted; "
            f"dropping the copy from template {artifact.template!r}",
        )

    def _skip(self, kind: DiagnosticKind, subject: str, message: str, *, log: bool = True) -> None:
        if log:
            logger.warning("%s", message)
        self._diagnostics.append(Diagnostic(kind=kind, subject=subject, message=message))
        if self._event_log is not None:
            self._event_log.append(PageSkipped(
                kind=kind, subject=subject, message=message, timestamp_ns=now_ns(),
            ))

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        root = self._config.root
        if output_dir == root or output_dir in root.parents:
            msg = f"Refusing to clean {output_dir}: it contains the project root"
            raise ExportError(msg)
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)


def _write_file(filepath: Path, content: str) -> int:
    """Write content to a file, creating parent dirs as needed.

    Returns the size in bytes of the written file.

    """
    data = content.encode("utf-8")
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_bytes(data)
    except OSError as exc:
        msg = f"Failed to write {filepath}: {exc}"
        raise ExportError(msg) from exc
    return len(data)
