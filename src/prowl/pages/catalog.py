"""Template catalog — discovery of page templates.

Scans the pages directory recursively once per generation pass or server
start.  The resulting catalog is immutable; a template added while the dev
server runs appears in the next catalog, never in the current one.

Template ids are paths relative to the pages directory with the extension
removed and POSIX separators::

    src/pages/index.html       -> "index"
    src/pages/post.html        -> "post"
    src/pages/blog/index.html  -> "blog/index"
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class TemplateRef:
    """A discovered page template.

    Attributes:
        id: Logical id (relative path without extension).
        name: Loader name relative to the template source root
            (``pages/post.html``), as the renderer resolves it.
        path: Absolute filesystem path.

    """

    id: str
    name: str
    path: Path


@dataclass(frozen=True, slots=True)
class TemplateCatalog(Mapping[str, TemplateRef]):
    """Immutable id -> TemplateRef mapping, in sorted discovery order."""

    _refs: dict[str, TemplateRef] = field(default_factory=dict)

    def __getitem__(self, template_id: str) -> TemplateRef:
        return self._refs[template_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)


def discover_templates(
    pages_dir: Path,
    *,
    ext: str = ".html",
    source_dir: Path | None = None,
) -> TemplateCatalog:
    """Recursively scan *pages_dir* for ``*<ext>`` templates.

    Args:
        pages_dir: Directory holding page templates.
        ext: Template file extension.
        source_dir: Loader root the renderer resolves names against.
            Defaults to *pages_dir* itself.

    Returns:
        A catalog, empty when *pages_dir* does not exist.  Files and
        directories whose names start with ``_`` are partials, not pages,
        and are skipped.

    """
    if not pages_dir.is_dir():
        return TemplateCatalog()

    loader_root = source_dir or pages_dir
    refs: dict[str, TemplateRef] = {}

    for path in sorted(pages_dir.rglob(f"*{ext}")):
        if not path.is_file():
            continue
        relative = path.relative_to(pages_dir)
        if any(part.startswith("_") for part in relative.parts):
            continue

        template_id = relative.with_suffix("").as_posix()
        try:
            name = path.relative_to(loader_root).as_posix()
        except ValueError:
            name = relative.as_posix()

        refs[template_id] = TemplateRef(id=template_id, name=name, path=path)

    return TemplateCatalog(refs)
