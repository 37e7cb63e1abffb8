"""Static asset copy — files under ``static_dir`` go to the output root.

``public/robots.txt`` becomes ``dist/robots.txt`` and
``public/img/logo.svg`` becomes ``dist/img/logo.svg``.  A file whose path
was already emitted as a page is left out; the page wins.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Collection
from pathlib import Path

from prowl._errors import ExportError

logger = logging.getLogger("prowl.export")

# Files/directories skipped during asset copying
_HIDDEN_PREFIX = "."
_SKIPPED_DIRS = frozenset({"__pycache__"})


def copy_static(
    static_path: Path,
    output_dir: Path,
    *,
    skip: Collection[str] = (),
) -> tuple[str, ...]:
    """Recursively copy static assets into *output_dir*.

    Skips hidden files and directories (names starting with ``.``) and
    ``__pycache__`` directories.

    Args:
        static_path: Source directory (e.g., ``root/public/``).
        output_dir: Root export output directory.
        skip: Output-relative POSIX paths that must not be overwritten.

    Returns:
        Output-relative POSIX paths of the copied files.

    Raises:
        ExportError: If a file cannot be copied.

    """
    if not static_path.is_dir():
        return ()

    copied: list[str] = []

    for src_file in sorted(static_path.rglob("*")):
        if not src_file.is_file():
            continue

        relative = src_file.relative_to(static_path)
        if any(part.startswith(_HIDDEN_PREFIX) or part in _SKIPPED_DIRS for part in relative.parts):
            continue

        key = relative.as_posix()
        if key in skip:
            logger.warning("Static file %s shadowed by a generated page; not copied", key)
            continue

        dest_file = output_dir / relative
        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_file, dest_file)
        except OSError as exc:
            msg = f"Failed to copy {src_file} to {dest_file}: {exc}"
            raise ExportError(msg) from exc
        copied.append(key)

    return tuple(copied)
