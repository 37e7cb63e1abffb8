"""Output path strategy — logical paths to artifact files and canonical URLs.

Two strategies:

    flat        ``about.html``  -> ``about.html``        URL ``/about``
    directory   ``about.html``  -> ``about/index.html``  URL ``/about/``

The root (``""``, ``"/"``, ``index.html``) always canonicalizes to ``/``.
Both functions are idempotent on their own output.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from prowl._errors import PathError

if TYPE_CHECKING:
    from prowl._types import OutputMode

_HTML = ".html"
_INDEX = "index.html"


def check_logical_path(logical_path: str) -> str:
    """Return *logical_path* unchanged if it stays inside the output directory.

    Raises:
        PathError: If any segment is ``..``.

    """
    if ".." in PurePosixPath(logical_path.replace("\\", "/")).parts:
        msg = f"Output path {logical_path!r} escapes the output directory"
        raise PathError(msg)
    return logical_path


def to_artifact_path(logical_path: str, mode: OutputMode) -> str:
    """Convert a logical output path to the physical file name for *mode*.

    ``about.html`` stays ``about.html`` in flat mode and becomes
    ``about/index.html`` in directory mode.  A path whose last segment is
    already ``index.html`` is left unchanged, as is any non-HTML file.
    Paths without an extension get ``.html``; a trailing ``/`` means the
    directory's index.

    Raises:
        PathError: If the path climbs out of the output directory.

    """
    path = logical_path.strip().lstrip("/")
    check_logical_path(path)
    if not path:
        return _INDEX
    if path.endswith("/"):
        return path + _INDEX

    last = path.rsplit("/", maxsplit=1)[-1]
    if "." not in last:
        path += _HTML
        last += _HTML

    if mode != "directory":
        return path
    if last == _INDEX or not last.endswith(_HTML):
        return path
    return path[: -len(_HTML)] + "/" + _INDEX


def to_canonical_url(physical_path: str, mode: OutputMode) -> str:
    """Return the canonical URL a physical artifact is served under.

    Flat mode drops the extension (``blog/a.html`` -> ``/blog/a``); directory
    mode ends in a slash (``blog/a/index.html`` -> ``/blog/a/``).  Non-HTML
    artifacts keep their file name.

    """
    path = physical_path.strip().lstrip("/")
    if path in ("", _INDEX):
        return "/"

    if path.endswith("/" + _INDEX):
        stem = path[: -len("/" + _INDEX)]
    elif path.endswith(_HTML):
        stem = path[: -len(_HTML)]
    else:
        return "/" + path

    if mode == "directory":
        return f"/{stem}/"
    return f"/{stem}"


def normalize_request_path(path: str) -> str:
    """Normalize a request path for lookups: leading slash, no trailing slash.

    ``/about/`` -> ``/about``; ``""`` and ``/`` -> ``/``.

    """
    if not path or path == "/":
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    return path.rstrip("/") or "/"
