"""Hook loader — discover data hooks from a ``hooks/`` directory.

Each module contributes hooks through module-level names:

    hook: Hook            — a single hook (``hooks/posts.py``)
    hooks: list[Hook]     — several hooks from one module

Files starting with ``_`` and ``__pycache__`` contents are skipped.  Modules
are visited in sorted path order so discovery is deterministic.
"""

from pathlib import Path

from prowl._errors import ConfigError
from prowl._modules import load_module
from prowl.hooks.registry import Hook


def discover_hooks(hooks_dir: Path) -> tuple[Hook, ...]:
    """Scan *hooks_dir* for Python modules and return the hooks they export.

    Returns an empty tuple when *hooks_dir* does not exist.

    Raises:
        ConfigError: If a module fails to import or exports something that
            is not a Hook.

    """
    if not hooks_dir.is_dir():
        return ()

    found: list[Hook] = []

    for py_file in sorted(hooks_dir.rglob("*.py")):
        if py_file.name.startswith("_"):
            continue
        if "__pycache__" in py_file.parts:
            continue

        relative = py_file.relative_to(hooks_dir).with_suffix("")
        module = load_module(py_file, "prowl_hooks." + ".".join(relative.parts))
        found.extend(_extract_hooks(module, py_file))

    return tuple(found)


def _extract_hooks(module: object, py_file: Path) -> list[Hook]:
    """Collect the ``hook`` / ``hooks`` exports of a loaded module."""
    exported: list[object] = []

    single = getattr(module, "hook", None)
    if single is not None:
        exported.append(single)

    many = getattr(module, "hooks", None)
    if many is not None:
        if not isinstance(many, (list, tuple)):
            msg = f"Hook module {py_file}: 'hooks' must be a list, got {type(many).__name__}"
            raise ConfigError(msg)
        exported.extend(many)

    for obj in exported:
        if not isinstance(obj, Hook):
            msg = (
                f"Hook module {py_file}: expected Hook objects "
                f"(use define_hook()), got {type(obj).__name__}"
            )
            raise ConfigError(msg)

    return exported  # type: ignore[return-value]
