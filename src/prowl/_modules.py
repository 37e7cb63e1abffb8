"""Import user project files as modules without touching ``sys.path``."""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from prowl._errors import ConfigError


def load_module(py_file: Path, module_name: str) -> ModuleType:
    """Import *py_file* under *module_name*.

    Uses ``importlib.util.spec_from_file_location`` for isolated loading.
    The module is registered in ``sys.modules`` so relative imports within
    project files work.

    Raises:
        ConfigError: If the file cannot be loaded or raises on import.

    """
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load {py_file}: not an importable Python file"
        raise ConfigError(msg)

    try:
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        msg = f"Failed to load {py_file}: {exc}"
        raise ConfigError(msg) from exc

    return module
