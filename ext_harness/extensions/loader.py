"""
Python extension loader.

A bundle is either a single `.py` file or a package directory with an
`__init__.py`. The module must define `register(api)`, optionally async.

Resolution problems (missing path, no entry point, no register function) are
reported as LoadError records so the caller can emit a load-failure snapshot.
Exceptions raised by the bundle's own code, at import time or inside
register(), are not caught here: the bundle is untrusted and its failures
belong to the caller's failure boundary.
"""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from ext_harness.exceptions import ExtensionLoadError
from ext_harness.extensions.api import ExtensionAPI, ExtensionRuntime, LoadedExtension
from ext_harness.protocols import RuntimeActions
from ext_harness.services.network import FetchSlot

__all__ = [
    'ENTRY_POINT',
    'LoadError',
    'LoadResult',
    'PythonExtensionLoader',
]

ENTRY_POINT = 'register'


@dataclass
class LoadError:
    path: str
    error: str


@dataclass
class LoadResult:
    runtime: ExtensionRuntime
    extensions: list[LoadedExtension] = field(default_factory=list)
    errors: list[LoadError] = field(default_factory=list)


def _resolve_entry_file(resolved: Path) -> Path:
    """Map a bundle path to the Python file that defines it."""
    if not resolved.exists():
        raise ExtensionLoadError(f'Extension path does not exist: {resolved}')
    if resolved.is_dir():
        init_file = resolved / '__init__.py'
        if not init_file.is_file():
            raise ExtensionLoadError(f'Extension directory has no __init__.py: {resolved}')
        return init_file
    if resolved.suffix != '.py':
        raise ExtensionLoadError(f'Extension file is not a Python module: {resolved}')
    return resolved


def _module_name(resolved: Path) -> str:
    """Stable, collision-free module name for a bundle path."""
    digest = hashlib.sha256(str(resolved).encode()).hexdigest()[:12]
    return f'ext_harness_bundle_{resolved.stem.replace("-", "_")}_{digest}'


def _import_bundle(name: str, resolved: Path, entry_file: Path) -> ModuleType:
    search_locations = [str(resolved)] if resolved.is_dir() else None
    spec = importlib.util.spec_from_file_location(name, entry_file, submodule_search_locations=search_locations)
    if spec is None or spec.loader is None:
        raise ExtensionLoadError(f'Cannot create an import spec for {entry_file}')

    module = importlib.util.module_from_spec(spec)
    # Registered before execution so package-relative imports resolve
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


def _forget_bundle(name: str) -> None:
    """Drop a bundle and its submodules from sys.modules so the next load starts fresh."""
    for key in [k for k in sys.modules if k == name or k.startswith(f'{name}.')]:
        del sys.modules[key]


class PythonExtensionLoader:
    """Loads Python extension bundles against a runtime adapter."""

    async def load(
        self,
        paths: Sequence[Path],
        cwd: Path,
        *,
        actions: RuntimeActions,
        fetch: FetchSlot,
    ) -> LoadResult:
        runtime = ExtensionRuntime(actions=actions, fetch=fetch, cwd=cwd)
        result = LoadResult(runtime=runtime)

        for path in paths:
            resolved = (cwd / path).resolve()
            try:
                entry_file = _resolve_entry_file(resolved)
            except ExtensionLoadError as e:
                result.errors.append(LoadError(path=str(path), error=str(e)))
                continue

            name = _module_name(resolved)
            try:
                module = _import_bundle(name, resolved, entry_file)
                register = getattr(module, ENTRY_POINT, None)
                if not callable(register):
                    result.errors.append(
                        LoadError(path=str(path), error=f'Extension does not define a {ENTRY_POINT}(api) function')
                    )
                    continue

                extension = LoadedExtension(path=str(path), resolved_path=str(resolved))
                outcome = register(ExtensionAPI(extension, runtime))
                if inspect.isawaitable(outcome):
                    await outcome
                result.extensions.append(extension)
            finally:
                _forget_bundle(name)

        return result
