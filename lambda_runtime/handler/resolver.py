"""Handler resolution.

Loads the user module from the task root by file path, trying each candidate
extension in order until one yields a callable export. Load failures of a
single candidate are tolerated; only the absence of any callable export is
fatal.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from lambda_runtime.exceptions.startup_errors import HandlerNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import ModuleType

    from lambda_runtime.handler.spec import HandlerSpec
    from lambda_runtime.types import LoadedHandler

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_ATTRIBUTE = "default"


class ModuleLoadError(Exception):
    """A single candidate module could not be loaded."""


class HandlerResolver:
    """Resolves handler specifications against one task root directory.

    Loaded modules are cached by resolved file path, so resolving the same
    specification twice executes the module body only once.
    """

    def __init__(self, task_root: str | Path, extensions: Sequence[str]) -> None:
        """Initialize the resolver.

        Args:
            task_root: Directory containing the handler modules.
            extensions: Candidate file suffixes, tried in the given order.
        """
        self._task_root = Path(task_root)
        self._extensions = tuple(extensions)
        self._module_cache: dict[str, ModuleType] = {}

    @property
    def extensions(self) -> tuple[str, ...]:
        """Candidate extensions in the order they are tried."""
        return self._extensions

    @property
    def cached_paths(self) -> list[str]:
        """Resolved paths of modules loaded so far."""
        return list(self._module_cache)

    def candidate_paths(self, module_name: str) -> list[Path]:
        """Return the candidate file paths for a module, in resolution order."""
        return [self._task_root / f"{module_name}{suffix}" for suffix in self._extensions]

    def resolve(self, spec: HandlerSpec) -> LoadedHandler:
        """Load the handler function named by a specification.

        Args:
            spec: Parsed handler specification.

        Returns:
            The callable export.

        Raises:
            HandlerNotFoundError: If no candidate module exposes a callable
                export or default.
        """
        self._ensure_import_path()
        candidates = self.candidate_paths(spec.module_name)

        for path in candidates:
            try:
                module = self._load_module(spec.module_name, path)
            except ModuleLoadError as error:
                logger.debug("Skipping handler candidate %s: %s", path, error)
                continue

            function = _find_export(module, spec.export_name)
            if function is not None:
                logger.info("Resolved handler %s from %s", spec, path)
                return function

            logger.debug("No callable %r or default export in %s", spec.export_name, path)

        raise HandlerNotFoundError(
            f'Handler "{spec.export_name}" not found in {spec.module_name}',
            module_name=spec.module_name,
            export_name=spec.export_name,
            candidates=[str(path) for path in candidates],
        )

    def _ensure_import_path(self) -> None:
        """Put the task root on sys.path so handlers can import sibling modules."""
        task_root = str(self._task_root)
        if task_root not in sys.path:
            sys.path.insert(0, task_root)

    def _load_module(self, module_name: str, path: Path) -> ModuleType:
        """Load one candidate module, consulting the cache first.

        Raises:
            ModuleLoadError: If the file is missing or fails to import.
        """
        if not path.is_file():
            raise ModuleLoadError(f"{path} does not exist")

        cache_key = str(path.resolve())
        cached = self._module_cache.get(cache_key)
        if cached is not None:
            return cached

        module_spec = importlib.util.spec_from_file_location(module_name, path)
        if module_spec is None or module_spec.loader is None:
            raise ModuleLoadError(f"No module loader for {path}")

        module = importlib.util.module_from_spec(module_spec)
        sys.modules[module_name] = module
        try:
            module_spec.loader.exec_module(module)
        except Exception as error:
            sys.modules.pop(module_name, None)
            logger.warning("Failed to load handler module %s", path, exc_info=True)
            raise ModuleLoadError(f"{type(error).__name__}: {error}") from error

        self._module_cache[cache_key] = module
        return module


def _find_export(module: ModuleType, export_name: str) -> LoadedHandler | None:
    """Return the named export, else the default export, if callable."""
    function = getattr(module, export_name, None)
    if function is None:
        function = getattr(module, DEFAULT_EXPORT_ATTRIBUTE, None)
    if callable(function):
        return function
    return None
