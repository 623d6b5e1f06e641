"""Execution context contract and the in-process implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .activator import activate
from .config import PathLike, load_config, resolve_paths
from .errors import ConfigError, ContextDisposedError, InvocationTargetError
from .unwrap import unwrap_failure

logger = logging.getLogger(__name__)


class ExecutionContext(ABC):
    """Environment in which classes from one module are instantiated.

    Paths are validated and made absolute once, at construction, and never
    change afterwards. Contexts are context managers; leaving the ``with``
    block disposes them.
    """

    def __init__(self, module_path: PathLike, config_path: PathLike | None = None) -> None:
        self._module_path, self._config_path = resolve_paths(module_path, config_path)
        try:
            self._config = load_config(self._config_path)
        except ConfigError as exc:
            logger.warning("Ignoring configuration file %s: %s", self._config_path, exc)
            self._config = {}
        self._disposed = False

    @property
    def module_path(self) -> Path:
        return self._module_path

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    @property
    def config(self) -> Mapping[str, Any]:
        return self._config

    @property
    def module_name(self) -> str:
        """Importable name of the module file.

        Activation refuses a module of this name that was already imported
        from somewhere else, such as a file called ``json.py``.
        """

        return self._module_path.stem

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _check_active(self) -> None:
        if self._disposed:
            raise ContextDisposedError(f"Execution context for {self._module_path} has been disposed")

    @abstractmethod
    def create_object(self, module_name: str, type_name: str, *args: Any, **kwargs: Any) -> Any:
        """Construct ``type_name`` from ``module_name`` with the given arguments."""

    @abstractmethod
    def dispose(self) -> None:
        """Release everything the context owns. Safe to call repeatedly."""

    def __enter__(self) -> "ExecutionContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"<{type(self).__name__} {self._module_path} ({state})>"


class DirectExecutionContext(ExecutionContext):
    """Creates objects in the caller's own interpreter.

    There is no isolation: the module lands in the caller's ``sys.modules``
    and its module-level state is shared with everything else in the process.
    """

    def create_object(self, module_name: str, type_name: str, *args: Any, **kwargs: Any) -> Any:
        self._check_active()
        try:
            return activate(
                module_name,
                type_name,
                args,
                kwargs,
                search_path=self._module_path.parent,
            )
        except InvocationTargetError as exc:
            failure = unwrap_failure(exc)
        raise failure

    def dispose(self) -> None:
        self._disposed = True
