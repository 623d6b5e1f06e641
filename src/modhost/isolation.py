"""Execution context backed by a separate domain process."""

from __future__ import annotations

import logging
import multiprocessing
import pickle
import shutil
import threading
import uuid
from multiprocessing.managers import RemoteError
from pathlib import Path
from typing import Any

from .config import ModHostSettings, PathLike, load_settings
from .context import ExecutionContext
from .domain import DomainManager, DomainSetup, _initialize_domain
from .errors import ActivationError, CleanupError, InvocationTargetError
from .unwrap import RemoteTraceback, unwrap_failure
from .utils import best_effort, copy_tree

logger = logging.getLogger(__name__)


class IsolatedExecutionContext(ExecutionContext):
    """Creates objects inside a dedicated domain process.

    The domain is started synchronously by the constructor and lives until
    :meth:`dispose`. With ``shadow_copy`` the module's directory is first
    copied into a private staging directory and the domain loads from the
    copy, so the original files can be replaced or removed while the domain
    is running. Disposal stops the domain and deletes the staging directory;
    failures there are logged and kept in :attr:`cleanup_errors`, never
    raised.
    """

    def __init__(
        self,
        module_path: PathLike,
        config_path: PathLike | None = None,
        shadow_copy: bool = False,
        shadow_copy_dir: PathLike | None = None,
        settings: ModHostSettings | None = None,
    ) -> None:
        super().__init__(module_path, config_path)
        self._settings = settings or load_settings()
        self._lock = threading.Lock()
        self._cleanup_errors: list[CleanupError] = []
        self._setup = self._build_setup(shadow_copy, shadow_copy_dir)
        self._domain: DomainManager | None = None
        self._activator: Any = None
        self._create_domain()

    def _build_setup(self, shadow_copy: bool, shadow_copy_dir: PathLike | None) -> DomainSetup:
        application_name = str(uuid.uuid4())
        cache_path = None
        if shadow_copy:
            if shadow_copy_dir is not None:
                cache_path = Path(shadow_copy_dir).absolute()
            else:
                cache_path = Path(self._settings.staging_root).absolute() / application_name
        return DomainSetup(
            application_name=application_name,
            friendly_name=self.module_path.stem,
            application_base=self.module_path.parent,
            configuration_file=self.config_path,
            config=dict(self.config),
            shadow_copy=shadow_copy,
            cache_path=cache_path,
        )

    def _create_domain(self) -> None:
        setup = self._setup
        try:
            if setup.cache_path is not None:
                logger.debug("Staging %s into %s", setup.application_base, setup.cache_path)
                copy_tree(setup.application_base, setup.cache_path)
            ctx = multiprocessing.get_context(self._settings.start_method)
            domain = DomainManager(ctx=ctx)
            domain.start(_initialize_domain, (setup,))
            self._domain = domain
            self._activator = domain.Activator()
        except BaseException:
            self._teardown()
            raise
        logger.info(
            "Created domain %s (%s) for %s", setup.friendly_name, setup.application_name, self.module_path
        )

    @property
    def setup(self) -> DomainSetup:
        return self._setup

    @property
    def domain(self) -> DomainManager | None:
        return self._domain

    @property
    def staging_path(self) -> Path | None:
        return self._setup.cache_path

    @property
    def cleanup_errors(self) -> list[CleanupError]:
        return list(self._cleanup_errors)

    def create_object(self, module_name: str, type_name: str, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            self._check_active()
            activator = self._activator
        try:
            pickle.dumps((args, kwargs))
        except Exception as exc:  # noqa: BLE001
            raise ActivationError(
                f"Arguments for {module_name}.{type_name} cannot be marshaled into the domain: {exc}",
                exc,
            ) from exc

        try:
            return activator.create(module_name, type_name, args, kwargs)
        except InvocationTargetError as exc:
            failure = unwrap_failure(exc)
        except RemoteError as exc:
            failure = ActivationError(
                f"Domain {self._setup.friendly_name} could not serve {module_name}.{type_name}",
                RemoteTraceback(str(exc)),
            )
        except (EOFError, OSError) as exc:
            failure = ActivationError(
                f"Domain {self._setup.friendly_name} is unreachable: {exc!r}",
                exc,
            )
        raise failure

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._teardown()

    def _teardown(self) -> None:
        domain, self._domain = self._domain, None
        self._activator = None
        if domain is not None:
            best_effort(domain.shutdown, lambda exc: self._record("unload domain", exc))
            logger.info("Unloaded domain %s (%s)", self._setup.friendly_name, self._setup.application_name)
        cache_path = self._setup.cache_path
        if cache_path is not None and cache_path.exists():
            best_effort(
                lambda: shutil.rmtree(cache_path),
                lambda exc: self._record(f"delete staging directory {cache_path}", exc),
            )

    def _record(self, action: str, exc: Exception) -> None:
        error = CleanupError(f"Failed to {action}: {exc}", exc)
        self._cleanup_errors.append(error)
        logger.warning("%s", error.message, exc_info=exc)
