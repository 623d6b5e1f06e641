"""Choose between isolated and direct execution contexts."""

from __future__ import annotations

import logging
import multiprocessing
import sys

from .config import ModHostSettings, PathLike, load_settings
from .context import DirectExecutionContext, ExecutionContext
from .isolation import IsolatedExecutionContext

logger = logging.getLogger(__name__)

_UNSUPPORTED_PLATFORMS = ("emscripten", "wasi")


def isolation_supported(start_method: str = "spawn") -> bool:
    """Whether this interpreter can start domain processes."""

    if sys.platform in _UNSUPPORTED_PLATFORMS:
        return False
    return start_method in multiprocessing.get_all_start_methods()


def create_context(
    module_path: PathLike | None,
    config_path: PathLike | None = None,
    *,
    isolate: bool = True,
    shadow_copy: bool = False,
    shadow_copy_dir: PathLike | None = None,
    settings: ModHostSettings | None = None,
    platform_supports_isolation: bool | None = None,
) -> ExecutionContext:
    """Build the execution context for *module_path*.

    An isolated context is returned when *isolate* is requested and the
    platform can start domains; otherwise the module is hosted directly in
    this process. Falling back is not an error.
    """

    settings = settings or load_settings()
    supported = platform_supports_isolation
    if supported is None:
        supported = isolation_supported(settings.start_method)

    if isolate and supported:
        return IsolatedExecutionContext(
            module_path,
            config_path,
            shadow_copy=shadow_copy,
            shadow_copy_dir=shadow_copy_dir,
            settings=settings,
        )
    if isolate:
        logger.debug("Isolation is not supported here; hosting %s directly", module_path)
    return DirectExecutionContext(module_path, config_path)
