"""modhost public package exports."""

from .activator import activate, resolve_type
from .config import ModHostSettings, default_config_path, load_config, load_settings, resolve_paths
from .context import DirectExecutionContext, ExecutionContext
from .domain import DomainSetup, current_domain, domain_config
from .errors import (
    ActivationError,
    ArgumentError,
    CleanupError,
    ConfigError,
    ContextDisposedError,
    InvocationTargetError,
    ModHostError,
    NotFoundError,
)
from .factory import create_context, isolation_supported
from .isolation import IsolatedExecutionContext
from .unwrap import RemoteTraceback, unwrap_failure

__all__ = [
    "ActivationError",
    "ArgumentError",
    "CleanupError",
    "ConfigError",
    "ContextDisposedError",
    "DirectExecutionContext",
    "DomainSetup",
    "ExecutionContext",
    "InvocationTargetError",
    "IsolatedExecutionContext",
    "ModHostError",
    "ModHostSettings",
    "NotFoundError",
    "RemoteTraceback",
    "activate",
    "create_context",
    "current_domain",
    "default_config_path",
    "domain_config",
    "isolation_supported",
    "load_config",
    "load_settings",
    "resolve_paths",
    "resolve_type",
    "unwrap_failure",
]
