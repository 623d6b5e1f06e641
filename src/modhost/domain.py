"""Domain process hosting an isolated module.

A domain is the server process of a :class:`DomainManager`. It starts from a
fresh interpreter, puts the module's load root first on ``sys.path`` and
serves activation requests. Objects built there stay there; the caller gets
proxies that forward method calls into the domain.
"""

from __future__ import annotations

import logging
import sys
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from multiprocessing.managers import BaseManager
from pathlib import Path
from typing import Any

from .activator import activate
from .errors import InvocationTargetError

logger = logging.getLogger(__name__)

_current: DomainSetup | None = None


@dataclass(frozen=True)
class DomainSetup:
    """Everything a domain needs to know about the module it hosts."""

    application_name: str
    friendly_name: str
    application_base: Path
    configuration_file: Path | None = None
    config: Mapping[str, Any] = field(default_factory=dict)
    shadow_copy: bool = False
    cache_path: Path | None = None

    @property
    def load_root(self) -> Path:
        if self.shadow_copy and self.cache_path is not None:
            return self.cache_path
        return self.application_base


def current_domain() -> DomainSetup | None:
    """Setup of the domain this code runs in, or ``None`` outside of one."""

    return _current


def domain_config() -> Mapping[str, Any]:
    """Parsed configuration file of the current domain."""

    if _current is None:
        return {}
    return _current.config


def _load_root() -> Path | None:
    return _current.load_root if _current is not None else None


def _initialize_domain(setup: DomainSetup) -> None:
    global _current
    sys.path.insert(0, str(setup.load_root))
    _current = setup


class DomainActivator:
    """Domain-side entry point for activation requests."""

    def create(
        self,
        module_name: str,
        type_name: str,
        args: Sequence[Any],
        kwargs: Mapping[str, Any],
    ) -> Any:
        try:
            return activate(module_name, type_name, args, kwargs, search_path=_load_root())
        except InvocationTargetError as exc:
            inner = exc.inner
            tb = "".join(traceback.format_exception(type(inner), inner, inner.__traceback__))
            raise InvocationTargetError(inner, tb) from None


class DomainManager(BaseManager):
    """Manager whose server process is one execution domain."""


DomainManager.register(
    "Activator",
    DomainActivator,
    method_to_typeid={"create": "Instance"},
)
DomainManager.register("Instance", create_method=False)
