"""Locate classes inside modules and construct instances of them."""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import ModuleType
from typing import Any

from .errors import ActivationError, InvocationTargetError
from .utils import prepended_path

logger = logging.getLogger(__name__)


def _loaded_from(module: ModuleType, root: Path) -> bool:
    location = getattr(module, "__file__", None)
    locations = [location] if location else list(getattr(module, "__path__", []))
    root = root.resolve()
    return any(Path(entry).resolve().is_relative_to(root) for entry in locations)


def _import(module_name: str, search_path: Path | None) -> ModuleType:
    if not module_name:
        raise ActivationError("module_name must not be empty")
    with prepended_path(search_path):
        try:
            module = importlib.import_module(module_name)
        except Exception as exc:  # noqa: BLE001
            raise ActivationError(f"Could not load module {module_name!r}: {exc}", exc) from exc
    if search_path is not None and not _loaded_from(module, search_path):
        raise ActivationError(
            f"Module {module_name!r} is already loaded from {getattr(module, '__file__', None) or 'elsewhere'}, "
            f"not from {search_path}"
        )
    return module


def resolve_type(module_name: str, type_name: str, search_path: Path | None = None) -> type:
    """Return the class named *type_name* inside *module_name*.

    *type_name* may be dotted to reach nested classes.
    """

    if not type_name:
        raise ActivationError("type_name must not be empty")
    target: Any = _import(module_name, search_path)
    for part in type_name.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ActivationError(
                f"Could not find type {type_name!r} in module {module_name!r}", exc
            ) from exc
    if not isinstance(target, type):
        raise ActivationError(f"{module_name}.{type_name} is not a type")
    return target


def activate(
    module_name: str,
    type_name: str,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
    search_path: Path | None = None,
) -> Any:
    """Construct ``module_name.type_name(*args, **kwargs)``.

    Lookup and argument mismatches raise :class:`ActivationError`. An
    exception raised by the constructor itself is wrapped in
    :class:`InvocationTargetError`.
    """

    cls = resolve_type(module_name, type_name, search_path)
    kwargs = dict(kwargs or {})
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        signature = None
    if signature is not None:
        try:
            signature.bind(*args, **kwargs)
        except TypeError as exc:
            raise ActivationError(
                f"No constructor of {module_name}.{type_name} accepts the supplied arguments: {exc}",
                exc,
            ) from exc

    logger.debug("Activating %s.%s with %d argument(s)", module_name, type_name, len(args) + len(kwargs))
    try:
        return cls(*args, **kwargs)
    except Exception as exc:  # noqa: BLE001
        raise InvocationTargetError(exc) from exc
