"""Error taxonomy for execution contexts."""

from __future__ import annotations

import pickle


def _portable(cause: BaseException | None) -> BaseException | None:
    # Only builtin exceptions are guaranteed to unpickle on the other side.
    if cause is not None and type(cause).__module__ == "builtins":
        return cause
    return None


def _qualified_kind(error: BaseException | None) -> str:
    if error is None:
        return "Exception"
    cls = type(error)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class ModHostError(Exception):
    """Base class for all errors raised by execution contexts."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __reduce__(self):
        return (type(self), (self.message, _portable(self.cause)))


class ArgumentError(ModHostError, ValueError):
    """A required argument is missing or empty."""


class NotFoundError(ModHostError, FileNotFoundError):
    """A module or configuration file does not exist."""


class ConfigError(ModHostError):
    """A configuration file could not be read or has the wrong shape."""


class ActivationError(ModHostError):
    """A type could not be located or no constructor accepts the arguments."""


class ContextDisposedError(ModHostError, RuntimeError):
    """The execution context was used after disposal."""


class CleanupError(ModHostError):
    """Tearing down a domain or deleting a staging area failed."""


def _dump_inner(inner: BaseException | None) -> bytes | None:
    if inner is None:
        return None
    try:
        return pickle.dumps(inner)
    except Exception:  # noqa: BLE001
        return None


def _rebuild_invocation_error(
    payload: bytes | None,
    kind: str,
    detail: str,
    remote_traceback: str | None,
) -> "InvocationTargetError":
    inner = None
    if payload is not None:
        try:
            inner = pickle.loads(payload)
        except Exception:  # noqa: BLE001
            inner = None
    return InvocationTargetError(inner, remote_traceback, kind=kind, detail=detail)


class InvocationTargetError(ModHostError):
    """Generic wrapper for an exception raised by an activated constructor.

    The wrapper is how a failure crosses the activation boundary. Callers of
    an execution context never see it: contexts hand it to
    :func:`modhost.unwrap.unwrap_failure` and raise the inner exception.

    When pickled, the inner exception travels as bytes and is rebuilt on the
    receiving side. If its class cannot be imported there, ``inner`` is
    ``None`` and only ``kind`` and ``detail`` survive.
    """

    def __init__(
        self,
        inner: BaseException | None,
        remote_traceback: str | None = None,
        *,
        kind: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.inner = inner
        self.kind = kind or _qualified_kind(inner)
        self.detail = detail if detail is not None else str(inner)
        self.remote_traceback = remote_traceback
        super().__init__(
            f"Exception has been thrown by the target of an invocation: {self.kind}: {self.detail}",
            inner,
        )

    def __reduce__(self):
        return (
            _rebuild_invocation_error,
            (_dump_inner(self.inner), self.kind, self.detail, self.remote_traceback),
        )
