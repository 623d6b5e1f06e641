"""Turn boundary-crossing wrappers back into the constructor's own failure."""

from __future__ import annotations

from .errors import ActivationError, InvocationTargetError


class RemoteTraceback(Exception):
    """Carries the formatted traceback of a failure raised inside a domain."""

    def __init__(self, tb: str) -> None:
        super().__init__(tb)
        self.tb = tb

    def __str__(self) -> str:
        return self.tb


def unwrap_failure(error: BaseException) -> BaseException:
    """Return the exception a caller should observe for *error*.

    Anything other than an :class:`InvocationTargetError` is returned as is.
    For a wrapper, the inner exception is returned with its class, arguments
    and (in-process) traceback intact. A traceback captured inside a domain
    is chained as ``__cause__``. If the inner exception could not be rebuilt
    in this process, an :class:`ActivationError` naming its kind stands in.
    """

    if not isinstance(error, InvocationTargetError):
        return error

    remote = RemoteTraceback(error.remote_traceback) if error.remote_traceback else None
    inner = error.inner
    if inner is None:
        return ActivationError(
            f"Constructor raised {error.kind}: {error.detail}",
            remote,
        )
    if remote is not None:
        inner.__cause__ = remote
    return inner
