"""Utility helpers."""

from __future__ import annotations

import shutil
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator


@contextmanager
def prepended_path(entry: Path | None) -> Iterator[None]:
    """Temporarily put *entry* at the front of ``sys.path``."""

    if entry is None:
        yield
        return
    value = str(entry)
    sys.path.insert(0, value)
    try:
        yield
    finally:
        try:
            sys.path.remove(value)
        except ValueError:
            pass


def copy_tree(source: Path, destination: Path) -> Path:
    """Copy *source* into *destination*, skipping bytecode caches.

    When *destination* lives inside *source* it is left out of the copy.
    """

    destination = destination.resolve()
    skip_caches = shutil.ignore_patterns("__pycache__", "*.pyc")

    def _ignore(directory: str, names: list[str]) -> set[str]:
        skipped = set(skip_caches(directory, names))
        skipped.update(name for name in names if Path(directory, name).resolve() == destination)
        return skipped

    shutil.copytree(source, destination, ignore=_ignore, dirs_exist_ok=True)
    return destination


def best_effort(action: Callable[[], None], on_error: Callable[[Exception], None]) -> None:
    """Run *action*, reporting any exception to *on_error* instead of raising."""

    try:
        action()
    except Exception as exc:  # noqa: BLE001
        on_error(exc)
