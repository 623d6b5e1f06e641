"""Replace a module on disk while an isolated domain keeps serving the old copy."""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from modhost import create_context

VERSION_TEMPLATE = textwrap.dedent(
    """
    class Version:
        def __init__(self, who):
            self.who = who

        def describe(self):
            return "{label} greets " + self.who
    """
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--no-shadow-copy", action="store_true", help="Load straight from the original directory.")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    with tempfile.TemporaryDirectory() as tmpdir:
        module_path = Path(tmpdir) / "versioned.py"
        module_path.write_text(VERSION_TEMPLATE.format(label="v1"), encoding="utf-8")

        with create_context(module_path, shadow_copy=not args.no_shadow_copy) as context:
            module_path.write_text(VERSION_TEMPLATE.format(label="v2"), encoding="utf-8")
            instance = context.create_object("versioned", "Version", "the domain")
            print(f"inside the domain: {instance.describe()}")

        with create_context(module_path) as fresh:
            print(f"fresh domain:      {fresh.create_object('versioned', 'Version', 'a new domain').describe()}")


if __name__ == "__main__":
    main()
