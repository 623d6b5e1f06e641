"""Command line interface for modhost."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from .config import load_settings, resolve_paths
from .errors import ModHostError
from .factory import create_context, isolation_supported

logger = logging.getLogger(__name__)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def cmd_info(args: argparse.Namespace) -> None:
    settings = load_settings()
    module_path, config_path = resolve_paths(args.module, args.config)
    print(f"module: {module_path}")
    print(f"config: {config_path or '-'}")
    print(f"module name: {module_path.stem}")
    print(f"isolation supported: {'yes' if isolation_supported(settings.start_method) else 'no'}")


def cmd_activate(args: argparse.Namespace) -> None:
    values = [_parse_value(raw) for raw in args.args]
    with create_context(
        args.module,
        args.config,
        isolate=not args.direct,
        shadow_copy=args.shadow_copy,
        shadow_copy_dir=args.shadow_copy_dir,
    ) as context:
        module_name = args.module_name or context.module_name
        instance = context.create_object(module_name, args.type_name, *values)
        if args.call:
            result = getattr(instance, args.call)()
            print(json.dumps(result, default=str))
        else:
            print(str(instance))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modhost", description="Host modules in execution contexts")
    sub = parser.add_subparsers(dest="command", required=True)

    p_info = sub.add_parser("info", help="Show how a module path resolves")
    p_info.add_argument("module")
    p_info.add_argument("--config")
    p_info.set_defaults(func=cmd_info)

    p_activate = sub.add_parser("activate", help="Instantiate a type from a module")
    p_activate.add_argument("module")
    p_activate.add_argument("type_name", metavar="TYPE")
    p_activate.add_argument("args", nargs="*", help="Constructor arguments, parsed as JSON when possible")
    p_activate.add_argument("--module-name", help="Importable module name (default: file stem)")
    p_activate.add_argument("--config")
    p_activate.add_argument("--direct", action="store_true", help="Do not isolate the module")
    p_activate.add_argument("--shadow-copy", action="store_true")
    p_activate.add_argument("--shadow-copy-dir")
    p_activate.add_argument("--call", metavar="METHOD", help="Call METHOD on the instance and print its result")
    p_activate.set_defaults(func=cmd_activate)

    return parser


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ModHostError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
