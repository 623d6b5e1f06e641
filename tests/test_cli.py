from __future__ import annotations

from pathlib import Path

from modhost.cli import build_parser, main


def test_info_prints_resolved_paths(plugin_path: Path, capsys) -> None:
    config = plugin_path.with_name(plugin_path.name + ".config")
    config.write_text("a: 1\n", encoding="utf-8")

    assert main(["info", str(plugin_path)]) == 0

    out = capsys.readouterr().out
    assert f"module: {plugin_path}" in out
    assert f"config: {config}" in out
    assert f"module name: {plugin_path.stem}" in out
    assert "isolation supported: yes" in out


def test_activate_direct_calls_method(plugin_path: Path, capsys) -> None:
    code = main(["activate", str(plugin_path), "Greeter", "Ada", '"?"', "--direct", "--call", "greet"])

    assert code == 0
    assert capsys.readouterr().out.strip() == '"Hello, Ada?"'


def test_activate_isolated_prints_instance(plugin_path: Path, capsys) -> None:
    code = main(["activate", str(plugin_path), "Greeter", "Ada"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "Greeter('Ada')"


def test_activate_reports_errors(tmp_path: Path, capsys) -> None:
    code = main(["activate", str(tmp_path / "missing.py"), "Greeter", "--direct"])

    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["activate", "mod.py", "Thing"])

    assert args.args == []
    assert args.direct is False
    assert args.shadow_copy is False
    assert args.module_name is None
