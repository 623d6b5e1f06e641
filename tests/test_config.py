from __future__ import annotations

from pathlib import Path

import pytest

from modhost.config import ModHostSettings, default_config_path, load_config, load_settings, resolve_paths
from modhost.errors import ArgumentError, ConfigError, NotFoundError


def test_resolve_paths_makes_module_path_absolute(tmp_path: Path, monkeypatch) -> None:
    module = tmp_path / "demo.py"
    module.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    module_path, config_path = resolve_paths("demo.py")

    assert module_path == module
    assert module_path.is_absolute()
    assert config_path is None


def test_resolve_paths_picks_up_default_config(tmp_path: Path, monkeypatch) -> None:
    module = tmp_path / "demo.py"
    module.write_text("", encoding="utf-8")
    config = tmp_path / "demo.py.config"
    config.write_text("answer: 42\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    _, config_path = resolve_paths("demo.py")

    assert config_path == config
    assert default_config_path(module) == config


def test_explicit_config_wins_over_default(tmp_path: Path) -> None:
    module = tmp_path / "demo.py"
    module.write_text("", encoding="utf-8")
    (tmp_path / "demo.py.config").write_text("{}", encoding="utf-8")
    explicit = tmp_path / "other.yaml"
    explicit.write_text("{}", encoding="utf-8")

    _, config_path = resolve_paths(module, explicit)

    assert config_path == explicit


@pytest.mark.parametrize("value", [None, ""])
def test_empty_module_path_is_an_argument_error(value) -> None:
    with pytest.raises(ArgumentError) as excinfo:
        resolve_paths(value)
    assert isinstance(excinfo.value, ValueError)


def test_missing_module_is_not_found(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        resolve_paths(tmp_path / "absent.py")
    assert isinstance(excinfo.value, FileNotFoundError)
    assert "absent.py" in str(excinfo.value)


def test_missing_explicit_config_is_not_found(tmp_path: Path) -> None:
    module = tmp_path / "demo.py"
    module.write_text("", encoding="utf-8")

    with pytest.raises(NotFoundError):
        resolve_paths(module, tmp_path / "absent.config")


def test_load_config_parses_yaml_mapping(tmp_path: Path) -> None:
    path = tmp_path / "demo.py.config"
    path.write_text("greeting: hi\nretries: 3\nnested:\n  flag: true\n", encoding="utf-8")

    assert load_config(path) == {"greeting": "hi", "retries": 3, "nested": {"flag": True}}


def test_load_config_empty_file_and_none(tmp_path: Path) -> None:
    path = tmp_path / "empty.config"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}
    assert load_config(None) == {}


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.config"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_load_config_wraps_parse_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.config"
    path.write_text("key: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_config(path)
    assert excinfo.value.cause is not None


def test_settings_read_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MODHOST_START_METHOD", "forkserver")
    monkeypatch.setenv("MODHOST_STAGING_ROOT", str(tmp_path))

    settings = load_settings()

    assert settings.start_method == "forkserver"
    assert settings.staging_root == tmp_path


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("MODHOST_START_METHOD", raising=False)

    settings = ModHostSettings()

    assert settings.start_method == "spawn"
    assert settings.log_level == "WARNING"
