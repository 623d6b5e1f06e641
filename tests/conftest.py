from __future__ import annotations

import textwrap
import uuid
from pathlib import Path

import pytest

PLUGIN_SOURCE = textwrap.dedent(
    """
    import modhost

    CREATED = 0


    class Greeter:
        def __init__(self, name, punctuation="!"):
            global CREATED
            CREATED += 1
            self.name = name
            self.punctuation = punctuation
            self.serial = CREATED

        def greet(self):
            return f"Hello, {self.name}{self.punctuation}"

        def received(self):
            return [self.name, self.punctuation]

        def serial_number(self):
            return self.serial

        def __repr__(self):
            return f"Greeter({self.name!r})"


    class Failing:
        def __init__(self, message):
            raise KeyError(message)


    class PluginError(Exception):
        pass


    class FailingWithPluginError:
        def __init__(self):
            raise PluginError("only importable inside the domain")


    class Outer:
        class Inner:
            def ping(self):
                return "pong"


    class ConfigReader:
        def __init__(self):
            self._config = dict(modhost.domain_config())

        def value(self, key):
            return self._config.get(key)

        def domain_name(self):
            domain = modhost.current_domain()
            return domain.friendly_name if domain is not None else None


    def helper():
        return 42
    """
)


def write_plugin(directory: Path) -> Path:
    """Write the plugin under a unique module name inside *directory*."""

    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"plugin_{uuid.uuid4().hex[:10]}.py"
    path.write_text(PLUGIN_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def plugin_path(tmp_path: Path) -> Path:
    return write_plugin(tmp_path / "modules")
