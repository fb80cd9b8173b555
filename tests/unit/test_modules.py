"""Unit tests for module enumeration and configured imports."""

import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path
from types import ModuleType

import pytest

import sample_collisions
import sample_tools
import toolscout
from toolscout.tools import enumerate_modules, import_tool_modules
from toolscout.tools.modules import discover_package_modules


@pytest.fixture
def tool_package(tmp_path, monkeypatch):
    """Create an importable package with public and private submodules."""
    package_dir = tmp_path / "scratch_tools"
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("")
    (package_dir / "weather.py").write_text(
        textwrap.dedent(
            """
            from toolscout.tools import tool

            @tool(description="Current temperature")
            def temperature(city: str) -> float:
                return 21.5
            """
        )
    )
    (package_dir / "alerts.py").write_text("")
    (package_dir / "_internal.py").write_text("")
    (package_dir / "broken.py").write_text("raise RuntimeError('cannot import')\n")
    monkeypatch.syspath_prepend(str(tmp_path))

    yield "scratch_tools"

    for name in list(sys.modules):
        if name == "scratch_tools" or name.startswith("scratch_tools."):
            del sys.modules[name]


def test_explicit_modules_returned_verbatim():
    modules = [sample_collisions, sample_tools]

    result = enumerate_modules(modules)

    assert result == modules
    assert result is not modules


def test_default_enumeration_uses_loaded_modules():
    modules = enumerate_modules()

    assert sample_tools in modules
    assert all(isinstance(m, ModuleType) for m in modules)


def test_default_enumeration_skips_dynamic_modules(monkeypatch):
    dynamic = ModuleType("dynamic_only")
    monkeypatch.setitem(sys.modules, "dynamic_only", dynamic)
    monkeypatch.setitem(sys.modules, "not_a_module", object())

    modules = enumerate_modules([])

    assert dynamic not in modules
    assert all(isinstance(m, ModuleType) for m in modules)


def test_discover_package_modules(tool_package):
    assert discover_package_modules(tool_package) == [
        "scratch_tools.alerts",
        "scratch_tools.broken",
        "scratch_tools.weather",
    ]


def test_discover_missing_package(caplog):
    with caplog.at_level(logging.WARNING, logger="toolscout.tools.modules"):
        assert discover_package_modules("no_such_package_anywhere") == []
    assert "no_such_package_anywhere" in caplog.text


def test_discover_plain_module_has_no_submodules(caplog):
    with caplog.at_level(logging.WARNING, logger="toolscout.tools.modules"):
        assert discover_package_modules("sample_tools") == []
    assert "no __path__" in caplog.text


def test_import_tool_modules_skips_failures(tool_package, caplog):
    with caplog.at_level(logging.WARNING, logger="toolscout.tools.modules"):
        modules = import_tool_modules(
            ["sample_tools", "missing_tool_module", "sample_tools"],
            [tool_package],
        )

    assert [m.__name__ for m in modules] == [
        "sample_tools",
        "scratch_tools.alerts",
        "scratch_tools.weather",
    ]
    assert "missing_tool_module" in caplog.text
    assert "scratch_tools.broken" in caplog.text


def test_import_tool_modules_empty():
    assert import_tool_modules() == []


def test_default_enumeration_includes_entry_script(tmp_path):
    """Test that tools declared in a script run as __main__ are discovered."""
    script = tmp_path / "clock_script.py"
    script.write_text(
        textwrap.dedent(
            """
            from toolscout.tools import DeclaredToolProvider, tool

            class Clock:
                @tool(description="Current time")
                @staticmethod
                def now() -> str:
                    return "12:00"

            tools = DeclaredToolProvider().get_tools()
            print([t.name for t in tools if t.source.startswith("__main__.")])
            """
        )
    )
    src_dir = str(Path(toolscout.__file__).resolve().parents[1])
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_dir, env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )

    assert result.stdout.strip() == "['now']"


def test_default_enumeration_accepts_file_backed_module_without_spec(monkeypatch):
    script_like = ModuleType("script_like")
    script_like.__file__ = "/tmp/script_like.py"
    monkeypatch.setitem(sys.modules, "script_like", script_like)

    assert script_like in enumerate_modules()
