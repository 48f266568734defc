"""Tests for warren.cli: commands, flags and target resolution."""

import logging
from pathlib import Path
from typing import Any

import pytest

from warren.app import App
from warren.cli import main
from warren.cli._resolve import is_import_string, resolve_app
from warren.config import AppConfig


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out


class TestRoutesCommand:
    def test_lists_routes(self, write_tree: Any, capsys: pytest.CaptureFixture[str]) -> None:
        root = write_tree(
            {
                "users.py": "async def GET(c):\n    pass\n\nasync def POST(c):\n    pass\n",
                "logo.svg": "<svg/>",
            }
        )
        main(["routes", str(root)])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        rows = [line.split() for line in lines[2:]]
        assert rows[0][:2] == ["GET", "/logo.svg"]
        assert rows[1] == ["GET", "/users", "GET"]
        assert rows[2] == ["POST", "/users", "POST"]

    def test_empty_directory(self, write_tree: Any, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(write_tree({}))])
        assert "No routes registered." in capsys.readouterr().out

    def test_unresolvable_target(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "no_such_module_here:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_broken_route_file(
        self, write_tree: Any, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = write_tree({"bad.py": "raise ImportError('nope')\n"})
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(root)])
        assert exc_info.value.code == 1
        assert "bad.py" in capsys.readouterr().err


class TestRunCommand:
    def test_flags_override_config(
        self,
        write_tree: Any,
        monkeypatch: pytest.MonkeyPatch,
        warren_logger: logging.Logger,
    ) -> None:
        runs: list[tuple[Any, ...]] = []
        monkeypatch.setattr(
            App,
            "run",
            lambda self, host, port, *, app_path=None: runs.append(
                (self.config, host, port, app_path)
            ),
        )
        root = write_tree({"a.txt": "a"})

        main(["--log-level", "warning", "run", str(root), "--debug", "--port", "9001"])

        ((config, host, port, app_path),) = runs
        assert config.debug
        assert config.log_level == "warning"
        assert not config.reload
        assert (host, port, app_path) == (None, 9001, None)

    def test_app_config_kept_without_flags(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "warren_cli_site.py").write_text(
            "from warren.app import App\n"
            "from warren.config import AppConfig\n"
            "from warren.routing.table import RouteTable\n"
            "app = App(RouteTable(), config=AppConfig(log_level='error', port=7000))\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(tmp_path)
        runs: list[tuple[Any, ...]] = []
        monkeypatch.setattr(
            App,
            "run",
            lambda self, host, port, *, app_path=None: runs.append((self.config, app_path)),
        )

        main(["run", "warren_cli_site:app"])

        ((config, app_path),) = runs
        assert config.log_level == "error"
        assert config.port == 7000
        assert app_path == "warren_cli_site:app"


class TestResolveApp:
    def test_directory_is_built(self, write_tree: Any) -> None:
        app = resolve_app(str(write_tree({"a.txt": "a"})))
        assert "/a.txt" in app.routes

    def test_directory_uses_given_config(self, write_tree: Any) -> None:
        config = AppConfig(port=9100)
        app = resolve_app(str(write_tree({})), config=config)
        assert app.config is config

    def test_module_attribute_defaults_to_app(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "warren_resolve_plain.py").write_text(
            "from warren.app import serve\n"
            "from warren.routing.table import RouteTable\n"
            "app = serve(RouteTable())\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(tmp_path)
        assert isinstance(resolve_app("warren_resolve_plain"), App)
        assert not is_import_string(str(tmp_path))
        assert is_import_string("warren_resolve_plain")

    def test_factory_is_called(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "warren_resolve_factory.py").write_text(
            "from warren.app import serve\n"
            "from warren.routing.table import RouteTable\n"
            "def create_app():\n"
            "    return serve(RouteTable())\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(tmp_path)
        assert isinstance(resolve_app("warren_resolve_factory:create_app"), App)

    def test_wrong_type(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "warren_resolve_wrong.py").write_text(
            "app = 42\n\ndef make():\n    return 'nope'\n\ndef broken():\n    raise OSError('x')\n",
            encoding="utf-8",
        )
        monkeypatch.syspath_prepend(tmp_path)
        with pytest.raises(TypeError, match="expected a warren App"):
            resolve_app("warren_resolve_wrong")
        with pytest.raises(TypeError, match="returned a str"):
            resolve_app("warren_resolve_wrong:make")
        with pytest.raises(TypeError, match="failed"):
            resolve_app("warren_resolve_wrong:broken")
