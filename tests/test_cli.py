"""Tests for finch.cli — argument parsing and the routes command."""

from pathlib import Path

import pytest

from finch.cli import main


@pytest.fixture
def controllers_dir(tmp_path: Path) -> Path:
    (tmp_path / "user.py").write_text(
        "def read(id, request, sink):\n"
        "    return {'id': id}\n"
        "\n"
        "def writeFoo(body, request, sink):\n"
        "    return 'foo'\n"
    )
    return tmp_path


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out

    def test_help(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_missing_controllers_argument(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2


class TestRoutesCommand:
    def test_lists_routes_in_priority_order(
        self, controllers_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", str(controllers_dir)])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        rows = [line.split() for line in lines[2:]]
        assert rows == [
            ["PUT", "/user/foo", "writeFoo"],
            ["GET", "/user/<^([0-9]+)\\Z>", "read"],
            ["GET", "/user", "read"],
        ]

    def test_no_empty_read(
        self, controllers_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", str(controllers_dir), "--no-empty-read"])
        out = capsys.readouterr().out
        assert "/user " not in out
        assert "/user/<" in out

    def test_empty_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(tmp_path)])
        assert "No routes registered." in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRunCommand:
    def test_builds_router_and_serves(
        self, controllers_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls = []

        def fake_run_dev_server(app, host, port, *, reload=False, app_path=None):
            calls.append((app, host, port, reload))

        monkeypatch.setattr("finch.server.dev.run_dev_server", fake_run_dev_server)
        main(["run", str(controllers_dir), "--port", "9000", "--reload", "--resources", "public"])

        (app, host, port, reload) = calls[0]
        assert (host, port, reload) == ("127.0.0.1", 9000, True)
        assert app.config.controllers == str(controllers_dir)
        assert app.config.resources == "public"
