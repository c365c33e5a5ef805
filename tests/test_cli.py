"""Unit tests for taskview.cli — command parsing and execution."""

import argparse
from unittest.mock import patch

import httpx
import pytest

import taskview.cli as cli_mod
from taskview.tasks.loader import TaskLoader


def _patched_loader(handler):
    """Make TaskLoader.from_config return a loader on a mock transport."""
    original = TaskLoader.from_config.__func__

    def from_config(cls, config, transport=None):
        return original(cls, config, transport=httpx.MockTransport(handler))

    return patch.object(TaskLoader, "from_config", classmethod(from_config))


class TestCLIParsing:
    def test_module_has_expected_commands(self):
        for name in ("main", "cmd_run", "cmd_serve_api", "cmd_fetch", "cmd_check"):
            assert hasattr(cli_mod, name)

    def test_no_command_prints_help(self, capsys):
        assert cli_mod.main([]) == 0
        assert "usage: taskview" in capsys.readouterr().out

    def test_unknown_command_exits(self):
        with pytest.raises(SystemExit):
            cli_mod.main(["nope"])


class TestCmdFetch:
    def test_prints_first_page_and_summary(self, task_rows, capsys):
        with _patched_loader(lambda request: httpx.Response(200, json=task_rows)):
            code = cli_mod.main(["fetch"])
        out = capsys.readouterr().out
        assert code == 0
        assert "[1] Write README" in out
        assert "[8] Deploy release" not in out
        assert "Page 1 of 2" in out
        assert "Showing 6 of 8 tasks" in out

    def test_search_and_page_clamp(self, task_rows, capsys):
        with _patched_loader(lambda request: httpx.Response(200, json=task_rows)):
            code = cli_mod.main(["fetch", "--search", "DEPLOY", "--page", "5"])
        out = capsys.readouterr().out
        assert code == 0
        assert "[8] Deploy release" in out
        assert "Page " not in out
        assert "Showing 1 of 1 tasks" in out

    def test_empty_collection(self, capsys):
        with _patched_loader(lambda request: httpx.Response(200, json=[])):
            code = cli_mod.main(["fetch"])
        out = capsys.readouterr().out
        assert code == 0
        assert "No tasks." in out
        assert "Showing 0 of 0 tasks" in out

    def test_server_error_exit_code(self, capsys):
        with _patched_loader(lambda request: httpx.Response(500)):
            code = cli_mod.main(["fetch"])
        assert code == 1
        assert "[ERROR] Failed to fetch tasks" in capsys.readouterr().out

    def test_uses_configured_page_size(self, task_rows, config_file, capsys):
        path = config_file("pagination:\n  page_size: 3\n")
        with _patched_loader(lambda request: httpx.Response(200, json=task_rows)):
            cli_mod.main(["fetch", "--config", str(path), "--page", "3"])
        out = capsys.readouterr().out
        assert "Page 3 of 3" in out
        assert "Showing 2 of 8 tasks" in out


class TestCmdCheck:
    def test_valid(self, config_file, capsys):
        path = config_file("app:\n  name: Board\n")
        assert cli_mod.main(["check", "--config", str(path)]) == 0
        assert "[OK] Board" in capsys.readouterr().out

    def test_invalid(self, config_file, capsys):
        path = config_file("pagination:\n  page_size: -1\n")
        assert cli_mod.main(["check", "--config", str(path)]) == 1
        out = capsys.readouterr().out
        assert "[ERROR]" in out
        assert "pagination.page_size" in out


class TestCmdRun:
    def test_reflex_missing(self, capsys):
        args = argparse.Namespace(host="0.0.0.0", port=3001, backend_port=8000, env="dev")
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert cli_mod.cmd_run(args) == 1
        assert "'reflex' command not found" in capsys.readouterr().out


class TestCmdServeApi:
    def test_bad_seed(self, tmp_path, capsys):
        args = argparse.Namespace(host="127.0.0.1", port=3000, seed=str(tmp_path / "missing.json"))
        assert cli_mod.cmd_serve_api(args) == 1
        assert "Seed file not found" in capsys.readouterr().out

    def test_starts_uvicorn(self):
        args = argparse.Namespace(host="127.0.0.1", port=3999, seed=None)
        with patch("uvicorn.run") as run:
            assert cli_mod.cmd_serve_api(args) == 0
        run.assert_called_once()
        assert run.call_args.kwargs == {"host": "127.0.0.1", "port": 3999}
