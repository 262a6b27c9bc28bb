"""Tests for the CLI entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from mrproxy.adapters import GitLabAdapter
from mrproxy.main import main, parse_args


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("GITLAB_TOKEN", "GITLAB_TOKEN_FILE", "GITLAB_PROJECT_ID", "GITLAB_MERGE_REQUEST_IID"):
        monkeypatch.delenv(key, raising=False)


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(body)
    return path


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.config == Path("config.yaml")
    assert args.check is False


def test_check_valid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_config(tmp_path, "gitlab:\n  project_id: 3\n  merge_request_iid: 5\n")
    assert main(["--config", str(path), "--check"]) == 0
    assert "Config OK" in capsys.readouterr().out


def test_check_missing_merge_request(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_config(tmp_path, "gitlab:\n  project_id: 3\n")
    assert main(["-c", str(path), "--check"]) == 1
    assert "merge_request_iid" in capsys.readouterr().err


def test_run_builds_adapter_and_serves(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITLAB_TOKEN", "tok")
    path = _write_config(
        tmp_path,
        "gitlab:\n  project_id: group/project\n  merge_request_iid: 5\nserver:\n  port: 9001\n",
    )
    with patch("mrproxy.main.run_server") as run_server:
        assert main(["-c", str(path)]) == 0

    host, port, adapter, project = run_server.call_args[0]
    assert (host, port) == ("127.0.0.1", 9001)
    assert isinstance(adapter, GitLabAdapter)
    assert adapter._session.headers["PRIVATE-TOKEN"] == "tok"
    assert project.project_id == "group/project"
    assert project.merge_request_iid == 5


def test_keyboard_interrupt_exits_cleanly(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "gitlab:\n  project_id: 3\n  merge_request_iid: 5\n")
    with patch("mrproxy.main.run_server", side_effect=KeyboardInterrupt):
        assert main(["-c", str(path)]) == 0


def test_fatal_error_returns_1(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "gitlab:\n  project_id: 3\n  merge_request_iid: 5\n")
    with patch("mrproxy.main.run_server", side_effect=OSError("address in use")):
        assert main(["-c", str(path)]) == 1
