import shutil

import pytest

from neogrove.delegation import FlowRunner, passthrough_args
from neogrove.errors import FlowCommandError, FlowNotFoundError


class Result:
    def __init__(self, returncode: int = 0):
        self.returncode = returncode


@pytest.fixture
def calls(monkeypatch):
    recorded: list[list[str]] = []

    def fake_run(cmd, *args, **kwargs):
        recorded.append(cmd)
        return Result(0)

    monkeypatch.setattr("neogrove.delegation.shutil.which", lambda command: f"/usr/bin/{command}")
    monkeypatch.setattr("neogrove.delegation.subprocess.run", fake_run)
    return recorded


def test_run_builds_flow_command(calls):
    FlowRunner().run("plan", "run", "my-plan")
    assert calls == [["flow", "plan", "run", "my-plan"]]


def test_run_uses_configured_command(calls):
    FlowRunner("grove-flow").run("models")
    assert calls == [["grove-flow", "models"]]


def test_run_inherits_stdio(monkeypatch):
    seen = {}

    def fake_run(cmd, *args, **kwargs):
        seen.update(kwargs)
        return Result(0)

    monkeypatch.setattr("neogrove.delegation.shutil.which", lambda command: "/usr/bin/flow")
    monkeypatch.setattr("neogrove.delegation.subprocess.run", fake_run)
    FlowRunner().run("run", "note.md")
    assert "stdout" not in seen
    assert "stdin" not in seen
    assert "capture_output" not in seen


def test_run_missing_executable(monkeypatch):
    monkeypatch.setattr("neogrove.delegation.shutil.which", lambda command: None)
    with pytest.raises(FlowNotFoundError, match="'flow' command not found in PATH"):
        FlowRunner().run("run", "note.md")


def test_run_nonzero_exit(monkeypatch):
    monkeypatch.setattr("neogrove.delegation.shutil.which", lambda command: "/usr/bin/flow")
    monkeypatch.setattr("neogrove.delegation.subprocess.run", lambda cmd, *a, **kw: Result(3))
    with pytest.raises(FlowCommandError, match="flow command failed") as excinfo:
        FlowRunner().run("plan", "list")
    assert excinfo.value.returncode == 3
    assert excinfo.value.to_dict()["category"] == "delegation"


def test_run_executable_vanishes(monkeypatch):
    def fake_run(cmd, *args, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr("neogrove.delegation.shutil.which", lambda command: "/usr/bin/flow")
    monkeypatch.setattr("neogrove.delegation.subprocess.run", fake_run)
    with pytest.raises(FlowNotFoundError):
        FlowRunner().run("models")


def test_run_real_process():
    """A real child process exiting non-zero surfaces as FlowCommandError."""
    if shutil.which("false") is None:
        pytest.skip("false is not available")
    with pytest.raises(FlowCommandError):
        FlowRunner("false").run()


def test_passthrough_args():
    assert passthrough_args(["--json", "extra"]) == ["--json", "extra"]
    assert passthrough_args(["--json", "extra", "-v"], flags_only=True) == ["--json", "-v"]
    assert passthrough_args([]) == []
