from __future__ import annotations

import argparse
import importlib.util
import json
from pathlib import Path

import pytest

from commit_notifier.delivery import DeliveryError
from commit_notifier.git import FakeGitRunner, GitExecutionResult, GitNotFoundError


def _load_module():
    module_path = Path(__file__).resolve().parents[1] / "scripts" / "commit_notify.py"
    spec = importlib.util.spec_from_file_location("commit_notify_test_module", module_path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _fake_runner(_settings) -> FakeGitRunner:
    return FakeGitRunner(
        [
            GitExecutionResult(args=("show",), returncode=0, stdout=" a.py | 3 ++-\n", stderr=""),
            GitExecutionResult(args=("rev-parse",), returncode=0, stdout="abc1234\n", stderr=""),
        ]
    )


class StubNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.messages: list[str] = []

    def send(self, text: str) -> dict[str, bool]:
        if self.error is not None:
            raise self.error
        self.messages.append(text)
        return {"ok": True}


@pytest.fixture
def push_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_ACTOR", "alice")
    monkeypatch.setenv("GITHUB_REPOSITORY", "org/repo")
    monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")


def test_outputs_json(monkeypatch, capsys, push_env):
    module = _load_module()
    monkeypatch.setattr(module, "load_runner", _fake_runner)

    module.main(["outputs", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data == {"git_stat": " a.py | 3 ++-", "sha_short": "abc1234", "git_branch": "main"}


def test_outputs_writes_github_output(monkeypatch, tmp_path, push_env):
    module = _load_module()
    monkeypatch.setattr(module, "load_runner", _fake_runner)
    output_file = tmp_path / "out"
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    module.main(["outputs"])

    contents = output_file.read_text(encoding="utf-8")
    assert "sha_short=abc1234\n" in contents
    assert "git_branch=main\n" in contents


def test_send_delivers(monkeypatch, push_env):
    module = _load_module()
    stub = StubNotifier()
    monkeypatch.setattr(module, "load_runner", _fake_runner)
    monkeypatch.setattr(module, "load_notifier", lambda _settings: stub)

    module.main(["send"])

    assert len(stub.messages) == 1
    assert stub.messages[0].startswith("*@alice pushed to* [org/repo:main]")
    assert " a.py | 3 ++-" in stub.messages[0]


def test_send_dry_run_prints(monkeypatch, capsys, push_env):
    module = _load_module()
    monkeypatch.setattr(module, "load_runner", _fake_runner)

    module.main(["send", "--dry-run"])

    assert "(github.com/org/repo/commit/abc1234)" in capsys.readouterr().out


def test_send_skips_other_branches(monkeypatch, push_env):
    module = _load_module()
    monkeypatch.setenv("GITHUB_REF", "refs/heads/feature-x")

    def fail(_settings):
        raise AssertionError("should not be called")

    monkeypatch.setattr(module, "load_runner", fail)
    monkeypatch.setattr(module, "load_notifier", fail)

    module.main(["send"])


def test_send_missing_credentials(monkeypatch, capsys, push_env):
    module = _load_module()
    monkeypatch.setattr(module, "load_runner", _fake_runner)

    with pytest.raises(SystemExit) as excinfo:
        module.main(["send"])

    assert excinfo.value.code == 1
    assert "TELEGRAM_TOKEN" in capsys.readouterr().err


def test_send_delivery_failure(monkeypatch, capsys, push_env):
    module = _load_module()
    monkeypatch.setattr(module, "load_runner", _fake_runner)
    monkeypatch.setattr(
        module, "load_notifier", lambda _settings: StubNotifier(DeliveryError("chat not found"))
    )

    exit_code = module.cmd_send(argparse.Namespace(dry_run=False), module.load_settings())

    assert exit_code == 1
    assert "Delivery failed: chat not found" in capsys.readouterr().err


def test_outputs_without_git(monkeypatch, capsys, push_env):
    module = _load_module()

    def missing(_settings):
        raise GitNotFoundError("git executable not found on PATH")

    monkeypatch.setattr(module, "load_runner", missing)

    exit_code = module.cmd_outputs(argparse.Namespace(json=False), module.load_settings())

    assert exit_code == 1
    assert "git unavailable" in capsys.readouterr().err


def test_invalid_settings_exit(monkeypatch, capsys):
    module = _load_module()
    monkeypatch.setenv("NOTIFIER_STAT_WIDTH", "0")

    with pytest.raises(SystemExit) as excinfo:
        module.main(["outputs"])

    assert excinfo.value.code == 1
    assert "Configuration error" in capsys.readouterr().err
