from __future__ import annotations

import pytest

_ENV_VARS = (
    "TELEGRAM_TO",
    "TELEGRAM_TOKEN",
    "TELEGRAM_API_BASE",
    "NOTIFIER_FORMAT",
    "GITHUB_ACTOR",
    "GITHUB_REPOSITORY",
    "GITHUB_REF",
    "GITHUB_EVENT_NAME",
    "GITHUB_OUTPUT",
    "GIT_PATH",
    "NOTIFIER_REPO_PATH",
    "NOTIFIER_STAT_WIDTH",
    "NOTIFIER_BRANCHES",
    "NOTIFIER_TIMEOUT",
    "NOTIFIER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working tree out of the settings under test.
    monkeypatch.chdir(tmp_path)
