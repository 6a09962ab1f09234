"""Push notification pipeline: collect, render, emit and deliver."""

from __future__ import annotations

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Any, Mapping, Protocol

from .config import NotifierSettings
from .delivery import TelegramNotifier
from .git import GitRunner
from .message import (
    NotificationRecord,
    branch_from_ref,
    escape_output,
    render_message,
    unescape_output,
)

logger = logging.getLogger(__name__)


class MessageSender(Protocol):
    def send(self, text: str) -> Any:
        ...


def configure_logging(level: str) -> None:
    """Configure root logging for the notifier."""

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def create_runner(settings: NotifierSettings) -> GitRunner:
    return GitRunner(
        settings.repo_path,
        Path(settings.git_path) if settings.git_path else None,
    )


def create_notifier(settings: NotifierSettings) -> TelegramNotifier:
    chat_id, token = settings.require_credentials()
    return TelegramNotifier(
        chat_id,
        token,
        parse_mode=settings.parse_mode,
        api_base=settings.telegram_api_base,
        timeout=settings.request_timeout,
    )


async def _collect(runner: GitRunner, width: int) -> tuple[str, str]:
    stat = await runner.diff_stat(width=width)
    sha = await runner.short_sha()
    return stat, sha


def collect_record(settings: NotifierSettings, runner: GitRunner) -> NotificationRecord:
    """Build the notification record for the checked-out HEAD."""

    stat, sha = asyncio.run(_collect(runner, settings.stat_width))
    if not stat:
        logger.warning("Diff stat is empty; is the checkout deep enough to see the parent commit?")
    return NotificationRecord(
        actor=settings.actor,
        repository=settings.repository,
        branch=branch_from_ref(settings.ref),
        short_sha=sha,
        diff_stat=escape_output(stat),
    )


def build_outputs(record: NotificationRecord) -> dict[str, str]:
    """Workflow step outputs for ``record``, already escaped."""

    return {
        "git_stat": record.diff_stat,
        "sha_short": escape_output(record.short_sha),
        "git_branch": escape_output(record.branch),
    }


def write_outputs(outputs: Mapping[str, str], path: Path | None = None) -> None:
    """Publish step outputs.

    ``outputs`` hold escaped values. When ``path`` (the ``GITHUB_OUTPUT`` file)
    is given the values are decoded and appended, multi-line ones in heredoc
    form. Otherwise the legacy
    ``::set-output`` command is printed with the escaped values.
    """

    if path is not None:
        with Path(path).open("a", encoding="utf-8") as handle:
            for name, escaped in outputs.items():
                value = unescape_output(escaped)
                if "\n" in value or "\r" in value:
                    delimiter = f"ghadelimiter_{uuid.uuid4()}"
                    handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
                else:
                    handle.write(f"{name}={value}\n")
        return

    for name, value in outputs.items():
        print(f"::set-output name={name}::{value}")


def should_notify(settings: NotifierSettings) -> bool:
    """Return True when the triggering event is a push to a watched branch."""

    if settings.event_name is not None and settings.event_name != "push":
        logger.info("Ignoring %s event", settings.event_name)
        return False
    if not settings.ref.startswith("refs/heads/"):
        logger.info("Ignoring non-branch ref %r", settings.ref)
        return False
    branch = branch_from_ref(settings.ref)
    if branch not in settings.branches:
        logger.info("Ignoring push to %s; watching %s", branch, ", ".join(settings.branches))
        return False
    return True


def notify(
    settings: NotifierSettings,
    *,
    runner: GitRunner | None = None,
    sender: MessageSender | None = None,
) -> str:
    """Collect, render and deliver the notification for the current push.

    Event filtering is left to the caller, see :func:`should_notify`.
    Returns the delivered text.
    """

    # Credentials are resolved before git runs.
    sender = sender or create_notifier(settings)
    runner = runner or create_runner(settings)

    record = collect_record(settings, runner)
    text = render_message(record.decoded())
    logger.info(
        "Sending notification for %s:%s at %s",
        record.repository,
        record.branch,
        record.short_sha,
    )
    sender.send(text)
    return text


__all__ = [
    "build_outputs",
    "collect_record",
    "configure_logging",
    "create_notifier",
    "create_runner",
    "notify",
    "should_notify",
    "write_outputs",
]
