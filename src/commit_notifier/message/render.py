"""Markdown rendering of push notifications."""

from __future__ import annotations

from .models import NotificationRecord

MESSAGE_TEMPLATE = (
    "*@{actor} pushed to* [{repository}:{branch}](github.com/{repository}/commit/{short_sha})\n"
    "\n"
    "```\n"
    "{diff_stat}\n"
    "```"
)


def render_message(record: NotificationRecord) -> str:
    """Render ``record`` into the fixed notification template.

    The diff stat is substituted verbatim, so an empty stat yields an empty
    fenced block.
    """

    return MESSAGE_TEMPLATE.format(
        actor=record.actor,
        repository=record.repository,
        branch=record.branch,
        short_sha=record.short_sha,
        diff_stat=record.diff_stat,
    )


__all__ = ["MESSAGE_TEMPLATE", "render_message"]
