"""Notification record model."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from .escape import unescape_output

_REF_PREFIX = "refs/heads/"
_HEX = re.compile(r"^[0-9a-fA-F]+$")
DEFAULT_ABBREV = 7


def branch_from_ref(ref: str) -> str:
    """Strip the ``refs/heads/`` prefix from ``ref``; other refs are returned unchanged."""

    if ref.startswith(_REF_PREFIX):
        return ref[len(_REF_PREFIX) :]
    return ref


def short_sha(full_sha: str, length: int = DEFAULT_ABBREV) -> str:
    """Return the abbreviated form of a commit hash."""

    value = full_sha.strip()
    if not value or not _HEX.match(value):
        raise ValueError(f"Not a commit hash: {full_sha!r}")
    if length < 1:
        raise ValueError("Abbreviation length must be >= 1")
    return value[:length].lower()


class NotificationRecord(BaseModel):
    """Values substituted into a push notification."""

    actor: str = Field(..., description="User that pushed the commits.")
    repository: str = Field(..., description="Repository in owner/name form.")
    branch: str = Field(..., description="Bare branch name.")
    short_sha: str = Field(..., description="Abbreviated HEAD commit hash.")
    diff_stat: str = Field(
        default="",
        description="Diff stat of the pushed commit, escaped for the workflow output channel.",
    )

    @field_validator("actor", "repository", "branch", "short_sha")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    def decoded(self) -> "NotificationRecord":
        """Return a copy with the diff stat escaping undone."""

        return self.model_copy(update={"diff_stat": unescape_output(self.diff_stat)})


__all__ = ["DEFAULT_ABBREV", "NotificationRecord", "branch_from_ref", "short_sha"]
