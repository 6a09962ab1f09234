"""Configuration management for the commit notifier."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_PARSE_MODES = {"markdown": "Markdown", "markdownv2": "MarkdownV2", "html": "HTML"}


class SettingsError(RuntimeError):
    """Raised when required settings are missing."""


class NotifierSettings(BaseSettings):
    """Runtime configuration sourced from the CI environment and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    telegram_to: str | None = Field(default=None, validation_alias="TELEGRAM_TO")
    telegram_token: str | None = Field(default=None, validation_alias="TELEGRAM_TOKEN")
    telegram_api_base: str = Field(
        default="https://api.telegram.org", validation_alias="TELEGRAM_API_BASE"
    )
    message_format: str = Field(default="markdown", validation_alias="NOTIFIER_FORMAT")
    actor: str = Field(default="", validation_alias="GITHUB_ACTOR")
    repository: str = Field(default="", validation_alias="GITHUB_REPOSITORY")
    ref: str = Field(default="", validation_alias="GITHUB_REF")
    event_name: str | None = Field(default=None, validation_alias="GITHUB_EVENT_NAME")
    github_output: Path | None = Field(default=None, validation_alias="GITHUB_OUTPUT")
    git_path: str | None = Field(default=None, validation_alias="GIT_PATH")
    repo_path: Path = Field(default=Path("."), validation_alias="NOTIFIER_REPO_PATH")
    stat_width: int = Field(default=50, validation_alias="NOTIFIER_STAT_WIDTH")
    branches: Annotated[tuple[str, ...], NoDecode] = Field(
        default=("main",), validation_alias="NOTIFIER_BRANCHES"
    )
    request_timeout: float | None = Field(default=None, validation_alias="NOTIFIER_TIMEOUT")
    log_level: str = Field(default="INFO", validation_alias="NOTIFIER_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "NOTIFIER_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("message_format")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in _PARSE_MODES:
            raise ValueError("NOTIFIER_FORMAT must be one of markdown, markdownv2, html")
        return normalized

    @field_validator("branches", mode="before")
    @classmethod
    def _parse_branches(cls, value):
        if value is None or value == "":
            return ("main",)
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip() for item in value if str(item).strip())
        if isinstance(value, str):
            parts = [part.strip() for part in value.split(",") if part.strip()]
            return tuple(parts) or ("main",)
        raise TypeError("NOTIFIER_BRANCHES must be a list of names or a comma-separated string")

    @field_validator("stat_width")
    @classmethod
    def _validate_stat_width(cls, value: int) -> int:
        if value < 1:
            raise ValueError("NOTIFIER_STAT_WIDTH must be >= 1")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("NOTIFIER_TIMEOUT must be > 0")
        return value

    @property
    def parse_mode(self) -> str:
        """Telegram ``parse_mode`` value for the configured message format."""

        return _PARSE_MODES[self.message_format]

    def require_credentials(self) -> tuple[str, str]:
        """Return ``(chat_id, token)`` or raise when either is missing."""

        missing = [
            name
            for name, value in {
                "TELEGRAM_TO": self.telegram_to,
                "TELEGRAM_TOKEN": self.telegram_token,
            }.items()
            if not value
        ]
        if missing:
            raise SettingsError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )
        return self.telegram_to, self.telegram_token


__all__ = ["NotifierSettings", "SettingsError"]
