"""Telegram Bot API delivery."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class DeliveryError(RuntimeError):
    """Raised when a notification could not be delivered."""


class TelegramNotifier:
    """Send messages to a Telegram chat through ``sendMessage``.

    A single request is made per message. Failures are raised, never retried.
    """

    def __init__(
        self,
        chat_id: str,
        token: str,
        *,
        parse_mode: str | None = "Markdown",
        api_base: str = "https://api.telegram.org",
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._chat_id = chat_id
        self._token = token
        self._parse_mode = parse_mode
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def build_payload(self, text: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"chat_id": self._chat_id, "text": text}
        if self._parse_mode:
            payload["parse_mode"] = self._parse_mode
        return payload

    def send(self, text: str) -> dict[str, Any]:
        """Deliver ``text`` and return the decoded API reply."""

        url = f"{self._api_base}/bot{self._token}/sendMessage"
        try:
            response = self._session.post(url, json=self.build_payload(text), timeout=self._timeout)
        except requests.RequestException as exc:
            # The exception text can embed the URL and with it the bot token.
            raise DeliveryError(f"Telegram request failed: {type(exc).__name__}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.status_code >= 400 or not body.get("ok", False):
            description = body.get("description") or response.reason or "unknown error"
            raise DeliveryError(
                f"Telegram rejected message with status {response.status_code}: {description}"
            )

        logger.info("Delivered notification to chat %s", self._chat_id)
        return body


__all__ = ["DeliveryError", "TelegramNotifier"]
