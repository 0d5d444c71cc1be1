"""Outbound chat delivery through the Telegram Bot API."""

import logging

import httpx

from fleet_eta.config import Settings
from fleet_eta.errors import UpstreamError

from .http import fetch_json

logger = logging.getLogger(__name__)

# Telegram rejects messages longer than this, counted in UTF-16 code units
MAX_MESSAGE_LENGTH = 4096


def truncate_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    """Cut ``text`` so that it is at most ``limit`` UTF-16 code units long."""
    encoded = text.encode("utf-16-le")
    if len(encoded) // 2 <= limit:
        return text
    # errors="ignore" drops a surrogate pair split by the cut
    return encoded[:limit * 2].decode("utf-16-le", errors="ignore")


class TelegramNotifier:
    """Fire-and-forget ``sendMessage`` calls; failures are only logged."""

    service = "telegram"

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = settings.telegram_api_url.rstrip("/")
        self.timeout = settings.http_timeout_s
        self._token = settings.telegram_bot_token
        self._transport = transport

    async def send_message(self, chat_id: int | str, text: str) -> bool:
        if not self._token:
            logger.warning("TELEGRAM_BOT_TOKEN is not configured, dropping reply to %s", chat_id)
            return False

        try:
            data = await fetch_json(
                self.service,
                "POST",
                f"{self.api_url}/bot{self._token}/sendMessage",
                json={
                    "chat_id": chat_id,
                    "text": truncate_message(text),
                    "disable_web_page_preview": True,
                },
                transport=self._transport,
                timeout=self.timeout,
            )
        except UpstreamError as e:
            logger.warning("Failed to deliver chat reply to %s: %s", chat_id, e)
            return False

        if not isinstance(data, dict) or not data.get("ok"):
            logger.warning("Telegram refused reply to %s: %s", chat_id, data)
            return False
        return True
