"""Telegram relay client for forwarding submissions to an operator."""

import logging
from dataclasses import dataclass
from typing import Literal

import httpx

from .config import TelegramConfig
from .formatter import format_submission
from .models import SubmissionPayload

logger = logging.getLogger(__name__)


DeliveryReason = Literal[
    "delivered",
    "not_configured",  # secrets missing, no request made
    "transport_error",  # endpoint unreachable or non-JSON answer
    "rejected",  # endpoint answered with ok != true
]


@dataclass(frozen=True)
class RelayResult:
    """Outcome of one relay attempt.

    Acceptance and delivery are reported separately: a submission can be
    accepted while the notification never reached the operator.
    """

    accepted: bool
    delivered: bool
    reason: DeliveryReason
    error: str | None = None


class TelegramRelay:
    """Sends formatted submissions to a Telegram chat.

    Holds no per-session state, so one instance can serve many sessions.
    Each call to send() makes at most one request and never retries.
    """

    def __init__(self, config: TelegramConfig, client: httpx.AsyncClient | None = None):
        """Initialize relay client.

        Args:
            config: Bot token, chat id and endpoint settings
            client: Optional preconfigured HTTP client
        """
        self.config = config
        self.client = client or httpx.AsyncClient(timeout=config.timeout)

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def send(self, payload: SubmissionPayload) -> RelayResult:
        """Format and deliver a submission.

        Args:
            payload: Snapshot of answers and contact details

        Returns:
            RelayResult describing acceptance and delivery
        """
        if not self.is_configured:
            logger.warning(
                "TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID not set; submission not sent to Telegram."
            )
            return RelayResult(accepted=True, delivered=False, reason="not_configured")

        text = format_submission(payload)

        try:
            response = await self.client.post(
                self.config.send_message_url,
                json={
                    "chat_id": self.config.chat_id,
                    "text": text,
                    "disable_web_page_preview": True,
                },
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL: a token or api_base that cannot form a request URL
            logger.error(f"Telegram request failed: {e!r}")
            return RelayResult(
                accepted=True, delivered=False, reason="transport_error", error=str(e)
            )

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Telegram API returned non-JSON (status {response.status_code})")
            return RelayResult(
                accepted=True,
                delivered=False,
                reason="transport_error",
                error="Telegram API returned non-JSON",
            )

        if not isinstance(data, dict) or data.get("ok") is not True:
            logger.error(f"Telegram API error: {data}")
            description = data.get("description") if isinstance(data, dict) else None
            return RelayResult(
                accepted=True,
                delivered=False,
                reason="rejected",
                error=description or "Telegram API error",
            )

        logger.info("Submission delivered to Telegram")
        return RelayResult(accepted=True, delivered=True, reason="delivered")
