"""Submitters used by the wizard session to hand off a completed pre-audit.

Two ways to submit exist: in-process through a TelegramRelay (the server
side), or over HTTP to the /api/submit endpoint (a remote widget).
"""

import logging
from typing import Protocol

import httpx

from .models import DeliveryPolicy, SubmissionPayload
from .relay import RelayResult, TelegramRelay

logger = logging.getLogger(__name__)

NOT_AVAILABLE_MESSAGE = (
    "Submission isn’t available right now. Please try again in a few minutes or contact us."
)
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class SubmissionError(Exception):
    """A submission attempt failed; the message is safe to show the user."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE, not_available: bool = False):
        super().__init__(message)
        self.message = message
        self.not_available = not_available


class Submitter(Protocol):
    """Protocol for submission targets."""

    async def submit(self, payload: SubmissionPayload) -> bool:
        """Submit once; return whether the notification was delivered.

        Raises:
            SubmissionError: When the attempt counts as failed for the user
        """
        ...


class RelaySubmitter:
    """Submits directly through a relay, applying the delivery policy."""

    def __init__(self, relay: TelegramRelay, policy: DeliveryPolicy = "lenient"):
        self.relay = relay
        self.policy = policy

    async def submit(self, payload: SubmissionPayload) -> bool:
        result: RelayResult = await self.relay.send(payload)
        if not result.delivered and result.reason != "not_configured" and self.policy == "strict":
            raise SubmissionError()
        return result.delivered


class HttpSubmitter:
    """Posts submissions to a running pre-audit API."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        """Initialize HTTP submitter.

        Args:
            base_url: Origin of the API (e.g., 'http://localhost:3000')
            client: Optional preconfigured HTTP client
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=30)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def submit(self, payload: SubmissionPayload) -> bool:
        try:
            response = await self.client.post(
                f"{self.base_url}/api/submit", json=payload.to_dict()
            )
        except httpx.HTTPError as e:
            logger.error(f"Submit request failed: {e!r}")
            raise SubmissionError() from e

        if response.status_code == 404:
            raise SubmissionError(NOT_AVAILABLE_MESSAGE, not_available=True)
        if not response.is_success:
            logger.error(f"Submit API answered {response.status_code}: {response.text}")
            raise SubmissionError()

        try:
            data = response.json()
        except ValueError:
            return False
        return isinstance(data, dict) and data.get("sent") is True
