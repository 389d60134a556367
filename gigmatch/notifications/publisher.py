"""Publishers that deliver notification payloads.

A publisher is handed to whatever needs to send notifications; nothing
reaches for a process-wide connection. Swap in a fake for tests.
"""
import asyncio
import logging
from typing import Optional, Protocol, Sequence, runtime_checkable

import aiohttp
from sqlalchemy.orm import Session

from gigmatch.notifications.store import NotificationStore
from gigmatch.notifications.templates import NotificationPayload

logger = logging.getLogger(__name__)


@runtime_checkable
class Publisher(Protocol):
    """Protocol for notification delivery channels."""

    async def publish(self, payloads: Sequence[NotificationPayload]) -> int:
        """Deliver payloads and return how many were delivered."""
        ...


class WebhookPublisher:
    """Relay notifications to a real-time gateway over an HTTP webhook."""

    def __init__(self, webhook_url: Optional[str] = None, timeout: float = 10):
        """
        Initialize webhook publisher.

        Args:
            webhook_url: Endpoint that forwards events to connected clients
            timeout: Per-request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def publish(self, payloads: Sequence[NotificationPayload]) -> int:
        """
        Post one event per payload to the webhook.

        Args:
            payloads: Notifications to relay

        Returns:
            Number of events the webhook accepted
        """
        if not self.webhook_url:
            logger.info("Notification webhook not configured")
            return 0

        if not payloads:
            return 0

        delivered = 0
        async with aiohttp.ClientSession() as session:
            for payload in payloads:
                if await self._post(session, payload):
                    delivered += 1

        if delivered < len(payloads):
            logger.warning("Webhook delivered %d of %d notifications", delivered, len(payloads))
        return delivered

    async def _post(self, session: aiohttp.ClientSession, payload: NotificationPayload) -> bool:
        body = {"event": "notification", "room": payload.recipient_id, "notification": payload.to_dict()}
        try:
            async with session.post(
                self.webhook_url,
                json=body,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status >= 300:
                    logger.error(
                        "Webhook rejected notification for %s: HTTP %s",
                        payload.recipient_id, response.status,
                    )
                    return False
                return True
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Webhook notification error: %s", e)
            return False


class StorePublisher:
    """Persist notifications to the inbox table."""

    def __init__(self, session: Session):
        self.store = NotificationStore(session)

    async def publish(self, payloads: Sequence[NotificationPayload]) -> int:
        """
        Save payloads through the wrapped session.

        The insert and commit are synchronous and block the event loop
        until they finish. The session is not moved to a worker thread
        because it belongs to the caller's thread.
        """
        return len(self.store.save_many(payloads))


class FanoutPublisher:
    """Publish to several channels in order.

    The first publisher is the system of record; its count is returned.
    Later publishers are best effort.
    """

    def __init__(self, *publishers: Publisher):
        if not publishers:
            raise ValueError("FanoutPublisher needs at least one publisher")
        self.publishers = publishers

    async def publish(self, payloads: Sequence[NotificationPayload]) -> int:
        primary, *others = self.publishers
        delivered = await primary.publish(payloads)
        for publisher in others:
            await publisher.publish(payloads)
        return delivered
