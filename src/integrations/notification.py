"""Simulated ARC notification service client."""

from __future__ import annotations

import random
import time
from datetime import UTC, datetime
from typing import Any

import structlog

logger = structlog.get_logger()


class NotificationService:
    def __init__(self, base_url: str = "http://localhost:3002") -> None:
        self._base_url = base_url

    async def send_notification(
        self,
        channel: str,
        recipient: str,
        subject: str | None = None,
        body: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Pretend to deliver a notification and return its delivery receipt."""
        logger.info(
            "notification_sent",
            channel=channel,
            recipient=recipient,
            has_subject=subject is not None,
            upstream=self._base_url,
        )
        return {
            "success": True,
            "channel": channel,
            "recipient": recipient,
            "messageId": f"msg-{int(time.time() * 1000)}-{random.randrange(1000)}",
            "timestamp": datetime.now(UTC).isoformat(),
        }
