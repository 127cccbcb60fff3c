"""WebSocket implementation of the live broadcaster."""

import asyncio
from typing import Any

from stockflow.config import get_logger
from stockflow.core.interfaces.broadcaster import IBroadcaster
from stockflow.infrastructure.realtime.session_registry import LiveSession, SessionRegistry

logger = get_logger(__name__)


class WebSocketBroadcaster(IBroadcaster):
    """
    Pushes messages to the sessions in a registry.

    Delivery is best effort: a send that fails or exceeds ``send_timeout``
    is dropped and logged, never retried.
    """

    def __init__(self, registry: SessionRegistry, send_timeout: float = 2.0):
        self._registry = registry
        self._send_timeout = send_timeout

    async def publish(self, topic: str, message: dict[str, Any]) -> int:
        sessions = self._registry.subscribers(topic)
        if not sessions:
            return 0

        results = await asyncio.gather(
            *(self._send(session, message) for session in sessions)
        )
        delivered = sum(results)
        logger.debug(
            "live_message_published",
            topic=topic,
            event_name=message.get("event"),
            sessions=len(sessions),
            delivered=delivered,
        )
        return delivered

    async def _send(self, session: LiveSession, message: dict[str, Any]) -> bool:
        try:
            await asyncio.wait_for(session.send(message), timeout=self._send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(
                "live_send_timeout",
                session_id=session.session_id,
                timeout=self._send_timeout,
            )
        except Exception as e:
            logger.warning(
                "live_send_failed",
                session_id=session.session_id,
                error=str(e),
            )
        return False
