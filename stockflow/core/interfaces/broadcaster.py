"""Abstract interface for live delivery to connected sessions."""

from abc import ABC, abstractmethod
from typing import Any

# Topic every connected session receives
GLOBAL_TOPIC = "broadcast"


def user_topic(user_id: int) -> str:
    """Private topic for a single user's sessions."""
    return f"user:{user_id}"


class IBroadcaster(ABC):
    """Best-effort publisher for live sessions."""

    @abstractmethod
    async def publish(self, topic: str, message: dict[str, Any]) -> int:
        """
        Push a message to every session subscribed to ``topic``.

        Returns the number of sessions that received it. Never raises
        for missing or failing sessions.
        """
        pass
