"""Abstract interface for notification storage."""

from abc import ABC, abstractmethod

from stockflow.core.entities.notification import Notification


class INotificationStore(ABC):
    """Interface for per-user notification persistence."""

    @abstractmethod
    async def create(self, notification: Notification) -> Notification:
        """Insert a notification."""
        pass

    @abstractmethod
    async def get(self, notification_id: int) -> Notification | None:
        """Get notification by ID."""
        pass

    @abstractmethod
    async def list_unread(self, user_id: int, limit: int = 50) -> list[Notification]:
        """List unread notifications for a user, newest first."""
        pass

    @abstractmethod
    async def list_recent(self, user_id: int, count: int = 20) -> list[Notification]:
        """List the most recent notifications for a user."""
        pass

    @abstractmethod
    async def count_unread(self, user_id: int) -> int:
        """Count unread notifications for a user."""
        pass

    @abstractmethod
    async def create_unless_unread(self, notification: Notification) -> Notification | None:
        """
        Insert a stock notification unless the same user already has an
        unread one of that type for that product.

        Returns the stored notification, or None when one was pending.
        Must be atomic with respect to concurrent callers.
        """
        pass

    @abstractmethod
    async def mark_read(self, notification_id: int) -> bool:
        """Flag a notification as read. Returns False if it does not exist."""
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: int) -> int:
        """Flag every unread notification of a user as read. Returns rows changed."""
        pass

    @abstractmethod
    async def delete(self, notification_id: int) -> bool:
        """Delete a notification. Returns False if it does not exist."""
        pass
