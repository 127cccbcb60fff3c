"""Notification inbox use case: per-user listing and read state."""

from stockflow.config import get_logger
from stockflow.core.entities.notification import Notification
from stockflow.core.exceptions import NotificationNotFoundError
from stockflow.core.interfaces.notification_store import INotificationStore

logger = get_logger(__name__)


class NotificationInboxUseCase:
    """
    Inbox operations scoped to one user.

    A notification that belongs to a different user is reported as not
    found, the same as a missing one.
    """

    def __init__(self, notification_store: INotificationStore):
        self._store = notification_store

    async def list_unread(self, user_id: int, limit: int = 50) -> list[Notification]:
        return await self._store.list_unread(user_id, limit=limit)

    async def list_recent(self, user_id: int, count: int = 20) -> list[Notification]:
        return await self._store.list_recent(user_id, count=count)

    async def unread_count(self, user_id: int) -> int:
        return await self._store.count_unread(user_id)

    async def mark_read(self, user_id: int, notification_id: int) -> Notification:
        notification = await self._get_owned(user_id, notification_id)
        if not notification.read:
            await self._store.mark_read(notification_id)
            notification.read = True
        return notification

    async def mark_all_read(self, user_id: int) -> int:
        return await self._store.mark_all_read(user_id)

    async def delete(self, user_id: int, notification_id: int) -> None:
        await self._get_owned(user_id, notification_id)
        await self._store.delete(notification_id)
        logger.info("notification_deleted", notification_id=notification_id, user_id=user_id)

    async def _get_owned(self, user_id: int, notification_id: int) -> Notification:
        notification = await self._store.get(notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotificationNotFoundError(notification_id)
        return notification
