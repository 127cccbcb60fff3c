"""SQLite implementation of notification storage."""

from datetime import datetime

import aiosqlite

from stockflow.config import get_logger
from stockflow.core.entities.notification import Notification, NotificationType
from stockflow.core.interfaces.notification_store import INotificationStore
from stockflow.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteNotificationStore(INotificationStore):
    """SQLite implementation of per-user notification storage."""

    async def create(self, notification: Notification) -> Notification:
        """Insert a notification."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO notifications (
                    user_id, type, title, message, product_id,
                    supplier_id, read, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    notification.user_id,
                    notification.type.value,
                    notification.title,
                    notification.message,
                    notification.product_id,
                    notification.supplier_id,
                    int(notification.read),
                    notification.created_at.isoformat(),
                ),
            )
            notification.id = cursor.lastrowid
            return notification

    async def get(self, notification_id: int) -> Notification | None:
        """Get notification by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM notifications WHERE id = ?", (notification_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_notification(row)

    async def list_unread(self, user_id: int, limit: int = 50) -> list[Notification]:
        """List unread notifications for a user, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM notifications
                WHERE user_id = ? AND read = 0
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (user_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_notification(row) for row in rows]

    async def list_recent(self, user_id: int, count: int = 20) -> list[Notification]:
        """List the most recent notifications for a user, read or not."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM notifications
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (user_id, count),
            )
            rows = await cursor.fetchall()
            return [self._row_to_notification(row) for row in rows]

    async def count_unread(self, user_id: int) -> int:
        """Count unread notifications for a user."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM notifications WHERE user_id = ? AND read = 0",
                (user_id,),
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def create_unless_unread(self, notification: Notification) -> Notification | None:
        """
        Insert a stock notification unless the user still has an unread one
        of the same type for the same product.

        The check and the insert are one statement against the pending-stock
        unique index, so overlapping callers cannot both insert.
        """
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO notifications (
                    user_id, type, title, message, product_id,
                    supplier_id, read, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, 0, ?)
                ON CONFLICT DO NOTHING
                """,
                (
                    notification.user_id,
                    notification.type.value,
                    notification.title,
                    notification.message,
                    notification.product_id,
                    notification.supplier_id,
                    notification.created_at.isoformat(),
                ),
            )
            if cursor.rowcount == 0:
                return None
            notification.id = cursor.lastrowid
            return notification

    async def mark_read(self, notification_id: int) -> bool:
        """Flag a notification as read."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE notifications SET read = 1 WHERE id = ?",
                (notification_id,),
            )
            return cursor.rowcount > 0

    async def mark_all_read(self, user_id: int) -> int:
        """Flag all of a user's unread notifications as read."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE notifications SET read = 1 WHERE user_id = ? AND read = 0",
                (user_id,),
            )
            logger.info("notifications_marked_read", user_id=user_id, count=cursor.rowcount)
            return cursor.rowcount

    async def delete(self, notification_id: int) -> bool:
        """Delete a notification."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM notifications WHERE id = ?", (notification_id,)
            )
            return cursor.rowcount > 0

    @staticmethod
    def _row_to_notification(row: aiosqlite.Row) -> Notification:
        return Notification(
            id=row["id"],
            user_id=row["user_id"],
            type=NotificationType(row["type"]),
            title=row["title"],
            message=row["message"],
            product_id=row["product_id"],
            supplier_id=row["supplier_id"],
            read=bool(row["read"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
