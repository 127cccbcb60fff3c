"""
Notification dispatcher.

Two independent delivery paths:
- persist: durable per-user notification rows (survive with nobody online)
- broadcast: best-effort push to live sessions (global or per-user topic)

Alert fan-out runs as background tasks scheduled after the caller's
transaction has committed. Task failures are logged and never reach the
caller; ``drain()`` waits for whatever is still in flight.
"""

import asyncio
from collections.abc import Coroutine, Iterable
from datetime import datetime
from typing import Any, Literal

from stockflow.config import get_logger
from stockflow.core.entities.alert import AlertTier, StockAlert
from stockflow.core.entities.movement import StockMovement
from stockflow.core.entities.notification import Notification, NotificationType
from stockflow.core.entities.product import Product
from stockflow.core.exceptions import AlertingError
from stockflow.core.interfaces.broadcaster import GLOBAL_TOPIC, IBroadcaster, user_topic
from stockflow.core.interfaces.notification_store import INotificationStore

logger = get_logger(__name__)

# Live event names
EVENT_STOCK_LOW = "notification:stock_low"
EVENT_STOCK_CRITICAL = "notification:stock_critical"
EVENT_PRIVATE = "notification:private"
EVENT_STOCK_MOVEMENT = "stock:movement"
EVENT_PRODUCT_UPDATE = "product:update"
EVENT_SUPPLIER_UPDATE = "supplier:update"
EVENT_ADMIN_ALERT = "alert:admin"
EVENT_SYSTEM_MESSAGE = "system:message"

ChangeAction = Literal["created", "updated", "deleted"]


def build_message(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Wrap a payload in the live wire envelope."""
    return {
        "event": event,
        "data": payload,
        "timestamp": datetime.utcnow().isoformat(),
    }


class NotificationDispatcher:
    """Persists notifications and pushes live events."""

    def __init__(
        self,
        notification_store: INotificationStore,
        broadcaster: IBroadcaster | None = None,
        recipients: Iterable[int] = (),
    ) -> None:
        self._store = notification_store
        self._broadcaster = broadcaster
        self._recipients = tuple(recipients)
        self._tasks: set[asyncio.Task] = set()

    @property
    def recipients(self) -> tuple[int, ...]:
        return self._recipients

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    # Persistence path

    async def persist(
        self,
        user_id: int,
        notification_type: NotificationType,
        title: str,
        message: str,
        product_id: int | None = None,
        supplier_id: int | None = None,
    ) -> Notification:
        """Create a durable notification row. Storage errors propagate."""
        notification = await self._store.create(
            Notification(
                user_id=user_id,
                type=notification_type,
                title=title,
                message=message,
                product_id=product_id,
                supplier_id=supplier_id,
            )
        )
        logger.info(
            "notification_persisted",
            notification_id=notification.id,
            user_id=user_id,
            type=notification_type.value,
        )
        return notification

    # Live path

    async def broadcast(self, event: str, payload: dict[str, Any]) -> int:
        """Push an event to every live session. Returns sessions reached."""
        return await self._publish(GLOBAL_TOPIC, event, payload)

    async def send_to_user(self, user_id: int, event: str, payload: dict[str, Any]) -> int:
        """Push an event to one user's private topic."""
        return await self._publish(user_topic(user_id), event, payload)

    async def _publish(self, topic: str, event: str, payload: dict[str, Any]) -> int:
        if self._broadcaster is None:
            return 0
        try:
            return await self._broadcaster.publish(topic, build_message(event, payload))
        except Exception as e:
            logger.warning("broadcast_failed", topic=topic, event_name=event, error=str(e))
            return 0

    # Alert fan-out

    def dispatch_alert(self, alert: StockAlert, recipients: Iterable[int] | None = None) -> None:
        """
        Schedule delivery of a stock alert and return immediately.

        One task persists a notification per recipient (skipping users who
        still have an unread notification of the same kind for the product);
        another broadcasts the alert to every live session.
        """
        targets = tuple(recipients) if recipients is not None else self._recipients
        if targets:
            self.spawn(self._persist_alert(alert, targets), name="persist_stock_alert")

        event = EVENT_STOCK_CRITICAL if alert.tier is AlertTier.CRITICAL else EVENT_STOCK_LOW
        self.spawn(self.broadcast(event, alert.to_payload()), name="broadcast_stock_alert")

    async def _persist_alert(self, alert: StockAlert, recipients: tuple[int, ...]) -> int:
        """Persist per recipient; raises AlertingError if any recipient failed."""
        created = 0
        failed: dict[int, str] = {}
        for user_id in recipients:
            try:
                notification = await self._store.create_unless_unread(
                    Notification(
                        user_id=user_id,
                        type=alert.notification_type,
                        title=alert.title,
                        message=alert.message,
                        product_id=alert.product_id,
                    )
                )
            except Exception as e:
                failed[user_id] = str(e)
                continue

            if notification is None:
                logger.debug(
                    "stock_notification_already_pending",
                    user_id=user_id,
                    product_id=alert.product_id,
                    type=alert.notification_type.value,
                )
                continue
            logger.info(
                "notification_persisted",
                notification_id=notification.id,
                user_id=user_id,
                type=alert.notification_type.value,
            )
            created += 1

        if failed:
            raise AlertingError(
                "persist",
                f"{len(failed)} of {len(recipients)} recipients failed: {failed}",
                product_id=alert.product_id,
            )
        return created

    # Other live events

    def broadcast_stock_movement(self, movement: StockMovement, product: Product) -> None:
        self.spawn(
            self.broadcast(
                EVENT_STOCK_MOVEMENT,
                {
                    "product_id": movement.product_id,
                    "product_name": product.name,
                    "movement_type": movement.movement_type.value,
                    "quantity": movement.quantity,
                    "new_quantity": product.quantity,
                    "reason": movement.reason,
                },
            ),
            name="broadcast_stock_movement",
        )

    def broadcast_product_update(self, product: Product, action: ChangeAction) -> None:
        self.spawn(
            self.broadcast(
                EVENT_PRODUCT_UPDATE,
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "quantity": product.quantity,
                    "action": action,
                },
            ),
            name="broadcast_product_update",
        )

    def broadcast_supplier_update(
        self, supplier_id: int, supplier_name: str, action: ChangeAction
    ) -> None:
        self.spawn(
            self.broadcast(
                EVENT_SUPPLIER_UPDATE,
                {"supplier_id": supplier_id, "supplier_name": supplier_name, "action": action},
            ),
            name="broadcast_supplier_update",
        )

    def notify_admins(
        self,
        title: str,
        message: str,
        severity: Literal["warning", "critical"] = "warning",
    ) -> None:
        """Admin alert; clients filter by role."""
        logger.warning("admin_alert", title=title, severity=severity)
        self.spawn(
            self.broadcast(
                EVENT_ADMIN_ALERT,
                {"type": "admin_alert", "title": title, "message": message, "severity": severity},
            ),
            name="broadcast_admin_alert",
        )

    def broadcast_system_message(self, message: str) -> None:
        self.spawn(
            self.broadcast(EVENT_SYSTEM_MESSAGE, {"message": message}),
            name="broadcast_system_message",
        )

    # Targeted notifications

    async def notify_supplier_alert(
        self,
        user_id: int,
        supplier_id: int,
        supplier_name: str,
        message: str,
    ) -> Notification:
        notification = await self.persist(
            user_id,
            NotificationType.SUPPLIER_ALERT,
            f"Supplier Alert: {supplier_name}",
            message,
            supplier_id=supplier_id,
        )
        self._push_private(notification)
        return notification

    async def notify_system(self, user_id: int, title: str, message: str) -> Notification:
        notification = await self.persist(user_id, NotificationType.SYSTEM, title, message)
        self._push_private(notification)
        return notification

    def _push_private(self, notification: Notification) -> None:
        self.spawn(
            self.send_to_user(
                notification.user_id,
                EVENT_PRIVATE,
                {
                    "id": notification.id,
                    "type": notification.type.value,
                    "title": notification.title,
                    "message": notification.message,
                    "product_id": notification.product_id,
                    "supplier_id": notification.supplier_id,
                },
            ),
            name="send_private_notification",
        )

    # Task bookkeeping

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """Run a coroutine in the background, logging any failure."""
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if isinstance(error, AlertingError):
            logger.error("alert_dispatch_failed", task=task.get_name(), **error.details)
        elif error is not None:
            logger.error(
                "alert_dispatch_failed",
                task=task.get_name(),
                error=str(error),
                error_type=error.__class__.__name__,
            )

    async def drain(self) -> None:
        """Wait for all in-flight background deliveries."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
