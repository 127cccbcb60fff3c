"""Notification inbox endpoints, scoped to the X-User-Id caller."""

from fastapi import APIRouter, Depends, Query, status

from stockflow.api.dependencies import get_current_user_id, get_dispatcher, get_inbox_use_case
from stockflow.application.dto.requests import SystemNotificationRequest
from stockflow.application.dto.responses import (
    ErrorResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from stockflow.application.use_cases import NotificationInboxUseCase
from stockflow.core.services import NotificationDispatcher

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/unread", response_model=NotificationListResponse)
async def list_unread(
    limit: int = Query(default=50, ge=1, le=500),
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> NotificationListResponse:
    """Unread notifications, newest first."""
    notifications = await inbox.list_unread(user_id, limit=limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.from_entity(n) for n in notifications],
        total=len(notifications),
    )


@router.get("/recent", response_model=NotificationListResponse)
async def list_recent(
    count: int = Query(default=20, ge=1, le=500),
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> NotificationListResponse:
    """Most recent notifications, read or unread."""
    notifications = await inbox.list_recent(user_id, count=count)
    return NotificationListResponse(
        notifications=[NotificationResponse.from_entity(n) for n in notifications],
        total=len(notifications),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> UnreadCountResponse:
    """Number of unread notifications."""
    return UnreadCountResponse(count=await inbox.unread_count(user_id))


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> MarkAllReadResponse:
    """Flag every unread notification as read."""
    return MarkAllReadResponse(updated=await inbox.mark_all_read(user_id))


@router.post(
    "/system",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_system_notification(
    request: SystemNotificationRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> NotificationResponse:
    """Persist a system notification and push it to the recipient's sessions."""
    notification = await dispatcher.notify_system(request.user_id, request.title, request.message)
    return NotificationResponse.from_entity(notification)


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def mark_read(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> NotificationResponse:
    """Flag one notification as read."""
    notification = await inbox.mark_read(user_id, notification_id)
    return NotificationResponse.from_entity(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_notification(
    notification_id: int,
    user_id: int = Depends(get_current_user_id),
    inbox: NotificationInboxUseCase = Depends(get_inbox_use_case),
) -> None:
    """Delete one notification."""
    await inbox.delete(user_id, notification_id)
