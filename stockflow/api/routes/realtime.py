"""Live session endpoints: status and the WebSocket channel."""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from stockflow.api.dependencies import get_session_registry
from stockflow.application.dto.responses import RealtimeStatusResponse
from stockflow.config import get_logger
from stockflow.core.services.notification_dispatcher import build_message
from stockflow.infrastructure.realtime import SessionRegistry

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])

EVENT_USER_JOIN = "user:join"
EVENT_USER_JOINED = "user:joined"
EVENT_ERROR = "error"


@router.get("/api/realtime/status", response_model=RealtimeStatusResponse)
async def realtime_status(
    registry: SessionRegistry = Depends(get_session_registry),
) -> RealtimeStatusResponse:
    """Connected session count and joined users."""
    return RealtimeStatusResponse(
        connected_sessions=registry.count(),
        connected_users=registry.users(),
    )


@router.websocket("/ws")
async def live_channel(websocket: WebSocket) -> None:
    """
    Live event channel.

    Every connection receives global broadcasts. Sending
    ``{"event": "user:join", "user_id": <id>, "role": <role>}`` also
    subscribes it to that user's private notifications.
    """
    registry: SessionRegistry = websocket.app.state.registry
    await websocket.accept()
    session = registry.connect(websocket)

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await session.send(build_message(EVENT_ERROR, {"message": "Invalid JSON"}))
                continue

            event = message.get("event") if isinstance(message, dict) else None
            if event != EVENT_USER_JOIN:
                logger.debug("live_message_ignored", session_id=session.session_id, event_name=event)
                continue

            user_id = message.get("user_id")
            if isinstance(user_id, bool) or not isinstance(user_id, int):
                await session.send(
                    build_message(EVENT_ERROR, {"message": "user_id must be an integer"})
                )
                continue

            registry.join(session.session_id, user_id, message.get("role"))
            await session.send(
                build_message(
                    EVENT_USER_JOINED,
                    {"user_id": user_id, "session_id": session.session_id},
                )
            )

    except WebSocketDisconnect:
        pass
    finally:
        registry.disconnect(session.session_id)
