"""
Registry of live WebSocket sessions.

Each connection gets a session id. A session receives the global topic from
the moment it connects and its user's private topic once it has sent
``user:join``.
"""

import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket

from stockflow.config import get_logger
from stockflow.core.interfaces.broadcaster import GLOBAL_TOPIC, user_topic

logger = get_logger(__name__)


@dataclass
class LiveSession:
    """One connected client."""

    session_id: str
    websocket: WebSocket
    user_id: int | None = None
    role: str | None = None
    topics: set[str] = field(default_factory=lambda: {GLOBAL_TOPIC})

    async def send(self, message: dict) -> None:
        await self.websocket.send_json(message)


class SessionRegistry:
    """Tracks live sessions by id; mutated only by connect, join and disconnect."""

    def __init__(self) -> None:
        self._sessions: dict[str, LiveSession] = {}

    def connect(self, websocket: WebSocket) -> LiveSession:
        session = LiveSession(session_id=uuid.uuid4().hex, websocket=websocket)
        self._sessions[session.session_id] = session
        logger.info("live_session_connected", session_id=session.session_id)
        return session

    def join(self, session_id: str, user_id: int, role: str | None = None) -> LiveSession | None:
        """Attach a user to a session and subscribe it to the private topic."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.user_id is not None and session.user_id != user_id:
            session.topics.discard(user_topic(session.user_id))
        session.user_id = user_id
        session.role = role
        session.topics.add(user_topic(user_id))
        logger.info("live_session_joined", session_id=session_id, user_id=user_id, role=role)
        return session

    def disconnect(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            logger.info(
                "live_session_disconnected",
                session_id=session_id,
                user_id=session.user_id,
            )

    def subscribers(self, topic: str) -> list[LiveSession]:
        """Snapshot of the sessions subscribed to a topic."""
        return [s for s in list(self._sessions.values()) if topic in s.topics]

    def count(self) -> int:
        return len(self._sessions)

    def users(self) -> list[int]:
        return sorted({s.user_id for s in self._sessions.values() if s.user_id is not None})

    def is_user_connected(self, user_id: int) -> bool:
        return any(s.user_id == user_id for s in self._sessions.values())
