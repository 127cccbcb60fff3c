"""Live session delivery over WebSockets."""

from stockflow.infrastructure.realtime.broadcaster import WebSocketBroadcaster
from stockflow.infrastructure.realtime.session_registry import LiveSession, SessionRegistry

__all__ = [
    "LiveSession",
    "SessionRegistry",
    "WebSocketBroadcaster",
]
