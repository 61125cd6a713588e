"""
Session Management

Tracks signed-out tokens and pushes session-change events
(SIGNED_IN / SIGNED_OUT) to WebSocket subscribers of each user.
"""
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Any, Optional
from fastapi import WebSocket
from onboarding.modules import settings

logger = logging.getLogger("onboarding.auth.session")

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


@dataclass
class Session:
    """An authenticated HR session as confirmed by the auth platform."""
    user_id: str
    email: Optional[str]
    access_token: str

    @classmethod
    def from_platform_user(cls, user: Dict[str, Any], access_token: str) -> "Session":
        return cls(user_id=str(user.get("id", "")), email=user.get("email"), access_token=access_token)

    def to_dict(self) -> dict:
        return {"user": {"id": self.user_id, "email": self.email}}


def _fingerprint(access_token: str) -> str:
    return hashlib.sha256(access_token.encode("utf-8")).hexdigest()


class SessionManager:
    """
    In-process registry of revoked tokens and session-change subscribers.
    """

    def __init__(self, token_ttl: Optional[int] = None):
        self.token_ttl = token_ttl or settings.ACCESS_TOKEN_TTL
        # fingerprint -> monotonic time after which the token has expired anyway
        self._revoked: Dict[str, float] = {}
        # user_id -> List[WebSocket]
        self.subscribers: Dict[str, List[WebSocket]] = {}

    def revoke(self, access_token: str):
        now = time.monotonic()
        self._prune(now)
        self._revoked[_fingerprint(access_token)] = now + self.token_ttl

    def is_revoked(self, access_token: str) -> bool:
        expires_at = self._revoked.get(_fingerprint(access_token))
        return expires_at is not None and expires_at > time.monotonic()

    def _prune(self, now: float):
        expired = [fp for fp, expires_at in self._revoked.items() if expires_at <= now]
        for fp in expired:
            del self._revoked[fp]

    async def subscribe(self, user_id: str, websocket: WebSocket):
        """Accepts and stores a new WS connection, then confirms the session."""
        await websocket.accept()
        self.subscribers.setdefault(user_id, []).append(websocket)
        logger.info(f"WS subscribed to session events for user {user_id}. Total: {len(self.subscribers[user_id])}")
        await websocket.send_json({"event": SIGNED_IN})

    def unsubscribe(self, user_id: str, websocket: WebSocket):
        if user_id in self.subscribers:
            if websocket in self.subscribers[user_id]:
                self.subscribers[user_id].remove(websocket)
                if not self.subscribers[user_id]:
                    del self.subscribers[user_id]
        logger.info(f"WS unsubscribed from session events for user {user_id}")

    async def broadcast(self, user_id: str, event: str):
        """Push an event to every subscriber of one user."""
        connections = list(self.subscribers.get(user_id, []))
        logger.debug(f"Broadcasting {event} to {len(connections)} clients of user {user_id}")

        to_remove = []
        for connection in connections:
            try:
                await connection.send_json({"event": event})
            except Exception as e:
                logger.warning(f"Failed to send to WS: {e}")
                to_remove.append(connection)

        for dead in to_remove:
            self.unsubscribe(user_id, dead)

    async def end_session(self, session: Session):
        """Forget a token and tell the user's open pages they were signed out."""
        self.revoke(session.access_token)
        logger.info(f"Session ended for user {session.user_id}")
        await self.broadcast(session.user_id, SIGNED_OUT)


# Singleton instance
session_manager = SessionManager()
