"""
Authentication Module

Provides:
- Session guard dependencies
- Session-change notifications
"""

from .middleware import get_current_session, get_access_token, resolve_session
from .session import Session, SessionManager, session_manager, SIGNED_IN, SIGNED_OUT

__all__ = [
    "get_current_session",
    "get_access_token",
    "resolve_session",
    "Session",
    "SessionManager",
    "session_manager",
    "SIGNED_IN",
    "SIGNED_OUT",
]
