"""
Authentication Middleware

FastAPI dependencies that act as the session guard for HR pages.
"""
import logging
from typing import Optional
from fastapi import HTTPException, Header, Depends
from onboarding.modules.platform_auth import PlatformAuthClient, PlatformAuthError, platform_auth
from onboarding.modules.hires.auth.session import Session, SessionManager, session_manager

logger = logging.getLogger("onboarding.auth")

SIGN_IN_REQUIRED = "Please sign in to access this page"
SESSION_INVALID = "Authentication error. Please try signing in again."


def get_platform_client() -> PlatformAuthClient:
    return platform_auth


def get_session_manager() -> SessionManager:
    return session_manager


async def get_access_token(
    authorization: Optional[str] = Header(None)
) -> Optional[str]:
    """Extract the bearer token from the Authorization header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def resolve_session(
    access_token: Optional[str],
    client: PlatformAuthClient,
    sessions: SessionManager
) -> Session:
    """
    Confirm a token with the auth platform.

    Raises HTTPException(401) when the token is missing, signed out or rejected.
    """
    if not access_token:
        raise HTTPException(status_code=401, detail=SIGN_IN_REQUIRED)

    if sessions.is_revoked(access_token):
        raise HTTPException(status_code=401, detail=SESSION_INVALID)

    try:
        user = await client.get_user(access_token)
    except PlatformAuthError as e:
        logger.warning(f"Auth check error: {e.message}")
        raise HTTPException(status_code=401, detail=SESSION_INVALID)

    if not user or not user.get("id"):
        raise HTTPException(status_code=401, detail=SESSION_INVALID)

    return Session.from_platform_user(user, access_token)


async def get_current_session(
    access_token: Optional[str] = Depends(get_access_token),
    client: PlatformAuthClient = Depends(get_platform_client),
    sessions: SessionManager = Depends(get_session_manager)
) -> Session:
    """
    FastAPI dependency to get the current HR session.

    Raises HTTPException if the request carries no valid session.
    """
    return await resolve_session(access_token, client, sessions)
