"""
Auth API Endpoints

Sign-in, sign-out, the current session, and a WebSocket feed of
session-change events for open HR pages.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends, WebSocket, WebSocketDisconnect, Query
from pydantic import BaseModel
from typing import Optional
from onboarding.modules.platform_auth import PlatformAuthError, platform_auth
from onboarding.modules.hires.auth.middleware import get_current_session, resolve_session
from onboarding.modules.hires.auth.session import Session, SIGNED_IN, session_manager

logger = logging.getLogger("onboarding.auth.api")

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignInRequest(BaseModel):
    email: str
    password: str


@router.post("/sign-in")
async def sign_in(request: SignInRequest):
    """Exchange HR credentials for a platform session."""
    email = request.email.strip().lower()
    logger.debug(f"[auth_endpoints.sign_in] email={email}")

    try:
        data = await platform_auth.sign_in_with_password(email, request.password)
    except PlatformAuthError as e:
        logger.warning(f"[auth_endpoints.sign_in] rejected: {e.message}")
        raise HTTPException(status_code=401, detail=e.message or "Error signing in")
    except Exception as e:
        logger.error(f"[auth_endpoints.sign_in] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error signing in")

    user = data.get("user") or {}
    if user.get("id"):
        await session_manager.broadcast(str(user["id"]), SIGNED_IN)

    return {
        "access_token": data.get("access_token"),
        "refresh_token": data.get("refresh_token"),
        "expires_in": data.get("expires_in"),
        "user": user,
    }


@router.post("/sign-out")
async def sign_out(session: Session = Depends(get_current_session)):
    """End the current session on the platform and notify open pages."""
    try:
        await platform_auth.sign_out(session.access_token)
    except PlatformAuthError as e:
        logger.error(f"[auth_endpoints.sign_out] ERROR: {e.message}")
        raise HTTPException(status_code=502, detail=e.message or "Error signing out")

    await session_manager.end_session(session)
    return {"message": "Signed out"}


@router.get("/session")
async def get_session(session: Session = Depends(get_current_session)):
    return session.to_dict()


@router.websocket("/events")
async def session_events(websocket: WebSocket, token: Optional[str] = Query(None)):
    """
    Session-change notifications.

    Sends SIGNED_IN once the token is confirmed and SIGNED_OUT when the
    user signs out anywhere. Closes with 4401 for a missing or bad token.
    """
    try:
        session = await resolve_session(token, platform_auth, session_manager)
    except HTTPException as e:
        logger.info(f"Rejecting session subscription: {e.detail}")
        await websocket.close(code=4401)
        return

    await session_manager.subscribe(session.user_id, websocket)
    try:
        while True:
            # inbound messages are ignored; receiving keeps the socket open
            await websocket.receive_text()
    except WebSocketDisconnect:
        session_manager.unsubscribe(session.user_id, websocket)
