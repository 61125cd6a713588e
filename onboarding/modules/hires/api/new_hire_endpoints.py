"""
New Hire API Endpoints

HR dashboard operations: list new hires, add one, send a reminder.
"""
import logging
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from onboarding.modules.hires.auth.middleware import get_current_session
from onboarding.modules.hires.auth.session import Session
from onboarding.modules.hires.exceptions import OnboardingError
from onboarding.modules.hires.services.new_hire_service import NewHireService, invite_link_for

logger = logging.getLogger("onboarding.hires.api")

router = APIRouter(prefix="/api/new-hires", tags=["new-hires"])


class AddNewHireRequest(BaseModel):
    name: str
    email: str


# Service instance
_new_hire_service = NewHireService()


@router.get("")
async def list_new_hires(session: Session = Depends(get_current_session)):
    """List every new hire with a shareable checklist link."""
    try:
        new_hires = await _new_hire_service.get_new_hires()
        items = []
        for new_hire in new_hires:
            item = new_hire.to_dict()
            item["invite_link"] = invite_link_for(new_hire)
            items.append(item)
        return {"new_hires": items, "count": len(items)}
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[new_hire_endpoints.list_new_hires] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load new hires. Please try again.")


@router.post("", status_code=201)
async def add_new_hire(
    request: AddNewHireRequest,
    session: Session = Depends(get_current_session)
):
    """
    Add a new hire.

    Returns the record with its verification code, invite link, the
    generated login password (if an account could be created) and the
    invitation text.
    """
    logger.debug(f"[new_hire_endpoints.add_new_hire] by={session.email}")

    try:
        result = await _new_hire_service.add_new_hire(request.name, request.email)
        if not result.get("unique_token"):
            raise OnboardingError("Failed to generate unique token for new hire")
        result["message"] = "New hire added successfully"
        return result
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[new_hire_endpoints.add_new_hire] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add new hire")


@router.post("/{new_hire_id}/reminder")
async def send_reminder(
    new_hire_id: str,
    session: Session = Depends(get_current_session)
):
    try:
        return await _new_hire_service.send_reminder(new_hire_id)
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[new_hire_endpoints.send_reminder] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to send reminder. Please try again.")
