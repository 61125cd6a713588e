"""
Access API Endpoints

Public entry point where a new hire trades a verification code for checklist access.
"""
import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from onboarding.modules.hires.exceptions import OnboardingError
from onboarding.modules.hires.services.new_hire_service import NewHireService

logger = logging.getLogger("onboarding.access.api")

router = APIRouter(prefix="/api/access", tags=["access"])


class VerifyAccessRequest(BaseModel):
    email: str = ""
    code: str = ""


_new_hire_service = NewHireService()


@router.post("/verify")
async def verify_access(request: VerifyAccessRequest):
    """Verify code + e-mail and hand back the checklist location."""
    try:
        new_hire = await _new_hire_service.verify_access(request.email, request.code)
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[access_endpoints.verify_access] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to verify access. Please try again later.")

    return {
        "message": "Verification successful!",
        "unique_token": new_hire.unique_token,
        "checklist_path": new_hire.checklist_path(),
    }
