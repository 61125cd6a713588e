"""
Platform Function Endpoints

HTTP rendition of the create-hr-user function: provisions a confirmed
login account and returns the password that was set.
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from onboarding.modules.hires.auth.middleware import get_current_session
from onboarding.modules.hires.auth.session import Session
from onboarding.modules.hires.exceptions import OnboardingError
from onboarding.modules.hires.services.account_service import AccountProvisioningService

logger = logging.getLogger("onboarding.functions.api")

router = APIRouter(prefix="/functions/v1", tags=["functions"])

_provisioning_service = AccountProvisioningService()


@router.post("/create-hr-user")
async def create_hr_user(request: Request, session: Session = Depends(get_current_session)):
    """
    Body: {"email": str, "name": str, "password": Optional[str]}

    200 with the generated password, 400 on missing fields,
    409 when the account exists, 500 on anything else.
    """
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    try:
        account = await _provisioning_service.create_account(
            body.get("email"),
            body.get("name"),
            password=body.get("password"),
        )
    except OnboardingError as e:
        if e.status_code == 409:
            return JSONResponse(
                status_code=409,
                content={"message": "User already exists", "password": None, "user": None, "error": e.message},
            )
        logger.error(f"Error: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return JSONResponse(status_code=200, content=account.to_dict())
