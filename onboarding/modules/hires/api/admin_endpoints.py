"""
Admin API Endpoints

Restricted area for creating HR login accounts, gated by a shared admin secret.
"""
import hmac
import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Optional
from onboarding.modules import settings
from onboarding.modules.hires.exceptions import OnboardingError, ValidationError
from onboarding.modules.hires.services.account_service import AccountProvisioningService
from onboarding.modules.hires.services.validators import require_email

logger = logging.getLogger("onboarding.admin.api")

router = APIRouter(prefix="/api/admin", tags=["admin"])


class CreateHrAccountRequest(BaseModel):
    email: str
    password: str = Field(min_length=8)
    admin_password: str
    name: Optional[str] = None


_provisioning_service = AccountProvisioningService()


def _admin_secret_matches(candidate: str) -> bool:
    secret = settings.ADMIN_SECRET
    if not secret:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


@router.post("/hr-accounts", status_code=201)
async def create_hr_account(request: CreateHrAccountRequest):
    """Create an HR account that can sign in to the dashboard."""
    if not _admin_secret_matches(request.admin_password):
        logger.warning("[admin_endpoints.create_hr_account] invalid admin password")
        raise HTTPException(status_code=403, detail="Invalid admin password")

    try:
        email = require_email(request.email)
        name = (request.name or "").strip() or email.split("@", 1)[0]
        account = await _provisioning_service.create_account(email, name, password=request.password)
    except ValidationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except OnboardingError as e:
        status_code = 409 if e.status_code == 409 else 502
        raise HTTPException(status_code=status_code, detail=e.message or "Failed to create HR account")
    except Exception as e:
        logger.error(f"[admin_endpoints.create_hr_account] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail="Failed to create HR account")

    return {
        "message": "HR account created successfully",
        "user": {"id": account.user.get("id"), "email": account.user.get("email", email)},
    }
