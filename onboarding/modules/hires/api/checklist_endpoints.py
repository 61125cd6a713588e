"""
Checklist API Endpoints

Token-based, unauthenticated: the token in the link is the credential.
"""
import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from onboarding.modules.hires.exceptions import OnboardingError
from onboarding.modules.hires.services.checklist_service import ChecklistService

logger = logging.getLogger("onboarding.checklist.api")

router = APIRouter(prefix="/api/checklist", tags=["checklist"])


class TaskStatusRequest(BaseModel):
    completed: bool


_checklist_service = ChecklistService()


@router.get("/{token}")
async def get_checklist(token: str):
    try:
        return await _checklist_service.get_checklist(token)
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[checklist_endpoints.get_checklist] ERROR: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail="Unable to connect to HR system. Please try again later or contact support."
        )


@router.put("/{token}/tasks/{task_id}")
async def set_task_status(token: str, task_id: str, request: TaskStatusRequest):
    try:
        return await _checklist_service.set_task_status(token, task_id, request.completed)
    except OnboardingError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"[checklist_endpoints.set_task_status] ERROR: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update task status. Please try again.")
