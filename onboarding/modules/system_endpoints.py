import logging
from fastapi import APIRouter, HTTPException
from onboarding.modules.database import database
from onboarding.modules.migration_runner import run_migrations

logger = logging.getLogger("onboarding.system")

router = APIRouter(prefix="/api/system", tags=["System"])

@router.get("/health")
async def health():
    """
    Database round trip; the same check the verification page runs before a lookup.
    """
    try:
        await database.fetch_val("SELECT count(*) FROM new_hires")
        return {"status": "ok", "checks": {"database": "ok"}}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "degraded", "checks": {"database": "error"}}

@router.post("/migrate")
async def trigger_migrations():
    """
    Manually checks and runs pending database migrations.
    """
    try:
        applied = await run_migrations(database)
        return {"status": "success", "message": "Database migrations applied.", "files": applied}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
