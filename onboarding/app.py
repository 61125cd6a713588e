import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from onboarding.modules import settings
from onboarding.modules.database import connect_to_db, disconnect_from_db
from onboarding.modules.system_endpoints import router as system_router
from onboarding.modules.hires.api import (
    auth_router,
    new_hire_router,
    access_router,
    checklist_router,
    admin_router,
    function_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings.warn_on_missing_settings()
    await connect_to_db()
    # Schema changes are applied via /api/system/migrate, not on boot
    yield
    # Shutdown
    await disconnect_from_db()

app = FastAPI(title="Onboarding Portal", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Include Routers
app.include_router(auth_router)
app.include_router(new_hire_router)
app.include_router(access_router)
app.include_router(checklist_router)
app.include_router(admin_router)
app.include_router(function_router)
app.include_router(system_router)

@app.get("/")
async def root():
    return {"status": "online", "system": "Onboarding Portal"}
