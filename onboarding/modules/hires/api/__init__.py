"""
REST API Endpoints

Thin API layer that delegates to services.
"""

from .auth_endpoints import router as auth_router
from .new_hire_endpoints import router as new_hire_router
from .access_endpoints import router as access_router
from .checklist_endpoints import router as checklist_router
from .admin_endpoints import router as admin_router
from .function_endpoints import router as function_router

__all__ = [
    "auth_router",
    "new_hire_router",
    "access_router",
    "checklist_router",
    "admin_router",
    "function_router",
]
