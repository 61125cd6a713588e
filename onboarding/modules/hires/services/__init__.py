"""
Business Logic Services

Services validate input, orchestrate repository calls and turn
failures into messages for the person using the portal.
"""

from .account_service import AccountProvisioningService, ProvisionedAccount
from .new_hire_service import NewHireService
from .checklist_service import ChecklistService

__all__ = [
    "AccountProvisioningService",
    "ProvisionedAccount",
    "NewHireService",
    "ChecklistService",
]
