"""
Account Provisioning Service

Creates platform login accounts for new hires and HR staff.
This is the logic behind the create-hr-user function.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any
from onboarding.modules.platform_auth import PlatformAuthClient, PlatformAuthError, platform_auth
from onboarding.modules.hires.exceptions import ConflictError, OnboardingError, ValidationError
from onboarding.modules.hires.services.tokens import generate_password

logger = logging.getLogger("onboarding.hires.provisioning")


@dataclass
class ProvisionedAccount:
    user: Dict[str, Any]
    password: str

    def to_dict(self) -> dict:
        return {
            "message": "User created successfully",
            "password": self.password,
            "user": self.user,
            "error": None,
        }


class AccountProvisioningService:
    """Service for creating login accounts through the platform admin API."""

    def __init__(self, client: Optional[PlatformAuthClient] = None):
        self.client = client or platform_auth

    async def create_account(
        self,
        email: Optional[str],
        name: Optional[str],
        password: Optional[str] = None
    ) -> ProvisionedAccount:
        """
        Create a confirmed account; generates a password when none is given.

        Raises:
            OnboardingError: platform not configured (500)
            ValidationError: email or name missing
            ConflictError: an account already exists for the email
        """
        if not self.client.admin_configured:
            raise OnboardingError("Missing platform environment variables", status_code=500)

        if not email or not email.strip() or not name or not name.strip():
            raise ValidationError("Email and name are required")

        normalized_email = email.strip().lower()
        user_password = password or generate_password()

        logger.debug(f"[AccountProvisioningService.create_account] email={normalized_email}")

        try:
            created = await self.client.admin_create_user(
                email=normalized_email,
                password=user_password,
                user_metadata={"full_name": name.strip()},
                email_confirm=True,
            )
        except PlatformAuthError as e:
            logger.error(f"[AccountProvisioningService.create_account] ERROR: {e.message}")
            if e.already_exists:
                raise ConflictError(e.message)
            raise OnboardingError(e.message, status_code=500)

        user = created.get("user", created) if isinstance(created, dict) else {}
        logger.info(f"User created successfully: {user.get('id')}")
        return ProvisionedAccount(user=user, password=user_password)
