"""
New Hire Service

Business logic for creating new hires and resolving their access credentials.
"""
import asyncio
import logging
from typing import Optional, List, Dict, Any
from onboarding.modules import settings
from onboarding.modules.mailer import InvitationMailer, compose_invitation, invitation_mailer, INVITATION_SUBJECT, REMINDER_SUBJECT
from onboarding.modules.hires.domain.new_hire import NewHire, VERIFICATION_STATUSES
from onboarding.modules.hires.exceptions import NotFoundError, OnboardingError, UnavailableError, ValidationError
from onboarding.modules.hires.repositories.new_hire_repository import NewHireRepository
from onboarding.modules.hires.services.account_service import AccountProvisioningService
from onboarding.modules.hires.services.tokens import generate_unique_token, generate_verification_code
from onboarding.modules.hires.services.validators import is_uuid, normalize_email, require_email, require_name

logger = logging.getLogger("onboarding.hires.service")

ACCOUNT_WARNING = "Failed to create login account for new hire, but will continue with onboarding process"


def invite_link_for(new_hire: NewHire, base_url: Optional[str] = None) -> str:
    return f"{(base_url or settings.PUBLIC_BASE_URL).rstrip('/')}{new_hire.checklist_path()}"


class NewHireService:
    """Service for new hire business logic."""

    def __init__(
        self,
        repository: Optional[NewHireRepository] = None,
        provisioning: Optional[AccountProvisioningService] = None,
        mailer: Optional[InvitationMailer] = None
    ):
        self.repository = repository or NewHireRepository()
        self.provisioning = provisioning or AccountProvisioningService()
        self.mailer = mailer or invitation_mailer

    async def add_new_hire(self, name: Optional[str], email: Optional[str]) -> Dict[str, Any]:
        """
        Register a new hire, provision a login account and send the invitation.

        A failed account provisioning does not stop the hire from being added;
        it is reported in the returned warnings instead.
        """
        clean_name = require_name(name)
        clean_email = require_email(email)

        token = generate_unique_token()
        verification_code = generate_verification_code()
        warnings: List[str] = []

        logger.info(f"Creating auth account for new hire: {clean_name} <{clean_email}>")
        generated_password = None
        try:
            account = await self.provisioning.create_account(clean_email, clean_name)
            generated_password = account.password
            logger.info(f"Auth account created successfully: {account.user.get('id')}")
        except Exception as e:
            logger.error(f"Error creating auth account: {e}", exc_info=True)
            warnings.append(ACCOUNT_WARNING)

        try:
            row = await self.repository.create(
                name=clean_name,
                email=clean_email,
                unique_token=token,
                verification_code=verification_code,
                verification_status="pending"
            )
        except Exception as e:
            logger.error(f"[NewHireService.add_new_hire] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error adding new hire")

        new_hire = NewHire.from_dict(row)
        invite_link = invite_link_for(new_hire)
        invitation = compose_invitation(
            name=new_hire.name,
            email=new_hire.email,
            verification_code=new_hire.verification_code,
            invite_link=invite_link,
            generated_password=generated_password,
        )

        try:
            await asyncio.to_thread(self.mailer.send, new_hire.email, INVITATION_SUBJECT, invitation)
        except ValueError as e:
            logger.error(f"[NewHireService.add_new_hire] invitation not sent: {e}")
            warnings.append("Invitation email could not be sent. Share the details below manually.")

        result = new_hire.to_dict()
        result.update({
            "generated_password": generated_password,
            "invite_link": invite_link,
            "invitation": invitation,
            "warnings": warnings,
        })
        return result

    async def get_new_hires(self) -> List[NewHire]:
        try:
            rows = await self.repository.list()
        except Exception as e:
            logger.error(f"[NewHireService.get_new_hires] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error fetching new hires")
        return [NewHire.from_dict(row) for row in rows]

    async def get_new_hire(self, new_hire_id: str) -> Optional[NewHire]:
        if not is_uuid(new_hire_id):
            return None
        try:
            row = await self.repository.get_by_id(new_hire_id)
        except Exception as e:
            logger.error(f"[NewHireService.get_new_hire] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error fetching new hire")
        return NewHire.from_dict(row) if row else None

    async def get_new_hire_by_token(self, token: Optional[str]) -> Optional[NewHire]:
        """Resolve a shareable-link token; blank or unknown tokens give None."""
        if not token or not token.strip():
            logger.error(f"Invalid token provided: {token!r}")
            return None

        try:
            row = await self.repository.get_by_token(token.strip())
        except Exception as e:
            logger.error(f"[NewHireService.get_new_hire_by_token] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error fetching new hire")

        if not row:
            logger.info(f"No new hire found with token: {token}")
            return None
        return NewHire.from_dict(row)

    async def get_new_hire_by_verification_code(self, code: Optional[str], email: Optional[str]) -> Optional[NewHire]:
        """Resolve a verification code; both the code and the e-mail must match."""
        normalized_code = (code or "").strip()
        normalized_email = normalize_email(email)
        if not normalized_code or not normalized_email:
            logger.error("Invalid code or email provided")
            return None

        logger.debug(f"Fetching new hire with verification code for email: {normalized_email}")
        row = await self.repository.get_by_verification_code(normalized_code, normalized_email)
        return NewHire.from_dict(row) if row else None

    async def update_verification_status(self, new_hire_id: str, status: str) -> Optional[NewHire]:
        if status not in VERIFICATION_STATUSES:
            raise ValidationError(f"Unknown verification status: {status}")
        if not is_uuid(new_hire_id):
            return None
        try:
            row = await self.repository.update_verification_status(new_hire_id, status)
        except Exception as e:
            logger.error(f"[NewHireService.update_verification_status] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error updating verification status")
        return NewHire.from_dict(row) if row else None

    async def check_connection(self) -> bool:
        try:
            await self.repository.ping()
            return True
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    async def verify_access(self, email: Optional[str], code: Optional[str]) -> NewHire:
        """
        Exchange a verification code and e-mail for checklist access.

        Marks the new hire as verified and returns it.
        """
        if not (email or "").strip() or not (code or "").strip():
            raise ValidationError("Please enter both email and verification code")

        if not await self.check_connection():
            raise UnavailableError("Unable to connect to database. Please try again later.")

        try:
            new_hire = await self.get_new_hire_by_verification_code(code, email)
        except Exception as e:
            logger.error(f"[NewHireService.verify_access] ERROR: {e}", exc_info=True)
            raise OnboardingError("Failed to verify access. Please try again later.")

        if not new_hire:
            raise NotFoundError("Invalid verification code or email. Please check and try again.")

        updated = await self.update_verification_status(new_hire.id, "verified")
        return updated or new_hire

    async def send_reminder(self, new_hire_id: str) -> Dict[str, Any]:
        new_hire = await self.get_new_hire(new_hire_id)
        if not new_hire:
            raise NotFoundError("New hire not found")

        message = compose_invitation(
            name=new_hire.name,
            email=new_hire.email,
            verification_code=new_hire.verification_code,
            invite_link=invite_link_for(new_hire),
        )
        try:
            delivery = await asyncio.to_thread(self.mailer.send, new_hire.email, REMINDER_SUBJECT, message)
        except ValueError as e:
            logger.error(f"[NewHireService.send_reminder] ERROR: {e}")
            raise OnboardingError("Failed to send reminder. Please try again.")

        return {"message": f"Reminder sent to {new_hire.email}", "delivery": delivery}
