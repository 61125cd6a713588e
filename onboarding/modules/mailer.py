"""
Invitation Mailer - Sends onboarding invitations and reminders from the system account via SMTP.

When no SMTP password is configured the message is written to the log instead,
so HR can still copy the code and link by hand.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import uuid
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from onboarding.modules import settings

logger = logging.getLogger("onboarding.mailer")

INVITATION_SUBJECT = "Welcome aboard! Your onboarding checklist"
REMINDER_SUBJECT = "Reminder: complete your onboarding checklist"


def compose_invitation(
    name: str,
    email: str,
    verification_code: str,
    invite_link: str,
    generated_password: Optional[str] = None,
    base_url: Optional[str] = None
) -> str:
    """Build the message HR shares with a new hire."""
    base_url = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")
    method = 1
    blocks = []

    if generated_password:
        blocks.append(
            f"METHOD {method} (SIMPLEST): \n"
            f"Use these login credentials:\n"
            f"Email: {email}\n"
            f"Password: {generated_password}\n"
            f"Visit: {base_url}/login\n"
        )
        method += 1

    blocks.append(
        f"METHOD {method} (RECOMMENDED): \n"
        f"Use your verification code: {verification_code}\n"
        f"Visit: {base_url}\n"
        f"Enter the code when prompted along with your email address.\n"
    )
    method += 1

    blocks.append(
        f"METHOD {method} (ALTERNATIVE):\n"
        f"Click this direct link to access your personalized onboarding checklist:\n"
        f"{invite_link}\n"
    )

    return (
        f"Hello {name},\n\n"
        "Welcome to the team! To get started with your onboarding process, "
        "please use one of the following methods:\n\n"
        + "\n".join(blocks)
        + "\nIf you have any questions, please don't hesitate to reach out.\n\n"
        "Best regards,\n"
        "HR Team"
    )


class InvitationMailer:
    """
    Sends plain-text onboarding mail from the system account.
    """

    def __init__(
        self,
        system_email: Optional[str] = None,
        email_password: Optional[str] = None,
        smtp_server: Optional[str] = None,
        smtp_port: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        self.system_email = system_email or settings.SYSTEM_EMAIL
        self.email_password = email_password if email_password is not None else settings.EMAIL_PASSWORD
        self.smtp_server = smtp_server or settings.SMTP_SERVER
        self.smtp_port = smtp_port or settings.SMTP_PORT
        self.timeout = timeout or settings.SMTP_TIMEOUT

    @property
    def configured(self) -> bool:
        return bool(self.email_password)

    def send(self, to: str, subject: str, message: str) -> Dict[str, Any]:
        """
        Sends one e-mail, or logs it when SMTP is not configured.

        Returns:
            Dict with send status and message details
        """
        message_id = f"EMAIL_{uuid.uuid4().hex[:8]}"
        result = {
            "message_id": message_id,
            "from": self.system_email,
            "to": to,
            "subject": subject,
            "sent_at": datetime.now(timezone.utc).isoformat(),
        }

        if not self.configured:
            logger.info(f"Email would be sent to {to} ({subject}):\n{message}")
            result.update({"status": "logged", "method": "log"})
            return result

        try:
            msg = MIMEMultipart()
            msg['From'] = self.system_email
            msg['To'] = to
            msg['Subject'] = subject
            msg.attach(MIMEText(message, 'plain'))

            with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=self.timeout) as server:
                server.starttls()
                server.login(self.system_email, self.email_password)
                server.send_message(msg, to_addrs=[to])

            logger.info(f"Email sent from system account to {to}, message_id: {message_id}")
            result.update({"status": "sent", "method": "smtp"})
            return result
        except Exception as e:
            logger.error(f"Failed to send email from system account: {e}")
            raise ValueError(f"Failed to send email: {str(e)}")


invitation_mailer = InvitationMailer()
