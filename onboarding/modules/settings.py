"""
Runtime Settings

Environment-driven configuration for the portal and the hosted platform
it delegates to (managed Postgres, auth, e-mail).
"""
import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("onboarding.settings")

# Managed Postgres
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost/onboarding")

# Hosted auth platform
PLATFORM_URL = (os.getenv("PLATFORM_URL") or "").rstrip("/")
PLATFORM_ANON_KEY = os.getenv("PLATFORM_ANON_KEY")
PLATFORM_SERVICE_ROLE_KEY = os.getenv("PLATFORM_SERVICE_ROLE_KEY")
PLATFORM_TIMEOUT = float(os.getenv("PLATFORM_TIMEOUT", "10"))
# Lifetime of a platform access token; revoked tokens are forgotten after this
ACCESS_TOKEN_TTL = int(os.getenv("ACCESS_TOKEN_TTL", "3600"))

# Links handed out to new hires
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5173").rstrip("/")
HR_CONTACT_EMAIL = os.getenv("HR_CONTACT_EMAIL", "hr@example.com")

# Shared secret for the restricted HR-account page
ADMIN_SECRET = os.getenv("ADMIN_SECRET")

# Outgoing mail
SYSTEM_EMAIL = os.getenv("SYSTEM_EMAIL", "onboarding@example.com")
SMTP_SERVER = os.getenv("SMTP_SERVER", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "15"))
EMAIL_PASSWORD = os.getenv("EMAIL_PASSWORD") or os.getenv("EMAIL_APP_PASSWORD")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def warn_on_missing_settings():
    """Log what is missing instead of refusing to start."""
    if not PLATFORM_URL or not PLATFORM_ANON_KEY:
        logger.warning("Platform auth not configured (PLATFORM_URL, PLATFORM_ANON_KEY). Sign-in will fail.")
    if not PLATFORM_SERVICE_ROLE_KEY:
        logger.warning("PLATFORM_SERVICE_ROLE_KEY not set. Login accounts cannot be provisioned.")
    if not ADMIN_SECRET:
        logger.warning("ADMIN_SECRET not set. HR account creation is disabled.")
    if not EMAIL_PASSWORD:
        logger.warning("EMAIL_PASSWORD not set. Invitations will be logged instead of e-mailed.")
