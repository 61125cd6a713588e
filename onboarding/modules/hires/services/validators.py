"""
Input normalisation shared by the services.
"""
import uuid
from typing import Optional
from pydantic import validate_email
from onboarding.modules.hires.exceptions import ValidationError


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def require_email(email: Optional[str]) -> str:
    value = normalize_email(email)
    if not value:
        raise ValidationError("Email is required")
    try:
        _, address = validate_email(value)
    except ValueError:
        raise ValidationError("Invalid email format")
    # validate_email also accepts "Name <addr>"; only a bare address is stored
    if address.lower() != value:
        raise ValidationError("Invalid email format")
    return value


def require_name(name: Optional[str], max_length: int = 100) -> str:
    value = (name or "").strip()
    if not value:
        raise ValidationError("Full name is required")
    if len(value) > max_length:
        raise ValidationError("Name too long")
    return value


def is_uuid(value: Optional[str]) -> bool:
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True
