"""
Secret Generation

Unique tokens, verification codes and initial passwords handed to new hires.
"""
import secrets
import string

BASE36_ALPHABET = string.digits + string.ascii_lowercase
PASSWORD_SUFFIX = "!A9"


def _base36(length: int) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def generate_unique_token() -> str:
    """Opaque link token: two random base-36 chunks of 10-13 characters each."""
    return _base36(10 + secrets.randbelow(4)) + _base36(10 + secrets.randbelow(4))


def generate_verification_code() -> str:
    """Six-digit code in [100000, 999999]."""
    return str(100000 + secrets.randbelow(900000))


def generate_password() -> str:
    # suffix satisfies password character-class rules
    return _base36(10) + _base36(6) + PASSWORD_SUFFIX
