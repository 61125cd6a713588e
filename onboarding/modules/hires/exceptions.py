"""
Onboarding - Exceptions

The message of every exception is the text shown to the person using the portal.
"""


class OnboardingError(Exception):
    """Base exception for onboarding errors"""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(OnboardingError):
    """Raised when form input is missing or malformed"""
    status_code = 400


class NotFoundError(OnboardingError):
    """Raised when a new hire or task cannot be found"""
    status_code = 404


class ConflictError(OnboardingError):
    """Raised when a login account already exists"""
    status_code = 409


class UnavailableError(OnboardingError):
    """Raised when the managed database cannot be reached"""
    status_code = 503
