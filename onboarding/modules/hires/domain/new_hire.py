"""
New Hire Domain Model
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

VERIFICATION_STATUSES = ("pending", "verified")


@dataclass
class NewHire:
    """An onboarding employee, reachable by unique token or verification code."""
    id: str
    name: str
    email: str
    unique_token: str
    verification_code: str
    verification_status: str = "pending"
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "NewHire":
        """Create NewHire from dictionary (e.g., from database row)."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            unique_token=data["unique_token"],
            verification_code=data["verification_code"],
            verification_status=data.get("verification_status") or "pending",
            created_at=data.get("created_at"),
        )

    @property
    def is_verified(self) -> bool:
        return self.verification_status == "verified"

    def checklist_path(self) -> str:
        return f"/checklist/{self.unique_token}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "unique_token": self.unique_token,
            "verification_code": self.verification_code,
            "verification_status": self.verification_status,
            "created_at": self.created_at,
        }

    def to_public_dict(self) -> dict:
        """Fields safe to show on the new hire's own checklist page."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "verification_status": self.verification_status,
            "created_at": self.created_at,
        }
