"""
New Hire Repository

Handles all database operations for the new_hires table.
"""
import logging
from typing import Optional, List, Dict, Any
from onboarding.modules.database import database

logger = logging.getLogger("onboarding.hires.repository")

NEW_HIRE_COLUMNS = "id, name, email, unique_token, verification_code, verification_status, created_at"


class NewHireRepository:
    """Repository for new hire data access."""

    def __init__(self, db=None):
        self.db = db or database

    async def ping(self) -> int:
        """Cheap round trip used as a connection check."""
        return await self.db.fetch_val("SELECT count(*) FROM new_hires")

    async def create(
        self,
        name: str,
        email: str,
        unique_token: str,
        verification_code: str,
        verification_status: str = "pending"
    ) -> Dict[str, Any]:
        """Insert a new hire and return the stored row."""
        query = f"""
            INSERT INTO new_hires (name, email, unique_token, verification_code, verification_status)
            VALUES (:name, :email, :unique_token, :verification_code, :verification_status)
            RETURNING {NEW_HIRE_COLUMNS}
        """
        row = await self.db.fetch_one(query, {
            "name": name,
            "email": email,
            "unique_token": unique_token,
            "verification_code": verification_code,
            "verification_status": verification_status
        })
        return dict(row)

    async def list(self) -> List[Dict[str, Any]]:
        query = f"SELECT {NEW_HIRE_COLUMNS} FROM new_hires ORDER BY created_at DESC"
        rows = await self.db.fetch_all(query)
        return [dict(row) for row in rows]

    async def get_by_id(self, new_hire_id: str) -> Optional[Dict[str, Any]]:
        query = f"SELECT {NEW_HIRE_COLUMNS} FROM new_hires WHERE id = :id"
        row = await self.db.fetch_one(query, {"id": new_hire_id})
        if not row:
            return None
        return dict(row)

    async def get_by_token(self, unique_token: str) -> Optional[Dict[str, Any]]:
        query = f"SELECT {NEW_HIRE_COLUMNS} FROM new_hires WHERE unique_token = :token"
        row = await self.db.fetch_one(query, {"token": unique_token})
        if not row:
            return None
        return dict(row)

    async def get_by_verification_code(self, verification_code: str, email: str) -> Optional[Dict[str, Any]]:
        query = f"""
            SELECT {NEW_HIRE_COLUMNS}
            FROM new_hires
            WHERE verification_code = :code AND email = :email
            LIMIT 1
        """
        row = await self.db.fetch_one(query, {"code": verification_code, "email": email})
        if not row:
            return None
        return dict(row)

    async def update_verification_status(self, new_hire_id: str, status: str) -> Optional[Dict[str, Any]]:
        query = f"""
            UPDATE new_hires
            SET verification_status = :status
            WHERE id = :id
            RETURNING {NEW_HIRE_COLUMNS}
        """
        row = await self.db.fetch_one(query, {"id": new_hire_id, "status": status})
        if not row:
            return None
        return dict(row)
