"""
Task Repository

Handles database operations for the tasks and task_completions tables.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any
from onboarding.modules.database import database

logger = logging.getLogger("onboarding.tasks.repository")

COMPLETION_COLUMNS = "id, new_hire_id, task_id, completed, completed_at"


class TaskRepository:
    """Repository for tasks and per-hire completion rows."""

    def __init__(self, db=None):
        self.db = db or database

    async def list_tasks(self) -> List[Dict[str, Any]]:
        query = """
            SELECT id, task_name, task_description
            FROM tasks
            ORDER BY created_at, task_name
        """
        rows = await self.db.fetch_all(query)
        return [dict(row) for row in rows]

    async def get_task(self, task_id: str) -> Optional[Dict[str, Any]]:
        query = "SELECT id, task_name, task_description FROM tasks WHERE id = :id"
        row = await self.db.fetch_one(query, {"id": task_id})
        if not row:
            return None
        return dict(row)

    async def list_completions(self, new_hire_id: str) -> List[Dict[str, Any]]:
        query = f"SELECT {COMPLETION_COLUMNS} FROM task_completions WHERE new_hire_id = :new_hire_id"
        rows = await self.db.fetch_all(query, {"new_hire_id": new_hire_id})
        return [dict(row) for row in rows]

    async def get_completion(self, new_hire_id: str, task_id: str) -> Optional[Dict[str, Any]]:
        query = f"""
            SELECT {COMPLETION_COLUMNS}
            FROM task_completions
            WHERE new_hire_id = :new_hire_id AND task_id = :task_id
        """
        row = await self.db.fetch_one(query, {"new_hire_id": new_hire_id, "task_id": task_id})
        if not row:
            return None
        return dict(row)

    async def update_completion(
        self,
        new_hire_id: str,
        task_id: str,
        completed: bool,
        completed_at: Optional[datetime]
    ) -> Dict[str, Any]:
        query = f"""
            UPDATE task_completions
            SET completed = :completed, completed_at = :completed_at
            WHERE new_hire_id = :new_hire_id AND task_id = :task_id
            RETURNING {COMPLETION_COLUMNS}
        """
        row = await self.db.fetch_one(query, {
            "new_hire_id": new_hire_id,
            "task_id": task_id,
            "completed": completed,
            "completed_at": completed_at
        })
        return dict(row)

    async def insert_completion(
        self,
        new_hire_id: str,
        task_id: str,
        completed: bool,
        completed_at: Optional[datetime]
    ) -> Dict[str, Any]:
        query = f"""
            INSERT INTO task_completions (new_hire_id, task_id, completed, completed_at)
            VALUES (:new_hire_id, :task_id, :completed, :completed_at)
            RETURNING {COMPLETION_COLUMNS}
        """
        row = await self.db.fetch_one(query, {
            "new_hire_id": new_hire_id,
            "task_id": task_id,
            "completed": completed,
            "completed_at": completed_at
        })
        return dict(row)
