"""
Checklist Service

Combines the task catalogue with one new hire's completion rows and
records tasks as done or not done.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from onboarding.modules import settings
from onboarding.modules.hires.domain.new_hire import NewHire
from onboarding.modules.hires.domain.task import Task, TaskCompletion, TaskWithCompletion, ChecklistProgress
from onboarding.modules.hires.exceptions import NotFoundError, OnboardingError, UnavailableError
from onboarding.modules.hires.repositories.task_repository import TaskRepository
from onboarding.modules.hires.services.new_hire_service import NewHireService
from onboarding.modules.hires.services.validators import is_uuid

logger = logging.getLogger("onboarding.checklist.service")

PROFILE_NOT_FOUND = "Your onboarding profile was not found. Please contact HR for assistance."
NO_TASKS_MESSAGE = "No tasks have been assigned yet. Check back later or contact HR."


class ChecklistService:
    """Service for checklist business logic."""

    def __init__(
        self,
        repository: Optional[TaskRepository] = None,
        new_hire_service: Optional[NewHireService] = None
    ):
        self.repository = repository or TaskRepository()
        self.new_hire_service = new_hire_service or NewHireService()

    async def get_tasks(self) -> List[Task]:
        try:
            rows = await self.repository.list_tasks()
        except Exception as e:
            logger.error(f"[ChecklistService.get_tasks] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error fetching tasks")
        return [Task.from_dict(row) for row in rows]

    async def get_task_completions(self, new_hire_id: str) -> List[TaskCompletion]:
        try:
            rows = await self.repository.list_completions(new_hire_id)
        except Exception as e:
            logger.error(f"[ChecklistService.get_task_completions] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error fetching task completions")
        return [TaskCompletion.from_dict(row) for row in rows]

    async def update_task_completion(self, new_hire_id: str, task_id: str, completed: bool) -> TaskCompletion:
        """
        Set the completion flag for a (new hire, task) pair.

        Updates the existing row when there is one, inserts otherwise.
        completed_at is stamped when completed and cleared when not.
        """
        completed_at = datetime.now(timezone.utc) if completed else None
        logger.debug(f"[ChecklistService.update_task_completion] new_hire_id={new_hire_id}, task_id={task_id}, completed={completed}")

        try:
            existing = await self.repository.get_completion(new_hire_id, task_id)
            if existing:
                row = await self.repository.update_completion(new_hire_id, task_id, completed, completed_at)
            else:
                row = await self.repository.insert_completion(new_hire_id, task_id, completed, completed_at)
        except Exception as e:
            logger.error(f"[ChecklistService.update_task_completion] ERROR: {e}", exc_info=True)
            raise OnboardingError("Error updating task completion")

        return TaskCompletion.from_dict(row)

    async def _resolve_new_hire(self, token: Optional[str]) -> NewHire:
        try:
            new_hire = await self.new_hire_service.get_new_hire_by_token(token)
        except OnboardingError:
            raise UnavailableError("Error connecting to HR system. Please try again later.")
        if not new_hire:
            raise NotFoundError(PROFILE_NOT_FOUND)
        return new_hire

    async def get_checklist(self, token: Optional[str]) -> Dict[str, Any]:
        """Everything the checklist page shows for the holder of a token."""
        new_hire = await self._resolve_new_hire(token)
        logger.info(f"Successfully found new hire: {new_hire.id}")

        try:
            tasks = await self.get_tasks()
        except OnboardingError:
            raise UnavailableError("Unable to load onboarding tasks. Please try again later.")

        completions: List[TaskCompletion] = []
        if tasks:
            try:
                completions = await self.get_task_completions(new_hire.id)
            except OnboardingError as e:
                # an unreadable completion list shows every task as open
                logger.error(f"Error fetching completions: {e.message}")
        else:
            logger.warning("No tasks found in the database")

        by_task = {c.task_id: c for c in completions}
        merged = [TaskWithCompletion.merge(task, by_task.get(task.id)) for task in tasks]
        progress = ChecklistProgress.from_tasks(merged)

        result = {
            "new_hire": new_hire.to_public_dict(),
            "tasks": [t.to_dict() for t in merged],
            "progress": progress.to_dict(),
            "contact_email": settings.HR_CONTACT_EMAIL,
        }
        if not merged:
            result["message"] = NO_TASKS_MESSAGE
        return result

    async def set_task_status(self, token: Optional[str], task_id: str, completed: bool) -> Dict[str, Any]:
        """Toggle one task on the checklist identified by a token."""
        new_hire = await self._resolve_new_hire(token)

        task_row = None
        if is_uuid(task_id):
            try:
                task_row = await self.repository.get_task(task_id)
            except Exception as e:
                logger.error(f"[ChecklistService.set_task_status] ERROR: {e}", exc_info=True)
                raise OnboardingError("Failed to update task status. Please try again.")
        if not task_row:
            raise NotFoundError("Task not found")
        task = Task.from_dict(task_row)

        try:
            completion = await self.update_task_completion(new_hire.id, task.id, completed)
        except OnboardingError:
            raise OnboardingError("Failed to update task status. Please try again.")

        result = {"completion": completion.to_dict()}
        if completed:
            result["message"] = f'Task "{task.task_name}" completed!'
        return result
