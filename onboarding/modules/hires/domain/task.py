"""
Task Domain Models
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class Task:
    """A named onboarding step."""
    id: str
    task_name: str
    task_description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=str(data["id"]),
            task_name=data["task_name"],
            task_description=data.get("task_description") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "task_name": self.task_name,
            "task_description": self.task_description,
        }


@dataclass
class TaskCompletion:
    """Completion flag for one (new hire, task) pair."""
    id: str
    new_hire_id: str
    task_id: str
    completed: bool
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TaskCompletion":
        return cls(
            id=str(data["id"]),
            new_hire_id=str(data["new_hire_id"]),
            task_id=str(data["task_id"]),
            completed=bool(data.get("completed")),
            completed_at=data.get("completed_at"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "new_hire_id": self.new_hire_id,
            "task_id": self.task_id,
            "completed": self.completed,
            "completed_at": self.completed_at,
        }


@dataclass
class TaskWithCompletion(Task):
    completed: bool = False

    @classmethod
    def merge(cls, task: Task, completion: Optional[TaskCompletion]) -> "TaskWithCompletion":
        return cls(
            id=task.id,
            task_name=task.task_name,
            task_description=task.task_description,
            completed=completion.completed if completion else False,
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["completed"] = self.completed
        return data


@dataclass
class ChecklistProgress:
    completed: int
    total: int

    @classmethod
    def from_tasks(cls, tasks: List[TaskWithCompletion]) -> "ChecklistProgress":
        return cls(completed=sum(1 for t in tasks if t.completed), total=len(tasks))

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 0
        # half-up, not banker's rounding
        return int(self.completed * 100 / self.total + 0.5)

    @property
    def all_completed(self) -> bool:
        return self.total > 0 and self.completed == self.total

    def to_dict(self) -> dict:
        return {
            "completed": self.completed,
            "total": self.total,
            "percent": self.percent,
            "all_completed": self.all_completed,
        }
