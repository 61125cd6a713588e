"""
Data Access Layer (Repositories)

Each method is a single statement against the managed database.
"""

from .new_hire_repository import NewHireRepository
from .task_repository import TaskRepository

__all__ = [
    "NewHireRepository",
    "TaskRepository",
]
