"""
Domain Models

Pure data models for new hires, tasks and their completion state.
"""

from .new_hire import NewHire, VERIFICATION_STATUSES
from .task import Task, TaskCompletion, TaskWithCompletion, ChecklistProgress

__all__ = [
    "NewHire",
    "VERIFICATION_STATUSES",
    "Task",
    "TaskCompletion",
    "TaskWithCompletion",
    "ChecklistProgress",
]
