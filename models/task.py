"""
models/task.py
--------------
Domain model for project tasks.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class DependencyType(str, Enum):
    """How a dependent task relates to its prerequisite."""
    FINISH_TO_START = "FINISH_TO_START"
    START_TO_START = "START_TO_START"
    FINISH_TO_FINISH = "FINISH_TO_FINISH"
    START_TO_FINISH = "START_TO_FINISH"
    BLOCKING = "BLOCKING"
    SOFT = "SOFT"


@dataclass
class Task:
    """
    Represents a unit of work inside a project.

    Attributes:
        id: Database primary key (None for new records).
        project_id: Owning project.
        subsystem_id: Subsystem the work is for (optional).
        title: Short description.
        start_date / end_date: Planned window; end_date drives "overdue".
        progress: Percent complete, 0-100.
        priority: LOW, MEDIUM, HIGH or CRITICAL.
        completed: Terminal flag, set by the service layer.

    Assigned members, required components and dependency edges live in
    association tables and are reached through the repositories.
    """
    project_id: int
    title: str
    subsystem_id: Optional[int] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = 0
    priority: TaskPriority = TaskPriority.MEDIUM
    completed: bool = False
    id: Optional[int] = None

    def __post_init__(self):
        self.priority = TaskPriority(self.priority)

    def is_overdue(self, reference: date) -> bool:
        return not self.completed and self.end_date is not None and self.end_date < reference

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        return f"[{mark}] {self.title} ({self.priority.value})"
