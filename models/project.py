"""
models/project.py
-----------------
Domain model for build-season projects.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Project:
    """
    Represents a project (usually one robot build season).

    Attributes:
        id: Database primary key (None for new records).
        name: Project name.
        start_date: First day of work.
        hard_deadline: Date the robot must be finished (e.g. bag day).
        goal_end_date: Internal target date, usually before the hard deadline.
        description: Optional free text.
    """
    name: str
    start_date: date
    hard_deadline: date
    goal_end_date: Optional[date] = None
    description: Optional[str] = None
    id: Optional[int] = None

    def is_active_on(self, day: date) -> bool:
        """True if `day` falls between the start date and the hard deadline."""
        return self.start_date <= day <= self.hard_deadline

    def __str__(self) -> str:
        return f"{self.name} ({self.start_date} -> {self.hard_deadline})"
