"""
models/milestone.py
-------------------
Domain model for project milestones.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Milestone:
    """A dated checkpoint inside a project."""
    project_id: int
    name: str
    date: date
    description: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} @ {self.date}"
