"""
models/project_template.py
--------------------------
Domain model for reusable subsystem project templates.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SubsystemType(str, Enum):
    DRIVETRAIN = "DRIVETRAIN"
    INTAKE = "INTAKE"
    SHOOTER = "SHOOTER"
    CLIMBER = "CLIMBER"
    ELEVATOR = "ELEVATOR"
    ARM = "ARM"
    ELECTRICAL = "ELECTRICAL"
    PNEUMATICS = "PNEUMATICS"
    VISION = "VISION"
    CONTROLS = "CONTROLS"
    OTHER = "OTHER"


class DifficultyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


@dataclass
class ProjectTemplate:
    """
    A template describing how to build one kind of subsystem.

    Templates are never deleted; they are soft-deactivated with `is_active`.
    `parallel_development` marks templates that can be built alongside
    other subsystems. `build_priority` runs from 1 (highest) to 10.
    """
    name: str
    subsystem_type: SubsystemType
    difficulty_level: DifficultyLevel = DifficultyLevel.INTERMEDIATE
    description: Optional[str] = None
    implementation_type: Optional[str] = None  # e.g. 'West Coast Drive'
    estimated_weeks: int = 0
    team_size: int = 0
    is_active: bool = True
    parallel_development: bool = True
    build_priority: int = 5
    usage_count: int = 0
    last_used_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.subsystem_type = SubsystemType(self.subsystem_type)
        self.difficulty_level = DifficultyLevel(self.difficulty_level)
