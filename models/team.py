"""
models/team.py
--------------
Domain models for the team structure: subteams, their subsystems and
the members on the roster.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SubsystemStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    TESTING = "TESTING"
    ISSUES = "ISSUES"


@dataclass
class Subteam:
    """
    A group of members (mechanical, programming, ...).

    Attributes:
        name: Unique regardless of case.
        color_code: Hex color used in charts.
        specialties: Comma-separated list of focus areas.
    """
    name: str
    color_code: Optional[str] = None
    specialties: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.name


@dataclass
class Subsystem:
    """
    A robot subsystem (drivetrain, intake, ...).

    Attributes:
        name: Unique regardless of case.
        status: Build status.
        responsible_subteam_id: Owning subteam, None when unassigned.
        responsible_member_id: Member accountable for it, if any.
    """
    name: str
    status: SubsystemStatus = SubsystemStatus.NOT_STARTED
    description: Optional[str] = None
    responsible_subteam_id: Optional[int] = None
    responsible_member_id: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.status = SubsystemStatus(self.status)

    def __str__(self) -> str:
        return f"{self.name} [{self.status.value}]"


@dataclass
class TeamMember:
    """
    A person on the team roster.

    Attributes:
        username: Unique regardless of case.
        email: Unique regardless of case.
        skills: Free-text list of skills.
        leader: True for subteam/team leads.
        subteam_id: None for members not yet placed on a subteam.
    """
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: Optional[str] = None
    leader: bool = False
    subteam_id: Optional[int] = None
    id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    def __str__(self) -> str:
        return self.full_name or self.username
