"""
models/meeting.py
-----------------
Domain model for team meetings and build sessions.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional


class MeetingStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    POSTPONED = "POSTPONED"


class MeetingType(str, Enum):
    TEAM_MEETING = "TEAM_MEETING"
    BUILD_SESSION = "BUILD_SESSION"
    DESIGN_REVIEW = "DESIGN_REVIEW"
    STRATEGY_SESSION = "STRATEGY_SESSION"
    COMPETITION_PREP = "COMPETITION_PREP"
    OUTREACH = "OUTREACH"


class MeetingPriority(str, Enum):
    EMERGENCY = "EMERGENCY"
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass
class Meeting:
    """
    Represents a meeting on a single date.

    Attributes:
        project_id: Owning project.
        date: Day of the meeting.
        start_time / end_time: Time window on that day.
        location: Physical location (may be empty for virtual meetings).
        virtual_meeting_url: Video call link (may be empty for in-person meetings).
        status / meeting_type / priority: Scheduling metadata.
        is_recurring: Part of a recurring series (see recurrence_pattern).
        requires_preparation: Attendees must prepare beforehand.
        action_items: Follow-ups captured during the meeting.
    """
    project_id: int
    date: date
    start_time: time
    end_time: time
    title: Optional[str] = None
    location: Optional[str] = None
    virtual_meeting_url: Optional[str] = None
    status: MeetingStatus = MeetingStatus.SCHEDULED
    meeting_type: MeetingType = MeetingType.TEAM_MEETING
    priority: MeetingPriority = MeetingPriority.MEDIUM
    is_recurring: bool = False
    recurrence_pattern: Optional[str] = None  # 'WEEKLY' | 'BIWEEKLY' | 'MONTHLY'
    requires_preparation: bool = False
    action_items: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.status = MeetingStatus(self.status)
        self.meeting_type = MeetingType(self.meeting_type)
        self.priority = MeetingPriority(self.priority)

    def is_virtual(self) -> bool:
        return bool(self.virtual_meeting_url)

    def is_hybrid(self) -> bool:
        return bool(self.location) and bool(self.virtual_meeting_url)

    def __str__(self) -> str:
        label = self.title or self.meeting_type.value
        return f"{label}: {self.date} {self.start_time:%H:%M}-{self.end_time:%H:%M}"
