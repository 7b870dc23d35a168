"""
repositories/meeting_repo.py
----------------------------
Data access layer for meetings.
All SQL queries related to the `meetings` table live here.
"""

from datetime import date, datetime, time
from typing import Optional

from models.meeting import Meeting, MeetingPriority, MeetingStatus, MeetingType
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_enum,
    require_range,
)

_CALENDAR_ORDER = "date ASC, start_time ASC, id ASC"

# Two time windows on the same date overlap unless one ends exactly when
# the other starts (or earlier).
_OVERLAP = (
    "date = %s AND ("
    "(start_time <= %s AND end_time > %s) OR "
    "(start_time < %s AND end_time >= %s) OR "
    "(start_time >= %s AND end_time <= %s))"
)

_PRIORITY_RANK = (
    "CASE priority "
    "WHEN 'EMERGENCY' THEN 1 "
    "WHEN 'CRITICAL' THEN 2 "
    "WHEN 'HIGH' THEN 3 "
    "WHEN 'MEDIUM' THEN 4 "
    "WHEN 'LOW' THEN 5 "
    "END"
)


def _overlap_params(day: date, start_time: time, end_time: time) -> tuple:
    return (day, start_time, start_time, end_time, end_time, start_time, end_time)


class MeetingRepository(BaseRepository):
    """Read-only queries on the meetings table."""

    table = "meetings"
    model = Meeting
    columns = (
        "id", "project_id", "title", "date", "start_time", "end_time",
        "location", "virtual_meeting_url", "status", "meeting_type", "priority",
        "is_recurring", "recurrence_pattern", "requires_preparation",
        "action_items", "notes", "created_by", "created_at",
    )

    # ── BY PROJECT ────────────────────────────────────────

    def find_by_project(self, project_id: int) -> list[Meeting]:
        require(project_id, "project_id")
        return self._fetch_all(
            "find_by_project",
            self._select("project_id = %s", order_by=_CALENDAR_ORDER),
            (project_id,),
        )

    def count_by_project(self, project_id: int) -> int:
        require(project_id, "project_id")
        return self._count("count_by_project", "project_id = %s", (project_id,))

    def find_by_project_and_date_between(self, project_id: int, start: date, end: date) -> list[Meeting]:
        require(project_id, "project_id")
        require_range(start, end)
        return self._fetch_all(
            "find_by_project_and_date_between",
            self._select("project_id = %s AND date BETWEEN %s AND %s", order_by=_CALENDAR_ORDER),
            (project_id, start, end),
        )

    def find_upcoming_by_project(self, project_id: int, today: Optional[date] = None) -> list[Meeting]:
        """Meetings of a project from `today` (inclusive) onwards."""
        require(project_id, "project_id")
        today = today or date.today()
        return self._fetch_all(
            "find_upcoming_by_project",
            self._select("project_id = %s AND date >= %s", order_by=_CALENDAR_ORDER),
            (project_id, today),
        )

    def find_next_meeting_for_project(
        self,
        project_id: int,
        today: Optional[date] = None,
        now: Optional[time] = None,
    ) -> Optional[Meeting]:
        """
        The first meeting that has not started yet: a later date, or
        today with a start time after `now`.

        Without `today` both default to the current clock. With `today`
        but no `now`, `now` is midnight, so any meeting starting later
        that date counts.
        """
        require(project_id, "project_id")
        if today is None:
            current = datetime.now()
            today = current.date()
            now = now or current.time()
        elif now is None:
            now = time.min
        return self._fetch_one(
            "find_next_meeting_for_project",
            self._select(
                "project_id = %s AND (date > %s OR (date = %s AND start_time > %s))",
                order_by=_CALENDAR_ORDER,
                limit=True,
            ),
            (project_id, today, today, now, 1),
        )

    def find_by_project_and_status(self, project_id: int, status: MeetingStatus) -> list[Meeting]:
        require(project_id, "project_id")
        return self._fetch_all(
            "find_by_project_and_status",
            self._select("project_id = %s AND status = %s", order_by=_CALENDAR_ORDER),
            (project_id, require_enum(status, MeetingStatus, "status")),
        )

    # ── BY DATE ───────────────────────────────────────────

    def find_by_date(self, day: date) -> list[Meeting]:
        require(day, "day")
        return self._fetch_all("find_by_date", self._select("date = %s", order_by=_CALENDAR_ORDER), (day,))

    def find_by_date_after(self, day: date) -> list[Meeting]:
        require(day, "day")
        return self._fetch_all("find_by_date_after", self._select("date > %s", order_by=_CALENDAR_ORDER), (day,))

    def find_by_date_on_or_after(self, day: date) -> list[Meeting]:
        require(day, "day")
        return self._fetch_all(
            "find_by_date_on_or_after", self._select("date >= %s", order_by=_CALENDAR_ORDER), (day,)
        )

    def find_by_date_between(self, start: date, end: date) -> list[Meeting]:
        require_range(start, end)
        return self._fetch_all(
            "find_by_date_between",
            self._select("date BETWEEN %s AND %s", order_by=_CALENDAR_ORDER),
            (start, end),
        )

    def find_todays_meetings(self, today: Optional[date] = None) -> list[Meeting]:
        today = today or date.today()
        return self._fetch_all(
            "find_todays_meetings", self._select("date = %s", order_by="start_time ASC, id ASC"), (today,)
        )

    def find_meetings_between_dates_ordered(self, start_of_week: date, end_of_week: date) -> list[Meeting]:
        """Calendar view of a week (or any inclusive date span)."""
        require_range(start_of_week, end_of_week, "start_of_week", "end_of_week")
        return self._fetch_all(
            "find_meetings_between_dates_ordered",
            self._select("date >= %s AND date <= %s", order_by=_CALENDAR_ORDER),
            (start_of_week, end_of_week),
        )

    def find_meetings_in_progress(self, today: date, now: time) -> list[Meeting]:
        """Meetings that have started but not yet ended at `now`."""
        require(today, "today")
        require(now, "now")
        return self._fetch_all(
            "find_meetings_in_progress",
            self._select("date = %s AND start_time <= %s AND end_time > %s", order_by="start_time ASC, id ASC"),
            (today, now, now),
        )

    # ── SCHEDULING CONFLICTS ──────────────────────────────

    def find_overlapping_meetings(self, day: date, start_time: time, end_time: time) -> list[Meeting]:
        """
        Meetings on `day` whose time window overlaps [start_time, end_time).

        A meeting ending exactly at `start_time`, or starting exactly at
        `end_time`, is not an overlap.
        """
        require(day, "day")
        require_range(start_time, end_time, "start_time", "end_time")
        return self._fetch_all(
            "find_overlapping_meetings",
            self._select(_OVERLAP, order_by="start_time ASC, id ASC"),
            _overlap_params(day, start_time, end_time),
        )

    def find_scheduling_conflicts(
        self, day: date, start_time: time, end_time: time, exclude_meeting_id: int
    ) -> list[Meeting]:
        """Same as find_overlapping_meetings, ignoring the meeting being rescheduled."""
        require(day, "day")
        require_range(start_time, end_time, "start_time", "end_time")
        require(exclude_meeting_id, "exclude_meeting_id")
        return self._fetch_all(
            "find_scheduling_conflicts",
            self._select(f"id <> %s AND {_OVERLAP}", order_by="start_time ASC, id ASC"),
            (exclude_meeting_id,) + _overlap_params(day, start_time, end_time),
        )

    # ── BY ATTRIBUTE ──────────────────────────────────────

    def find_by_status(self, status: MeetingStatus) -> list[Meeting]:
        return self._fetch_all(
            "find_by_status",
            self._select("status = %s", order_by=_CALENDAR_ORDER),
            (require_enum(status, MeetingStatus, "status"),),
        )

    def count_by_status(self, status: MeetingStatus) -> int:
        return self._count("count_by_status", "status = %s", (require_enum(status, MeetingStatus, "status"),))

    def find_by_meeting_type(self, meeting_type: MeetingType) -> list[Meeting]:
        return self._fetch_all(
            "find_by_meeting_type",
            self._select("meeting_type = %s", order_by=_CALENDAR_ORDER),
            (require_enum(meeting_type, MeetingType, "meeting_type"),),
        )

    def find_by_priority(self, priority: MeetingPriority) -> list[Meeting]:
        return self._fetch_all(
            "find_by_priority",
            self._select("priority = %s", order_by=_CALENDAR_ORDER),
            (require_enum(priority, MeetingPriority, "priority"),),
        )

    def find_by_location_containing_ignore_case(self, text: str) -> list[Meeting]:
        return self._fetch_all(
            "find_by_location_containing_ignore_case",
            self._select("location ILIKE %s", order_by=_CALENDAR_ORDER),
            (contains_pattern(text, "text"),),
        )

    def find_virtual_meetings(self) -> list[Meeting]:
        return self._fetch_all(
            "find_virtual_meetings",
            self._select(
                "virtual_meeting_url IS NOT NULL AND virtual_meeting_url <> ''",
                order_by=_CALENDAR_ORDER,
            ),
        )

    def find_hybrid_meetings(self) -> list[Meeting]:
        """Meetings with both a physical location and a video link."""
        return self._fetch_all(
            "find_hybrid_meetings",
            self._select(
                "location IS NOT NULL AND location <> '' "
                "AND virtual_meeting_url IS NOT NULL AND virtual_meeting_url <> ''",
                order_by=_CALENDAR_ORDER,
            ),
        )

    def find_recurring_meetings(self) -> list[Meeting]:
        return self._fetch_all("find_recurring_meetings", self._select("is_recurring = TRUE", order_by=_CALENDAR_ORDER))

    def find_requiring_preparation(self) -> list[Meeting]:
        return self._fetch_all(
            "find_requiring_preparation", self._select("requires_preparation = TRUE", order_by=_CALENDAR_ORDER)
        )

    def find_meetings_with_action_items(self) -> list[Meeting]:
        return self._fetch_all(
            "find_meetings_with_action_items",
            self._select("action_items IS NOT NULL AND action_items <> ''", order_by=_CALENDAR_ORDER),
        )

    def find_all_ordered_by_priority_and_date(self) -> list[Meeting]:
        """Every meeting, most urgent priority first, then chronologically."""
        return self._fetch_all(
            "find_all_ordered_by_priority_and_date",
            self._select(order_by=f"{_PRIORITY_RANK} ASC, {_CALENDAR_ORDER}"),
        )
