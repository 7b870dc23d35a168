"""
repositories/milestone_repo.py
------------------------------
Data access layer for project milestones.
All SQL queries related to the `milestones` table live here.
"""

from datetime import date, timedelta
from typing import Optional

from models.milestone import Milestone
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_non_negative,
    require_range,
    require_text,
)

_DATE_ORDER = "date ASC, id ASC"


class MilestoneRepository(BaseRepository):
    """Read-only queries on the milestones table."""

    table = "milestones"
    model = Milestone
    columns = ("id", "project_id", "name", "description", "date")

    def find_by_project(self, project_id: int) -> list[Milestone]:
        """A project's milestones in date order."""
        require(project_id, "project_id")
        return self._fetch_all(
            "find_by_project", self._select("project_id = %s", order_by=_DATE_ORDER), (project_id,)
        )

    def count_by_project(self, project_id: int) -> int:
        require(project_id, "project_id")
        return self._count("count_by_project", "project_id = %s", (project_id,))

    def find_by_name(self, name: str) -> Optional[Milestone]:
        require_text(name, "name")
        return self._fetch_one("find_by_name", self._select("name = %s", order_by="id ASC", limit=True), (name, 1))

    def find_by_name_containing_ignore_case(self, text: str) -> list[Milestone]:
        return self._fetch_all(
            "find_by_name_containing_ignore_case",
            self._select("name ILIKE %s", order_by=_DATE_ORDER),
            (contains_pattern(text, "text"),),
        )

    def find_by_date_before(self, day: date) -> list[Milestone]:
        require(day, "day")
        return self._fetch_all("find_by_date_before", self._select("date < %s", order_by=_DATE_ORDER), (day,))

    def find_by_date_after(self, day: date) -> list[Milestone]:
        require(day, "day")
        return self._fetch_all("find_by_date_after", self._select("date > %s", order_by=_DATE_ORDER), (day,))

    def find_by_date_between(self, start: date, end: date) -> list[Milestone]:
        require_range(start, end)
        return self._fetch_all(
            "find_by_date_between", self._select("date BETWEEN %s AND %s", order_by=_DATE_ORDER), (start, end)
        )

    def find_upcoming_milestones(
        self, project_id: int, days_ahead: int, today: Optional[date] = None
    ) -> list[Milestone]:
        """Milestones of a project dated within [today, today + days_ahead]."""
        require(project_id, "project_id")
        require_non_negative(days_ahead, "days_ahead")
        today = today or date.today()
        return self._fetch_all(
            "find_upcoming_milestones",
            self._select("project_id = %s AND date BETWEEN %s AND %s", order_by=_DATE_ORDER),
            (project_id, today, today + timedelta(days=days_ahead)),
        )

    def find_overdue_milestones(self, project_id: int, reference: Optional[date] = None) -> list[Milestone]:
        """
        Milestones of a project dated strictly before `reference`
        (default: today). Milestones carry no completion flag, so every
        past milestone counts.
        """
        require(project_id, "project_id")
        reference = reference or date.today()
        return self._fetch_all(
            "find_overdue_milestones",
            self._select("project_id = %s AND date < %s", order_by=_DATE_ORDER),
            (project_id, reference),
        )
