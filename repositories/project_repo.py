"""
repositories/project_repo.py
----------------------------
Data access layer for projects.
All SQL queries related to the `projects` table live here.
"""

from datetime import date, timedelta
from typing import Optional

from models.project import Project
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_non_negative,
    require_range,
    require_text,
)

_DEADLINE_ORDER = "hard_deadline ASC, id ASC"


class ProjectRepository(BaseRepository):
    """Read-only queries on the projects table."""

    table = "projects"
    model = Project
    columns = ("id", "name", "description", "start_date", "goal_end_date", "hard_deadline")

    # ── LOOKUP ────────────────────────────────────────────

    def find_by_name(self, name: str) -> list[Project]:
        require_text(name, "name")
        return self._fetch_all("find_by_name", self._select("name = %s"), (name,))

    def find_by_name_containing_ignore_case(self, text: str) -> list[Project]:
        return self._fetch_all(
            "find_by_name_containing_ignore_case",
            self._select("name ILIKE %s", order_by="name ASC, id ASC"),
            (contains_pattern(text, "text"),),
        )

    def find_all_order_by_hard_deadline(self) -> list[Project]:
        return self._fetch_all("find_all_order_by_hard_deadline", self._select(order_by=_DEADLINE_ORDER))

    # ── DATE RANGES ───────────────────────────────────────

    def find_by_start_date_after(self, day: date) -> list[Project]:
        require(day, "day")
        return self._fetch_all(
            "find_by_start_date_after", self._select("start_date > %s", order_by="start_date ASC, id ASC"), (day,)
        )

    def find_by_start_date_before(self, day: date) -> list[Project]:
        require(day, "day")
        return self._fetch_all(
            "find_by_start_date_before", self._select("start_date < %s", order_by="start_date ASC, id ASC"), (day,)
        )

    def find_by_hard_deadline_before(self, day: date) -> list[Project]:
        require(day, "day")
        return self._fetch_all(
            "find_by_hard_deadline_before", self._select("hard_deadline < %s", order_by=_DEADLINE_ORDER), (day,)
        )

    def find_by_hard_deadline_after(self, day: date) -> list[Project]:
        require(day, "day")
        return self._fetch_all(
            "find_by_hard_deadline_after", self._select("hard_deadline > %s", order_by=_DEADLINE_ORDER), (day,)
        )

    def find_by_hard_deadline_between(self, start: date, end: date) -> list[Project]:
        require_range(start, end)
        return self._fetch_all(
            "find_by_hard_deadline_between",
            self._select("hard_deadline BETWEEN %s AND %s", order_by=_DEADLINE_ORDER),
            (start, end),
        )

    def find_by_goal_end_date_before(self, day: date) -> list[Project]:
        require(day, "day")
        return self._fetch_all(
            "find_by_goal_end_date_before",
            self._select("goal_end_date < %s", order_by="goal_end_date ASC, id ASC"),
            (day,),
        )

    # ── STATUS ────────────────────────────────────────────

    def find_active_projects(self, today: Optional[date] = None) -> list[Project]:
        """Projects that have started and whose hard deadline has not passed."""
        today = today or date.today()
        return self._fetch_all(
            "find_active_projects",
            self._select("start_date <= %s AND hard_deadline >= %s", order_by=_DEADLINE_ORDER),
            (today, today),
        )

    def count_active_projects(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return self._count("count_active_projects", "start_date <= %s AND hard_deadline >= %s", (today, today))

    def find_projects_due_soon(self, days_ahead: int, today: Optional[date] = None) -> list[Project]:
        """Projects whose hard deadline falls within [today, today + days_ahead]."""
        require_non_negative(days_ahead, "days_ahead")
        today = today or date.today()
        return self._fetch_all(
            "find_projects_due_soon",
            self._select("hard_deadline BETWEEN %s AND %s", order_by=_DEADLINE_ORDER),
            (today, today + timedelta(days=days_ahead)),
        )

    def find_overdue_projects(self, reference: Optional[date] = None) -> list[Project]:
        """
        Projects past their hard deadline (strictly before `reference`)
        that still have at least one incomplete task.
        """
        reference = reference or date.today()
        return self._fetch_all(
            "find_overdue_projects",
            self._select(
                "hard_deadline < %s AND EXISTS ("
                "SELECT 1 FROM tasks t WHERE t.project_id = projects.id AND t.completed = FALSE)",
                order_by=_DEADLINE_ORDER,
            ),
            (reference,),
        )
