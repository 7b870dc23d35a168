"""
repositories/component_repo.py
------------------------------
Data access layer for purchased components.
All SQL queries related to the `components` table live here.
"""

from datetime import date, timedelta
from typing import Optional

from models.component import Component
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_non_negative,
    require_range,
    require_text,
)


class ComponentRepository(BaseRepository):
    """Read-only queries on the components table."""

    table = "components"
    model = Component
    columns = (
        "id", "part_number", "name", "description",
        "expected_delivery", "actual_delivery", "delivered",
    )

    # ── LOOKUP ────────────────────────────────────────────

    def find_by_part_number(self, part_number: str) -> Optional[Component]:
        """Exact (case-sensitive) part number match."""
        require(part_number, "part_number")
        return self._fetch_one(
            "find_by_part_number",
            self._select("part_number = %s", order_by=""),
            (part_number,),
        )

    def find_by_part_number_ignore_case(self, part_number: str) -> Optional[Component]:
        require(part_number, "part_number")
        return self._fetch_one(
            "find_by_part_number_ignore_case",
            self._select("LOWER(part_number) = LOWER(%s)", order_by=""),
            (part_number,),
        )

    def exists_by_part_number_ignore_case(self, part_number: str) -> bool:
        require(part_number, "part_number")
        return self._exists(
            "exists_by_part_number_ignore_case",
            "LOWER(part_number) = LOWER(%s)",
            (part_number,),
        )

    def find_by_name(self, name: str) -> list[Component]:
        require_text(name, "name")
        return self._fetch_all("find_by_name", self._select("name = %s"), (name,))

    def find_by_name_containing_ignore_case(self, text: str) -> list[Component]:
        return self._fetch_all(
            "find_by_name_containing_ignore_case",
            self._select("name ILIKE %s", order_by="name ASC, id ASC"),
            (contains_pattern(text, "text"),),
        )

    # ── DELIVERY STATE ────────────────────────────────────

    def find_by_delivered(self, delivered: bool) -> list[Component]:
        require(delivered, "delivered")
        return self._fetch_all("find_by_delivered", self._select("delivered = %s"), (delivered,))

    def count_by_delivered(self, delivered: bool) -> int:
        require(delivered, "delivered")
        return self._count("count_by_delivered", "delivered = %s", (delivered,))

    def find_by_expected_delivery_before(self, day: date) -> list[Component]:
        require(day, "day")
        return self._fetch_all(
            "find_by_expected_delivery_before",
            self._select("expected_delivery < %s", order_by="expected_delivery ASC, id ASC"),
            (day,),
        )

    def find_by_expected_delivery_after(self, day: date) -> list[Component]:
        require(day, "day")
        return self._fetch_all(
            "find_by_expected_delivery_after",
            self._select("expected_delivery > %s", order_by="expected_delivery ASC, id ASC"),
            (day,),
        )

    def find_by_expected_delivery_between(self, start: date, end: date) -> list[Component]:
        """Expected delivery within [start, end], both ends inclusive."""
        require_range(start, end)
        return self._fetch_all(
            "find_by_expected_delivery_between",
            self._select("expected_delivery BETWEEN %s AND %s", order_by="expected_delivery ASC, id ASC"),
            (start, end),
        )

    def find_delivered_after(self, day: date) -> list[Component]:
        """Components that have arrived, with an actual delivery after `day`."""
        require(day, "day")
        return self._fetch_all(
            "find_delivered_after",
            self._select("delivered = TRUE AND actual_delivery > %s", order_by="actual_delivery ASC, id ASC"),
            (day,),
        )

    def find_overdue_components(self, reference: Optional[date] = None) -> list[Component]:
        """
        Components not yet delivered whose expected delivery date is
        strictly before `reference` (default: today).
        """
        reference = reference or date.today()
        return self._fetch_all(
            "find_overdue_components",
            self._select(
                "delivered = FALSE AND expected_delivery IS NOT NULL AND expected_delivery < %s",
                order_by="expected_delivery ASC, id ASC",
            ),
            (reference,),
        )

    def find_due_soon(self, days_ahead: int, today: Optional[date] = None) -> list[Component]:
        """Undelivered components expected within [today, today + days_ahead]."""
        require_non_negative(days_ahead, "days_ahead")
        today = today or date.today()
        return self._fetch_all(
            "find_due_soon",
            self._select(
                "delivered = FALSE AND expected_delivery BETWEEN %s AND %s",
                order_by="expected_delivery ASC, id ASC",
            ),
            (today, today + timedelta(days=days_ahead)),
        )

    # ── RELATIONSHIPS ─────────────────────────────────────

    def find_by_required_task(self, task_id: int) -> list[Component]:
        """Components a task needs before it can be done."""
        require(task_id, "task_id")
        sql = f"""
            SELECT DISTINCT {self._cols("c")}
            FROM components c
            JOIN component_tasks ct ON ct.component_id = c.id
            WHERE ct.task_id = %s
            ORDER BY c.id ASC;
        """
        return self._fetch_all("find_by_required_task", sql, (task_id,))
