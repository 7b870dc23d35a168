"""
repositories/task_repo.py
-------------------------
Data access layer for tasks.
All SQL queries related to the `tasks` table live here, including the
traversals of the task_assignments, component_tasks and task_dependencies
association tables that return tasks.

Dependency edges point from a prerequisite task to a dependent task and
are only followed while active.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from models.task import DependencyType, Task, TaskPriority
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require,
    require_enum,
    require_non_negative,
    require_positive,
)

_DUE_ORDER = "end_date ASC NULLS LAST, id ASC"


class TaskRepository(BaseRepository):
    """Read-only queries on the tasks table."""

    table = "tasks"
    model = Task
    columns = (
        "id", "project_id", "subsystem_id", "title", "description",
        "start_date", "end_date", "progress", "priority", "completed",
    )

    # ── BY OWNER ──────────────────────────────────────────

    def find_by_project(self, project_id: int) -> list[Task]:
        require(project_id, "project_id")
        return self._fetch_all("find_by_project", self._select("project_id = %s"), (project_id,))

    def find_by_subsystem(self, subsystem_id: int) -> list[Task]:
        require(subsystem_id, "subsystem_id")
        return self._fetch_all("find_by_subsystem", self._select("subsystem_id = %s"), (subsystem_id,))

    def count_by_project(self, project_id: int) -> int:
        require(project_id, "project_id")
        return self._count("count_by_project", "project_id = %s", (project_id,))

    def count_completed_by_project(self, project_id: int) -> int:
        require(project_id, "project_id")
        return self._count("count_completed_by_project", "project_id = %s AND completed = TRUE", (project_id,))

    # ── BY ASSOCIATION ────────────────────────────────────

    def find_by_assigned_member(self, member_id: int) -> list[Task]:
        """Tasks a team member is assigned to."""
        require(member_id, "member_id")
        sql = f"""
            SELECT {self._cols("t")}
            FROM tasks t
            JOIN task_assignments ta ON ta.task_id = t.id
            WHERE ta.team_member_id = %s
            ORDER BY t.id ASC;
        """
        return self._fetch_all("find_by_assigned_member", sql, (member_id,))

    def find_assigned_to_members(self, member_ids: Sequence[int]) -> list[Task]:
        """Tasks assigned to any of the given members, each task once."""
        require(member_ids, "member_ids")
        if not member_ids:
            return []
        return self._fetch_all(
            "find_assigned_to_members",
            self._select(
                "id IN (SELECT task_id FROM task_assignments WHERE team_member_id = ANY(%s::bigint[]))"
            ),
            (list(member_ids),),
        )

    def find_by_required_component(self, component_id: int) -> list[Task]:
        """Tasks waiting on a component."""
        require(component_id, "component_id")
        sql = f"""
            SELECT {self._cols("t")}
            FROM tasks t
            JOIN component_tasks ct ON ct.task_id = t.id
            WHERE ct.component_id = %s
            ORDER BY t.id ASC;
        """
        return self._fetch_all("find_by_required_component", sql, (component_id,))

    # ── STATE ─────────────────────────────────────────────

    def find_by_completed(self, completed: bool) -> list[Task]:
        require(completed, "completed")
        return self._fetch_all("find_by_completed", self._select("completed = %s"), (completed,))

    def find_by_priority(self, priority: TaskPriority) -> list[Task]:
        return self._fetch_all(
            "find_by_priority",
            self._select("priority = %s"),
            (require_enum(priority, TaskPriority, "priority"),),
        )

    def find_by_end_date_before(self, day: date) -> list[Task]:
        require(day, "day")
        return self._fetch_all("find_by_end_date_before", self._select("end_date < %s", order_by=_DUE_ORDER), (day,))

    def find_by_title_containing_ignore_case(self, text: str) -> list[Task]:
        return self._fetch_all(
            "find_by_title_containing_ignore_case",
            self._select("title ILIKE %s"),
            (contains_pattern(text, "text"),),
        )

    def find_incomplete_by_project(self, project_id: int) -> list[Task]:
        require(project_id, "project_id")
        return self._fetch_all(
            "find_incomplete_by_project",
            self._select("project_id = %s AND completed = FALSE"),
            (project_id,),
        )

    def find_tasks_due_soon(self, project_id: int, days_ahead: int, today: Optional[date] = None) -> list[Task]:
        """Incomplete tasks of a project ending within [today, today + days_ahead]."""
        require(project_id, "project_id")
        require_non_negative(days_ahead, "days_ahead")
        today = today or date.today()
        return self._fetch_all(
            "find_tasks_due_soon",
            self._select(
                "project_id = %s AND completed = FALSE AND end_date IS NOT NULL "
                "AND end_date >= %s AND end_date <= %s",
                order_by=_DUE_ORDER,
            ),
            (project_id, today, today + timedelta(days=days_ahead)),
        )

    def find_overdue_by_project(self, project_id: int, reference: Optional[date] = None) -> list[Task]:
        """Incomplete tasks of a project whose end date is strictly before `reference`."""
        require(project_id, "project_id")
        reference = reference or date.today()
        return self._fetch_all(
            "find_overdue_by_project",
            self._select(
                "project_id = %s AND completed = FALSE AND end_date IS NOT NULL AND end_date < %s",
                order_by=_DUE_ORDER,
            ),
            (project_id, reference),
        )

    # ── DEPENDENCIES ──────────────────────────────────────

    def find_tasks_with_dependencies(self) -> list[Task]:
        """Tasks that depend on at least one other task."""
        return self._fetch_all(
            "find_tasks_with_dependencies",
            self._select("id IN (SELECT dependent_task_id FROM task_dependencies WHERE is_active = TRUE)"),
        )

    def find_blocking_tasks(self) -> list[Task]:
        """Tasks that at least one other task depends on."""
        return self._fetch_all(
            "find_blocking_tasks",
            self._select("id IN (SELECT prerequisite_task_id FROM task_dependencies WHERE is_active = TRUE)"),
        )

    def find_direct_prerequisites(self, task_id: int) -> list[Task]:
        """Tasks that must happen before `task_id`."""
        require(task_id, "task_id")
        sql = f"""
            SELECT {self._cols("t")}
            FROM task_dependencies td
            JOIN tasks t ON t.id = td.prerequisite_task_id
            WHERE td.dependent_task_id = %s AND td.is_active = TRUE
            ORDER BY td.dependency_type ASC, t.end_date ASC NULLS LAST, t.id ASC;
        """
        return self._fetch_all("find_direct_prerequisites", sql, (task_id,))

    def find_direct_dependents(self, task_id: int) -> list[Task]:
        """Tasks waiting on `task_id`."""
        require(task_id, "task_id")
        sql = f"""
            SELECT {self._cols("t")}
            FROM task_dependencies td
            JOIN tasks t ON t.id = td.dependent_task_id
            WHERE td.prerequisite_task_id = %s AND td.is_active = TRUE
            ORDER BY td.dependency_type ASC, t.start_date ASC NULLS LAST, t.id ASC;
        """
        return self._fetch_all("find_direct_dependents", sql, (task_id,))

    def find_critical_path_tasks(self, project_id: int) -> list[Task]:
        """Tasks on either end of an active critical-path edge."""
        require(project_id, "project_id")
        return self._fetch_all(
            "find_critical_path_tasks",
            self._select(
                "id IN ("
                "SELECT dependent_task_id FROM task_dependencies "
                "WHERE project_id = %s AND is_active = TRUE AND critical_path = TRUE "
                "UNION "
                "SELECT prerequisite_task_id FROM task_dependencies "
                "WHERE project_id = %s AND is_active = TRUE AND critical_path = TRUE)",
                order_by=_DUE_ORDER,
            ),
            (project_id, project_id),
        )

    def find_by_dependency_type(self, project_id: int, dependency_type: DependencyType) -> list[Task]:
        """Dependent tasks linked by at least one active edge of the given type."""
        require(project_id, "project_id")
        return self._fetch_all(
            "find_by_dependency_type",
            self._select(
                "id IN (SELECT dependent_task_id FROM task_dependencies "
                "WHERE project_id = %s AND is_active = TRUE AND dependency_type = %s)"
            ),
            (project_id, require_enum(dependency_type, DependencyType, "dependency_type")),
        )

    def find_blocked_tasks(self, project_id: int) -> list[Task]:
        """
        Incomplete tasks that cannot proceed: a finish-to-start or blocking
        prerequisite is not completed, or a start-to-start prerequisite has
        not started (progress 0).
        """
        require(project_id, "project_id")
        return self._fetch_all(
            "find_blocked_tasks",
            self._select(
                "completed = FALSE AND id IN ("
                "SELECT td.dependent_task_id FROM task_dependencies td "
                "JOIN tasks p ON p.id = td.prerequisite_task_id "
                "WHERE td.project_id = %s AND td.is_active = TRUE AND ("
                "(td.dependency_type IN ('FINISH_TO_START', 'BLOCKING') AND p.completed = FALSE) "
                "OR (td.dependency_type = 'START_TO_START' AND p.progress = 0)))"
            ),
            (project_id,),
        )

    def find_most_connected_tasks(self, project_id: int, limit: int) -> list[Task]:
        """Tasks of a project ranked by how many active edges touch them."""
        require(project_id, "project_id")
        require_positive(limit, "limit")
        return self._fetch_all(
            "find_most_connected_tasks",
            self._select(
                "project_id = %s",
                order_by=(
                    "(SELECT COUNT(*) FROM task_dependencies td "
                    "WHERE (td.dependent_task_id = tasks.id OR td.prerequisite_task_id = tasks.id) "
                    "AND td.is_active = TRUE) DESC, id ASC"
                ),
                limit=True,
            ),
            (project_id, limit),
        )
