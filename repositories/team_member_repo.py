"""
repositories/team_member_repo.py
--------------------------------
Data access layer for the team roster.
All SQL queries related to the `team_members` table live here.
"""

from typing import Optional

from models.team import TeamMember
from repositories.base import BaseRepository, contains_pattern, require

_NAME_ORDER = "last_name ASC NULLS LAST, first_name ASC NULLS LAST, id ASC"


class TeamMemberRepository(BaseRepository):
    """Read-only queries on the team_members table."""

    table = "team_members"
    model = TeamMember
    columns = (
        "id", "username", "first_name", "last_name", "email",
        "phone", "skills", "leader", "subteam_id",
    )

    # ── IDENTITY ──────────────────────────────────────────

    def find_by_username(self, username: str) -> Optional[TeamMember]:
        require(username, "username")
        return self._fetch_one("find_by_username", self._select("username = %s", order_by=""), (username,))

    def find_by_email(self, email: str) -> Optional[TeamMember]:
        require(email, "email")
        return self._fetch_one("find_by_email", self._select("email = %s", order_by=""), (email,))

    def find_by_username_or_email(self, username: str, email: str) -> Optional[TeamMember]:
        """First member (by id) matching either the username or the email."""
        require(username, "username")
        require(email, "email")
        return self._fetch_one(
            "find_by_username_or_email",
            self._select("username = %s OR email = %s", limit=True),
            (username, email, 1),
        )

    def exists_by_username_ignore_case(self, username: str) -> bool:
        require(username, "username")
        return self._exists("exists_by_username_ignore_case", "LOWER(username) = LOWER(%s)", (username,))

    def exists_by_email_ignore_case(self, email: str) -> bool:
        require(email, "email")
        return self._exists("exists_by_email_ignore_case", "LOWER(email) = LOWER(%s)", (email,))

    # ── NAME SEARCH ───────────────────────────────────────

    def find_by_name(self, text: str) -> list[TeamMember]:
        """Members whose first or last name contains `text`, ignoring case."""
        pattern = contains_pattern(text, "text")
        return self._fetch_all(
            "find_by_name",
            self._select("first_name ILIKE %s OR last_name ILIKE %s", order_by=_NAME_ORDER),
            (pattern, pattern),
        )

    def find_by_first_name_containing_ignore_case(self, text: str) -> list[TeamMember]:
        return self._fetch_all(
            "find_by_first_name_containing_ignore_case",
            self._select("first_name ILIKE %s", order_by=_NAME_ORDER),
            (contains_pattern(text, "text"),),
        )

    def find_by_last_name_containing_ignore_case(self, text: str) -> list[TeamMember]:
        return self._fetch_all(
            "find_by_last_name_containing_ignore_case",
            self._select("last_name ILIKE %s", order_by=_NAME_ORDER),
            (contains_pattern(text, "text"),),
        )

    def find_by_skill(self, skill: str) -> list[TeamMember]:
        return self._fetch_all(
            "find_by_skill",
            self._select("skills ILIKE %s", order_by=_NAME_ORDER),
            (contains_pattern(skill, "skill"),),
        )

    # ── SUBTEAM ───────────────────────────────────────────

    def find_by_subteam(self, subteam_id: int) -> list[TeamMember]:
        require(subteam_id, "subteam_id")
        return self._fetch_all(
            "find_by_subteam", self._select("subteam_id = %s", order_by=_NAME_ORDER), (subteam_id,)
        )

    def find_without_subteam(self) -> list[TeamMember]:
        return self._fetch_all("find_without_subteam", self._select("subteam_id IS NULL", order_by=_NAME_ORDER))

    def count_by_subteam(self, subteam_id: int) -> int:
        require(subteam_id, "subteam_id")
        return self._count("count_by_subteam", "subteam_id = %s", (subteam_id,))

    # ── LEADERSHIP ────────────────────────────────────────

    def find_by_leader(self, leader: bool) -> list[TeamMember]:
        require(leader, "leader")
        return self._fetch_all("find_by_leader", self._select("leader = %s", order_by=_NAME_ORDER), (leader,))

    def find_leaders(self) -> list[TeamMember]:
        return self.find_by_leader(True)

    def count_leaders(self) -> int:
        return self._count("count_leaders", "leader = TRUE")

    # ── ASSIGNMENTS ───────────────────────────────────────

    def find_by_task(self, task_id: int) -> list[TeamMember]:
        """Members assigned to a task."""
        require(task_id, "task_id")
        sql = f"""
            SELECT {self._cols("m")}
            FROM team_members m
            JOIN task_assignments ta ON ta.team_member_id = m.id
            WHERE ta.task_id = %s
            ORDER BY m.last_name ASC NULLS LAST, m.first_name ASC NULLS LAST, m.id ASC;
        """
        return self._fetch_all("find_by_task", sql, (task_id,))

    def find_by_project(self, project_id: int) -> list[TeamMember]:
        """Members assigned to at least one task of a project, each listed once."""
        require(project_id, "project_id")
        return self._fetch_all(
            "find_by_project",
            self._select(
                "id IN (SELECT ta.team_member_id FROM task_assignments ta "
                "JOIN tasks t ON t.id = ta.task_id WHERE t.project_id = %s)",
                order_by=_NAME_ORDER,
            ),
            (project_id,),
        )
