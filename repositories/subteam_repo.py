"""
repositories/subteam_repo.py
----------------------------
Data access layer for subteams.
"""

from typing import Optional

from models.team import Subteam
from repositories.base import BaseRepository, contains_pattern, require_text


class SubteamRepository(BaseRepository):
    """Read-only queries on the subteams table."""

    table = "subteams"
    model = Subteam
    columns = ("id", "name", "color_code", "specialties")

    def find_by_name(self, name: str) -> Optional[Subteam]:
        require_text(name, "name")
        return self._fetch_one("find_by_name", self._select("name = %s", order_by=""), (name,))

    def find_by_name_ignore_case(self, name: str) -> Optional[Subteam]:
        require_text(name, "name")
        return self._fetch_one(
            "find_by_name_ignore_case", self._select("LOWER(name) = LOWER(%s)", order_by=""), (name,)
        )

    def exists_by_name(self, name: str) -> bool:
        require_text(name, "name")
        return self._exists("exists_by_name", "name = %s", (name,))

    def exists_by_name_ignore_case(self, name: str) -> bool:
        require_text(name, "name")
        return self._exists("exists_by_name_ignore_case", "LOWER(name) = LOWER(%s)", (name,))

    def find_all_order_by_name(self) -> list[Subteam]:
        return self._fetch_all("find_all_order_by_name", self._select(order_by="name ASC, id ASC"))

    def find_by_color_code(self, color_code: str) -> list[Subteam]:
        require_text(color_code, "color_code")
        return self._fetch_all(
            "find_by_color_code", self._select("LOWER(color_code) = LOWER(%s)"), (color_code,)
        )

    def find_by_specialties_containing_ignore_case(self, text: str) -> list[Subteam]:
        return self._fetch_all(
            "find_by_specialties_containing_ignore_case",
            self._select("specialties ILIKE %s", order_by="name ASC, id ASC"),
            (contains_pattern(text, "text"),),
        )
