"""
repositories/subsystem_repo.py
------------------------------
Data access layer for robot subsystems.
All SQL queries related to the `subsystems` table live here.
"""

from typing import Optional

from models.team import Subsystem, SubsystemStatus
from repositories.base import BaseRepository, contains_pattern, require, require_enum, require_text

_NAME_ORDER = "name ASC, id ASC"


class SubsystemRepository(BaseRepository):
    """Read-only queries on the subsystems table."""

    table = "subsystems"
    model = Subsystem
    columns = ("id", "name", "description", "status", "responsible_subteam_id", "responsible_member_id")

    # ── NAME ──────────────────────────────────────────────

    def find_by_name(self, name: str) -> Optional[Subsystem]:
        require_text(name, "name")
        return self._fetch_one("find_by_name", self._select("name = %s", order_by=""), (name,))

    def find_by_name_ignore_case(self, name: str) -> Optional[Subsystem]:
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

    def find_all_order_by_name(self) -> list[Subsystem]:
        return self._fetch_all("find_all_order_by_name", self._select(order_by=_NAME_ORDER))

    def find_by_description_containing_ignore_case(self, text: str) -> list[Subsystem]:
        return self._fetch_all(
            "find_by_description_containing_ignore_case",
            self._select("description ILIKE %s", order_by=_NAME_ORDER),
            (contains_pattern(text, "text"),),
        )

    # ── STATUS ────────────────────────────────────────────

    def find_by_status(self, status: SubsystemStatus) -> list[Subsystem]:
        return self._fetch_all(
            "find_by_status",
            self._select("status = %s"),
            (require_enum(status, SubsystemStatus, "status"),),
        )

    def find_by_status_order_by_name(self, status: SubsystemStatus) -> list[Subsystem]:
        return self._fetch_all(
            "find_by_status_order_by_name",
            self._select("status = %s", order_by=_NAME_ORDER),
            (require_enum(status, SubsystemStatus, "status"),),
        )

    def count_by_status(self, status: SubsystemStatus) -> int:
        return self._count("count_by_status", "status = %s", (require_enum(status, SubsystemStatus, "status"),))

    # ── OWNERSHIP ─────────────────────────────────────────

    def find_by_responsible_subteam(self, subteam_id: int) -> list[Subsystem]:
        require(subteam_id, "subteam_id")
        return self._fetch_all(
            "find_by_responsible_subteam",
            self._select("responsible_subteam_id = %s", order_by=_NAME_ORDER),
            (subteam_id,),
        )

    def count_by_responsible_subteam(self, subteam_id: int) -> int:
        require(subteam_id, "subteam_id")
        return self._count("count_by_responsible_subteam", "responsible_subteam_id = %s", (subteam_id,))

    def find_by_status_and_responsible_subteam(
        self, status: SubsystemStatus, subteam_id: int
    ) -> list[Subsystem]:
        require(subteam_id, "subteam_id")
        return self._fetch_all(
            "find_by_status_and_responsible_subteam",
            self._select("status = %s AND responsible_subteam_id = %s", order_by=_NAME_ORDER),
            (require_enum(status, SubsystemStatus, "status"), subteam_id),
        )

    def find_unassigned(self) -> list[Subsystem]:
        """Subsystems no subteam has taken ownership of."""
        return self._fetch_all(
            "find_unassigned", self._select("responsible_subteam_id IS NULL", order_by=_NAME_ORDER)
        )

    def find_assigned(self) -> list[Subsystem]:
        return self._fetch_all(
            "find_assigned", self._select("responsible_subteam_id IS NOT NULL", order_by=_NAME_ORDER)
        )

    def find_by_responsible_member(self, member_id: int) -> list[Subsystem]:
        require(member_id, "member_id")
        return self._fetch_all(
            "find_by_responsible_member",
            self._select("responsible_member_id = %s", order_by=_NAME_ORDER),
            (member_id,),
        )
