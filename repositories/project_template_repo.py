"""
repositories/project_template_repo.py
-------------------------------------
Data access layer for subsystem project templates.
All SQL queries related to the `project_templates` table live here.

Templates are soft-deactivated, so most lookups only return active rows.
"""

from models.project_template import DifficultyLevel, ProjectTemplate, SubsystemType
from repositories.base import (
    BaseRepository,
    contains_pattern,
    require_enum,
    require_positive,
    require_range,
    require_text,
)

_PRIORITY_ORDER = "build_priority ASC, name ASC, id ASC"


class ProjectTemplateRepository(BaseRepository):
    """Read-only queries on the project_templates table."""

    table = "project_templates"
    model = ProjectTemplate
    columns = (
        "id", "name", "description", "subsystem_type", "implementation_type",
        "estimated_weeks", "team_size", "difficulty_level", "is_active",
        "parallel_development", "build_priority", "usage_count", "last_used_at",
        "created_by", "created_at",
    )

    def find_active(self) -> list[ProjectTemplate]:
        return self._fetch_all("find_active", self._select("is_active = TRUE", order_by="name ASC, id ASC"))

    def count_active(self) -> int:
        return self._count("count_active", "is_active = TRUE")

    def find_by_subsystem_type(self, subsystem_type: SubsystemType) -> list[ProjectTemplate]:
        return self._fetch_all(
            "find_by_subsystem_type",
            self._select("subsystem_type = %s AND is_active = TRUE", order_by=_PRIORITY_ORDER),
            (require_enum(subsystem_type, SubsystemType, "subsystem_type"),),
        )

    def count_by_subsystem_type(self, subsystem_type: SubsystemType) -> int:
        return self._count(
            "count_by_subsystem_type",
            "subsystem_type = %s AND is_active = TRUE",
            (require_enum(subsystem_type, SubsystemType, "subsystem_type"),),
        )

    def find_by_difficulty_level(self, level: DifficultyLevel) -> list[ProjectTemplate]:
        return self._fetch_all(
            "find_by_difficulty_level",
            self._select("difficulty_level = %s AND is_active = TRUE", order_by=_PRIORITY_ORDER),
            (require_enum(level, DifficultyLevel, "level"),),
        )

    def find_beginner_friendly(self) -> list[ProjectTemplate]:
        return self.find_by_difficulty_level(DifficultyLevel.BEGINNER)

    def find_by_name_containing_ignore_case(self, text: str) -> list[ProjectTemplate]:
        return self._fetch_all(
            "find_by_name_containing_ignore_case",
            self._select("name ILIKE %s AND is_active = TRUE", order_by="name ASC, id ASC"),
            (contains_pattern(text, "text"),),
        )

    def exists_by_name_ignore_case(self, name: str) -> bool:
        """Any template (active or not) already uses this name."""
        require_text(name, "name")
        return self._exists("exists_by_name_ignore_case", "LOWER(name) = LOWER(%s)", (name,))

    def find_by_created_by(self, created_by: str) -> list[ProjectTemplate]:
        require_text(created_by, "created_by")
        return self._fetch_all(
            "find_by_created_by",
            self._select("created_by = %s", order_by="created_at DESC NULLS LAST, id ASC"),
            (created_by,),
        )

    def find_most_popular(self, limit: int) -> list[ProjectTemplate]:
        require_positive(limit, "limit")
        return self._fetch_all(
            "find_most_popular",
            self._select("is_active = TRUE", order_by="usage_count DESC, name ASC, id ASC", limit=True),
            (limit,),
        )

    def find_recently_used(self, limit: int) -> list[ProjectTemplate]:
        require_positive(limit, "limit")
        return self._fetch_all(
            "find_recently_used",
            self._select(
                "is_active = TRUE AND last_used_at IS NOT NULL",
                order_by="last_used_at DESC, id ASC",
                limit=True,
            ),
            (limit,),
        )

    def find_parallel_development_templates(self) -> list[ProjectTemplate]:
        """Templates that can be built alongside other subsystems."""
        return self._fetch_all(
            "find_parallel_development_templates",
            self._select("parallel_development = TRUE AND is_active = TRUE", order_by=_PRIORITY_ORDER),
        )

    def find_independent_templates(self) -> list[ProjectTemplate]:
        """Templates that must be built on their own."""
        return self._fetch_all(
            "find_independent_templates",
            self._select("parallel_development = FALSE AND is_active = TRUE", order_by=_PRIORITY_ORDER),
        )

    def find_by_estimated_weeks_between(self, min_weeks: int, max_weeks: int) -> list[ProjectTemplate]:
        require_range(min_weeks, max_weeks, "min_weeks", "max_weeks")
        return self._fetch_all(
            "find_by_estimated_weeks_between",
            self._select(
                "estimated_weeks BETWEEN %s AND %s AND is_active = TRUE",
                order_by="estimated_weeks ASC, id ASC",
            ),
            (min_weeks, max_weeks),
        )
