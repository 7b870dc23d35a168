"""
Tests for the shared repository plumbing.

Covers:
- Parameter validation helpers
- LIKE pattern escaping
- Row mapping and SELECT building
- Connection handling and error propagation
"""

from datetime import date

import psycopg2
import pytest

from conftest import make_row
from models.project import Project
from models.project_template import SubsystemType
from models.task import TaskPriority
from repositories.base import (
    InvalidQueryError,
    contains_pattern,
    require,
    require_enum,
    require_non_negative,
    require_positive,
    require_range,
    require_text,
)
from repositories.part_repo import PartRepository
from repositories.project_repo import ProjectRepository


class TestValidation:
    """Test the parameter validation helpers."""

    def test_require_passes_value_through(self):
        assert require(0, "x") == 0
        assert require(False, "flag") is False

    def test_require_rejects_none(self):
        with pytest.raises(InvalidQueryError) as exc:
            require(None, "project_id")
        assert exc.value.param == "project_id"
        assert "project_id" in str(exc.value)

    def test_invalid_query_error_is_value_error(self):
        with pytest.raises(ValueError):
            require(None, "x")

    def test_require_text_rejects_blank(self):
        with pytest.raises(InvalidQueryError):
            require_text("   ", "name")
        assert require_text("gearbox", "name") == "gearbox"

    def test_require_enum_accepts_member_and_name(self):
        assert require_enum(TaskPriority.HIGH, TaskPriority, "priority") == "HIGH"
        assert require_enum("LOW", TaskPriority, "priority") == "LOW"

    def test_require_enum_rejects_unknown_value(self):
        with pytest.raises(InvalidQueryError) as exc:
            require_enum("URGENT", TaskPriority, "priority")
        assert exc.value.param == "priority"

    def test_require_enum_rejects_none(self):
        with pytest.raises(InvalidQueryError):
            require_enum(None, TaskPriority, "priority")

    def test_require_enum_rejects_member_of_another_enum(self):
        with pytest.raises(InvalidQueryError) as exc:
            require_enum(SubsystemType.PNEUMATICS, TaskPriority, "priority")
        assert "TaskPriority" in exc.value.reason

    def test_foreign_enum_member_never_reaches_the_database(self, db):
        """A SubsystemType sharing a name with a PartCategory is still the wrong type."""
        with pytest.raises(InvalidQueryError) as exc:
            PartRepository().find_by_category(SubsystemType.PNEUMATICS)
        assert exc.value.param == "category"
        db.cursor.execute.assert_not_called()

    def test_require_positive(self):
        assert require_positive(5, "limit") == 5
        with pytest.raises(InvalidQueryError):
            require_positive(0, "limit")
        with pytest.raises(InvalidQueryError):
            require_positive(-1, "limit")

    def test_require_non_negative(self):
        assert require_non_negative(0, "days_ahead") == 0
        with pytest.raises(InvalidQueryError):
            require_non_negative(-3, "days_ahead")

    def test_require_range_allows_equal_bounds(self):
        day = date(2025, 1, 4)
        assert require_range(day, day) == (day, day)

    def test_require_range_rejects_inverted_bounds(self):
        with pytest.raises(InvalidQueryError) as exc:
            require_range(date(2025, 2, 1), date(2025, 1, 1))
        assert exc.value.param == "end"


class TestContainsPattern:
    """Test ILIKE pattern building."""

    def test_wraps_text(self):
        assert contains_pattern("drive", "text") == "%drive%"

    def test_escapes_wildcards(self):
        assert contains_pattern("50%_off", "text") == "%50\\%\\_off%"

    def test_escapes_backslash(self):
        assert contains_pattern("a\\b", "text") == "%a\\\\b%"

    def test_rejects_none(self):
        with pytest.raises(InvalidQueryError):
            contains_pattern(None, "text")


class TestBaseRepository:
    """Test generic lookups through a concrete repository."""

    @pytest.fixture
    def repo(self):
        return ProjectRepository()

    def test_row_to_model_maps_columns(self, repo):
        row = make_row(
            repo, id=7, name="Crescendo", start_date=date(2024, 1, 6), hard_deadline=date(2024, 2, 20)
        )
        project = repo._row_to_model(row)
        assert isinstance(project, Project)
        assert project.id == 7
        assert project.name == "Crescendo"
        assert project.goal_end_date is None

    def test_cols_with_alias(self, repo):
        assert repo._cols("p").startswith("p.id, p.name")

    def test_select_with_limit(self, repo):
        sql = repo._select("name = %s", limit=True)
        assert sql.endswith("WHERE name = %s ORDER BY id ASC LIMIT %s;")

    def test_find_by_id_returns_model(self, repo, db):
        db.returns_row(make_row(
            repo, id=1, name="Rapid React", start_date=date(2022, 1, 8), hard_deadline=date(2022, 2, 22)
        ))
        project = repo.find_by_id(1)
        assert project.name == "Rapid React"
        assert "WHERE id = %s" in db.sql
        assert db.params == (1,)

    def test_find_by_id_missing_returns_none(self, repo, db):
        assert repo.find_by_id(99) is None

    def test_find_by_id_requires_id(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_by_id(None)
        db.cursor.execute.assert_not_called()

    def test_find_all_returns_every_row(self, repo, db):
        db.returns_rows([
            make_row(repo, id=1, name="A", start_date=date(2024, 1, 1), hard_deadline=date(2024, 2, 1)),
            make_row(repo, id=2, name="B", start_date=date(2025, 1, 1), hard_deadline=date(2025, 2, 1)),
        ])
        assert [p.id for p in repo.find_all()] == [1, 2]
        assert db.sql.endswith("ORDER BY id ASC;")

    def test_count(self, repo, db):
        db.returns_scalar(3)
        assert repo.count() == 3
        assert db.sql == "SELECT COUNT(*) FROM projects;"

    def test_exists_by_id(self, repo, db):
        db.returns_scalar(True)
        assert repo.exists_by_id(4) is True
        assert db.sql == "SELECT EXISTS (SELECT 1 FROM projects WHERE id = %s);"

    def test_connection_released_after_query(self, repo, db):
        repo.find_all()
        db.release.assert_called_once_with(db.conn)

    def test_database_error_propagates_and_releases(self, repo, db):
        db.cursor.execute.side_effect = psycopg2.OperationalError("server closed the connection")
        with pytest.raises(psycopg2.OperationalError):
            repo.find_all()
        db.release.assert_called_once_with(db.conn)

    def test_database_error_is_logged(self, repo, db, caplog):
        db.cursor.execute.side_effect = psycopg2.ProgrammingError("relation does not exist")
        with pytest.raises(psycopg2.ProgrammingError):
            repo.count()
        assert "ProjectRepository.count failed" in caplog.text
