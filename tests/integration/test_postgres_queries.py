"""
Integration tests against a real PostgreSQL database.

Set TEST_DATABASE_URL to a throwaway database to run them; every table is
truncated before each test.
"""

import os
from datetime import date, time, timedelta

import psycopg2
import pytest
from psycopg2 import errors

from db import connection
from db.init_db import create_tables
from repositories.meeting_repo import MeetingRepository
from repositories.part_repo import PartRepository
from repositories.project_repo import ProjectRepository
from repositories.task_repo import TaskRepository
from repositories.team_member_repo import TeamMemberRepository
from repositories.user_repo import UserRepository

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL not set"),
]

_TABLES = (
    "task_assignments, task_dependencies, component_tasks, tasks, milestones, meetings, "
    "subsystems, team_members, subteams, components, parts, project_templates, "
    "frc_matches, frc_team_rankings, frc_events, users, projects"
)


@pytest.fixture(scope="module", autouse=True)
def database():
    connection.close_pool()
    connection.init_pool(1, 2, dsn=TEST_DATABASE_URL)
    create_tables()
    yield
    connection.close_pool()


def execute(sql, params=()):
    """Run a write statement and return the first column of the first row, if any."""
    conn = connection.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql, params)
            row = cur.fetchone() if cur.description else None
        conn.commit()
        return row[0] if row else None
    except psycopg2.Error:
        conn.rollback()
        raise
    finally:
        connection.release_connection(conn)


@pytest.fixture(autouse=True)
def clean_tables():
    execute(f"TRUNCATE {_TABLES} RESTART IDENTITY CASCADE;")


def add_project(name="Reefscape", start=date(2025, 1, 4), deadline=date(2025, 2, 18)):
    return execute(
        "INSERT INTO projects (name, start_date, hard_deadline) VALUES (%s, %s, %s) RETURNING id;",
        (name, start, deadline),
    )


def add_task(project_id, title, end_date=None, completed=False):
    return execute(
        "INSERT INTO tasks (project_id, title, end_date, completed) VALUES (%s, %s, %s, %s) RETURNING id;",
        (project_id, title, end_date, completed),
    )


def add_meeting(project_id, day, start, end):
    return execute(
        "INSERT INTO meetings (project_id, date, start_time, end_time) VALUES (%s, %s, %s, %s) RETURNING id;",
        (project_id, day, start, end),
    )


def add_part(part_number, quantity, minimum, safety=0):
    return execute(
        "INSERT INTO parts (part_number, name, category, quantity_on_hand, minimum_stock, safety_stock) "
        "VALUES (%s, %s, 'FASTENERS', %s, %s, %s) RETURNING id;",
        (part_number, part_number, quantity, minimum, safety),
    )


class TestCaseInsensitiveUniqueness:

    def test_exists_ignores_case(self):
        execute(
            "INSERT INTO team_members (username, email) VALUES (%s, %s);",
            ("JDoe", "JDoe@Example.org"),
        )
        repo = TeamMemberRepository()
        assert repo.exists_by_username_ignore_case("jdoe")
        assert repo.exists_by_email_ignore_case("JDOE@EXAMPLE.ORG")

    def test_store_rejects_case_variant(self):
        add_part("AM-0001", 5, 2)
        with pytest.raises(errors.UniqueViolation):
            add_part("am-0001", 5, 2)
        assert PartRepository().exists_by_part_number_ignore_case("Am-0001")


class TestDateBoundaries:

    def test_before_after_are_strict_and_between_inclusive(self):
        repo = ProjectRepository()
        day = date(2025, 1, 4)
        add_project(start=day)
        assert repo.find_by_start_date_after(day) == []
        assert repo.find_by_start_date_before(day) == []
        assert len(repo.find_by_hard_deadline_between(date(2025, 2, 18), date(2025, 2, 18))) == 1

    def test_neighbouring_deadlines_split_around_reference(self):
        repo = ProjectRepository()
        d = date(2025, 2, 18)
        earlier = add_project("Earlier", deadline=d - timedelta(days=1))
        on_day = add_project("On the day", deadline=d)
        later = add_project("Later", deadline=d + timedelta(days=1))
        assert [p.id for p in repo.find_by_hard_deadline_before(d)] == [earlier]
        assert [p.id for p in repo.find_by_hard_deadline_after(d)] == [later]
        between = repo.find_by_hard_deadline_between(d - timedelta(days=1), d + timedelta(days=1))
        assert [p.id for p in between] == [earlier, on_day, later]

    def test_overdue_excludes_reference_date(self):
        project_id = add_project()
        add_task(project_id, "Due today", end_date=date(2025, 2, 1))
        late = add_task(project_id, "Late", end_date=date(2025, 1, 31))
        overdue = TaskRepository().find_overdue_by_project(project_id, reference=date(2025, 2, 1))
        assert [t.id for t in overdue] == [late]


class TestStockThresholds:

    def test_low_stock_is_inclusive(self):
        at_minimum = add_part("P-1", 4, 4)
        add_part("P-2", 5, 4)
        below_safety = add_part("P-3", 1, 4, safety=1)
        repo = PartRepository()
        assert {p.id for p in repo.find_low_stock()} == {at_minimum, below_safety}
        assert [p.id for p in repo.find_critically_low_stock()] == [below_safety]


class TestMeetingOverlap:

    def test_touching_meetings_do_not_overlap(self):
        project_id = add_project()
        day = date(2025, 1, 11)
        add_meeting(project_id, day, time(9, 0), time(12, 0))
        assert MeetingRepository().find_overlapping_meetings(day, time(12, 0), time(14, 0)) == []

    def test_contained_meeting_overlaps(self):
        project_id = add_project()
        day = date(2025, 1, 11)
        meeting_id = add_meeting(project_id, day, time(10, 0), time(11, 0))
        found = MeetingRepository().find_overlapping_meetings(day, time(9, 0), time(12, 0))
        assert [m.id for m in found] == [meeting_id]

    def test_partial_overlap_is_found(self):
        project_id = add_project()
        day = date(2025, 1, 11)
        meeting_id = add_meeting(project_id, day, time(9, 0), time(10, 30))
        found = MeetingRepository().find_overlapping_meetings(day, time(10, 0), time(11, 0))
        assert [m.id for m in found] == [meeting_id]

    def test_scheduling_conflicts_skip_the_meeting_itself(self):
        project_id = add_project()
        day = date(2025, 1, 11)
        meeting_id = add_meeting(project_id, day, time(9, 0), time(12, 0))
        repo = MeetingRepository()
        assert repo.find_scheduling_conflicts(day, time(9, 0), time(12, 0), meeting_id) == []


class TestProjectDeadlines:

    def test_deadline_before_reference(self):
        project_id = add_project(start=date(2025, 1, 4), deadline=date(2025, 1, 10))
        repo = ProjectRepository()
        assert [p.id for p in repo.find_by_hard_deadline_before(date(2025, 1, 15))] == [project_id]
        assert repo.find_by_hard_deadline_before(date(2025, 1, 5)) == []

    def test_project_overdue_only_with_incomplete_tasks(self):
        project_id = add_project(deadline=date(2025, 2, 18))
        task_id = add_task(project_id, "Bumpers")
        repo = ProjectRepository()
        assert [p.id for p in repo.find_overdue_projects(date(2025, 2, 19))] == [project_id]
        assert repo.find_overdue_projects(date(2025, 2, 18)) == []

        execute("UPDATE tasks SET completed = TRUE WHERE id = %s;", (task_id,))
        assert repo.find_overdue_projects(date(2025, 2, 19)) == []


class TestCoppa:

    def test_minor_without_consent(self):
        user_id = execute(
            "INSERT INTO users (username, email, role, age, requires_parental_consent) "
            "VALUES ('rookie10', 'rookie10@example.org', 'STUDENT', 10, TRUE) RETURNING id;"
        )
        repo = UserRepository()
        assert [u.id for u in repo.find_minor_users()] == [user_id]
        assert repo.find_minors_with_valid_consent() == []
        assert [u.id for u in repo.find_minors_without_consent()] == [user_id]

    def test_minor_with_consent(self):
        user_id = execute(
            "INSERT INTO users (username, email, role, age, requires_parental_consent, parental_consent_date) "
            "VALUES ('rookie11', 'rookie11@example.org', 'STUDENT', 11, FALSE, NOW()) RETURNING id;"
        )
        repo = UserRepository()
        assert [u.id for u in repo.find_minors_with_valid_consent()] == [user_id]
        assert repo.find_minors_without_consent() == []
