"""
Tests for the meeting repository.

Covers:
- Calendar and date-range lookups
- Overlap detection for scheduling conflicts
- Attribute filters and priority ordering
"""

from datetime import date, time

import pytest

from conftest import make_row
from models.meeting import MeetingPriority, MeetingStatus, MeetingType
from repositories.base import InvalidQueryError
from repositories.meeting_repo import MeetingRepository

DAY = date(2025, 1, 11)


@pytest.fixture
def repo():
    return MeetingRepository()


@pytest.fixture
def build_session(repo):
    return make_row(
        repo, id=12, project_id=1, title="Saturday build", date=DAY,
        start_time=time(9, 0), end_time=time(15, 0), location="Shop",
        status="SCHEDULED", meeting_type="BUILD_SESSION", priority="HIGH",
        is_recurring=True, recurrence_pattern="WEEKLY", requires_preparation=False,
    )


class TestMeetingLookups:
    """Test project and date lookups."""

    def test_row_mapping_converts_enums(self, repo, db, build_session):
        db.returns_rows([build_session])
        meeting = repo.find_by_project(1)[0]
        assert meeting.meeting_type is MeetingType.BUILD_SESSION
        assert meeting.priority is MeetingPriority.HIGH
        assert meeting.start_time == time(9, 0)
        assert not meeting.is_virtual()

    def test_find_by_project_is_in_calendar_order(self, repo, db):
        repo.find_by_project(1)
        assert db.sql.endswith("ORDER BY date ASC, start_time ASC, id ASC;")

    def test_find_by_date_after_is_strict(self, repo, db):
        repo.find_by_date_after(DAY)
        assert "WHERE date > %s" in db.sql

    def test_find_by_date_on_or_after(self, repo, db):
        repo.find_by_date_on_or_after(DAY)
        assert "WHERE date >= %s" in db.sql

    def test_find_by_date_between_is_inclusive(self, repo, db):
        repo.find_by_date_between(DAY, date(2025, 1, 17))
        assert "date BETWEEN %s AND %s" in db.sql

    def test_find_by_date_between_rejects_inverted_range(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_by_date_between(date(2025, 1, 17), DAY)

    def test_find_next_meeting_for_project(self, repo, db, build_session):
        db.returns_row(build_session)
        meeting = repo.find_next_meeting_for_project(1, today=date(2025, 1, 10), now=time(18, 0))
        assert meeting.id == 12
        assert "(date > %s OR (date = %s AND start_time > %s))" in db.sql
        assert db.params == (1, date(2025, 1, 10), date(2025, 1, 10), time(18, 0), 1)

    def test_find_next_meeting_with_only_today_starts_at_midnight(self, repo, db):
        """A supplied date is never paired with the wall-clock time."""
        repo.find_next_meeting_for_project(1, today=date(2030, 5, 1))
        assert db.params == (1, date(2030, 5, 1), date(2030, 5, 1), time(0, 0), 1)

    def test_find_meetings_in_progress(self, repo, db):
        repo.find_meetings_in_progress(DAY, time(10, 30))
        assert "date = %s AND start_time <= %s AND end_time > %s" in db.sql
        assert db.params == (DAY, time(10, 30), time(10, 30))

    def test_find_by_project_and_status(self, repo, db):
        repo.find_by_project_and_status(1, MeetingStatus.CANCELLED)
        assert db.params == (1, "CANCELLED")


class TestSchedulingConflicts:
    """Test overlap queries."""

    def test_overlap_predicate_and_params(self, repo, db):
        repo.find_overlapping_meetings(DAY, time(15, 0), time(17, 0))
        assert (
            "date = %s AND ((start_time <= %s AND end_time > %s) OR "
            "(start_time < %s AND end_time >= %s) OR "
            "(start_time >= %s AND end_time <= %s))"
        ) in db.sql
        assert db.params == (
            DAY, time(15, 0), time(15, 0), time(17, 0), time(17, 0), time(15, 0), time(17, 0)
        )

    def test_overlap_rejects_inverted_window(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_overlapping_meetings(DAY, time(17, 0), time(15, 0))

    def test_scheduling_conflicts_excludes_meeting(self, repo, db):
        repo.find_scheduling_conflicts(DAY, time(9, 0), time(11, 0), exclude_meeting_id=12)
        assert "WHERE id <> %s AND date = %s" in db.sql
        assert db.params[0] == 12
        assert len(db.params) == 8

    def test_scheduling_conflicts_requires_exclusion(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_scheduling_conflicts(DAY, time(9, 0), time(11, 0), None)


class TestMeetingAttributes:
    """Test attribute filters."""

    def test_find_by_meeting_type(self, repo, db):
        repo.find_by_meeting_type(MeetingType.DESIGN_REVIEW)
        assert db.params == ("DESIGN_REVIEW",)

    def test_find_by_priority_rejects_unknown(self, repo, db):
        with pytest.raises(InvalidQueryError):
            repo.find_by_priority("URGENT")

    def test_find_by_location_containing_ignore_case(self, repo, db):
        repo.find_by_location_containing_ignore_case("room_1")
        assert db.params == ("%room\\_1%",)

    def test_find_hybrid_meetings(self, repo, db):
        repo.find_hybrid_meetings()
        assert "location IS NOT NULL AND location <> ''" in db.sql
        assert "virtual_meeting_url IS NOT NULL AND virtual_meeting_url <> ''" in db.sql

    def test_find_meetings_with_action_items(self, repo, db):
        repo.find_meetings_with_action_items()
        assert "action_items IS NOT NULL AND action_items <> ''" in db.sql

    def test_priority_ordering_ranks_emergency_first(self, repo, db):
        repo.find_all_ordered_by_priority_and_date()
        assert "ORDER BY CASE priority WHEN 'EMERGENCY' THEN 1" in db.sql
        assert db.sql.endswith("END ASC, date ASC, start_time ASC, id ASC;")

    def test_count_by_status(self, repo, db):
        db.returns_scalar(4)
        assert repo.count_by_status("SCHEDULED") == 4
