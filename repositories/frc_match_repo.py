"""
repositories/frc_match_repo.py
------------------------------
Data access layer for FRC match schedules.
All SQL queries related to the `frc_matches` table live here.
"""

from datetime import datetime
from typing import Optional

from models.frc import CompetitionLevel, FrcMatch
from repositories.base import BaseRepository, require, require_enum, require_range

_SCHEDULE_ORDER = "scheduled_time ASC NULLS LAST, match_number ASC, id ASC"


class FrcMatchRepository(BaseRepository):
    """Read-only queries on the frc_matches table."""

    table = "frc_matches"
    model = FrcMatch
    columns = (
        "id", "frc_event_id", "match_number", "competition_level",
        "scheduled_time", "actual_time",
        "red_alliance_teams", "blue_alliance_teams", "red_score", "blue_score",
    )

    def find_by_event(self, event_id: int) -> list[FrcMatch]:
        """Full schedule of an event in play order."""
        require(event_id, "event_id")
        return self._fetch_all(
            "find_by_event",
            self._select("frc_event_id = %s", order_by=_SCHEDULE_ORDER),
            (event_id,),
        )

    def find_by_event_and_level(self, event_id: int, level: CompetitionLevel) -> list[FrcMatch]:
        require(event_id, "event_id")
        return self._fetch_all(
            "find_by_event_and_level",
            self._select("frc_event_id = %s AND competition_level = %s", order_by="match_number ASC"),
            (event_id, require_enum(level, CompetitionLevel, "level")),
        )

    def find_by_event_and_match_number(
        self, event_id: int, level: CompetitionLevel, match_number: int
    ) -> Optional[FrcMatch]:
        require(event_id, "event_id")
        require(match_number, "match_number")
        return self._fetch_one(
            "find_by_event_and_match_number",
            self._select(
                "frc_event_id = %s AND competition_level = %s AND match_number = %s",
                order_by="",
            ),
            (event_id, require_enum(level, CompetitionLevel, "level"), match_number),
        )

    def find_by_team(self, event_id: int, team_number: int) -> list[FrcMatch]:
        """Matches where the team plays on either alliance."""
        require(event_id, "event_id")
        require(team_number, "team_number")
        return self._fetch_all(
            "find_by_team",
            self._select(
                "frc_event_id = %s AND (%s = ANY(red_alliance_teams) OR %s = ANY(blue_alliance_teams))",
                order_by=_SCHEDULE_ORDER,
            ),
            (event_id, team_number, team_number),
        )

    def find_upcoming_matches(self, event_id: int, now: Optional[datetime] = None) -> list[FrcMatch]:
        """Matches scheduled strictly after `now` (default: current time)."""
        require(event_id, "event_id")
        now = now or datetime.now()
        return self._fetch_all(
            "find_upcoming_matches",
            self._select("frc_event_id = %s AND scheduled_time > %s", order_by=_SCHEDULE_ORDER),
            (event_id, now),
        )

    def find_next_match_for_team(
        self, event_id: int, team_number: int, now: Optional[datetime] = None
    ) -> Optional[FrcMatch]:
        require(event_id, "event_id")
        require(team_number, "team_number")
        now = now or datetime.now()
        sql = self._select(
            "frc_event_id = %s AND scheduled_time > %s "
            "AND (%s = ANY(red_alliance_teams) OR %s = ANY(blue_alliance_teams))",
            order_by=_SCHEDULE_ORDER,
            limit=True,
        )
        return self._fetch_one(
            "find_next_match_for_team", sql, (event_id, now, team_number, team_number, 1)
        )

    def find_completed_matches(self, event_id: int) -> list[FrcMatch]:
        """Matches with both alliance scores posted."""
        require(event_id, "event_id")
        return self._fetch_all(
            "find_completed_matches",
            self._select(
                "frc_event_id = %s AND red_score IS NOT NULL AND blue_score IS NOT NULL",
                order_by=_SCHEDULE_ORDER,
            ),
            (event_id,),
        )

    def find_by_scheduled_time_between(self, start: datetime, end: datetime) -> list[FrcMatch]:
        """Matches across all events scheduled within [start, end]."""
        require_range(start, end)
        return self._fetch_all(
            "find_by_scheduled_time_between",
            self._select("scheduled_time BETWEEN %s AND %s", order_by=_SCHEDULE_ORDER),
            (start, end),
        )

    def count_by_event(self, event_id: int) -> int:
        require(event_id, "event_id")
        return self._count("count_by_event", "frc_event_id = %s", (event_id,))

    def count_by_event_and_level(self, event_id: int, level: CompetitionLevel) -> int:
        require(event_id, "event_id")
        return self._count(
            "count_by_event_and_level",
            "frc_event_id = %s AND competition_level = %s",
            (event_id, require_enum(level, CompetitionLevel, "level")),
        )
