"""
models/frc.py
-------------
Domain models for FRC competition data synced from the FRC Events API:
match schedules and team rankings. Both belong to an FRC event row.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class CompetitionLevel(str, Enum):
    """Tournament level of a match."""
    PRACTICE = "PRACTICE"
    QUALIFICATION = "QUALIFICATION"
    PLAYOFF = "PLAYOFF"


@dataclass
class FrcMatch:
    """
    A scheduled match at an event.

    Attributes:
        frc_event_id: Owning event.
        match_number: Number within the competition level.
        competition_level: PRACTICE, QUALIFICATION or PLAYOFF.
        scheduled_time: Scheduled start time.
        actual_time: When the match actually started (None until played).
        red_alliance_teams: Team numbers on the red alliance.
        blue_alliance_teams: Team numbers on the blue alliance.
        red_score / blue_score: Final scores (None until played).
    """
    frc_event_id: int
    match_number: int
    competition_level: CompetitionLevel
    scheduled_time: Optional[datetime] = None
    actual_time: Optional[datetime] = None
    red_alliance_teams: list[int] = field(default_factory=list)
    blue_alliance_teams: list[int] = field(default_factory=list)
    red_score: Optional[int] = None
    blue_score: Optional[int] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.competition_level = CompetitionLevel(self.competition_level)
        self.red_alliance_teams = list(self.red_alliance_teams or [])
        self.blue_alliance_teams = list(self.blue_alliance_teams or [])

    def has_team(self, team_number: int) -> bool:
        return team_number in self.red_alliance_teams or team_number in self.blue_alliance_teams

    def is_played(self) -> bool:
        return self.red_score is not None and self.blue_score is not None

    def __str__(self) -> str:
        return f"{self.competition_level.value} {self.match_number}"


@dataclass
class FrcTeamRanking:
    """
    A team's standing at one event.

    Attributes:
        frc_event_id: Owning event.
        team_number: FRC team number.
        rank: Position in the event ranking (1 = best).
        season_year: Competition season.
        wins / losses / ties: Qualification record.
        ranking_points: Ranking score reported by the API.
    """
    frc_event_id: int
    team_number: int
    rank: int
    season_year: int
    wins: int = 0
    losses: int = 0
    ties: int = 0
    ranking_points: Optional[Decimal] = None
    updated_at: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ties}"
